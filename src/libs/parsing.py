from typing import Any, Optional


def as_int(value: Any) -> Optional[int]:
    """Integer form of a loosely typed id (JSON body, identity metadata), else None"""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
