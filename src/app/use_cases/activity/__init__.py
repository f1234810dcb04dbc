"""
Activity Use Cases

All activity-log read logic.
"""

from .get_activity_logs_use_case import (
    ACTIVITY_LOG_LIMIT,
    ActivityLogEntry,
    GetActivityLogsUseCase,
)

__all__ = [
    "ACTIVITY_LOG_LIMIT",
    "ActivityLogEntry",
    "GetActivityLogsUseCase",
]
