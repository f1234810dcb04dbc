"""
Form action helpers.

Form actions always answer with HTTP 200 and an ActionState body; failures
travel in the `error` field instead of the status code.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from src.libs.result import Error

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ActionState(BaseModel):
    """Result of a form action: error or success plus echoed fields"""

    model_config = ConfigDict(extra="allow")

    error: Optional[str] = None
    success: Optional[str] = None


class ActionValidationError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def parse_form(schema: Type[SchemaT], payload: Dict[str, Any]) -> SchemaT:
    """Validate a submission, surfacing only the first validation message"""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        message = first["msg"]
        # pydantic prefixes custom ValueError messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        raise ActionValidationError(message) from exc


def action_error(error: Error, **echo: Any) -> ActionState:
    return ActionState(error=error.message, **echo)
