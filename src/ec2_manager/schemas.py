####################################
# --- Request/response schemas --- #
####################################

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator
)
from typing_extensions import Self


class Action(str, Enum):
    """Lifecycle operations a request may ask for."""
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    CHANGE_CLASS = "change_class"


# Older callers spell change_class the way the first deployment did
ACTION_ALIASES = {
    "change_type": Action.CHANGE_CLASS,
}

VALID_ACTIONS = [action.value for action in Action]


class OperationRequest(BaseModel):
    """Invocation payload.

    Missing keys parse to empty values so that the validator, not the parser,
    reports what is wrong with the request.
    """
    action: str = Field(
        "",
        description="Operation to perform.",
        json_schema_extra={"example": "restart"},
    )
    instance_id: str = Field(
        "",
        description="Identifier of the instance to operate on.",
        json_schema_extra={"example": "i-1234567890abcdef0"},
    )
    instance_type: Optional[str] = Field(
        None,
        description="Target machine class, only used by change_class.",
        json_schema_extra={"example": "t3.medium"},
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("action", "instance_id", mode="before")
    @classmethod
    def empty_when_missing(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("instance_type", mode="before")
    @classmethod
    def strip_instance_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @property
    def normalized_action(self) -> str:
        """Action name with legacy aliases resolved."""
        action = self.action
        alias = ACTION_ALIASES.get(action)
        return alias.value if alias else action


class OperationResult(BaseModel):
    """Invocation response payload."""
    success: bool = Field(description="Whether the operation succeeded.")
    message: str = Field(description="Human readable summary.")
    error: str = Field("", description="Failure detail, empty on success.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Instance i-1234567890abcdef0 restarted successfully",
                "error": "",
            }
        }
    )

    @model_validator(mode="after")
    def check_error_is_set_only_on_failure(self) -> Self:
        if self.success and self.error:
            raise ValueError("error must be empty when success is true")
        if not self.success and not self.error:
            raise ValueError("error is required when success is false")
        return self

    @classmethod
    def succeeded(cls, message: str) -> "OperationResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str, error: str) -> "OperationResult":
        return cls(success=False, message=message, error=error or message)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
