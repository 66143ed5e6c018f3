"""Exception types raised while validating and executing instance operations."""
from typing import Optional


class InstanceOperationError(Exception):
    """Base class for every failure the handler converts into a result."""

    def __init__(self, message: str, instance_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.instance_id = instance_id

    def __str__(self) -> str:
        return self.message


class ValidationError(InstanceOperationError):
    """Bad input; raised before any provider call is attempted."""


class MissingField(ValidationError):
    def __init__(self, field: str, detail: str = ""):
        message = f"{field} is required"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.field = field


class UnknownAction(ValidationError):
    def __init__(self, action: str, valid_actions):
        super().__init__(
            f"unknown action: {action}. Valid actions are: {', '.join(valid_actions)}"
        )
        self.action = action


class ProviderError(InstanceOperationError):
    """A compute API call failed (network, auth, throttling, ...)."""

    def __init__(self, operation: str, instance_id: str, cause: Exception):
        super().__init__(f"failed to {operation} instance {instance_id}: {cause}", instance_id)
        self.operation = operation
        self.cause = cause


class NotFoundError(InstanceOperationError):
    def __init__(self, instance_id: str):
        super().__init__(f"instance {instance_id} not found", instance_id)


class WaitTimeoutError(InstanceOperationError, TimeoutError):
    def __init__(self, instance_id: str, target: str, timeout: float):
        super().__init__(
            f"timed out after {timeout:g}s waiting for instance {instance_id} to reach {target}",
            instance_id,
        )
        self.target = target
        self.timeout = timeout


class OperationCancelledError(InstanceOperationError):
    """The caller cancelled the operation or its deadline expired."""

    def __init__(self, instance_id: str, what: str):
        super().__init__(f"cancelled while {what} for instance {instance_id}", instance_id)
        self.what = what


class UnexpectedStateError(InstanceOperationError):
    """The instance entered a state from which the awaited state is unreachable."""

    def __init__(self, instance_id: str, target: str, observed: str):
        super().__init__(
            f"instance {instance_id} entered state {observed} while waiting for {target}",
            instance_id,
        )
        self.target = target
        self.observed = observed
