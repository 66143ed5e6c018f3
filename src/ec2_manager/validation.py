"""Request validation.

Rules are applied in order and the first failure wins. Validation never
touches the provider.
"""
from dataclasses import dataclass
from typing import Optional

from ec2_manager.commands import (
    ChangeInstanceClass,
    InstanceCommand,
    RestartInstance,
    StartInstance,
    StopInstance,
)
from ec2_manager.errors import MissingField, UnknownAction, ValidationError
from ec2_manager.schemas import VALID_ACTIONS, Action, OperationRequest


@dataclass(frozen=True)
class ValidationOutcome:
    """Either the command a request maps to, or why it was rejected."""
    command: Optional[InstanceCommand] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


def _build_command(action: Action, request: OperationRequest) -> InstanceCommand:
    if action == Action.START:
        return StartInstance(request.instance_id)
    if action == Action.STOP:
        return StopInstance(request.instance_id)
    if action == Action.RESTART:
        return RestartInstance(request.instance_id)
    return ChangeInstanceClass(request.instance_id, request.instance_type)


def validate(request: OperationRequest) -> ValidationOutcome:
    """Check required fields and the action value of ``request``."""
    if not request.instance_id:
        return ValidationOutcome(error=MissingField("instance_id"))

    if not request.action:
        return ValidationOutcome(error=MissingField("action"))

    action_name = request.normalized_action
    if action_name not in VALID_ACTIONS:
        return ValidationOutcome(error=UnknownAction(request.action, VALID_ACTIONS))
    action = Action(action_name)

    if action == Action.CHANGE_CLASS and not request.instance_type:
        return ValidationOutcome(
            error=MissingField("instance_type", f"for {Action.CHANGE_CLASS.value} action")
        )

    return ValidationOutcome(command=_build_command(action, request))
