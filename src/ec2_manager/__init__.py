"""
Lifecycle controller for a single EC2 instance.

Validates start/stop/restart/change_class requests and drives the instance
through provider-observed states, reporting a uniform result payload.
"""
from ec2_manager.handler import handle_request, lambda_handler
from ec2_manager.orchestrator import InstanceOrchestrator
from ec2_manager.schemas import Action, OperationRequest, OperationResult
from ec2_manager.validation import ValidationOutcome, validate

__all__ = [
    "Action",
    "InstanceOrchestrator",
    "OperationRequest",
    "OperationResult",
    "ValidationOutcome",
    "handle_request",
    "lambda_handler",
    "validate",
]
