"""Invocation boundary for ec2-manager.

``lambda_handler`` is the AWS Lambda entry point. ``handle_request`` holds the
request flow (parse, validate, build provider, execute) and converts every
failure into an ``OperationResult`` so nothing escapes to the caller.
"""
import json
import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError as PayloadError

from ec2_manager.aws_clients import create_ec2_client
from ec2_manager.cancellation import CancellationToken
from ec2_manager.ec2_provider import Ec2Provider
from ec2_manager.errors import InstanceOperationError, UnknownAction
from ec2_manager.orchestrator import InstanceOrchestrator
from ec2_manager.provider import ComputeProvider
from ec2_manager.schemas import OperationRequest, OperationResult
from ec2_manager.settings import Settings, get_settings
from ec2_manager.validation import validate

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Settings], ComputeProvider]


def default_provider_factory(settings: Settings) -> ComputeProvider:
    return Ec2Provider(create_ec2_client(settings))


def parse_event(event: Any) -> Dict[str, Any]:
    """Extract the request payload from a Lambda event.

    Direct invocations pass the payload itself. Function URL and API Gateway
    proxy events carry it as a JSON string under ``body``.
    """
    if not isinstance(event, dict):
        raise ValueError("request payload must be a JSON object")
    body = event.get('body')
    if 'action' not in event and isinstance(body, str):
        payload = json.loads(body) if body else {}
        if not isinstance(payload, dict):
            raise ValueError("request body must be a JSON object")
        return payload
    return event


def handle_request(
    request: Union[OperationRequest, Dict[str, Any]],
    provider_factory: Optional[ProviderFactory] = None,
    token: Optional[CancellationToken] = None,
    settings: Optional[Settings] = None,
) -> OperationResult:
    """Validate and execute one operation request."""
    if settings is None:
        try:
            settings = get_settings()
        except Exception as e:
            logger.error(f"Failed to load settings: {e}")
            return OperationResult.failed("Failed to initialize EC2 manager", str(e))
    provider_factory = provider_factory or default_provider_factory

    if not isinstance(request, OperationRequest):
        try:
            request = OperationRequest.model_validate(request)
        except PayloadError as e:
            logger.warning(f"Rejected malformed request: {e}")
            return OperationResult.failed("Validation failed", f"invalid request: {e}")

    logger.info(
        f"Received request: action={request.action}, instance_id={request.instance_id}, "
        f"instance_type={request.instance_type or ''}"
    )

    outcome = validate(request)
    if not outcome.ok:
        logger.warning(f"Validation failed: {outcome.message}")
        summary = "Invalid action" if isinstance(outcome.error, UnknownAction) else "Validation failed"
        return OperationResult.failed(summary, outcome.message)

    try:
        provider = provider_factory(settings)
    except Exception as e:
        logger.error(f"Failed to initialize EC2 manager: {e}")
        return OperationResult.failed("Failed to initialize EC2 manager", str(e))

    orchestrator = InstanceOrchestrator.from_settings(provider, settings)
    command = outcome.command
    try:
        message = orchestrator.execute(command, token)
    except InstanceOperationError as e:
        return OperationResult.failed(f"Failed to execute action: {command.action.value}", str(e))
    except Exception as e:
        logger.exception(f"Unexpected error executing {command.action.value} on {command.instance_id}")
        return OperationResult.failed(f"Failed to execute action: {command.action.value}", str(e))

    logger.info(message)
    return OperationResult.succeeded(message)


def lambda_handler(event, context):
    """AWS Lambda entry point; returns the result payload as a dict."""
    try:
        settings = get_settings()
        logging.getLogger("ec2_manager").setLevel(settings.log_level)
    except Exception as e:
        logger.error(f"Failed to load settings: {e}")
        return OperationResult.failed("Failed to initialize EC2 manager", str(e)).to_payload()

    try:
        payload = parse_event(event)
    except ValueError as e:
        logger.warning(f"Could not parse event: {e}")
        return OperationResult.failed("Validation failed", str(e)).to_payload()

    token = CancellationToken.from_lambda_context(context, settings.deadline_margin_seconds)
    return handle_request(payload, token=token, settings=settings).to_payload()
