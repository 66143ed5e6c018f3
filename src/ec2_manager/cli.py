# cli.py
import json
import logging
import sys
from typing import Optional

import click

from ec2_manager.cancellation import CancellationToken
from ec2_manager.handler import handle_request
from ec2_manager.schemas import Action, OperationRequest
from ec2_manager.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)


def _run(action: Action, instance_id: str, instance_type: Optional[str] = None,
         timeout: Optional[float] = None):
    settings = get_settings()
    token = CancellationToken.with_timeout(timeout) if timeout else None
    request = OperationRequest(action=action.value, instance_id=instance_id,
                               instance_type=instance_type)
    result = handle_request(request, token=token, settings=settings)
    click.echo(json.dumps(result.to_payload(), indent=2))
    if not result.success:
        sys.exit(1)


timeout_option = click.option(
    "--timeout",
    type=float,
    default=None,
    help="Give up after this many seconds (default: no overall deadline)",
)


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """Start, stop, restart or resize a single EC2 instance"""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.argument("instance_id")
@timeout_option
def start(instance_id, timeout):
    """Start an instance"""
    _run(Action.START, instance_id, timeout=timeout)


@cli.command()
@click.argument("instance_id")
@timeout_option
def stop(instance_id, timeout):
    """Stop an instance"""
    _run(Action.STOP, instance_id, timeout=timeout)


@cli.command()
@click.argument("instance_id")
@timeout_option
def restart(instance_id, timeout):
    """Stop an instance, wait until it is stopped, then start it"""
    _run(Action.RESTART, instance_id, timeout=timeout)


@cli.command("change-class")
@click.argument("instance_id")
@click.argument("instance_type")
@timeout_option
def change_class(instance_id, instance_type, timeout):
    """Stop an instance if needed and change its instance type"""
    _run(Action.CHANGE_CLASS, instance_id, instance_type, timeout=timeout)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  Poll Interval: {settings.poll_interval_seconds}s")
    print(f"  Max Wait: {settings.max_wait_seconds}s")
    print(f"  Log Level: {settings.log_level}")


if __name__ == "__main__":
    cli()
