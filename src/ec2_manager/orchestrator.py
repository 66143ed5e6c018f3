"""Instance lifecycle orchestration.

Restart and change_class are composite operations built on a shared
sub-protocol: issue a stop, then poll until the provider reports ``stopped``.
A composite stops at the first failing step and never force-starts an
instance whose stop could not be confirmed.
"""
import logging
from typing import Any, Callable, Optional, TypeVar

from ec2_manager.cancellation import CancellationToken, MonotonicClock
from ec2_manager.commands import InstanceCommand
from ec2_manager.errors import InstanceOperationError, ProviderError
from ec2_manager.provider import ComputeProvider, InstanceState, StateChange
from ec2_manager.utils.decorators import log_operation
from ec2_manager.waiter import DEFAULT_MAX_WAIT, DEFAULT_POLL_INTERVAL, wait_for_state

logger = logging.getLogger(__name__)

T = TypeVar('T')


class InstanceOrchestrator:
    """Run lifecycle operations against one provider handle.

    Args:
        provider: Compute provider owned by this orchestrator for the
            duration of one invocation.
        poll_interval: Seconds between state queries while waiting.
        max_wait: Ceiling in seconds for each wait on ``stopped``.
        clock: Clock used to measure the wait; defaults to the token's clock.
    """

    def __init__(self, provider: ComputeProvider, *,
                 poll_interval: float = DEFAULT_POLL_INTERVAL,
                 max_wait: float = DEFAULT_MAX_WAIT,
                 clock: Any = None):
        self.provider = provider
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.clock = clock

    @classmethod
    def from_settings(cls, provider: ComputeProvider, settings) -> "InstanceOrchestrator":
        return cls(
            provider,
            poll_interval=settings.poll_interval_seconds,
            max_wait=settings.max_wait_seconds,
        )

    def execute(self, command: InstanceCommand,
                token: Optional[CancellationToken] = None) -> str:
        """Run ``command`` and return its success message."""
        command.run(self, self._token(token))
        return command.success_message()

    @log_operation("start")
    def start(self, instance_id: str, token: Optional[CancellationToken] = None) -> None:
        token = self._token(token)
        token.raise_if_cancelled(instance_id, "starting")
        change = self._call("start", instance_id, self.provider.start_instance, instance_id)
        self._log_state_change(change)

    @log_operation("stop")
    def stop(self, instance_id: str, token: Optional[CancellationToken] = None) -> None:
        token = self._token(token)
        token.raise_if_cancelled(instance_id, "stopping")
        change = self._call("stop", instance_id, self.provider.stop_instance, instance_id)
        self._log_state_change(change)

    @log_operation("restart")
    def restart(self, instance_id: str, token: Optional[CancellationToken] = None) -> None:
        token = self._token(token)
        self.stop(instance_id, token)
        self._wait_until_stopped(instance_id, token)
        logger.info(f"Starting instance {instance_id}...")
        self.start(instance_id, token)

    @log_operation("change class")
    def change_class(self, instance_id: str, new_class: str,
                     token: Optional[CancellationToken] = None) -> None:
        """Move the instance to ``new_class``, leaving it stopped."""
        token = self._token(token)
        token.raise_if_cancelled(instance_id, "checking state")
        current = self._call("describe", instance_id, self.provider.describe_instance, instance_id)

        if current != InstanceState.STOPPED:
            logger.info(f"Instance {instance_id} is in state {current.value}, stopping it first...")
            self.stop(instance_id, token)
            self._wait_until_stopped(instance_id, token)

        token.raise_if_cancelled(instance_id, "changing instance type")
        self._call("modify instance type of", instance_id,
                   self.provider.modify_instance_class, instance_id, new_class)
        logger.info(f"Successfully changed instance {instance_id} type to {new_class}")

    def _wait_until_stopped(self, instance_id: str, token: CancellationToken) -> None:
        logger.info(f"Waiting for instance {instance_id} to stop...")
        try:
            wait_for_state(
                self.provider,
                instance_id,
                InstanceState.STOPPED,
                token,
                interval=self.poll_interval,
                timeout=self.max_wait,
                clock=self.clock,
            )
        except InstanceOperationError:
            raise
        except Exception as e:
            raise ProviderError("describe", instance_id, e) from e

    def _token(self, token: Optional[CancellationToken]) -> CancellationToken:
        if token is not None:
            return token
        return CancellationToken(clock=self.clock or MonotonicClock())

    @staticmethod
    def _call(operation: str, instance_id: str, func: Callable[..., T], *args) -> T:
        try:
            return func(*args)
        except InstanceOperationError:
            raise
        except Exception as e:
            raise ProviderError(operation, instance_id, e) from e

    @staticmethod
    def _log_state_change(change: Optional[StateChange]) -> None:
        if change is not None:
            logger.info(
                f"Instance {change.instance_id} state changing from "
                f"{change.previous} to {change.current}"
            )
