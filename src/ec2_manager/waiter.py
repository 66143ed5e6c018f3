"""Poll-with-timeout primitive for instance state transitions."""
import logging
from typing import Any, Optional

from ec2_manager.cancellation import CancellationToken
from ec2_manager.errors import UnexpectedStateError, WaitTimeoutError
from ec2_manager.provider import ComputeProvider, InstanceState

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_WAIT = 300.0

# States from which the target can no longer be reached without outside action
FAILURE_STATES = {
    InstanceState.STOPPED: {
        InstanceState.PENDING,
        InstanceState.SHUTTING_DOWN,
        InstanceState.TERMINATED,
    },
}


def wait_for_state(
    provider: ComputeProvider,
    instance_id: str,
    target: InstanceState,
    token: Optional[CancellationToken] = None,
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_MAX_WAIT,
    clock: Any = None,
) -> InstanceState:
    """Block until ``instance_id`` reports ``target``.

    The provider is queried immediately and then every ``interval`` seconds.
    Elapsed time is measured on ``clock`` (the token's clock by default).

    Raises:
        WaitTimeoutError: ``timeout`` elapsed without observing ``target``.
        OperationCancelledError: the token was cancelled or hit its deadline.
        UnexpectedStateError: the instance moved to a state that rules out ``target``.
        NotFoundError: the instance disappeared.
    """
    token = token or CancellationToken(clock=clock)
    clock = clock or token.clock
    what = f"waiting for state {target.value}"
    failure_states = FAILURE_STATES.get(target, set())

    started = clock.now()
    polls = 0
    while True:
        token.raise_if_cancelled(instance_id, what)

        state = provider.describe_instance(instance_id)
        polls += 1
        if state == target:
            logger.info(f"Instance {instance_id} reached {target.value} after {polls} poll(s)")
            return state
        if state in failure_states:
            raise UnexpectedStateError(instance_id, target.value, state.value)

        elapsed = clock.now() - started
        if elapsed >= timeout:
            logger.warning(f"Instance {instance_id} still {state.value} after {elapsed:.0f}s")
            raise WaitTimeoutError(instance_id, target.value, timeout)

        logger.debug(f"Instance {instance_id} is {state.value}, polling again in {interval}s")
        if token.sleep(min(interval, timeout - elapsed)):
            token.raise_if_cancelled(instance_id, what)
