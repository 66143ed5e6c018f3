"""Decorator utilities for cross-cutting concerns."""
import time
import logging
import functools
from typing import Any, Callable, TypeVar, cast

from ec2_manager.errors import InstanceOperationError

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_operation(operation: str) -> Callable[[F], F]:
    """Decorator to log an orchestrator operation with its duration.

    The decorated method must take the instance id as its first positional
    argument after ``self``.

    Args:
        operation: Human readable operation name used in log lines

    Returns:
        Decorator function
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self, instance_id, *args, **kwargs):
            start_time = time.monotonic()
            logger.info(f"{operation} {instance_id}: started")
            try:
                result = func(self, instance_id, *args, **kwargs)
            except InstanceOperationError as e:
                duration = time.monotonic() - start_time
                logger.error(f"{operation} {instance_id}: failed after {duration:.2f}s: {e}")
                raise
            except Exception:
                duration = time.monotonic() - start_time
                logger.exception(f"{operation} {instance_id}: crashed after {duration:.2f}s")
                raise
            duration = time.monotonic() - start_time
            logger.info(f"{operation} {instance_id}: completed in {duration:.2f}s")
            return result
        return cast(F, wrapper)
    return decorator
