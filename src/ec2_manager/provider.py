"""Compute provider capability interface used by the orchestrator."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class InstanceState(str, Enum):
    """Lifecycle states reported by the provider."""
    PENDING = "pending"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class StateChange:
    """Transition reported by a start or stop call."""
    instance_id: str
    previous: str
    current: str


class ComputeProvider(ABC):
    """Control API for a single compute instance.

    Implementations may raise any exception on call failure; the orchestrator
    wraps it with the operation name and instance id. ``describe_instance``
    must raise ``NotFoundError`` when the instance does not exist.
    """

    @abstractmethod
    def start_instance(self, instance_id: str) -> Optional[StateChange]:
        ...

    @abstractmethod
    def stop_instance(self, instance_id: str) -> Optional[StateChange]:
        ...

    @abstractmethod
    def describe_instance(self, instance_id: str) -> InstanceState:
        ...

    @abstractmethod
    def modify_instance_class(self, instance_id: str, instance_class: str) -> None:
        ...
