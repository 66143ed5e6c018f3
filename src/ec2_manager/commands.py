"""Typed commands, one per action.

A validated request becomes exactly one of these. Each command knows how to
run itself against an orchestrator and how to describe its success.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Optional

from ec2_manager.schemas import Action

if TYPE_CHECKING:
    from ec2_manager.cancellation import CancellationToken
    from ec2_manager.orchestrator import InstanceOrchestrator


@dataclass(frozen=True)
class InstanceCommand(ABC):
    instance_id: str

    action: ClassVar[Action]

    @abstractmethod
    def run(self, orchestrator: "InstanceOrchestrator",
            token: Optional["CancellationToken"] = None) -> None:
        ...

    @abstractmethod
    def success_message(self) -> str:
        ...


@dataclass(frozen=True)
class StartInstance(InstanceCommand):
    action: ClassVar[Action] = Action.START

    def run(self, orchestrator, token=None):
        orchestrator.start(self.instance_id, token)

    def success_message(self):
        return f"Instance {self.instance_id} started successfully"


@dataclass(frozen=True)
class StopInstance(InstanceCommand):
    action: ClassVar[Action] = Action.STOP

    def run(self, orchestrator, token=None):
        orchestrator.stop(self.instance_id, token)

    def success_message(self):
        return f"Instance {self.instance_id} stopped successfully"


@dataclass(frozen=True)
class RestartInstance(InstanceCommand):
    action: ClassVar[Action] = Action.RESTART

    def run(self, orchestrator, token=None):
        orchestrator.restart(self.instance_id, token)

    def success_message(self):
        return f"Instance {self.instance_id} restarted successfully"


@dataclass(frozen=True)
class ChangeInstanceClass(InstanceCommand):
    target_class: str = ""

    action: ClassVar[Action] = Action.CHANGE_CLASS

    def run(self, orchestrator, token=None):
        orchestrator.change_class(self.instance_id, self.target_class, token)

    def success_message(self):
        return f"Instance {self.instance_id} type changed to {self.target_class} successfully"
