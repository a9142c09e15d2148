"""
Data models for alarm plans.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union


@dataclass(frozen=True)
class CreateAction:
    """Create an alarm for a queue that has none."""
    queue: str
    alarm: str
    threshold: int


@dataclass(frozen=True)
class DeleteAction:
    """Delete an alarm whose queue no longer exists."""
    alarm: str


Action = Union[CreateAction, DeleteAction]


@dataclass(frozen=True)
class PlanSummary:
    to_create: int
    to_delete: int


@dataclass(frozen=True)
class Plan:
    """
    Output of the analyze stage and the only input of the deploy stage.

    The summary is derived from the action lists, so it always matches them.
    """
    region: str
    alarm_suffix: str
    create: Tuple[CreateAction, ...] = field(default_factory=tuple)
    delete: Tuple[DeleteAction, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Lists handed in by callers are frozen so the plan stays immutable
        object.__setattr__(self, "create", tuple(self.create))
        object.__setattr__(self, "delete", tuple(self.delete))

    @property
    def summary(self) -> PlanSummary:
        return PlanSummary(to_create=len(self.create), to_delete=len(self.delete))

    @property
    def is_empty(self) -> bool:
        return not self.create and not self.delete
