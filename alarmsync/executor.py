"""
Apply a saved plan: create missing alarms, then delete orphaned ones.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .aws.alarms import AlarmClient, AlarmSettings
from .aws.notify import Notifier
from .plan.models import Plan

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """Tally of a deploy run."""
    created: int = 0
    deleted: int = 0
    create_failures: int = 0
    delete_failures: int = 0
    failed_alarms: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.create_failures + self.delete_failures

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created": self.created,
            "deleted": self.deleted,
            "failed": self.failed,
            "failed_alarms": list(self.failed_alarms),
        }


class PlanExecutor:
    """
    Runs the create phase then the delete phase of a plan.

    A failed action is logged and counted; the run always continues. Nothing
    is retried and nothing already applied is rolled back.
    """

    def __init__(self, alarms: AlarmClient, notifier: Optional[Notifier] = None):
        self.alarms = alarms
        self.notifier = notifier

    @classmethod
    def for_plan(cls, plan: Plan, settings: AlarmSettings) -> "PlanExecutor":
        """Build an executor with AWS clients in the plan's region."""
        alarms = AlarmClient(plan.region, settings)
        notifier = Notifier(plan.region, settings.topic_arn)
        return cls(alarms, notifier)

    def execute(self, plan: Plan) -> Outcome:
        outcome = Outcome()

        if plan.create:
            logger.info("Phase 1: Creating Alarms")
            logger.info("-" * 40)
            for action in plan.create:
                logger.info(f"Creating alarm: {action.alarm} (threshold: {action.threshold})")
                if self._apply(self.alarms.create_alarm, action):
                    outcome.created += 1
                    logger.info(f"Created: {action.alarm}")
                else:
                    outcome.create_failures += 1
                    outcome.failed_alarms.append(action.alarm)
                    logger.error(f"Failed: {action.alarm}")

        if plan.delete:
            logger.info("Phase 2: Deleting Orphaned Alarms")
            logger.info("-" * 40)
            for action in plan.delete:
                logger.info(f"Deleting alarm: {action.alarm}")
                if self._apply(self.alarms.delete_alarm, action):
                    outcome.deleted += 1
                    logger.info(f"Deleted: {action.alarm}")
                else:
                    outcome.delete_failures += 1
                    outcome.failed_alarms.append(action.alarm)
                    logger.error(f"Failed to delete: {action.alarm}")

        self._notify(outcome)
        return outcome

    def _apply(self, call, action) -> bool:
        try:
            return bool(call(action))
        except Exception as e:
            logger.error(f"Error applying {type(action).__name__} for {action.alarm}: {e}")
            return False

    def _notify(self, outcome: Outcome) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.publish(outcome.created, outcome.deleted, outcome.failed)
        except Exception as e:
            logger.warning(f"Warning: Failed to send notification: {e}")
