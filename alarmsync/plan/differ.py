"""
Diff live queues against existing alarms.
"""

import logging
from typing import Iterable, List

from ..naming import DLQ_PATTERNS, alarm_name_for, classify, strip_suffix
from .models import CreateAction, DeleteAction, Plan

logger = logging.getLogger(__name__)


def find_ambiguous_queues(queues: Iterable[str], suffix: str) -> List[str]:
    """
    Queues whose own name ends with the alarm suffix.

    Such a name cannot be told apart from an alarm name, so a later run may
    take it for an orphaned alarm. These are reported, not resolved.
    """
    if not suffix:
        return []
    return sorted(q for q in set(queues) if q.endswith(suffix))


def diff(
    queues: Iterable[str],
    alarms: Iterable[str],
    suffix: str,
    default_threshold: int,
    region: str = "",
    dlq_patterns: Iterable[str] = DLQ_PATTERNS,
) -> Plan:
    """
    Compute the alarm changes needed to match the queue inventory.

    Args:
        queues: Queue names currently present
        alarms: Alarm names matching the suffix filter
        suffix: Alarm name suffix
        default_threshold: Threshold for non dead-letter queues
        region: Region recorded in the plan
        dlq_patterns: Name endings that mark a dead-letter queue

    Returns:
        Plan with creates sorted by queue name and deletes sorted by alarm name
    """
    queue_set = frozenset(queues)
    alarm_set = frozenset(alarms)
    patterns = tuple(dlq_patterns)

    for queue in find_ambiguous_queues(queue_set, suffix):
        logger.warning(f"Queue name '{queue}' ends with alarm suffix '{suffix}'; "
                       f"its alarm may be mistaken for an orphan")

    create = []
    for queue in sorted(queue_set):
        expected = alarm_name_for(queue, suffix)
        if expected not in alarm_set:
            threshold = classify(queue, default_threshold, patterns)
            create.append(CreateAction(queue=queue, alarm=expected, threshold=threshold))
            logger.info(f"  [CREATE] {expected} (threshold: {threshold})")

    delete = []
    for alarm in sorted(alarm_set):
        if strip_suffix(alarm, suffix) not in queue_set:
            delete.append(DeleteAction(alarm=alarm))
            logger.info(f"  [DELETE] {alarm} (orphaned)")

    return Plan(region=region, alarm_suffix=suffix, create=create, delete=delete)
