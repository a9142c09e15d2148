"""
Naming convention linking a queue to its alarm, and the threshold policy.
"""

from typing import Iterable

DLQ_PATTERNS = ("-dlq", "-dead-letter", "_dlq")
DLQ_THRESHOLD = 1


def extract_queue_name(locator: str) -> str:
    """
    Extract the queue name from a queue URL or ARN.

    Args:
        locator: Queue URL (https://sqs.../123456789012/orders) or ARN

    Returns:
        The final '/'-delimited segment; ARNs without '/' fall back to the
        final ':' segment
    """
    locator = locator.strip()
    if "/" in locator:
        return locator.rstrip("/").rsplit("/", 1)[-1]
    if locator.startswith("arn:"):
        return locator.rsplit(":", 1)[-1]
    return locator


def alarm_name_for(queue: str, suffix: str) -> str:
    """Alarm name expected for a queue."""
    return f"{queue}{suffix}"


def strip_suffix(alarm: str, suffix: str) -> str:
    """
    Reverse ``alarm_name_for``.

    Names that do not end with the suffix are returned unchanged, so an alarm
    that only contains the suffix somewhere in the middle is compared whole.
    """
    if suffix and alarm.endswith(suffix):
        return alarm[: -len(suffix)]
    return alarm


def is_dlq(queue: str, patterns: Iterable[str] = DLQ_PATTERNS) -> bool:
    """Case-sensitive check for a dead-letter queue naming pattern."""
    return any(queue.endswith(p) for p in patterns)


def classify(queue: str, default_threshold: int, patterns: Iterable[str] = DLQ_PATTERNS) -> int:
    """
    Pick the alarm threshold for a queue.

    Args:
        queue: Queue name
        default_threshold: Threshold for ordinary queues
        patterns: Dead-letter name endings

    Returns:
        1 for dead-letter queues, ``default_threshold`` otherwise
    """
    if is_dlq(queue, patterns):
        return DLQ_THRESHOLD
    return default_threshold
