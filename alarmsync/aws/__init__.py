"""
AWS collaborators: queue/alarm inventory, alarm changes and notifications.
"""

from .inventory import list_queue_names, list_alarm_names
from .alarms import AlarmClient, AlarmSettings
from .notify import Notifier, build_summary_message

__all__ = [
    "list_queue_names",
    "list_alarm_names",
    "AlarmClient",
    "AlarmSettings",
    "Notifier",
    "build_summary_message",
]
