"""
Errors raised by alarmsync.

Only fatal conditions are exceptions; per-alarm failures during deploy are
counted, not raised.
"""


class AlarmSyncError(Exception):
    """Base error for alarmsync."""
    pass


class ConfigError(AlarmSyncError):
    """An environment or CLI setting could not be parsed."""
    pass


class InventoryError(AlarmSyncError):
    """Listing queues or alarms failed while building a plan."""
    pass


class PlanError(AlarmSyncError):
    """Base error for plan artifact problems."""
    pass


class PlanNotFoundError(PlanError):
    """The plan file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Plan file not found: {path}")


class PlanFormatError(PlanError):
    """The plan file exists but is not a valid plan."""
    pass
