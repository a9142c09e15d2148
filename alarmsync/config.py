"""
Runtime configuration for alarmsync.

Settings are read from the environment once, at the CLI boundary, and passed
down explicitly. Nothing below the CLI reads ``os.environ``.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_REGION = "us-east-1"
DEFAULT_ALARM_SUFFIX = "-cloudwatch-alarm"
DEFAULT_THRESHOLD = 5
DEFAULT_PERIOD = 60
DEFAULT_PLAN_PATH = "plan.json"


@dataclass(frozen=True)
class SyncConfig:
    """Settings shared by the analyze and deploy stages."""
    region: str = DEFAULT_REGION
    alarm_suffix: str = DEFAULT_ALARM_SUFFIX
    default_threshold: int = DEFAULT_THRESHOLD
    topic_arn: Optional[str] = None
    period: int = DEFAULT_PERIOD
    plan_path: str = DEFAULT_PLAN_PATH

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SyncConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            SyncConfig with unset variables left at their defaults

        Raises:
            ConfigError: If a numeric variable is not a positive integer
        """
        env = os.environ if environ is None else environ

        return cls(
            region=env.get("AWS_REGION") or DEFAULT_REGION,
            alarm_suffix=env.get("ALARM_SUFFIX") or DEFAULT_ALARM_SUFFIX,
            default_threshold=_positive_int(env, "ALARM_THRESHOLD", DEFAULT_THRESHOLD),
            topic_arn=env.get("SNS_TOPIC_ARN") or None,
            period=_positive_int(env, "ALARM_PERIOD", DEFAULT_PERIOD),
            plan_path=env.get("ALARM_PLAN_PATH") or DEFAULT_PLAN_PATH,
        )

    def with_overrides(self, **overrides) -> "SyncConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        for key in ("default_threshold", "period"):
            if key in values and values[key] <= 0:
                raise ConfigError(f"{key} must be a positive integer, got {values[key]}")
        if "alarm_suffix" in values and not values["alarm_suffix"]:
            raise ConfigError("alarm_suffix must not be empty")
        return replace(self, **values)


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value}")
    return value
