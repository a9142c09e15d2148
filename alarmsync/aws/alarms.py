"""
CloudWatch alarm create/delete calls.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import DEFAULT_PERIOD
from ..plan.models import CreateAction, DeleteAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlarmSettings:
    """Evaluation settings shared by every alarm alarmsync creates."""
    topic_arn: Optional[str] = None
    period: int = DEFAULT_PERIOD
    namespace: str = "AWS/SQS"
    metric_name: str = "ApproximateNumberOfMessagesVisible"
    statistic: str = "Average"
    evaluation_periods: int = 1
    comparison_operator: str = "GreaterThanThreshold"
    treat_missing_data: str = "notBreaching"


class AlarmClient:
    """Applies plan actions to CloudWatch."""

    def __init__(self, region: str, settings: Optional[AlarmSettings] = None, client: Optional[Any] = None):
        self.region = region
        self.settings = settings or AlarmSettings()
        self._client = client or boto3.client("cloudwatch", region_name=region)

    def build_alarm_request(self, action: CreateAction) -> Dict[str, Any]:
        """Keyword arguments for ``put_metric_alarm``."""
        s = self.settings
        request = {
            "AlarmName": action.alarm,
            "AlarmDescription": f"Alarm for SQS queue {action.queue}",
            "Namespace": s.namespace,
            "MetricName": s.metric_name,
            "Dimensions": [{"Name": "QueueName", "Value": action.queue}],
            "Statistic": s.statistic,
            "Period": s.period,
            "EvaluationPeriods": s.evaluation_periods,
            "Threshold": float(action.threshold),
            "ComparisonOperator": s.comparison_operator,
            "TreatMissingData": s.treat_missing_data,
        }
        if s.topic_arn:
            request["AlarmActions"] = [s.topic_arn]
            request["OKActions"] = [s.topic_arn]
        return request

    def create_alarm(self, action: CreateAction) -> bool:
        """
        Create (or overwrite) the alarm for a queue.

        Returns:
            True on success, False if CloudWatch rejected the call
        """
        try:
            self._client.put_metric_alarm(**self.build_alarm_request(action))
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to create alarm {action.alarm}: {e}")
            return False

    def delete_alarm(self, action: DeleteAction) -> bool:
        """Delete an alarm. Returns True on success."""
        try:
            self._client.delete_alarms(AlarmNames=[action.alarm])
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete alarm {action.alarm}: {e}")
            return False
