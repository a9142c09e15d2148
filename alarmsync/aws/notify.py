"""
Deployment summary notifications over SNS.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

# SNS rejects subjects longer than this
MAX_SUBJECT_LENGTH = 100


def build_summary_message(region: str, created: int, deleted: int, failed: int,
                          timestamp: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Build the subject and body of the deployment summary.

    Returns:
        Tuple of (subject, message)
    """
    ts = (timestamp or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    subject = f"SQS Alarms Deployed: {created} created, {deleted} deleted"
    if failed:
        subject += f", {failed} failed"

    status_line = ("Pipeline execution completed successfully." if failed == 0
                   else f"Pipeline execution completed with {failed} failed operation(s).")
    message = (
        "SQS Alarm Deployment Complete\n"
        "\n"
        f"Region: {region}\n"
        f"Timestamp: {ts}\n"
        "\n"
        "Results:\n"
        f"Created: {created}\n"
        f"Deleted: {deleted}\n"
        f"Failed: {failed}\n"
        "\n"
        f"{status_line}"
    )
    return subject[:MAX_SUBJECT_LENGTH], message


class Notifier:
    """Best-effort SNS publisher for deployment summaries."""

    def __init__(self, region: str, topic_arn: Optional[str], client: Optional[Any] = None):
        self.region = region
        self.topic_arn = topic_arn
        self._client = client

    def _sns(self):
        if self._client is None:
            self._client = boto3.client("sns", region_name=self.region)
        return self._client

    def publish(self, created: int, deleted: int, failed: int) -> bool:
        """
        Publish the deployment summary.

        Returns:
            True if SNS accepted the message, False if it was skipped or failed
        """
        if not self.topic_arn:
            logger.info("No SNS topic configured; skipping notification")
            return False

        subject, message = build_summary_message(self.region, created, deleted, failed)
        try:
            self._sns().publish(TopicArn=self.topic_arn, Subject=subject, Message=message)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Warning: Failed to send notification: {e}")
            return False
