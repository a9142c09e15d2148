"""
Inventory listing for SQS queues and CloudWatch alarms.
"""

import logging
from typing import Any, Optional, Set

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import InventoryError
from ..naming import extract_queue_name

logger = logging.getLogger(__name__)


def list_queue_names(region: str, client: Optional[Any] = None) -> Set[str]:
    """
    List the names of all SQS queues in a region.

    Args:
        region: AWS region
        client: Optional SQS client (created with boto3 when omitted)

    Returns:
        Set of queue names

    Raises:
        InventoryError: If the queues cannot be listed
    """
    sqs = client or boto3.client("sqs", region_name=region)
    names: Set[str] = set()

    try:
        paginator = sqs.get_paginator("list_queues")
        for page in paginator.paginate():
            for url in page.get("QueueUrls", []):
                names.add(extract_queue_name(url))
    except (ClientError, BotoCoreError) as e:
        raise InventoryError(f"Failed to list SQS queues in {region}: {e}") from e

    logger.debug(f"Found {len(names)} SQS queues in {region}")
    return names


def list_alarm_names(region: str, suffix: str, client: Optional[Any] = None) -> Set[str]:
    """
    List metric alarm names that contain the alarm suffix.

    Args:
        region: AWS region
        suffix: Alarm name suffix used as the filter
        client: Optional CloudWatch client

    Returns:
        Set of alarm names

    Raises:
        InventoryError: If the alarms cannot be listed
    """
    cloudwatch = client or boto3.client("cloudwatch", region_name=region)
    names: Set[str] = set()

    try:
        paginator = cloudwatch.get_paginator("describe_alarms")
        for page in paginator.paginate(AlarmTypes=["MetricAlarm"]):
            for alarm in page.get("MetricAlarms", []):
                name = alarm.get("AlarmName", "")
                if suffix in name:
                    names.add(name)
    except (ClientError, BotoCoreError) as e:
        raise InventoryError(f"Failed to list CloudWatch alarms in {region}: {e}") from e

    logger.debug(f"Found {len(names)} alarms matching '{suffix}' in {region}")
    return names
