"""
Tests for the AWS collaborators, using mocked boto3 clients.
"""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError
from alarmsync.aws import (
    AlarmClient,
    AlarmSettings,
    Notifier,
    build_summary_message,
    list_alarm_names,
    list_queue_names,
)
from alarmsync.errors import InventoryError
from alarmsync.plan import CreateAction, DeleteAction

TOPIC = "arn:aws:sns:us-east-1:123456789012:alarm-topic"


def client_error(operation, code="AccessDenied"):
    return ClientError({"Error": {"Code": code, "Message": "denied"}}, operation)


def paginated_client(pages):
    client = Mock()
    paginator = Mock()
    paginator.paginate.return_value = pages
    client.get_paginator.return_value = paginator
    return client


class TestInventory:
    """Test queue and alarm listing."""

    def test_list_queue_names(self):
        """Test queue names are collected across pages."""
        client = paginated_client([
            {"QueueUrls": [
                "https://sqs.us-east-1.amazonaws.com/123456789012/orders",
                "https://sqs.us-east-1.amazonaws.com/123456789012/orders-dlq",
            ]},
            {"QueueUrls": ["https://sqs.us-east-1.amazonaws.com/123456789012/payments"]},
            {},
        ])

        names = list_queue_names("us-east-1", client=client)

        assert names == {"orders", "orders-dlq", "payments"}
        client.get_paginator.assert_called_once_with("list_queues")

    def test_list_queue_names_error(self):
        """Test SQS listing errors become InventoryError."""
        client = paginated_client([])
        client.get_paginator.return_value.paginate.side_effect = client_error("ListQueues")

        with pytest.raises(InventoryError, match="SQS queues"):
            list_queue_names("us-east-1", client=client)

    def test_list_alarm_names_filters_by_suffix(self):
        """Test only alarms containing the suffix are kept."""
        client = paginated_client([
            {"MetricAlarms": [
                {"AlarmName": "orders-cloudwatch-alarm"},
                {"AlarmName": "cpu-high"},
            ]},
            {"MetricAlarms": [{"AlarmName": "legacy-dlq-cloudwatch-alarm"}]},
        ])

        names = list_alarm_names("us-east-1", "-cloudwatch-alarm", client=client)

        assert names == {"orders-cloudwatch-alarm", "legacy-dlq-cloudwatch-alarm"}
        client.get_paginator.assert_called_once_with("describe_alarms")
        client.get_paginator.return_value.paginate.assert_called_once_with(AlarmTypes=["MetricAlarm"])

    def test_list_alarm_names_error(self):
        """Test CloudWatch listing errors become InventoryError."""
        client = paginated_client([])
        client.get_paginator.return_value.paginate.side_effect = client_error("DescribeAlarms")

        with pytest.raises(InventoryError, match="CloudWatch alarms"):
            list_alarm_names("us-east-1", "-cloudwatch-alarm", client=client)

    @patch("alarmsync.aws.inventory.boto3.client")
    def test_creates_regional_client(self, mock_client):
        """Test a client is created for the requested region."""
        mock_client.return_value = paginated_client([])

        list_queue_names("eu-west-1")

        mock_client.assert_called_once_with("sqs", region_name="eu-west-1")


class TestAlarmClient:
    """Test alarm create/delete calls."""

    def test_create_alarm_request(self):
        """Test the put_metric_alarm request for a queue."""
        cloudwatch = Mock()
        alarms = AlarmClient("us-east-1", AlarmSettings(topic_arn=TOPIC, period=60), client=cloudwatch)

        assert alarms.create_alarm(CreateAction("orders-dlq", "orders-dlq-cloudwatch-alarm", 1))

        kwargs = cloudwatch.put_metric_alarm.call_args.kwargs
        assert kwargs["AlarmName"] == "orders-dlq-cloudwatch-alarm"
        assert kwargs["AlarmDescription"] == "Alarm for SQS queue orders-dlq"
        assert kwargs["Namespace"] == "AWS/SQS"
        assert kwargs["MetricName"] == "ApproximateNumberOfMessagesVisible"
        assert kwargs["Dimensions"] == [{"Name": "QueueName", "Value": "orders-dlq"}]
        assert kwargs["Statistic"] == "Average"
        assert kwargs["Period"] == 60
        assert kwargs["EvaluationPeriods"] == 1
        assert kwargs["Threshold"] == 1
        assert kwargs["ComparisonOperator"] == "GreaterThanThreshold"
        assert kwargs["TreatMissingData"] == "notBreaching"
        assert kwargs["AlarmActions"] == [TOPIC]
        assert kwargs["OKActions"] == [TOPIC]

    def test_no_topic_means_no_actions(self):
        """Test alarms without a topic carry no actions."""
        alarms = AlarmClient("us-east-1", AlarmSettings(), client=Mock())
        request = alarms.build_alarm_request(CreateAction("orders", "orders-cloudwatch-alarm", 5))

        assert "AlarmActions" not in request
        assert "OKActions" not in request

    def test_create_alarm_failure(self):
        """Test a rejected create returns False."""
        cloudwatch = Mock()
        cloudwatch.put_metric_alarm.side_effect = client_error("PutMetricAlarm", "Throttling")
        alarms = AlarmClient("us-east-1", client=cloudwatch)

        assert alarms.create_alarm(CreateAction("orders", "orders-cloudwatch-alarm", 5)) is False

    def test_delete_alarm(self):
        """Test deleting a single alarm."""
        cloudwatch = Mock()
        alarms = AlarmClient("us-east-1", client=cloudwatch)

        assert alarms.delete_alarm(DeleteAction("legacy-cloudwatch-alarm"))
        cloudwatch.delete_alarms.assert_called_once_with(AlarmNames=["legacy-cloudwatch-alarm"])

    def test_delete_alarm_failure(self):
        """Test a rejected delete returns False."""
        cloudwatch = Mock()
        cloudwatch.delete_alarms.side_effect = client_error("DeleteAlarms")
        alarms = AlarmClient("us-east-1", client=cloudwatch)

        assert alarms.delete_alarm(DeleteAction("legacy-cloudwatch-alarm")) is False


class TestNotifier:
    """Test deployment summary notifications."""

    def test_summary_message(self):
        """Test the summary subject and body."""
        subject, message = build_summary_message("us-east-1", 2, 1, 0)

        assert subject == "SQS Alarms Deployed: 2 created, 1 deleted"
        assert "Region: us-east-1" in message
        assert "Created: 2" in message
        assert "Deleted: 1" in message
        assert "Failed: 0" in message
        assert "completed successfully" in message

    def test_summary_message_with_failures(self):
        """Test the summary reports failed operations."""
        subject, message = build_summary_message("us-east-1", 1, 1, 1)

        assert subject.endswith("1 failed")
        assert "completed successfully" not in message
        assert len(subject) <= 100

    def test_publish(self):
        """Test publishing the summary to SNS."""
        sns = Mock()
        notifier = Notifier("us-east-1", TOPIC, client=sns)

        assert notifier.publish(2, 1, 0)

        kwargs = sns.publish.call_args.kwargs
        assert kwargs["TopicArn"] == TOPIC
        assert kwargs["Subject"] == "SQS Alarms Deployed: 2 created, 1 deleted"

    def test_publish_failure_is_swallowed(self):
        """Test SNS errors do not raise."""
        sns = Mock()
        sns.publish.side_effect = client_error("Publish")
        notifier = Notifier("us-east-1", TOPIC, client=sns)

        assert notifier.publish(0, 0, 0) is False

    def test_no_topic_skips_publish(self):
        """Test publishing is skipped without a topic."""
        sns = Mock()
        notifier = Notifier("us-east-1", None, client=sns)

        assert notifier.publish(1, 0, 0) is False
        sns.publish.assert_not_called()
