"""Registration notifications published to SNS."""
import json
import logging
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from webapp.errors import NotificationError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def publish(self, event: dict) -> None:
        ...


class SnsNotifier:
    def __init__(self, client, topic_arn):
        self.client = client
        self.topic_arn = topic_arn

    def publish(self, event):
        try:
            self.client.publish(TopicArn=self.topic_arn, Message=json.dumps(event))
        except (BotoCoreError, ClientError) as e:
            raise NotificationError(f"SNS publish failed: {e}") from e


class NullNotifier:
    """Used when no topic is configured (development, tests)."""

    def publish(self, event):
        logger.info("Notifications disabled, dropping event for %s", event.get("email"))


def build_notifier(config):
    if not config["SNS_TOPIC_ARN"]:
        logger.warning("SNS_TOPIC_ARN not set, registration notifications disabled")
        return NullNotifier()
    client = boto3.client("sns", region_name=config["AWS_REGION"])
    return SnsNotifier(client, config["SNS_TOPIC_ARN"])
