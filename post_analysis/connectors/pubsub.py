"""SNS publisher for stage notifications."""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError

from post_analysis.common.component import ServiceComponent
from post_analysis.common.errors import PublishError, TopicNotFoundError
from post_analysis.common.utils import describe_client_error
from post_analysis.models import PubSubEvent

from .config import PubSubConfig

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NotFound", "NotFoundException"})


class Publisher(ServiceComponent[PubSubConfig]):
    """Publishes events to the notification topic."""

    _config_type = PubSubConfig
    _service_name = "sns"

    @property
    def topic_arn(self) -> str | None:
        return self.config.topic_arn

    async def connect(self) -> None:
        if not self.config.enabled:
            logger.info("Pubsub disabled, not connecting to sns")
            return
        await super().connect()

    async def validate(self) -> None:
        """Check that the topic exists.

        Raises:
            TopicNotFoundError: if the topic does not exist
            PublishError: if the check itself failed
        """
        if not self.config.enabled:
            logger.info("Pubsub disabled, skipping topic check")
            return

        try:
            await self.client.get_topic_attributes(TopicArn=self.topic_arn)
        except ClientError as e:
            code, message = describe_client_error(e)
            if code in _NOT_FOUND_CODES:
                raise TopicNotFoundError(self.topic_arn) from e
            raise PublishError(
                f"checking if the pubsub topic exists failed: {code} - {message}"
            ) from e
        except BotoCoreError as e:
            raise PublishError(f"checking if the pubsub topic exists failed: {e}") from e

        logger.info(f"Using topic {self.topic_arn}")

    async def publish(self, event: PubSubEvent) -> str | None:
        """Publish an event and return the message id."""
        if not event.payload:
            raise ValueError("filename is required")

        if not self.config.enabled:
            logger.info(f"Pubsub disabled, not publishing {event.event_type}")
            return None

        try:
            response = await self.client.publish(
                TopicArn=self.topic_arn,
                Message=event.model_dump_json(by_alias=True),
            )
        except ClientError as e:
            code, message = describe_client_error(e)
            raise PublishError(f"publishing {event.event_type} failed: {code} - {message}") from e
        except BotoCoreError as e:
            raise PublishError(f"publishing {event.event_type} failed: {e}") from e

        message_id = response.get("MessageId")
        logger.info(f"Published {event.event_type} for \"{event.payload}\" ({message_id})")
        return message_id

    async def confirm_subscription(self, token: str, topic_arn: str | None = None) -> None:
        """Confirm an HTTP subscription to the topic."""
        topic_arn = topic_arn or self.topic_arn

        try:
            await self.client.confirm_subscription(TopicArn=topic_arn, Token=token)
        except ClientError as e:
            code, message = describe_client_error(e)
            raise PublishError(f"confirming subscription failed: {code} - {message}") from e
        except BotoCoreError as e:
            raise PublishError(f"confirming subscription failed: {e}") from e

        logger.info(f"Confirmed subscription to {topic_arn}")
