"""AWS connector configuration."""

from __future__ import annotations

import os

from pydantic import Field, model_validator

from post_analysis.common.config import AWSServiceConfig


class StorageConfig(AWSServiceConfig):
    """S3 location of scraped and analyzed posts."""

    bucket: str = Field(
        default="rube_goldberg_project",
        description="Bucket holding the post files",
        min_length=1,
    )
    prefix: str = Field(
        default="reddit_data",
        description="Key prefix of the post files",
    )
    timeout: float = Field(
        default=50.0,
        description="Timeout per storage operation in seconds",
        gt=0,
        le=600,
    )


class PubSubConfig(AWSServiceConfig):
    """SNS topic chaining the entity stage into the sentiment stage."""

    enabled: bool = Field(
        default=True,
        description="Publish stage notifications",
    )
    topic_arn: str | None = Field(
        default=None,
        description="ARN of the notification topic",
        pattern=r"^arn:aws[a-z-]*:sns:[a-z0-9-]+:\d{12}:[A-Za-z0-9_-]{1,256}$",
    )

    @model_validator(mode="before")
    @classmethod
    def validate_topic(cls, values: dict) -> dict:
        values = dict(values)
        topic_arn = values.get("topic_arn") or os.getenv("SNS_TOPIC_ARN")

        if values.get("enabled", True) and not topic_arn:
            raise ValueError("topic_arn or SNS_TOPIC_ARN must be set when pubsub is enabled")

        values["topic_arn"] = topic_arn
        return values
