"""Notification payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Events exchanged over the notification topic."""

    UPDATE_POST_SENTIMENT = "update-post-sentiment"


class PubSubEvent(BaseModel):
    """Event published once a stage has uploaded its output."""

    model_config = ConfigDict(populate_by_name=True)

    event_type: str = Field(..., alias="eventType")
    payload: str = Field(..., description="Name of the analyzed file")


class SNSEnvelope(BaseModel):
    """Body of an SNS HTTP(S) delivery.

    Reference: https://docs.aws.amazon.com/sns/latest/dg/sns-message-and-json-formats.html
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(..., alias="Type")
    message_id: str | None = Field(default=None, alias="MessageId")
    topic_arn: str | None = Field(default=None, alias="TopicArn")
    message: str = Field(default="", alias="Message")
    token: str | None = Field(default=None, alias="Token")
