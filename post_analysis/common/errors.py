"""Errors raised by the analysis service."""

from __future__ import annotations

from typing import Any


class AnalysisError(Exception):
    """Base class for all service errors."""


class ConfigError(AnalysisError):
    """Invalid or missing configuration."""


class NotConnectedError(AnalysisError):
    """A component was used before connecting."""


class StorageError(AnalysisError):
    """Reading from or writing to object storage failed."""


class LanguageError(AnalysisError):
    """The natural-language API rejected or failed a request."""


class PublishError(AnalysisError):
    """Publishing to or managing the notification topic failed."""


class TopicNotFoundError(PublishError):
    """The configured notification topic does not exist."""

    def __init__(self, topic: str) -> None:
        self.topic = topic
        super().__init__(f'"{topic}" does not exist as a topic')


class MalformedResponseError(AnalysisError):
    """An API response is missing an expected key."""

    def __init__(self, response: Any, key: str) -> None:
        self.response = response
        self.key = key
        super().__init__(f"Malformed response, missing '{key}': {response}")
