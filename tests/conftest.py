"""Pytest configuration."""

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

from post_analysis.connectors import Publisher, StorageConnector
from post_analysis.inference import LanguageClient

pytest_plugins = ["pytest_asyncio"]

TOPIC_ARN = "arn:aws:sns:eu-central-1:123456789012:rube_goldberg"


def make_client_error(code: str, operation: str = "Operation", message: str = "") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": message or code}}, operation)


def make_body(payload: Any) -> MagicMock:
    """Mock an S3 StreamingBody holding ``payload`` as JSON."""
    body = MagicMock()
    body.read = AsyncMock(return_value=json.dumps(payload).encode())
    return body


@pytest.fixture
def raw_posts() -> list[dict[str, Any]]:
    """Scraped posts as stored in the bucket."""
    return [
        {
            "title": "Launch day",
            "score": 42,
            "id": "p1",
            "url": "https://reddit.com/p1",
            "comms_num": 2,
            "created": 1585000000.0,
            "body": "Google and Amazon announced a partnership with Google Cloud.",
            "timestamp": 1585000000.0,
            "comments": ["great", "meh"],
        },
        {
            "title": "Link only",
            "score": 3,
            "id": "p2",
            "url": "https://example.com",
            "comms_num": 0,
            "created": 1585000100.0,
            "body": "",
            "timestamp": 1585000100.0,
            "comments": [],
        },
        {
            "title": "Complaint",
            "score": 7,
            "id": "p3",
            "url": "https://reddit.com/p3",
            "comms_num": 1,
            "created": 1585000200.0,
            "body": "The Seattle office is terrible.",
            "timestamp": 1585000200.0,
            "comments": ["agreed"],
        },
    ]


@pytest.fixture
def storage() -> StorageConnector:
    """Storage connector with a mocked S3 client."""
    connector = StorageConnector.from_config(
        {"bucket": "test-bucket", "prefix": "reddit_data", "region": "eu-central-1", "timeout": 5}
    )
    connector._client = AsyncMock()
    return connector


@pytest.fixture
def publisher() -> Publisher:
    """Publisher with a mocked SNS client."""
    component = Publisher.from_config({"topic_arn": TOPIC_ARN, "region": "eu-central-1"})
    component._client = AsyncMock()
    return component


@pytest.fixture
def language() -> LanguageClient:
    """Language client with a mocked Comprehend client and no waiting."""
    client = LanguageClient.from_config(
        {
            "region": "eu-central-1",
            "requests_per_minute": 600_000,
            "max_retries": 3,
            "backoff_min": 0,
            "backoff_max": 0,
        }
    )
    client._client = AsyncMock()
    return client


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors."""
    return make_client_error


@pytest.fixture
def s3_body():
    """Factory for mocked S3 object bodies."""
    return make_body
