"""S3 connector for post files."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from post_analysis.common.component import ServiceComponent
from post_analysis.common.errors import StorageError
from post_analysis.common.utils import describe_client_error
from post_analysis.models import RECORD_LIST, AnalysisRecord, Post, parse_posts

from .config import StorageConfig

logger = logging.getLogger(__name__)


class StorageConnector(ServiceComponent[StorageConfig]):
    """Reads scraped posts and reads/writes analysis files."""

    _config_type = StorageConfig
    _service_name = "s3"

    def object_key(self, filename: str) -> str:
        prefix = self.config.prefix.strip("/")
        return f"{prefix}/{filename}" if prefix else filename

    def location(self, filename: str) -> str:
        return f"s3://{self.config.bucket}/{self.object_key(filename)}"

    async def _get_json(self, filename: str) -> Any:
        key = self.object_key(filename)

        try:
            async with asyncio.timeout(self.config.timeout):
                response = await self.client.get_object(Bucket=self.config.bucket, Key=key)
                body = await response["Body"].read()
        except ClientError as e:
            code, message = describe_client_error(e)
            raise StorageError(
                f"getting bucket reader failed for {self.location(filename)}: {code} - {message}"
            ) from e
        except BotoCoreError as e:
            raise StorageError(
                f"getting bucket reader failed for {self.location(filename)}: {e}"
            ) from e
        except TimeoutError as e:
            raise StorageError(f"reading {self.location(filename)} timed out") from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise StorageError(f"parsing json failed: {e}") from e

    async def read_posts(self, filename: str) -> list[Post]:
        """Download and parse a scraped posts file."""
        payload = await self._get_json(filename)
        try:
            posts = parse_posts(payload)
        except ValidationError as e:
            raise StorageError(f"{self.location(filename)} does not contain posts: {e}") from e

        logger.debug(f"Read {len(posts)} posts from {self.location(filename)}")
        return posts

    async def read_records(self, filename: str) -> list[AnalysisRecord]:
        """Download and parse an analysis file."""
        payload = await self._get_json(filename)
        try:
            records = RECORD_LIST.validate_python(payload)
        except ValidationError as e:
            raise StorageError(
                f"{self.location(filename)} does not contain analyzed posts: {e}"
            ) from e

        logger.debug(f"Read {len(records)} analyzed posts from {self.location(filename)}")
        return records

    async def write_records(self, filename: str, records: list[AnalysisRecord]) -> str:
        """Upload analysis records and return their location."""
        body = RECORD_LIST.dump_json(records, by_alias=True)

        try:
            async with asyncio.timeout(self.config.timeout):
                await self.client.put_object(
                    Bucket=self.config.bucket,
                    Key=self.object_key(filename),
                    Body=body,
                    ContentType="application/json",
                )
        except ClientError as e:
            code, message = describe_client_error(e)
            raise StorageError(
                f"writing {self.location(filename)} failed: {code} - {message}"
            ) from e
        except BotoCoreError as e:
            raise StorageError(f"writing {self.location(filename)} failed: {e}") from e
        except TimeoutError as e:
            raise StorageError(f"writing {self.location(filename)} timed out") from e

        return self.location(filename)
