"""Amazon Comprehend client for analyzing post bodies."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import tenacity
from botocore.exceptions import BotoCoreError, ClientError

from post_analysis.common.component import ServiceComponent
from post_analysis.common.errors import LanguageError, MalformedResponseError
from post_analysis.common.utils import describe_client_error
from post_analysis.models import Post, prune_empty_posts

from .config import LanguageConfig
from .scoring import classify_sentiment, count_entities, score_from_comprehend

logger = logging.getLogger(__name__)

THROTTLING_CODES = frozenset({"ThrottlingException", "TooManyRequestsException"})


def is_throttled(error: BaseException) -> bool:
    return isinstance(error, ClientError) and describe_client_error(error)[0] in THROTTLING_CODES


def truncate_text(text: str, max_bytes: int) -> str:
    """Cut ``text`` to at most ``max_bytes`` of UTF-8 without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


class LanguageClient(ServiceComponent[LanguageConfig]):
    """Sends post bodies to Comprehend one at a time."""

    _config_type = LanguageConfig
    _service_name = "comprehend"

    def __init__(self, config: LanguageConfig) -> None:
        """Initialize client."""
        super().__init__(config)
        self._lock = asyncio.Lock()
        self._last_request: float | None = None

        logger.debug(f"Language client initialized with config: {config}")

    async def _throttle(self) -> None:
        """Space requests to stay under the configured rate."""
        interval = 60.0 / self.config.requests_per_minute

        async with self._lock:
            loop = asyncio.get_running_loop()
            if self._last_request is not None:
                wait = self._last_request + interval - loop.time()
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = loop.time()

    async def _call(self, operation: str, text: str) -> dict[str, Any]:
        """Call a Comprehend detection operation, retrying while throttled."""
        retrying = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception(is_throttled),
            wait=tenacity.wait_exponential(
                multiplier=1, min=self.config.backoff_min, max=self.config.backoff_max
            ),
            stop=tenacity.stop_after_attempt(self.config.max_retries),
            reraise=True,
        )
        document = truncate_text(text, self.config.max_text_bytes)

        try:
            async for attempt in retrying:
                with attempt:
                    await self._throttle()
                    return await getattr(self.client, operation)(
                        Text=document, LanguageCode=self.config.language_code
                    )
        except ClientError as e:
            code, message = describe_client_error(e)
            raise LanguageError(f"{operation} failed: {code} - {message}") from e
        except BotoCoreError as e:
            raise LanguageError(f"{operation} failed: {e}") from e

    async def detect_entities(self, text: str) -> list[str]:
        """Names of the entities mentioned in ``text``, one per mention."""
        response = await self._call("detect_entities", text)
        if (entities := response.get("Entities")) is None:
            raise MalformedResponseError(response, "Entities")

        return [entity["Text"] for entity in entities if entity.get("Text")]

    async def detect_sentiment(self, text: str) -> float:
        """Sentiment score of ``text`` in [-1, 1]."""
        response = await self._call("detect_sentiment", text)
        if (scores := response.get("SentimentScore")) is None:
            raise MalformedResponseError(response, "SentimentScore")

        return score_from_comprehend(scores)

    async def analyze_entities(self, posts: list[Post]) -> list[Post]:
        """Count the entities in each post with a body.

        Posts with an empty body are dropped from the result.
        """
        analyzed = []
        for post in prune_empty_posts(posts):
            names = await self.detect_entities(post.body)

            post = post.model_copy(deep=True)
            post.analysis.entity.count = count_entities(names)
            analyzed.append(post)

        logger.debug(f"Analyzed entities of {len(analyzed)}/{len(posts)} posts")
        return analyzed

    async def analyze_sentiment(self, posts: list[Post]) -> list[Post]:
        """Score the sentiment of each post with a body.

        Scores are added to the running total the post already carries.
        """
        analyzed = []
        for post in prune_empty_posts(posts):
            score = await self.detect_sentiment(post.body)

            post = post.model_copy(deep=True)
            sentiment = post.analysis.sentiment
            sentiment.score += score
            sentiment.parsed_sentiment = classify_sentiment(sentiment.score).value
            analyzed.append(post)

        logger.debug(f"Analyzed sentiment of {len(analyzed)}/{len(posts)} posts")
        return analyzed
