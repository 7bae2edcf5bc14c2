"""Stage runner tying storage, analysis and notifications together."""

from __future__ import annotations

import logging
from enum import Enum

from post_analysis.common.errors import AnalysisError
from post_analysis.common.utils import is_analysis_filename, output_filename, source_filename
from post_analysis.connectors import Publisher, StorageConnector
from post_analysis.inference import LanguageClient
from post_analysis.models import (
    AnalysisRecord,
    EventType,
    Post,
    PubSubEvent,
    merge_analysis,
    merge_entities,
    merge_sentiment,
    to_records,
)

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Analysis stages exposed by the service."""

    POSTS = "posts"
    ENTITY = "entity"
    SENTIMENT = "sentiment"


_MERGERS = {
    Stage.POSTS: merge_analysis,
    Stage.ENTITY: merge_entities,
    Stage.SENTIMENT: merge_sentiment,
}


class AnalysisProcessor:
    """Runs one analysis stage over a file in storage.

    Every stage downloads its input, sends each post body to the language
    API, uploads the merged analysis and finally runs the stage's hook. The
    entity stage's hook publishes an event that triggers the sentiment stage.
    """

    def __init__(
        self,
        storage: StorageConnector,
        language: LanguageClient,
        publisher: Publisher,
    ) -> None:
        self.storage = storage
        self.language = language
        self.publisher = publisher

    async def run(self, stage: Stage, filename: str) -> str | None:
        """Run ``stage`` over ``filename``.

        Returns:
            The name of the uploaded analysis file, or None if the stage aborted.
        """
        try:
            records = await self._analyze(stage, filename)
            if records is None:
                return None

            output = output_filename(filename)
            location = await self.storage.write_records(output, records)
        except AnalysisError as e:
            logger.error(f"{stage.value} analysis of \"{filename}\" failed: {e}")
            return None

        logger.info(f"uploaded analyzed posts to '{location}'")
        await self._on_analyzed(stage, output)
        return output

    async def _analyze(self, stage: Stage, filename: str) -> list[AnalysisRecord] | None:
        records: list[AnalysisRecord] | None = None
        source = filename

        if is_analysis_filename(filename):
            logger.info(f"downloading \"{filename}\"...")
            records = await self.storage.read_records(filename)
            if not records:
                logger.warning("found 0 analyzed posts - Aborting...")
                return None

            logger.info(f"found {len(records)} analyzed posts")
            source = source_filename(filename)

        logger.info(f"downloading \"{source}\"...")
        posts = await self.storage.read_posts(source)
        if not posts:
            logger.warning("found 0 posts - Aborting...")
            return None

        logger.info(f"starting {stage.value} analysis with {len(posts)} posts")
        analyzed = await self._apply(stage, posts)
        if not analyzed:
            logger.warning("analyzed 0 posts - Aborting...")
            return None

        logger.info(
            f"after pruning posts with empty body we analyzed {stage.value} on {len(analyzed)} posts"
        )

        if records is None:
            return to_records(analyzed)
        return _MERGERS[stage](analyzed, records)

    async def _apply(self, stage: Stage, posts: list[Post]) -> list[Post]:
        if stage is Stage.ENTITY:
            return await self.language.analyze_entities(posts)
        if stage is Stage.SENTIMENT:
            return await self.language.analyze_sentiment(posts)

        posts = await self.language.analyze_entities(posts)
        return await self.language.analyze_sentiment(posts)

    async def _on_analyzed(self, stage: Stage, analyzed_filename: str) -> None:
        if stage is not Stage.ENTITY:
            logger.info(f"finished analyzing {stage.value} of \"{analyzed_filename}\"")
            return

        event = PubSubEvent(
            event_type=EventType.UPDATE_POST_SENTIMENT.value,
            payload=analyzed_filename,
        )
        try:
            await self.publisher.publish(event)
        except (AnalysisError, ValueError) as e:
            logger.error(f"failed to trigger sentiment analysis for \"{analyzed_filename}\": {e}")
