"""Flattened analysis records written to storage."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import Field, TypeAdapter

from post_analysis.models.post import (
    Analysis,
    EntitySummary,
    Post,
    SentimentSummary,
    _Record,
)


class EntityCount(_Record):
    name: str
    count: int


class AnalysisRecord(_Record):
    """Analysis of one post, without the post itself."""

    id: str = Field(..., description="Submission id")
    entity: list[EntityCount] = Field(default_factory=list)
    sentiment: SentimentSummary = Field(default_factory=SentimentSummary)

    @classmethod
    def from_post(cls, post: Post) -> AnalysisRecord:
        return cls(
            id=post.id,
            entity=_entity_list(post.analysis.entity),
            sentiment=post.analysis.sentiment.model_copy(),
        )

    def to_post(self) -> Post:
        return Post(
            id=self.id,
            analysis=Analysis(
                sentiment=self.sentiment.model_copy(),
                entity=EntitySummary(count={e.name: e.count for e in self.entity}),
            ),
        )


RECORD_LIST = TypeAdapter(list[AnalysisRecord])


def _entity_list(summary: EntitySummary) -> list[EntityCount]:
    ordered = sorted(summary.count.items(), key=lambda item: (-item[1], item[0]))
    return [EntityCount(name=name, count=count) for name, count in ordered]


def to_records(posts: list[Post]) -> list[AnalysisRecord]:
    return [AnalysisRecord.from_post(post) for post in posts]


def from_records(records: list[AnalysisRecord]) -> list[Post]:
    return [record.to_post() for record in records]


def _merge(
    posts: list[Post],
    records: list[AnalysisRecord],
    apply: Callable[[Post, AnalysisRecord], None],
) -> list[AnalysisRecord]:
    merged = [record.model_copy(deep=True) for record in records]
    by_id = {record.id: record for record in merged}

    for post in posts:
        if (record := by_id.get(post.id)) is None:
            record = AnalysisRecord(id=post.id)
            by_id[post.id] = record
            merged.append(record)
        apply(post, record)

    return merged


def _apply_entities(post: Post, record: AnalysisRecord) -> None:
    record.entity = _entity_list(post.analysis.entity)


def _apply_sentiment(post: Post, record: AnalysisRecord) -> None:
    record.sentiment = post.analysis.sentiment.model_copy()


def _apply_analysis(post: Post, record: AnalysisRecord) -> None:
    _apply_entities(post, record)
    _apply_sentiment(post, record)


def merge_entities(posts: list[Post], records: list[AnalysisRecord]) -> list[AnalysisRecord]:
    """Replace the entity counts of the records matching each post's id.

    Posts without a matching record are appended as new records.
    """
    return _merge(posts, records, _apply_entities)


def merge_sentiment(posts: list[Post], records: list[AnalysisRecord]) -> list[AnalysisRecord]:
    """Replace the sentiment of the records matching each post's id."""
    return _merge(posts, records, _apply_sentiment)


def merge_analysis(posts: list[Post], records: list[AnalysisRecord]) -> list[AnalysisRecord]:
    """Replace both entity counts and sentiment."""
    return _merge(posts, records, _apply_analysis)
