"""Models for social media analysis."""

from .event import EventType, PubSubEvent, SNSEnvelope
from .post import (
    Analysis,
    EntitySummary,
    Post,
    ScrapedPosts,
    SentimentSummary,
    dump_posts,
    parse_posts,
    prune_empty_posts,
)
from .record import (
    RECORD_LIST,
    AnalysisRecord,
    EntityCount,
    from_records,
    merge_analysis,
    merge_entities,
    merge_sentiment,
    to_records,
)

__all__ = [
    "Analysis",
    "AnalysisRecord",
    "EntityCount",
    "EntitySummary",
    "EventType",
    "Post",
    "PubSubEvent",
    "RECORD_LIST",
    "SNSEnvelope",
    "ScrapedPosts",
    "SentimentSummary",
    "dump_posts",
    "from_records",
    "merge_analysis",
    "merge_entities",
    "merge_sentiment",
    "parse_posts",
    "prune_empty_posts",
    "to_records",
]
