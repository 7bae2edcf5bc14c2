"""Social media post models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationInfo, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SentimentSummary(_Record):
    """Sentiment of a document."""

    score: float = Field(
        default=0.0,
        description="Sentiment score between -1 and 1",
    )
    parsed_sentiment: str = Field(
        default="",
        alias="parsedSentiment",
        description="Label derived from the score",
    )


class EntitySummary(_Record):
    """Entities mentioned in a document."""

    count: dict[str, int] = Field(
        default_factory=dict,
        description="Occurrences per entity name",
    )


class Analysis(_Record):
    """Analysis results attached to a post."""

    sentiment: SentimentSummary = Field(default_factory=SentimentSummary)
    entity: EntitySummary = Field(default_factory=EntitySummary)


class Post(_Record):
    """A scraped reddit submission."""

    id: str = Field(..., description="Submission id")
    title: str = ""
    score: int = 0
    url: str = ""
    comment_count: int = Field(default=0, alias="comms_num")
    created: float | None = None
    body: str = ""
    timestamp: float | None = None
    comments: list[str] = Field(default_factory=list)
    analysis: Analysis = Field(default_factory=Analysis)
    comments_analysis: Analysis = Field(default_factory=Analysis, alias="commentsAnalysis")

    @field_validator(
        "title",
        "score",
        "url",
        "comment_count",
        "body",
        "comments",
        "analysis",
        "comments_analysis",
        mode="before",
    )
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Decode JSON null as the field's empty value."""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class ScrapedPosts(_Record):
    """Hot and top posts as written by the scraper."""

    hot_posts: list[Post] = Field(default_factory=list)
    top_posts: list[Post] = Field(default_factory=list)

    @property
    def posts(self) -> list[Post]:
        return [*self.hot_posts, *self.top_posts]


_POST_LIST = TypeAdapter(list[Post])


def parse_posts(payload: Any) -> list[Post]:
    """Parse a decoded JSON document into posts.

    Accepts either a plain list of posts or the scraper's
    ``{"hot_posts": [...], "top_posts": [...]}`` object.

    Raises:
        pydantic.ValidationError: if the payload does not describe posts
    """
    if isinstance(payload, dict):
        return ScrapedPosts.model_validate(payload).posts
    return _POST_LIST.validate_python(payload)


def dump_posts(posts: list[Post]) -> list[dict[str, Any]]:
    return _POST_LIST.dump_python(posts, by_alias=True)


def prune_empty_posts(posts: list[Post]) -> list[Post]:
    """Remove posts where the submitter did not write any body text."""
    return [post for post in posts if post.body.strip()]
