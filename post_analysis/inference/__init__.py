"""Inference package for post analysis."""

from .client import LanguageClient
from .config import LanguageConfig
from .scoring import SentimentLabel, classify_sentiment, count_entities, sentiment_chart

__all__ = [
    "LanguageClient",
    "LanguageConfig",
    "SentimentLabel",
    "classify_sentiment",
    "count_entities",
    "sentiment_chart",
]
