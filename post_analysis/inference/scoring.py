"""Entity tallies and sentiment labels."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Mapping
from enum import Enum

NEUTRAL_SCORE = 0.1
_TOLERANCE = 1e-9


class SentimentLabel(str, Enum):
    """Coarse sentiment classes."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    MIXED = "mixed"
    NEGATIVE = "negative"
    UNKNOWN = "unknown"


def classify_sentiment(score: float) -> SentimentLabel:
    """Map a score in [-1, 1] to a label.

    ========  ===============
    label     score
    ========  ===============
    positive  > 0.1
    neutral   0.1
    mixed     0.0 up to 0.1
    negative  < 0.0
    unknown   NaN or out of range
    ========  ===============
    """
    if math.isnan(score) or not -1.0 <= score <= 1.0:
        return SentimentLabel.UNKNOWN
    if math.isclose(score, NEUTRAL_SCORE, abs_tol=_TOLERANCE):
        return SentimentLabel.NEUTRAL
    if score > NEUTRAL_SCORE:
        return SentimentLabel.POSITIVE
    if score >= 0.0:
        return SentimentLabel.MIXED
    return SentimentLabel.NEGATIVE


def sentiment_chart() -> str:
    return (
        "To interpret the scores:\n"
        "\tpositive: > 0.1\n"
        "\tnegative: < 0.0\n"
        "\tneutral: 0.1\n"
        "\tmixed: 0.0 - 0.1\n"
    )


def count_entities(names: Iterable[str]) -> dict[str, int]:
    """Count how many times each entity name was mentioned."""
    return dict(Counter(names))


def score_from_comprehend(scores: Mapping[str, float]) -> float:
    """Collapse Comprehend's class confidences into a single score.

    Comprehend reports a confidence per class (Positive, Negative, Neutral,
    Mixed) that sums to 1, so ``Positive - Negative`` is bounded by [-1, 1].
    """
    return float(scores.get("Positive", 0.0)) - float(scores.get("Negative", 0.0))
