"""Plain-text summary of an analysis file."""

from __future__ import annotations

from post_analysis.inference.scoring import sentiment_chart
from post_analysis.models import AnalysisRecord

TOP_ENTITIES = 5


def format_report(records: list[AnalysisRecord], top_entities: int = TOP_ENTITIES) -> str:
    lines = []
    for record in records:
        entities = ", ".join(f"{e.name} ({e.count})" for e in record.entity[:top_entities])
        lines.append(
            f'post id: "{record.id}"\n'
            f"\tsentiment for post: {record.sentiment.parsed_sentiment or 'n/a'}\n"
            f"\tsentiment score: {record.sentiment.score:f}\n"
            f"\ttop entities: {entities or 'none'}"
        )

    lines.append(sentiment_chart())
    return "\n".join(lines)
