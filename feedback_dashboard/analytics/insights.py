"""Heuristic summary, themes and actionable insights for a feedback set."""

from collections.abc import Sequence
from dataclasses import dataclass

from feedback_dashboard.analytics.aggregator import SummaryStatistics
from feedback_dashboard.analytics.themes import THEME_RULES, ThemeRule, detect_themes
from feedback_dashboard.models.schemas import FeedbackRecord, Sentiment

INSIGHT_THRESHOLDS = {
    "positive_percent": 50,
    "channel_consolidation_sources": 3,
    "excerpt_length": 50,
    "summary_source_sample": 3,
}


@dataclass(frozen=True)
class InsightReport:
    summary: str
    themes: tuple[str, ...]
    actionable: tuple[str, ...]

    is_empty = False

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "themes": list(self.themes),
            "actionable": list(self.actionable),
        }


@dataclass(frozen=True)
class NoFeedback:
    message: str = "No feedback available to analyze."

    is_empty = True


NO_FEEDBACK = NoFeedback()


def distinct_sources(records: Sequence[FeedbackRecord]) -> list[str]:
    """Source labels in first-seen order."""
    return list(dict.fromkeys(r.source for r in records))


def excerpt(text: str | None, length: int) -> str:
    return (text or "")[:length] + "..."


def generate_insights(
    records: Sequence[FeedbackRecord],
    stats: SummaryStatistics,
    rules: Sequence[ThemeRule] = THEME_RULES,
) -> InsightReport | NoFeedback:
    if stats.total == 0:
        return NO_FEEDBACK

    sources = distinct_sources(records)
    sample = ", ".join(sources[: INSIGHT_THRESHOLDS["summary_source_sample"]])
    summary = (
        f"Based on {stats.total} feedback entries, customers have provided "
        f"{stats.positive} positive, {stats.neutral} neutral, and {stats.negative} "
        f"negative responses. The feedback spans across {len(sources)} different "
        f"sources including {sample}."
    )

    themes = detect_themes((r.comment for r in records), rules)

    actionable: list[str] = []
    if stats.negative > 0:
        first_negative = next(
            (r for r in records if r.sentiment == Sentiment.NEGATIVE.value), None
        )
        comment = first_negative.comment if first_negative else None
        actionable.append(
            f"Address {stats.negative} negative feedback items, particularly around "
            f"{excerpt(comment, INSIGHT_THRESHOLDS['excerpt_length'])}"
        )
    if len(sources) > INSIGHT_THRESHOLDS["channel_consolidation_sources"]:
        actionable.append(
            f"Feedback is coming from {len(sources)} different channels - "
            "consider consolidating or improving integration."
        )

    pct = stats.positive_percent
    if pct < INSIGHT_THRESHOLDS["positive_percent"]:
        actionable.append(
            f"With {pct}% positive sentiment, focus on improving areas mentioned "
            "in neutral and negative feedback."
        )
    else:
        actionable.append(
            f"Strong {pct}% positive sentiment indicates good product-market fit - "
            "continue building on strengths."
        )

    return InsightReport(summary=summary, themes=themes, actionable=tuple(actionable))
