"""Sentiment counts and percentages over a feedback record set."""

from collections.abc import Sequence
from dataclasses import dataclass

from feedback_dashboard.models.schemas import FeedbackRecord, Sentiment


def round_percent(count: int, total: int) -> int:
    """Percentage of ``count`` in ``total``, rounded half up; 0 for an empty total."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


@dataclass(frozen=True)
class SummaryStatistics:
    total: int
    positive: int
    neutral: int
    negative: int

    @property
    def positive_percent(self) -> int:
        return round_percent(self.positive, self.total)

    @property
    def neutral_percent(self) -> int:
        return round_percent(self.neutral, self.total)

    @property
    def negative_percent(self) -> int:
        return round_percent(self.negative, self.total)

    def count_for(self, sentiment: Sentiment) -> int:
        return getattr(self, sentiment.value)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "positive": {"count": self.positive, "percent": self.positive_percent},
            "neutral": {"count": self.neutral, "percent": self.neutral_percent},
            "negative": {"count": self.negative, "percent": self.negative_percent},
        }


def summarize(records: Sequence[FeedbackRecord]) -> SummaryStatistics:
    # Exact, case-sensitive match; unrecognized values land in no bucket.
    raw = [r.sentiment for r in records]
    return SummaryStatistics(
        total=len(records),
        positive=raw.count(Sentiment.POSITIVE.value),
        neutral=raw.count(Sentiment.NEUTRAL.value),
        negative=raw.count(Sentiment.NEGATIVE.value),
    )
