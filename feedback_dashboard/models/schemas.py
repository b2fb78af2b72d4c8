"""Feedback record model and request/response Pydantic models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class SentimentFilter(str, Enum):
    ALL = "all"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class SortKey(str, Enum):
    RECENT = "recent"
    OLDEST = "oldest"
    USER = "user"


class FeedbackRecord(BaseModel):
    """One row of the feedback table.

    ``sentiment`` keeps the raw stored string so that rows with an
    unrecognized value can still be read, counted in totals and listed.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    user: str = ""
    comment: str | None = None
    source: str = ""
    sentiment: str = ""
    timestamp: int = 0

    @field_validator("user", "source", "sentiment", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _null_timestamp(cls, value):
        return 0 if value is None else value

    @property
    def sentiment_category(self) -> Sentiment | None:
        try:
            return Sentiment(self.sentiment)
        except ValueError:
            return None


# ── API schemas ──────────────────────────────────────────────────────
class FeedbackListResponse(BaseModel):
    sentiment: SentimentFilter
    sort: SortKey
    count: int
    records: list[FeedbackRecord] = Field(default_factory=list)


class SentimentBreakdown(BaseModel):
    count: int
    percent: int


class InsightsPayload(BaseModel):
    summary: str
    themes: list[str] = []
    actionable: list[str] = []


class SummaryResponse(BaseModel):
    total: int
    positive: SentimentBreakdown
    neutral: SentimentBreakdown
    negative: SentimentBreakdown
    insights: InsightsPayload | None = None
    message: str = ""


class HealthResponse(BaseModel):
    status: str
    service: str
    store_configured: bool
    store_connected: bool
