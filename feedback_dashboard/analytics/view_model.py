"""Assemble the presentation-ready dashboard structure."""

from collections.abc import Sequence
from dataclasses import dataclass

from feedback_dashboard.analytics.aggregator import SummaryStatistics, summarize
from feedback_dashboard.analytics.filter_sort import (
    DEFAULT_VIEW_STATE,
    ViewState,
    apply_view,
    user_ranks,
)
from feedback_dashboard.analytics.insights import InsightReport, NoFeedback, generate_insights
from feedback_dashboard.config import settings
from feedback_dashboard.models.schemas import FeedbackRecord


@dataclass(frozen=True)
class DashboardView:
    title: str
    stats: SummaryStatistics
    insights: InsightReport | NoFeedback
    state: ViewState
    records: tuple[FeedbackRecord, ...]
    records_payload: tuple[dict, ...]


def serialize_records(records: Sequence[FeedbackRecord]) -> tuple[dict, ...]:
    """Full record set as JSON-ready dicts for client-side re-rendering."""
    ranks = user_ranks(records)
    return tuple(
        {**r.model_dump(), "user_rank": ranks[r.id]}
        for r in records
    )


def build_dashboard(
    records: Sequence[FeedbackRecord],
    state: ViewState = DEFAULT_VIEW_STATE,
    title: str | None = None,
) -> DashboardView:
    stats = summarize(records)
    return DashboardView(
        title=title or settings.dashboard_title,
        stats=stats,
        insights=generate_insights(records, stats),
        state=state,
        records=tuple(apply_view(records, state)),
        records_payload=serialize_records(records),
    )
