"""JSON API over the feedback analytics pipeline."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from feedback_dashboard.analytics.aggregator import summarize
from feedback_dashboard.analytics.filter_sort import ViewState, apply_view
from feedback_dashboard.analytics.insights import generate_insights
from feedback_dashboard.clients.d1 import (
    FeedbackStoreClient,
    StoreNotConfiguredError,
    StoreQueryError,
    get_store,
)
from feedback_dashboard.models.schemas import (
    FeedbackListResponse,
    FeedbackRecord,
    SentimentFilter,
    SortKey,
    SummaryResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _load_records(store: FeedbackStoreClient) -> list[FeedbackRecord]:
    try:
        return await store.fetch_all_feedback()
    except StoreNotConfiguredError as e:
        logger.error("Record store not configured: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    except StoreQueryError as e:
        logger.error("Feedback query failed: %s", e)
        raise HTTPException(status_code=502, detail=f"Feedback query failed: {e}") from e


@router.get("/feedback", response_model=FeedbackListResponse)
async def list_feedback(
    sentiment: SentimentFilter = SentimentFilter.ALL,
    sort: SortKey = SortKey.RECENT,
    store: FeedbackStoreClient = Depends(get_store),
):
    """List feedback records filtered by sentiment and ordered by the sort key."""
    records = apply_view(await _load_records(store), ViewState(sentiment=sentiment, sort=sort))
    return FeedbackListResponse(
        sentiment=sentiment,
        sort=sort,
        count=len(records),
        records=records,
    )


@router.get("/summary", response_model=SummaryResponse)
async def feedback_summary(store: FeedbackStoreClient = Depends(get_store)):
    """Sentiment statistics and heuristic insights for the full record set."""
    records = await _load_records(store)
    stats = summarize(records)
    insights = generate_insights(records, stats)
    if insights.is_empty:
        return SummaryResponse(**stats.to_dict(), message=insights.message)
    return SummaryResponse(**stats.to_dict(), insights=insights.to_dict())
