"""HTML dashboard endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from feedback_dashboard.analytics.filter_sort import ViewState
from feedback_dashboard.analytics.view_model import build_dashboard
from feedback_dashboard.clients.d1 import (
    FeedbackStoreClient,
    StoreNotConfiguredError,
    StoreQueryError,
    get_store,
)
from feedback_dashboard.models.schemas import SentimentFilter, SortKey
from feedback_dashboard.rendering import render_dashboard, render_store_error

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    sentiment: SentimentFilter = SentimentFilter.ALL,
    sort: SortKey = SortKey.RECENT,
    store: FeedbackStoreClient = Depends(get_store),
):
    """Render the feedback report; the query params set the initial filter and sort."""
    try:
        records = await store.fetch_all_feedback()
    except StoreNotConfiguredError as e:
        logger.error("Dashboard requested without a configured store: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})
    except StoreQueryError as e:
        logger.error("Feedback query failed: %s", e)
        return HTMLResponse(status_code=500, content=render_store_error(str(e)))

    view = build_dashboard(records, ViewState(sentiment=sentiment, sort=sort))
    return HTMLResponse(content=render_dashboard(view))
