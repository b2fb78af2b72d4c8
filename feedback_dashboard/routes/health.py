"""Health check endpoint."""

from fastapi import APIRouter, Depends

from feedback_dashboard.clients.d1 import FeedbackStoreClient, get_store
from feedback_dashboard.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(store: FeedbackStoreClient = Depends(get_store)):
    connected = store.is_configured and await store.ping()
    return HealthResponse(
        status="ok",
        service="feedback-dashboard",
        store_configured=store.is_configured,
        store_connected=connected,
    )
