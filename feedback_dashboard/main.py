"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from feedback_dashboard.clients.d1 import feedback_store
from feedback_dashboard.config import settings
from feedback_dashboard.routes.dashboard import router as dashboard_router
from feedback_dashboard.routes.feedback_routes import router as feedback_router
from feedback_dashboard.routes.health import router as health_router

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    if not feedback_store.is_configured:
        logging.getLogger(__name__).warning(
            "D1 store not configured: set D1_ACCOUNT_ID, D1_DATABASE_ID and CLOUDFLARE_API_TOKEN"
        )
    yield
    await feedback_store.close()


app = FastAPI(
    title="Customer Feedback Dashboard",
    version="0.1.0",
    description="Sentiment metrics, heuristic insights and a filterable feedback listing",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(feedback_router, prefix="/api")
app.include_router(dashboard_router)

# Mount static files last so API routes take priority
if STATIC_DIR.is_dir():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
