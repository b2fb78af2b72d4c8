"""Shared fixtures with mocked Cloudflare D1 API responses.

Mock payloads match the REAL D1 REST query API envelope:
- rows are nested under result[0].results
- failures come back with success=false and an errors list
"""

import httpx
import pytest
import respx

from feedback_dashboard.clients.d1 import FeedbackStoreClient, d1_query_url
from feedback_dashboard.models.schemas import FeedbackRecord

MOCK_D1_API = "https://d1.test/client/v4"
MOCK_ACCOUNT_ID = "acct-123"
MOCK_DATABASE_ID = "db-456"
MOCK_QUERY_URL = d1_query_url(MOCK_D1_API, MOCK_ACCOUNT_ID, MOCK_DATABASE_ID)

# ── Mock Data ────────────────────────────────────────────────────────

MOCK_ROWS = [
    {"id": 1, "user": "Alice", "comment": "Love the new design", "source": "survey", "sentiment": "positive", "timestamp": 1_700_000_100},
    {"id": 2, "user": "bob", "comment": "The app keeps crashing and is slow", "source": "support", "sentiment": "negative", "timestamp": 1_700_000_300},
    {"id": 3, "user": "Carol", "comment": "It works", "source": "chat", "sentiment": "neutral", "timestamp": 1_700_000_200},
    {"id": 4, "user": "dave", "comment": "Great value", "source": "email", "sentiment": "positive", "timestamp": 1_700_000_400},
    {"id": 5, "user": "Eve", "comment": "Solid product", "source": "survey", "sentiment": "positive", "timestamp": 1_700_000_500},
]


def d1_envelope(rows: list[dict]) -> dict:
    return {
        "result": [{"results": rows, "success": True, "meta": {"rows_read": len(rows)}}],
        "success": True,
        "errors": [],
        "messages": [],
    }


def d1_error(message: str, code: int = 7500) -> dict:
    return {
        "result": [],
        "success": False,
        "errors": [{"code": code, "message": message}],
        "messages": [],
    }


def make_record(
    id: int,
    sentiment: str = "positive",
    timestamp: int = 0,
    user: str = "user",
    comment: str | None = "fine",
    source: str = "survey",
) -> FeedbackRecord:
    return FeedbackRecord(
        id=id, user=user, comment=comment, source=source, sentiment=sentiment, timestamp=timestamp
    )


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def mock_d1():
    with respx.mock(assert_all_called=False) as respx_mock:
        respx_mock.post(MOCK_QUERY_URL).mock(
            return_value=httpx.Response(200, json=d1_envelope(MOCK_ROWS))
        )
        yield respx_mock


@pytest.fixture
async def store():
    s = FeedbackStoreClient(
        account_id=MOCK_ACCOUNT_ID,
        database_id=MOCK_DATABASE_ID,
        api_token="test-token",
        api_base=MOCK_D1_API,
    )
    yield s
    await s.close()


@pytest.fixture
async def unconfigured_store():
    s = FeedbackStoreClient(account_id="", database_id="", api_token="", api_base=MOCK_D1_API)
    yield s
    await s.close()
