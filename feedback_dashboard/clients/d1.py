"""Async HTTP client for the Cloudflare D1 REST query API."""

import logging
from contextlib import contextmanager
from contextvars import ContextVar

import httpx
from pydantic import ValidationError

from feedback_dashboard.config import settings
from feedback_dashboard.models.schemas import FeedbackRecord

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for record store failures."""


class StoreNotConfiguredError(StoreError):
    """The D1 account, database or API token is not set."""


class StoreQueryError(StoreError):
    """The store was reached but the query did not produce usable rows."""


# ── Per-request store via contextvars ────────────────────────────────
_current_store: ContextVar["FeedbackStoreClient | None"] = ContextVar(
    "feedback_store", default=None
)


def get_store() -> "FeedbackStoreClient":
    """Return the current per-context store, or fall back to the default singleton."""
    store = _current_store.get()
    return store if store is not None else _default_store


@contextmanager
def use_store(store: "FeedbackStoreClient"):
    """Context manager to set the active FeedbackStoreClient for the current async context."""
    token = _current_store.set(store)
    try:
        yield store
    finally:
        _current_store.reset(token)


def d1_query_url(api_base: str, account_id: str, database_id: str) -> str:
    return f"{api_base.rstrip('/')}/accounts/{account_id}/d1/database/{database_id}/query"


class FeedbackStoreClient:
    def __init__(
        self,
        account_id: str | None = None,
        database_id: str | None = None,
        api_token: str | None = None,
        api_base: str | None = None,
        table: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._account_id = settings.d1_account_id if account_id is None else account_id
        self._database_id = settings.d1_database_id if database_id is None else database_id
        self._api_token = settings.cloudflare_api_token if api_token is None else api_token
        self._api_base = api_base or settings.d1_api_base
        self._table = table or settings.feedback_table
        self._client = httpx.AsyncClient(timeout=timeout or settings.d1_timeout_seconds)

    @property
    def is_configured(self) -> bool:
        return bool(self._account_id and self._database_id and self._api_token)

    async def execute(self, sql: str, params: list | None = None) -> list[dict]:
        """Run one SQL statement and return its result rows."""
        if not self.is_configured:
            raise StoreNotConfiguredError(
                "Record store not configured. Set D1_ACCOUNT_ID, D1_DATABASE_ID "
                "and CLOUDFLARE_API_TOKEN."
            )

        url = d1_query_url(self._api_base, self._account_id, self._database_id)
        body: dict = {"sql": sql}
        if params:
            body["params"] = params
        try:
            resp = await self._client.post(
                url,
                headers={"Authorization": f"Bearer {self._api_token}"},
                json=body,
            )
        except httpx.HTTPError as e:
            raise StoreQueryError(f"Could not reach D1: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise StoreQueryError(
                f"D1 returned an unreadable response (HTTP {resp.status_code})"
            ) from e
        if not isinstance(data, dict):
            raise StoreQueryError(f"D1 returned an unexpected payload (HTTP {resp.status_code})")

        if resp.status_code >= 400 or not data.get("success", False):
            errors = data.get("errors") or []
            if not isinstance(errors, list):
                errors = [errors]
            detail = "; ".join(
                str(err.get("message", err) if isinstance(err, dict) else err)
                for err in errors
                if err
            )
            raise StoreQueryError(detail or f"D1 query failed (HTTP {resp.status_code})")

        results = data.get("result") or []
        if not isinstance(results, list):
            raise StoreQueryError("D1 returned a malformed result envelope")
        if not results:
            return []
        first = results[0]
        if not isinstance(first, dict):
            raise StoreQueryError("D1 returned a malformed statement result")
        if not first.get("success", True):
            raise StoreQueryError(str(first.get("error") or "D1 statement failed"))
        rows = first.get("results") or []
        if not isinstance(rows, list):
            raise StoreQueryError("D1 returned malformed result rows")
        return rows

    async def fetch_all_feedback(self) -> list[FeedbackRecord]:
        rows = await self.execute(f"SELECT * FROM {self._table}")
        try:
            records = [FeedbackRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            raise StoreQueryError(f"Malformed feedback row: {e}") from e
        logger.debug("Fetched %d feedback records from %s", len(records), self._table)
        return records

    async def ping(self) -> bool:
        """Return True when the store answers a trivial query."""
        try:
            await self.execute("SELECT 1")
        except StoreError:
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()


# ── Default singleton (used by FastAPI routes and health checks) ────
_default_store = FeedbackStoreClient()
feedback_store = _default_store
