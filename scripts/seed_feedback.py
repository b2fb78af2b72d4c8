"""Create the feedback table in a D1 database and load sample records.

Usage:
    python scripts/seed_feedback.py

Requires D1_ACCOUNT_ID, D1_DATABASE_ID and CLOUDFLARE_API_TOKEN env vars
(or a .env file).
"""

import re
import sys
from pathlib import Path

import httpx

from feedback_dashboard.clients.d1 import d1_query_url
from feedback_dashboard.config import settings
from feedback_dashboard.models.schemas import Sentiment

SCHEMA_FILE = Path(__file__).resolve().parent.parent / "schema.sql"


def schema_sql(table: str) -> str:
    """schema.sql with the CREATE TABLE target renamed to the configured table."""
    return re.sub(
        r"CREATE TABLE IF NOT EXISTS \w+",
        f"CREATE TABLE IF NOT EXISTS {table}",
        SCHEMA_FILE.read_text(),
        count=1,
    )


SAMPLE_FEEDBACK = [
    {"user": "Alice Chen", "comment": "Love the new dashboard design, very clean.", "source": "survey", "sentiment": "positive"},
    {"user": "bob", "comment": "The app keeps crashing when I upload large files.", "source": "support", "sentiment": "negative"},
    {"user": "Carlos Díaz", "comment": "Onboarding was a bit confusing but support helped.", "source": "chat", "sentiment": "neutral"},
    {"user": "Dana", "comment": "Search is slow on mobile, please improve performance.", "source": "email", "sentiment": "negative"},
    {"user": "Émile", "comment": "Great product, the export feature saves me hours.", "source": "survey", "sentiment": "positive"},
    {"user": "frank", "comment": "Missing dark mode, otherwise fine.", "source": "twitter", "sentiment": "neutral"},
    {"user": "Grace", "comment": "Fast, reliable and easy to use.", "source": "chat", "sentiment": "positive"},
]


def _post(client: httpx.Client, url: str, sql: str, params: list | None = None) -> dict:
    body: dict = {"sql": sql}
    if params:
        body["params"] = params
    resp = client.post(
        url,
        headers={"Authorization": f"Bearer {settings.cloudflare_api_token}"},
        json=body,
    )
    data = resp.json()
    if resp.status_code >= 400 or not data.get("success", False):
        print(f"Query failed: {resp.status_code} {data.get('errors')}")
        sys.exit(1)
    return data


def seed():
    if not (settings.d1_account_id and settings.d1_database_id and settings.cloudflare_api_token):
        print("Error: D1_ACCOUNT_ID, D1_DATABASE_ID and CLOUDFLARE_API_TOKEN must be set")
        sys.exit(1)

    # Reject bad sample rows before touching the database
    for row in SAMPLE_FEEDBACK:
        Sentiment(row["sentiment"])

    url = d1_query_url(settings.d1_api_base, settings.d1_account_id, settings.d1_database_id)
    client = httpx.Client(timeout=settings.d1_timeout_seconds)

    _post(client, url, schema_sql(settings.feedback_table))
    print(f"Applied {SCHEMA_FILE.name} as table {settings.feedback_table}")

    for row in SAMPLE_FEEDBACK:
        _post(
            client,
            url,
            f"INSERT INTO {settings.feedback_table} (user, comment, source, sentiment) VALUES (?, ?, ?, ?)",
            [row["user"], row["comment"], row["source"], row["sentiment"]],
        )
    print(f"Inserted {len(SAMPLE_FEEDBACK)} feedback records")


if __name__ == "__main__":
    seed()
