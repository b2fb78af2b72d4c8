"""Deterministic filter and sort over feedback records.

The dashboard script re-applies the same contract in the browser on every
click: exact sentiment match, then a stable sort on ``timestamp`` or on the
integer ``user_rank`` computed here. Keeping the collation on the server is
what lets both sides agree on the ``user`` ordering.
"""

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass

from feedback_dashboard.models.schemas import FeedbackRecord, SentimentFilter, SortKey


@dataclass(frozen=True)
class ViewState:
    sentiment: SentimentFilter = SentimentFilter.ALL
    sort: SortKey = SortKey.RECENT


DEFAULT_VIEW_STATE = ViewState()


def collation_key(name: str | None) -> tuple[str, str, str]:
    """Locale-independent approximation of a case/accent-insensitive collation.

    Primary: accents stripped, case-folded. Secondary: case-folded with accents.
    Tertiary: lowercase before uppercase.
    """
    text = unicodedata.normalize("NFKD", name or "")
    base = "".join(ch for ch in text if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text.swapcase())


def user_ranks(records: Sequence[FeedbackRecord]) -> dict[int, int]:
    """Dense rank of each record's user collation key, keyed by record id."""
    keys = sorted({collation_key(r.user) for r in records})
    rank = {key: i for i, key in enumerate(keys)}
    return {r.id: rank[collation_key(r.user)] for r in records}


def filter_records(
    records: Sequence[FeedbackRecord], sentiment: SentimentFilter
) -> list[FeedbackRecord]:
    if sentiment is SentimentFilter.ALL:
        return list(records)
    return [r for r in records if r.sentiment == sentiment.value]


def sort_records(records: Sequence[FeedbackRecord], sort: SortKey) -> list[FeedbackRecord]:
    # sorted() is stable, so ties keep their filtered order for every key.
    if sort is SortKey.RECENT:
        return sorted(records, key=lambda r: -r.timestamp)
    if sort is SortKey.OLDEST:
        return sorted(records, key=lambda r: r.timestamp)
    return sorted(records, key=lambda r: collation_key(r.user))


def apply_view(
    records: Sequence[FeedbackRecord], state: ViewState = DEFAULT_VIEW_STATE
) -> list[FeedbackRecord]:
    return sort_records(filter_records(records, state.sentiment), state.sort)
