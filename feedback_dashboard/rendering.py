"""Jinja2 rendering for the dashboard and the store diagnostic page.

Autoescaping is on for every ``.html`` template, so record text and insight
sentences are escaped once, here, and nowhere else.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from feedback_dashboard.analytics.view_model import DashboardView
from feedback_dashboard.models.schemas import Sentiment, SentimentFilter, SortKey

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

FILTER_CONTROLS = (
    (SentimentFilter.ALL, "All"),
    (SentimentFilter.POSITIVE, "Positive"),
    (SentimentFilter.NEUTRAL, "Neutral"),
    (SentimentFilter.NEGATIVE, "Negative"),
)

SORT_CONTROLS = (
    (SortKey.RECENT, "Most Recent"),
    (SortKey.OLDEST, "Oldest"),
    (SortKey.USER, "User Name"),
)

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)


def sentiment_class(value: str) -> str:
    """CSS modifier for a raw sentiment value; unrecognized values share one class."""
    try:
        return f"sentiment-{Sentiment(value).value}"
    except ValueError:
        return "sentiment-unknown"


_env.filters["sentiment_class"] = sentiment_class


def render_dashboard(view: DashboardView) -> str:
    template = _env.get_template("dashboard.html")
    return template.render(
        view=view,
        filter_controls=FILTER_CONTROLS,
        sort_controls=SORT_CONTROLS,
    )


def render_store_error(detail: str) -> str:
    return _env.get_template("store_error.html").render(detail=detail)
