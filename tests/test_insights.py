"""Tests for the heuristic insight generator."""

from feedback_dashboard.analytics.aggregator import summarize
from feedback_dashboard.analytics.insights import (
    INSIGHT_THRESHOLDS,
    NO_FEEDBACK,
    InsightReport,
    distinct_sources,
    excerpt,
    generate_insights,
)
from feedback_dashboard.analytics.themes import FALLBACK_THEMES, ThemeRule
from tests.conftest import make_record


def _report(records) -> InsightReport:
    report = generate_insights(records, summarize(records))
    assert isinstance(report, InsightReport)
    return report


def test_empty_set_returns_no_feedback_marker():
    result = generate_insights([], summarize([]))
    assert result is NO_FEEDBACK
    assert result.is_empty
    assert result.message == "No feedback available to analyze."


def test_summary_sentence():
    records = [
        make_record(1, "positive", source="survey"),
        make_record(2, "negative", source="chat"),
        make_record(3, "neutral", source="survey"),
    ]
    assert _report(records).summary == (
        "Based on 3 feedback entries, customers have provided 1 positive, 1 neutral, "
        "and 1 negative responses. The feedback spans across 2 different sources "
        "including survey, chat."
    )


def test_summary_lists_first_three_sources_in_encounter_order():
    sources = ["zeta", "alpha", "zeta", "mid", "beta"]
    records = [make_record(i, source=s) for i, s in enumerate(sources, start=1)]
    summary = _report(records).summary
    assert "spans across 4 different sources including zeta, alpha, mid." in summary
    assert "beta" not in summary


def test_distinct_sources_first_occurrence_order():
    records = [make_record(i, source=s) for i, s in enumerate(["b", "a", "b", "c", "a"])]
    assert distinct_sources(records) == ["b", "a", "c"]


def test_strong_positive_variant_at_sixty_percent():
    records = (
        [make_record(i, "positive") for i in range(6)]
        + [make_record(10 + i, "neutral") for i in range(3)]
        + [make_record(20, "negative", comment="Too many popups")]
    )
    report = _report(records)
    assert report.actionable[-1] == (
        "Strong 60% positive sentiment indicates good product-market fit - "
        "continue building on strengths."
    )


def test_improvement_variant_below_threshold():
    records = [make_record(1, "positive"), make_record(2, "neutral"), make_record(3, "neutral")]
    report = _report(records)
    assert report.actionable[-1] == (
        "With 33% positive sentiment, focus on improving areas mentioned in neutral "
        "and negative feedback."
    )
    assert sum(1 for a in report.actionable if "positive sentiment" in a) == 1


def test_exactly_fifty_percent_is_strong():
    records = [make_record(1, "positive"), make_record(2, "neutral")]
    assert _report(records).actionable[-1].startswith("Strong 50% positive sentiment")


def test_negative_insight_uses_first_negative_comment():
    long_comment = "Checkout fails every single time I try to pay with a saved card"
    records = [
        make_record(1, "positive"),
        make_record(2, "negative", comment=long_comment),
        make_record(3, "negative", comment="Second complaint"),
    ]
    first = _report(records).actionable[0]
    assert first == (
        f"Address 2 negative feedback items, particularly around {long_comment[:50]}..."
    )
    assert "Second complaint" not in first


def test_short_negative_comment_still_gets_ellipsis():
    records = [make_record(1, "negative", comment="Slow")]
    assert _report(records).actionable[0].endswith("particularly around Slow...")


def test_no_negative_insight_without_negatives():
    records = [make_record(1, "positive"), make_record(2, "neutral")]
    assert not any(a.startswith("Address") for a in _report(records).actionable)


def test_channel_consolidation_with_four_sources():
    sources = ["survey", "chat", "email", "twitter", "survey"]
    records = [make_record(i, source=s) for i, s in enumerate(sources)]
    actionable = _report(records).actionable
    assert (
        "Feedback is coming from 4 different channels - consider consolidating "
        "or improving integration."
    ) in actionable


def test_no_channel_consolidation_with_two_sources():
    sources = ["survey", "chat", "survey", "chat", "chat"]
    records = [make_record(i, source=s) for i, s in enumerate(sources)]
    assert not any("different channels" in a for a in _report(records).actionable)


def test_actionable_order():
    sources = ["a", "b", "c", "d"]
    records = [make_record(i, "negative", source=s) for i, s in enumerate(sources)]
    actionable = _report(records).actionable
    assert len(actionable) == 3
    assert actionable[0].startswith("Address 4 negative")
    assert "different channels" in actionable[1]
    assert actionable[2].startswith("With 0% positive")


def test_themes_from_comments():
    records = [make_record(1, comment="the app keeps crashing and is slow")]
    themes = _report(records).themes
    assert "Bugs & Stability" in themes
    assert "Performance Issues" in themes


def test_fallback_themes():
    assert _report([make_record(1, comment="nice")]).themes == FALLBACK_THEMES


def test_custom_rule_table():
    rules = (ThemeRule(label="Pricing", keywords=("price",)),)
    records = [make_record(1, comment="The price went up")]
    report = generate_insights(records, summarize(records), rules)
    assert report.themes == ("Pricing",)


def test_null_comments_do_not_crash():
    records = [make_record(1, "negative", comment=None), make_record(2, comment=None)]
    report = _report(records)
    assert report.themes == FALLBACK_THEMES
    assert report.actionable[0] == "Address 1 negative feedback items, particularly around ..."


def test_text_is_raw_not_escaped():
    records = [make_record(1, "negative", comment="<b>broken</b> & \"bad\"", source="a&b")]
    report = _report(records)
    assert "<b>broken</b> & \"bad\"" in report.actionable[0]
    assert "including a&b." in report.summary


def test_excerpt_truncates():
    assert excerpt("x" * 80, INSIGHT_THRESHOLDS["excerpt_length"]) == "x" * 50 + "..."
    assert excerpt(None, 50) == "..."


def test_deterministic():
    records = [make_record(i, s) for i, s in enumerate(["positive", "negative", "neutral"])]
    assert _report(records) == _report(records)


def test_to_dict():
    data = _report([make_record(1)]).to_dict()
    assert set(data) == {"summary", "themes", "actionable"}
    assert isinstance(data["themes"], list)
