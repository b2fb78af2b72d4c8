"""Keyword-table theme detection over feedback comments."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeRule:
    label: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(kw in text for kw in self.keywords)


THEME_RULES: tuple[ThemeRule, ...] = (
    ThemeRule(label="Performance Issues", keywords=("slow", "performance")),
    ThemeRule(label="Bugs & Stability", keywords=("bug", "crash")),
    ThemeRule(label="User Interface", keywords=("ui", "interface", "design")),
    ThemeRule(label="Feature Requests", keywords=("feature", "missing")),
    ThemeRule(label="User Experience", keywords=("onboarding", "confusing")),
)

FALLBACK_THEMES: tuple[str, ...] = ("General Feedback", "Product Experience", "Feature Requests")


def comment_blob(comments: Iterable[str | None]) -> str:
    """Lowercased, space-joined comments; missing comments count as empty text."""
    return " ".join((c or "").lower() for c in comments)


def detect_themes(
    comments: Iterable[str | None],
    rules: Sequence[ThemeRule] = THEME_RULES,
) -> tuple[str, ...]:
    """Substring scan of the comment blob, one label per matching rule, in table order.

    When nothing matches the fixed fallback is returned as a whole.
    """
    blob = comment_blob(comments)
    labels: list[str] = []
    for rule in rules:
        if rule.label not in labels and rule.matches(blob):
            labels.append(rule.label)
    return tuple(labels) if labels else FALLBACK_THEMES
