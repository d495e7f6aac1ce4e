"""Scoring categories usable as power-rating targets."""

from __future__ import annotations

from enum import Enum

from domain.accessors import score_for
from domain.common import MatchRecord
from domain.protocol import Alliance, ScoreField, ScoringCategory


def category_overall(match: MatchRecord, alliance: Alliance) -> float:
    """Final alliance score as reported, penalties included."""
    return score_for(match, alliance, ScoreField.FINAL)


def category_auto(match: MatchRecord, alliance: Alliance) -> float:
    return score_for(match, alliance, ScoreField.AUTO)


def category_teleop(match: MatchRecord, alliance: Alliance) -> float:
    return score_for(match, alliance, ScoreField.TELEOP)


def category_foul(match: MatchRecord, alliance: Alliance) -> float:
    return score_for(match, alliance, ScoreField.FOUL)


def category_dpr(match: MatchRecord, alliance: Alliance) -> float:
    """Opponent's final score; regressing on it yields defensive ratings."""
    return category_overall(match, alliance.opponent)


class Category(str, Enum):
    """Named built-in scoring categories."""

    OVERALL = "overall"
    AUTO = "auto"
    TELEOP = "teleop"
    FOUL = "foul"
    DPR = "dpr"

    @property
    def score_fn(self) -> ScoringCategory:
        return _CATEGORY_FUNCTIONS[self]


_CATEGORY_FUNCTIONS: dict[Category, ScoringCategory] = {
    Category.OVERALL: category_overall,
    Category.AUTO: category_auto,
    Category.TELEOP: category_teleop,
    Category.FOUL: category_foul,
    Category.DPR: category_dpr,
}


def resolve_category(name: str) -> ScoringCategory:
    """Look up a built-in category function by name (case-insensitive)."""
    try:
        return Category(name.lower()).score_fn
    except ValueError as exc:
        available = ", ".join(category.value for category in Category)
        raise KeyError(f"Unknown scoring category '{name}'. Available: {available}") from exc


__all__ = [
    "Category",
    "category_auto",
    "category_dpr",
    "category_foul",
    "category_overall",
    "category_teleop",
    "resolve_category",
]
