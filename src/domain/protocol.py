"""Shared protocols and enums for match analytics."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domain.common import MatchRecord


class Alliance(str, Enum):
    """Which side of the field a team is seated on."""

    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> Alliance:
        return Alliance.BLUE if self is Alliance.RED else Alliance.RED


class TournamentLevel(str, Enum):
    """Tournament stage a match was played in."""

    QUALIFICATION = "qualification"
    PLAYOFF = "playoff"


class ScoreField(str, Enum):
    """Per-alliance score breakdown reported for every match."""

    FINAL = "final"
    AUTO = "auto"
    TELEOP = "teleop"
    FOUL = "foul"


@runtime_checkable
class ScoringCategory(Protocol):
    """Target-score definition used as the regression target for power ratings."""

    def __call__(self, match: MatchRecord, alliance: Alliance) -> float: ...


__all__ = [
    "Alliance",
    "ScoreField",
    "ScoringCategory",
    "TournamentLevel",
]
