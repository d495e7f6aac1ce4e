"""Shared value types for match analytics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from domain.protocol import Alliance, ScoreField


@dataclass(frozen=True)
class TeamSlot:
    """One team seated at one driver station."""

    team_number: int
    station: str


@dataclass(frozen=True)
class MatchRecord:
    """Canonical played-match payload consumed by the analytics functions."""

    match_number: int
    teams: tuple[TeamSlot, ...] = ()
    tournament_level: str | None = None
    score_red_final: float | None = None
    score_red_auto: float | None = None
    score_red_teleop: float | None = None
    score_red_foul: float | None = None
    score_blue_final: float | None = None
    score_blue_auto: float | None = None
    score_blue_teleop: float | None = None
    score_blue_foul: float | None = None
    actual_start_time: datetime | None = None
    post_result_time: datetime | None = None

    def score(self, alliance: Alliance, field: ScoreField) -> float | None:
        """Return the raw reported score, or None when the field was absent."""
        return getattr(self, _SCORE_ATTRIBUTES[(alliance, field)])


@dataclass(frozen=True)
class AllianceRow:
    """One alliance's participation in one match, as a regression row."""

    team_numbers: tuple[int, ...]
    score: float


_SCORE_ATTRIBUTES: dict[tuple[Alliance, ScoreField], str] = {
    (Alliance.RED, ScoreField.FINAL): "score_red_final",
    (Alliance.RED, ScoreField.AUTO): "score_red_auto",
    (Alliance.RED, ScoreField.TELEOP): "score_red_teleop",
    (Alliance.RED, ScoreField.FOUL): "score_red_foul",
    (Alliance.BLUE, ScoreField.FINAL): "score_blue_final",
    (Alliance.BLUE, ScoreField.AUTO): "score_blue_auto",
    (Alliance.BLUE, ScoreField.TELEOP): "score_blue_teleop",
    (Alliance.BLUE, ScoreField.FOUL): "score_blue_foul",
}


__all__ = ["AllianceRow", "MatchRecord", "TeamSlot"]
