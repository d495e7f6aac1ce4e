"""Read-only helpers over match records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from domain.common import MatchRecord
from domain.protocol import Alliance, ScoreField, TournamentLevel

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def station_alliance(station: str | None) -> Alliance | None:
    """Classify a driver-station label by its color prefix."""
    if not station:
        return None
    normalized = station.lower()
    if normalized.startswith(Alliance.RED.value):
        return Alliance.RED
    if normalized.startswith(Alliance.BLUE.value):
        return Alliance.BLUE
    return None


def alliance_of(match: MatchRecord, team: int) -> Alliance | None:
    """Return the alliance ``team`` played on, or None if it did not play."""
    for slot in match.teams:
        if slot.team_number == team:
            alliance = station_alliance(slot.station)
            if alliance is not None:
                return alliance
    return None


def alliance_members(match: MatchRecord, alliance: Alliance) -> tuple[int, ...]:
    return tuple(
        slot.team_number for slot in match.teams if station_alliance(slot.station) is alliance
    )


def score_for(match: MatchRecord, alliance: Alliance, field: ScoreField) -> float:
    """Reported alliance score for one breakdown field; absent fields count as 0."""
    value = match.score(alliance, field)
    return 0.0 if value is None else float(value)


def match_timestamp(match: MatchRecord) -> datetime:
    """Effective time a match was played: result post time, then start time, then epoch."""
    if match.post_result_time is not None:
        return _as_aware(match.post_result_time)
    if match.actual_start_time is not None:
        return _as_aware(match.actual_start_time)
    return EPOCH


def sort_chronologically(matches: Iterable[MatchRecord]) -> list[MatchRecord]:
    return sorted(matches, key=match_timestamp)


def filter_by_level(
    matches: Sequence[MatchRecord],
    level: TournamentLevel | str,
) -> list[MatchRecord]:
    """Keep matches whose tournament level equals ``level`` ignoring case."""
    target = (level.value if isinstance(level, TournamentLevel) else level).lower()
    return [
        match
        for match in matches
        if match.tournament_level is not None and match.tournament_level.lower() == target
    ]


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC so that mixed batches stay comparable.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


__all__ = [
    "EPOCH",
    "alliance_members",
    "alliance_of",
    "filter_by_level",
    "match_timestamp",
    "score_for",
    "sort_chronologically",
    "station_alliance",
]
