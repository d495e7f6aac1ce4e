"""Assemble every per-team metric for one event into a single summary."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from domain.accessors import alliance_of, match_timestamp
from domain.common import MatchRecord
from domain.config import AnalyticsParameters
from domain.metrics.derived import upset_factor, win_rate, win_shares
from domain.metrics.trends import (
    auto_reliability,
    choke_index,
    clutch_index,
    elim_performance,
    foul_rate,
    performance_trend,
    playoff_elevation,
    scoring_std_dev,
    season_high_low,
    team_momentum,
)
from domain.ratings.power_rating import EventRatings, calculate_event_ratings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamReport:
    """Outcome of every analytics function for one team at one event."""

    team_number: int
    matches_played: int
    overall_opr: float
    auto_opr: float
    teleop_opr: float
    dpr: float
    ccwm: float
    win_rate: float
    win_shares: float
    upset_factor: float
    auto_reliability: float
    playoff_elevation: float
    clutch_index: float
    choke_index: float
    momentum: float
    performance_trend: float
    elim_performance: float
    season_high: float
    season_low: float
    scoring_std_dev: float
    foul_rate: float


def team_matches(matches: Sequence[MatchRecord], team: int) -> list[MatchRecord]:
    """Subset of an event batch in which ``team`` has a known alliance."""
    return [match for match in matches if alliance_of(match, team) is not None]


def build_team_report(
    event_matches: Sequence[MatchRecord],
    team: int,
    *,
    params: AnalyticsParameters | None = None,
    ratings: EventRatings | None = None,
) -> TeamReport:
    """Compute ratings from the full event batch and trends from the team's own matches.

    ``ratings`` may be passed in to reuse one solve across several teams.
    """
    params = params or AnalyticsParameters()
    if ratings is None:
        ratings = calculate_event_ratings(event_matches, ridge=params.ridge)

    played = team_matches(event_matches, team)
    if not played:
        logger.info("Team %s has no matches in a batch of %d", team, len(event_matches))

    high, low = season_high_low(played, team)
    return TeamReport(
        team_number=team,
        matches_played=len(played),
        overall_opr=ratings.overall.get(team, 0.0),
        auto_opr=ratings.auto.get(team, 0.0),
        teleop_opr=ratings.teleop.get(team, 0.0),
        dpr=ratings.dpr.get(team, 0.0),
        ccwm=ratings.ccwm(team),
        win_rate=win_rate(played, team),
        win_shares=win_shares(played, team, ratings.overall, ratings.dpr),
        upset_factor=upset_factor(played, team, ratings.overall),
        auto_reliability=auto_reliability(played, team, threshold=params.auto_threshold),
        playoff_elevation=playoff_elevation(played, team),
        clutch_index=clutch_index(played, team),
        choke_index=choke_index(played, team),
        momentum=team_momentum(played, team, window=params.momentum_window),
        performance_trend=performance_trend(played, team),
        elim_performance=elim_performance(played, team),
        season_high=high,
        season_low=low,
        scoring_std_dev=scoring_std_dev(played, team),
        foul_rate=foul_rate(played, team),
    )


def most_recent_event(batches: Mapping[str, Sequence[MatchRecord]]) -> str | None:
    """Event code whose latest match was played most recently.

    Events without matches are skipped; on ties the first event wins.
    """
    latest_code: str | None = None
    latest_time = None
    for event_code, matches in batches.items():
        if not matches:
            continue
        event_time = max(match_timestamp(match) for match in matches)
        if latest_time is None or event_time > latest_time:
            latest_code = event_code
            latest_time = event_time
    return latest_code


__all__ = ["TeamReport", "build_team_report", "most_recent_event", "team_matches"]
