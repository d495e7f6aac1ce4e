"""Per-team descriptive statistics over a match batch.

All functions take the matches to consider (usually the subset a team played
at one event) and return 0 rather than raising when the team has no scored
matches or a denominator would be zero.
"""

from __future__ import annotations

from collections.abc import Sequence
from statistics import fmean, pstdev

from domain.accessors import alliance_members, alliance_of, filter_by_level, sort_chronologically
from domain.categories import category_auto, category_foul, category_overall
from domain.common import MatchRecord
from domain.protocol import TournamentLevel

DEFAULT_AUTO_THRESHOLD = 50.0
DEFAULT_MOMENTUM_WINDOW = 3


def team_scores(matches: Sequence[MatchRecord], team: int) -> list[float]:
    """Overall alliance score for each match the team played, in batch order."""
    scores: list[float] = []
    for match in matches:
        alliance = alliance_of(match, team)
        if alliance is not None:
            scores.append(category_overall(match, alliance))
    return scores


def average_team_score(matches: Sequence[MatchRecord], team: int) -> float:
    scores = team_scores(matches, team)
    return fmean(scores) if scores else 0.0


def _level_averages(matches: Sequence[MatchRecord], team: int) -> tuple[float, float]:
    qualification = average_team_score(filter_by_level(matches, TournamentLevel.QUALIFICATION), team)
    playoff = average_team_score(filter_by_level(matches, TournamentLevel.PLAYOFF), team)
    return qualification, playoff


def auto_reliability(
    matches: Sequence[MatchRecord],
    team: int,
    threshold: float = DEFAULT_AUTO_THRESHOLD,
) -> float:
    """Percent of the team's matches whose alliance auto score reached ``threshold``."""
    total = 0
    success = 0
    for match in matches:
        alliance = alliance_of(match, team)
        if alliance is None:
            continue
        total += 1
        if category_auto(match, alliance) >= threshold:
            success += 1
    return (success / total) * 100.0 if total else 0.0


def playoff_elevation(matches: Sequence[MatchRecord], team: int) -> float:
    qualification, playoff = _level_averages(matches, team)
    if not qualification:
        return 0.0
    return playoff - qualification


def clutch_index(matches: Sequence[MatchRecord], team: int) -> float:
    """Percent change from qualification average to playoff average."""
    qualification, playoff = _level_averages(matches, team)
    if not qualification:
        return 0.0
    return ((playoff - qualification) / qualification) * 100.0


def choke_index(matches: Sequence[MatchRecord], team: int) -> float:
    """Percent drop from qualification to playoff average; 0 when there is no drop."""
    qualification, playoff = _level_averages(matches, team)
    if not qualification or playoff >= qualification:
        return 0.0
    return ((qualification - playoff) / qualification) * 100.0


def elim_performance(matches: Sequence[MatchRecord], team: int) -> float:
    return average_team_score(filter_by_level(matches, TournamentLevel.PLAYOFF), team)


def team_momentum(
    matches: Sequence[MatchRecord],
    team: int,
    window: int = DEFAULT_MOMENTUM_WINDOW,
) -> float:
    """Average score over the latest ``window`` matches of the batch.

    A ``window`` of 0 covers the whole batch, matching a ``[-0:]`` tail slice.
    """
    recent = sort_chronologically(matches)[-window:]
    return average_team_score(recent, team)


def performance_trend(matches: Sequence[MatchRecord], team: int) -> float:
    """Percent change between the first and second chronological halves."""
    ordered = sort_chronologically(matches)
    if len(ordered) < 2:
        return 0.0
    midpoint = len(ordered) // 2
    first = average_team_score(ordered[:midpoint], team)
    second = average_team_score(ordered[midpoint:], team)
    if not first:
        return 0.0
    return ((second - first) / first) * 100.0


def season_high_low(matches: Sequence[MatchRecord], team: int) -> tuple[float, float]:
    scores = team_scores(matches, team)
    if not scores:
        return 0.0, 0.0
    return max(scores), min(scores)


def scoring_std_dev(matches: Sequence[MatchRecord], team: int) -> float:
    """Population standard deviation of the team's alliance scores."""
    scores = team_scores(matches, team)
    return pstdev(scores) if scores else 0.0


def foul_rate(matches: Sequence[MatchRecord], team: int) -> float:
    """Average share of alliance foul points per match, split evenly across partners."""
    shares: list[float] = []
    for match in matches:
        alliance = alliance_of(match, team)
        if alliance is None:
            continue
        member_count = len(alliance_members(match, alliance)) or 1
        shares.append(category_foul(match, alliance) / member_count)
    return fmean(shares) if shares else 0.0


__all__ = [
    "DEFAULT_AUTO_THRESHOLD",
    "DEFAULT_MOMENTUM_WINDOW",
    "auto_reliability",
    "average_team_score",
    "choke_index",
    "clutch_index",
    "elim_performance",
    "foul_rate",
    "performance_trend",
    "playoff_elevation",
    "scoring_std_dev",
    "season_high_low",
    "team_momentum",
    "team_scores",
]
