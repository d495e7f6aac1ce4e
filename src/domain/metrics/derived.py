"""Composite metrics combining match outcomes with power ratings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from domain.accessors import alliance_members, alliance_of
from domain.categories import category_overall
from domain.common import MatchRecord
from domain.protocol import Alliance
from domain.ratings.power_rating import calculate_ccwm


@dataclass(frozen=True)
class TeamOutcome:
    """One match seen from one team's side."""

    match: MatchRecord
    alliance: Alliance
    own_score: float
    opponent_score: float

    @property
    def margin(self) -> float:
        return self.own_score - self.opponent_score

    @property
    def won(self) -> bool:
        return self.own_score > self.opponent_score


def team_outcomes(matches: Sequence[MatchRecord], team: int) -> list[TeamOutcome]:
    """Outcomes for every match in which ``team`` has a known alliance."""
    outcomes: list[TeamOutcome] = []
    for match in matches:
        alliance = alliance_of(match, team)
        if alliance is None:
            continue
        outcomes.append(
            TeamOutcome(
                match=match,
                alliance=alliance,
                own_score=category_overall(match, alliance),
                opponent_score=category_overall(match, alliance.opponent),
            )
        )
    return outcomes


def win_rate(matches: Sequence[MatchRecord], team: int) -> float:
    """Percent of the team's matches won outright; ties count as non-wins."""
    outcomes = team_outcomes(matches, team)
    if not outcomes:
        return 0.0
    wins = sum(1 for outcome in outcomes if outcome.won)
    return (wins / len(outcomes)) * 100.0


def win_shares(
    matches: Sequence[MatchRecord],
    team: int,
    opr: Mapping[int, float],
    dpr: Mapping[int, float],
) -> float:
    """CCWM expressed in average winning margins, scaled by the number of wins."""
    margins = [outcome.margin for outcome in team_outcomes(matches, team) if outcome.won]
    if not margins:
        return 0.0
    average_margin = sum(margins) / len(margins)
    return (calculate_ccwm(opr, dpr, team) / average_margin) * len(margins)


def upset_factor(
    matches: Sequence[MatchRecord],
    team: int,
    opr: Mapping[int, float],
) -> float:
    """Percent of wins taken against an alliance with a higher summed OPR."""
    wins = [outcome for outcome in team_outcomes(matches, team) if outcome.won]
    if not wins:
        return 0.0

    upsets = 0
    for outcome in wins:
        own_opr = _alliance_opr(outcome.match, outcome.alliance, opr)
        opponent_opr = _alliance_opr(outcome.match, outcome.alliance.opponent, opr)
        if own_opr < opponent_opr:
            upsets += 1
    return (upsets / len(wins)) * 100.0


def _alliance_opr(match: MatchRecord, alliance: Alliance, opr: Mapping[int, float]) -> float:
    return sum(opr.get(member, 0.0) for member in alliance_members(match, alliance))


__all__ = ["TeamOutcome", "team_outcomes", "upset_factor", "win_rate", "win_shares"]
