"""Alliance-based power ratings (OPR, DPR, CCWM)."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np

from domain.accessors import alliance_members
from domain.categories import category_auto, category_dpr, category_overall
from domain.common import AllianceRow, MatchRecord
from domain.protocol import Alliance, ScoringCategory
from domain.ratings.solver import DEFAULT_RIDGE, solve_least_squares

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerRatingMap(Mapping[int, float]):
    """Per-team coefficients plus the column order they were solved in."""

    teams: tuple[int, ...] = ()
    coefficients: Mapping[int, float] = field(default_factory=dict)

    @property
    def column_index(self) -> dict[int, int]:
        return {team: index for index, team in enumerate(self.teams)}

    def __getitem__(self, team: int) -> float:
        return self.coefficients[team]

    def __iter__(self) -> Iterator[int]:
        return iter(self.teams)

    def __len__(self) -> int:
        return len(self.teams)

    @classmethod
    def from_solution(cls, teams: Sequence[int], solution: np.ndarray) -> PowerRatingMap:
        if len(teams) != len(solution):
            raise ValueError(
                f"solution length {len(solution)} does not match team count {len(teams)}"
            )
        ordered = tuple(teams)
        return cls(
            teams=ordered,
            coefficients={team: float(solution[index]) for index, team in enumerate(ordered)},
        )


@dataclass(frozen=True)
class EventRatings:
    """All power ratings derived from one event's full match batch."""

    overall: PowerRatingMap
    auto: PowerRatingMap
    teleop: PowerRatingMap
    dpr: PowerRatingMap

    def ccwm(self, team: int) -> float:
        return calculate_ccwm(self.overall, self.dpr, team)


def build_alliance_rows(
    matches: Sequence[MatchRecord],
    category: ScoringCategory,
) -> list[AllianceRow]:
    """Up to two rows per match (red, then blue); empty alliances are skipped."""
    rows: list[AllianceRow] = []
    for match in matches:
        for alliance in (Alliance.RED, Alliance.BLUE):
            members = alliance_members(match, alliance)
            if not members:
                continue
            rows.append(AllianceRow(team_numbers=members, score=float(category(match, alliance))))
    return rows


def sorted_team_columns(rows: Sequence[AllianceRow]) -> tuple[int, ...]:
    return tuple(sorted({team for row in rows for team in row.team_numbers}))


def build_design_matrix(
    rows: Sequence[AllianceRow],
    teams: Sequence[int],
) -> tuple[np.ndarray, np.ndarray]:
    """Binary membership matrix (rows x teams) and the matching score vector."""
    column_index = {team: index for index, team in enumerate(teams)}
    design = np.zeros((len(rows), len(teams)), dtype=float)
    target = np.zeros(len(rows), dtype=float)
    for row_index, row in enumerate(rows):
        for team in row.team_numbers:
            design[row_index, column_index[team]] = 1.0
        target[row_index] = row.score
    return design, target


def calculate_category_opr(
    matches: Sequence[MatchRecord],
    category: ScoringCategory,
    *,
    ridge: float = DEFAULT_RIDGE,
) -> PowerRatingMap:
    """Solve per-team contributions to ``category`` across an event's matches.

    Pass the full event batch, not one team's matches: every alliance row
    constrains the coefficients of its partners.
    """
    rows = build_alliance_rows(matches, category)
    if not rows:
        return PowerRatingMap()

    teams = sorted_team_columns(rows)
    design, target = build_design_matrix(rows, teams)
    logger.debug(
        "Solving power ratings rows=%d teams=%d ridge=%s", design.shape[0], design.shape[1], ridge
    )
    solution = solve_least_squares(design, target, ridge)
    return PowerRatingMap.from_solution(teams, solution)


def calculate_opr(matches: Sequence[MatchRecord], *, ridge: float = DEFAULT_RIDGE) -> PowerRatingMap:
    return calculate_category_opr(matches, category_overall, ridge=ridge)


def calculate_dpr(matches: Sequence[MatchRecord], *, ridge: float = DEFAULT_RIDGE) -> PowerRatingMap:
    """Defensive rating: the same regression with the opponent's score as target."""
    return calculate_category_opr(matches, category_dpr, ridge=ridge)


def calculate_ccwm(opr: Mapping[int, float], dpr: Mapping[int, float], team: int) -> float:
    """Calculated contribution to winning margin; missing entries count as 0."""
    return opr.get(team, 0.0) - dpr.get(team, 0.0)


def derive_teleop_opr(overall: PowerRatingMap, auto: PowerRatingMap) -> PowerRatingMap:
    """Teleop contribution as Overall OPR minus Auto OPR, over the union of teams."""
    teams = tuple(sorted(set(overall) | set(auto)))
    return PowerRatingMap(
        teams=teams,
        coefficients={team: overall.get(team, 0.0) - auto.get(team, 0.0) for team in teams},
    )


def calculate_event_ratings(
    matches: Sequence[MatchRecord],
    *,
    ridge: float = DEFAULT_RIDGE,
) -> EventRatings:
    overall = calculate_category_opr(matches, category_overall, ridge=ridge)
    auto = calculate_category_opr(matches, category_auto, ridge=ridge)
    return EventRatings(
        overall=overall,
        auto=auto,
        teleop=derive_teleop_opr(overall, auto),
        dpr=calculate_dpr(matches, ridge=ridge),
    )


__all__ = [
    "EventRatings",
    "PowerRatingMap",
    "build_alliance_rows",
    "build_design_matrix",
    "calculate_category_opr",
    "calculate_ccwm",
    "calculate_dpr",
    "calculate_event_ratings",
    "calculate_opr",
    "derive_teleop_opr",
    "sorted_team_columns",
]
