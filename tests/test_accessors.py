"""Unit tests for match-record accessors."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from domain.accessors import (
    EPOCH,
    alliance_members,
    alliance_of,
    filter_by_level,
    match_timestamp,
    score_for,
    sort_chronologically,
)
from domain.common import MatchRecord, TeamSlot
from domain.protocol import Alliance, ScoreField, TournamentLevel


def _match(match_number: int = 1, **kwargs) -> MatchRecord:
    kwargs.setdefault(
        "teams",
        (
            TeamSlot(team_number=1, station="Red1"),
            TeamSlot(team_number=2, station="red2"),
            TeamSlot(team_number=3, station="Blue1"),
            TeamSlot(team_number=4, station="BLUE2"),
        ),
    )
    return MatchRecord(match_number=match_number, **kwargs)


def test_alliance_of_classifies_station_prefix_ignoring_case() -> None:
    match = _match()
    assert alliance_of(match, 1) is Alliance.RED
    assert alliance_of(match, 2) is Alliance.RED
    assert alliance_of(match, 3) is Alliance.BLUE
    assert alliance_of(match, 4) is Alliance.BLUE


def test_alliance_of_returns_none_for_absent_team() -> None:
    assert alliance_of(_match(), 9999) is None


def test_alliance_of_returns_none_for_unrecognized_station() -> None:
    match = _match(teams=(TeamSlot(team_number=5, station="Green1"),))
    assert alliance_of(match, 5) is None


def test_alliance_members_keeps_record_order() -> None:
    match = _match()
    assert alliance_members(match, Alliance.RED) == (1, 2)
    assert alliance_members(match, Alliance.BLUE) == (3, 4)


def test_score_for_reads_field_and_defaults_missing_to_zero() -> None:
    match = _match(score_red_final=88, score_blue_auto=12.5)
    assert score_for(match, Alliance.RED, ScoreField.FINAL) == pytest.approx(88.0)
    assert score_for(match, Alliance.BLUE, ScoreField.AUTO) == pytest.approx(12.5)
    assert score_for(match, Alliance.RED, ScoreField.FOUL) == pytest.approx(0.0)
    assert score_for(match, Alliance.BLUE, ScoreField.TELEOP) == pytest.approx(0.0)


def test_match_timestamp_prefers_post_result_time() -> None:
    start = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)
    posted = datetime(2025, 1, 1, 10, 5, tzinfo=UTC)
    assert match_timestamp(_match(actual_start_time=start, post_result_time=posted)) == posted
    assert match_timestamp(_match(actual_start_time=start)) == start
    assert match_timestamp(_match()) == EPOCH


def test_match_timestamp_treats_naive_times_as_utc() -> None:
    naive = datetime(2025, 1, 1, 10, 0)
    assert match_timestamp(_match(actual_start_time=naive)) == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


def test_sort_chronologically_orders_by_effective_time() -> None:
    late = _match(2, actual_start_time=datetime(2025, 1, 2, tzinfo=UTC))
    early = _match(1, actual_start_time=datetime(2025, 1, 1, tzinfo=UTC))
    undated = _match(3)
    assert [match.match_number for match in sort_chronologically([late, early, undated])] == [3, 1, 2]


def test_filter_by_level_is_case_insensitive_and_skips_missing_level() -> None:
    matches = [
        _match(1, tournament_level="QUALIFICATION"),
        _match(2, tournament_level="Playoff"),
        _match(3, tournament_level=None),
        _match(4, tournament_level="qualification"),
    ]
    qualification = filter_by_level(matches, TournamentLevel.QUALIFICATION)
    assert [match.match_number for match in qualification] == [1, 4]
    assert [match.match_number for match in filter_by_level(matches, "PLAYOFF")] == [2]
    assert filter_by_level(matches, "practice") == []
