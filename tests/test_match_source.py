"""Tests for FTC payload parsing and the JSON-file match source."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from domain.accessors import EPOCH, match_timestamp
from domain.common import TeamSlot
from domain.protocol import Alliance, ScoreField
from repositories.match_source import (
    JsonFileMatchSource,
    MatchSource,
    parse_match_record,
    parse_matches_payload,
)

RAW_MATCH = {
    "actualStartTime": "2024-11-16T09:35:12.33",
    "description": "Qualification 1",
    "tournamentLevel": "QUALIFICATION",
    "series": 0,
    "matchNumber": 1,
    "scoreRedFinal": 112,
    "scoreRedFoul": 10,
    "scoreRedAuto": 36,
    "scoreBlueFinal": 87,
    "scoreBlueFoul": 0,
    "scoreBlueAuto": 24,
    "scoreBlueTeleop": 63,
    "postResultTime": "2024-11-16T09:40:01Z",
    "teams": [
        {"teamNumber": 19567, "station": "Red1", "dq": False, "onField": True},
        {"teamNumber": 8393, "station": "Red2", "dq": False, "onField": True},
        {"teamNumber": 16236, "station": "Blue1", "dq": False, "onField": True},
        {"teamNumber": 23511, "station": "Blue2", "dq": False, "onField": True},
    ],
    "modifiedOn": "2024-11-16T09:40:01.523",
}


def test_parse_match_record_maps_api_fields() -> None:
    record = parse_match_record(RAW_MATCH)
    assert record is not None
    assert record.match_number == 1
    assert record.tournament_level == "QUALIFICATION"
    assert record.teams[0] == TeamSlot(team_number=19567, station="Red1")
    assert len(record.teams) == 4
    assert record.score(Alliance.RED, ScoreField.FINAL) == pytest.approx(112.0)
    assert record.score(Alliance.BLUE, ScoreField.TELEOP) == pytest.approx(63.0)
    # Absent in the payload, so left unset rather than zero.
    assert record.score(Alliance.RED, ScoreField.TELEOP) is None
    assert record.post_result_time == datetime(2024, 11, 16, 9, 40, 1, tzinfo=timezone.utc)
    assert match_timestamp(record) == record.post_result_time


def test_parse_match_record_tolerates_bad_optional_fields() -> None:
    record = parse_match_record(
        {
            "matchNumber": "7",
            "scoreRedFinal": "not a number",
            "actualStartTime": "sometime",
            "teams": None,
        }
    )
    assert record is not None
    assert record.match_number == 7
    assert record.teams == ()
    assert record.score_red_final is None
    assert record.actual_start_time is None
    assert match_timestamp(record) == EPOCH


def test_parse_match_record_keeps_offset_timestamps() -> None:
    record = parse_match_record({"matchNumber": 1, "actualStartTime": "2024-11-16T09:35:00-05:00"})
    assert record is not None
    assert record.actual_start_time == datetime(
        2024, 11, 16, 9, 35, tzinfo=timezone(timedelta(hours=-5))
    )


def test_parse_match_record_skips_entries_without_match_number(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="repositories.match_source"):
        assert parse_match_record({"teams": []}) is None
    assert "matchNumber" in caplog.text


def test_parse_match_record_skips_bad_team_slots(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="repositories.match_source"):
        record = parse_match_record(
            {
                "matchNumber": 3,
                "teams": [
                    {"teamNumber": None, "station": "Red1"},
                    "garbage",
                    {"teamNumber": 42, "station": "Blue1"},
                ],
            }
        )
    assert record is not None
    assert record.teams == (TeamSlot(team_number=42, station="Blue1"),)
    assert "teamNumber" in caplog.text


def test_parse_matches_payload_accepts_wrapped_and_bare_lists() -> None:
    wrapped = parse_matches_payload({"matches": [RAW_MATCH, {"nope": 1}]})
    bare = parse_matches_payload([RAW_MATCH])
    assert [record.match_number for record in wrapped] == [1]
    assert wrapped == bare
    assert parse_matches_payload({"matches": None}) == []


def test_parse_matches_payload_rejects_scalars() -> None:
    with pytest.raises(ValueError, match="Unsupported match payload type"):
        parse_matches_payload("matches")


def test_json_file_source_reads_season_event_layout(tmp_path: Path) -> None:
    season_dir = tmp_path / "2024"
    season_dir.mkdir()
    (season_dir / "USCAFFQ1.json").write_text(json.dumps({"matches": [RAW_MATCH]}))
    (season_dir / "USCAFFQ2.json").write_text(json.dumps([]))

    source = JsonFileMatchSource(tmp_path)
    assert isinstance(source, MatchSource)
    assert source.event_codes("2024") == ["USCAFFQ1", "USCAFFQ2"]
    assert source.event_codes("2023") == []

    matches = source.fetch_matches("USCAFFQ1", "2024")
    assert len(matches) == 1
    assert matches[0].match_number == 1
    assert source.fetch_matches("USCAFFQ2", "2024") == []


def test_json_file_source_missing_event_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="event=NOPE season=2024"):
        JsonFileMatchSource(tmp_path).fetch_matches("NOPE", "2024")


def test_parse_match_record_accepts_integral_float_numbers() -> None:
    record = parse_match_record(
        {
            "matchNumber": 12.0,
            "teams": [
                {"teamNumber": 19567.0, "station": "Red1"},
                {"teamNumber": 8393.5, "station": "Blue1"},
            ],
        }
    )
    assert record is not None
    assert record.match_number == 12
    assert record.teams == (TeamSlot(team_number=19567, station="Red1"),)
