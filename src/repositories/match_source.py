"""Match-record sources and FTC Events API payload parsing."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from domain.common import MatchRecord, TeamSlot

logger = logging.getLogger(__name__)

_SCORE_KEYS = {
    "score_red_final": "scoreRedFinal",
    "score_red_auto": "scoreRedAuto",
    "score_red_teleop": "scoreRedTeleop",
    "score_red_foul": "scoreRedFoul",
    "score_blue_final": "scoreBlueFinal",
    "score_blue_auto": "scoreBlueAuto",
    "score_blue_teleop": "scoreBlueTeleop",
    "score_blue_foul": "scoreBlueFoul",
}


@runtime_checkable
class MatchSource(Protocol):
    """Anything able to supply the played matches of one event."""

    def fetch_matches(self, event_code: str, season: str) -> list[MatchRecord]: ...


def parse_match_record(raw: Mapping[str, Any]) -> MatchRecord | None:
    """Convert one ``matches[]`` entry of the FTC Events API into a record.

    Returns None when the entry has no usable match number. Optional fields that
    are missing or malformed are left as None.
    """
    match_number = _as_int(raw.get("matchNumber"))
    if match_number is None:
        logger.warning("Skipping match without a valid matchNumber: %r", raw.get("matchNumber"))
        return None

    teams: list[TeamSlot] = []
    for slot in raw.get("teams") or []:
        if not isinstance(slot, Mapping):
            logger.warning("Skipping malformed team slot in match %s: %r", match_number, slot)
            continue
        team_number = _as_int(slot.get("teamNumber"))
        if team_number is None:
            logger.warning(
                "Skipping team slot without a valid teamNumber in match %s: %r",
                match_number,
                slot,
            )
            continue
        teams.append(TeamSlot(team_number=team_number, station=str(slot.get("station") or "")))

    level = raw.get("tournamentLevel")
    return MatchRecord(
        match_number=match_number,
        teams=tuple(teams),
        tournament_level=None if level is None else str(level),
        actual_start_time=_as_datetime(raw.get("actualStartTime")),
        post_result_time=_as_datetime(raw.get("postResultTime")),
        **{field: _as_float(raw.get(key)) for field, key in _SCORE_KEYS.items()},
    )


def parse_matches_payload(payload: Any) -> list[MatchRecord]:
    """Parse either ``{"matches": [...]}`` or a bare list of match entries."""
    if isinstance(payload, Mapping):
        entries = payload.get("matches") or []
    elif isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)):
        entries = payload
    else:
        raise ValueError(f"Unsupported match payload type: {type(payload).__name__}")

    records: list[MatchRecord] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            logger.warning("Skipping non-object match entry: %r", entry)
            continue
        record = parse_match_record(entry)
        if record is not None:
            records.append(record)
    return records


class JsonFileMatchSource:
    """Serve matches from JSON dumps laid out as ``{root}/{season}/{event_code}.json``."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = root_dir

    def path_for(self, event_code: str, season: str) -> Path:
        return self.root_dir / str(season) / f"{event_code}.json"

    def fetch_matches(self, event_code: str, season: str) -> list[MatchRecord]:
        path = self.path_for(event_code, season)
        if not path.is_file():
            raise FileNotFoundError(f"Match file not found for event={event_code} season={season}: {path}")
        with path.open("r", encoding="utf-8") as file:
            payload = json.load(file)
        records = parse_matches_payload(payload)
        logger.debug("Loaded %d matches from %s", len(records), path)
        return records

    def event_codes(self, season: str) -> list[str]:
        season_dir = self.root_dir / str(season)
        if not season_dir.is_dir():
            return []
        return sorted(path.stem for path in season_dir.glob("*.json"))


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_datetime(value: Any) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp %r", value)
        return None


__all__ = [
    "JsonFileMatchSource",
    "MatchSource",
    "parse_match_record",
    "parse_matches_payload",
]
