"""Match data sources."""

from repositories.match_source import (
    JsonFileMatchSource,
    MatchSource,
    parse_match_record,
    parse_matches_payload,
)

__all__ = [
    "JsonFileMatchSource",
    "MatchSource",
    "parse_match_record",
    "parse_matches_payload",
]
