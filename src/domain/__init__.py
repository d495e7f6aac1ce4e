"""Match analytics domain modules."""

from domain.common import MatchRecord, TeamSlot
from domain.protocol import Alliance, ScoreField, ScoringCategory, TournamentLevel

__all__ = [
    "Alliance",
    "MatchRecord",
    "ScoreField",
    "ScoringCategory",
    "TeamSlot",
    "TournamentLevel",
]
