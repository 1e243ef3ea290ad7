# src/glickoladder/schemas/__init__.py

"""Pydantic schemas for API validation and serialization."""

from .common import RatingState
from .leaderboard import LeaderboardEntry, LeaderboardRequest
from .match import ActionLogEntry, MatchCreate, MatchRecord
from .player import LadderPlayer, PlayerCreate
from .rating import (
    DecayRequest,
    MatchResultIn,
    RatingUpdateRequest,
    RDRequest,
    RDResponse,
)

__all__ = [
    # Common
    "RatingState",
    # Leaderboard
    "LeaderboardEntry",
    "LeaderboardRequest",
    # Match
    "ActionLogEntry",
    "MatchCreate",
    "MatchRecord",
    # Player
    "LadderPlayer",
    "PlayerCreate",
    # Rating
    "DecayRequest",
    "MatchResultIn",
    "RatingUpdateRequest",
    "RDRequest",
    "RDResponse",
]
