# src/glickoladder/schemas/leaderboard.py

"""Leaderboard schemas for ladder rankings."""

from datetime import datetime

from pydantic import BaseModel, Field

from .player import LadderPlayer


class LeaderboardEntry(BaseModel):
    """Single entry in the ladder leaderboard.

    Attributes:
        rank: Position in leaderboard (1-indexed)
        player: The player's ladder record
    """

    rank: int = Field(..., ge=1, description="Position in leaderboard (1-indexed)")
    player: LadderPlayer


class LeaderboardRequest(BaseModel):
    """Players to rank, optionally refreshing their RD from inactivity first."""

    players: list[LadderPlayer] = Field(default_factory=list)
    refresh: bool = Field(True, description="Recompute RD before ranking")
    now: datetime | None = None
