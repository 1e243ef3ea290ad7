# src/glickoladder/schemas/match.py

"""Pydantic schemas for recording ladder matches."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .player import LadderPlayer


class MatchCreate(BaseModel):
    """
    Properties to receive via API on create.

    The caller supplies the current records of the players involved; the
    response carries the replacement records for winner and loser.
    """

    players: list[LadderPlayer] = Field(..., min_length=1)
    winner_id: str
    loser_id: str
    draw: bool = False

    # Optional: when the match was played (defaults to now if not provided)
    played_at: datetime | None = Field(
        default=None,
        description="When the match was played (ISO format). Defaults to current time.",
    )


class ActionLogEntry(BaseModel):
    """An audit record of one rated match."""

    id: str
    type: Literal["match_result"] = "match_result"
    winner: str
    loser: str
    winner_id: str
    loser_id: str
    old_winner_rating: int | float
    old_loser_rating: int | float
    new_winner_rating: int | float
    new_loser_rating: int | float
    draw: bool = False
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class MatchRecord(BaseModel):
    """New player records and the log entry produced by one match."""

    winner: LadderPlayer
    loser: LadderPlayer
    log_entry: ActionLogEntry
