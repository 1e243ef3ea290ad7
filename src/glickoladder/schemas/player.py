# src/glickoladder/schemas/player.py

"""Pydantic schemas for ladder players."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ===============================================
# Create Schema: What a caller sends to register a player
# ===============================================
class PlayerCreate(BaseModel):
    """Properties to receive via API on create."""

    name: str = Field(..., min_length=1)
    rating: float | None = Field(default=None, description="Seed rating")


# ===============================================
# Ladder Player: The full record the caller persists
# ===============================================
class LadderPlayer(BaseModel):
    """A player's ladder record.

    Records are immutable; every ladder operation returns new instances.
    """

    id: str
    name: str
    rating: int | float
    rd: float = Field(..., gt=0)
    volatility: float = Field(..., gt=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    draws: int = Field(0, ge=0)
    last_match_at: datetime | None = None

    model_config = ConfigDict(frozen=True)
