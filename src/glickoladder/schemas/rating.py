# src/glickoladder/schemas/rating.py

"""Pydantic schemas for the stateless rating calculator endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from glickoladder.rating.glicko2_engine import MatchResult

from .common import RatingState


class MatchResultIn(BaseModel):
    """One game against one opponent.

    Examples:
        {"opponent_rating": 1400, "opponent_rd": 30, "score": 1}
        {"opponent_rating": 1550, "opponent_rd": 100, "score": 0.5}
    """

    opponent_rating: float
    opponent_rd: float = Field(..., gt=0, description="Opponent rating deviation")
    score: float = Field(..., ge=0, le=1, description="1 win, 0.5 draw, 0 loss")

    def to_result(self) -> MatchResult:
        return MatchResult(
            opponent_rating=self.opponent_rating,
            opponent_rd=self.opponent_rd,
            score=self.score,
        )


class RatingUpdateRequest(BaseModel):
    """A player's current rating and the results of one rating period."""

    player: RatingState
    results: list[MatchResultIn] = Field(default_factory=list)


class DecayRequest(BaseModel):
    """A player's rating and the time of their last match (None if never)."""

    player: RatingState
    last_match_at: datetime | None = None

    # Optional reference time, mostly for reproducible calculations
    now: datetime | None = None


class RDRequest(BaseModel):
    """RD-only calculation from the time of the last match."""

    last_match_at: datetime | None = None
    now: datetime | None = None


class RDResponse(BaseModel):
    rd: float
