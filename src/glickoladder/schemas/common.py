# src/glickoladder/schemas/common.py

"""Common Pydantic schemas used across multiple resources."""

from pydantic import BaseModel, Field

from glickoladder.rating.glicko2_engine import Glicko2Rating


class RatingState(BaseModel):
    """Pydantic model for a Glicko-2 rating triple with validation.

    This mirrors the ``Glicko2Rating`` dataclass used by the engine and adds
    runtime validation for API inputs/outputs.

    Attributes:
        rating: The player's skill rating (nominal centre 1500)
        rd: Rating deviation / uncertainty, strictly positive
        volatility: Expected fluctuation in skill, strictly positive
    """

    rating: int | float = Field(..., description="Skill rating")
    rd: float = Field(..., gt=0, description="Rating deviation (uncertainty)")
    volatility: float = Field(0.06, gt=0, description="Volatility")

    def to_glicko2(self) -> Glicko2Rating:
        return Glicko2Rating(rating=self.rating, rd=self.rd, volatility=self.volatility)

    @classmethod
    def from_glicko2(cls, rating: Glicko2Rating) -> "RatingState":
        return cls(rating=rating.rating, rd=rating.rd, volatility=rating.volatility)
