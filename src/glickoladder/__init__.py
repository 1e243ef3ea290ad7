# src/glickoladder/__init__.py

"""Glicko-2 ratings for a competitive ladder."""

from .rating.decay import calculate_rd, decay_rd
from .rating.glicko2_engine import (
    Glicko2Engine,
    Glicko2Rating,
    MatchResult,
    update_rating,
)
from .rating.scale import from_internal_scale, to_internal_scale

__all__ = [
    "Glicko2Engine",
    "Glicko2Rating",
    "MatchResult",
    "calculate_rd",
    "decay_rd",
    "from_internal_scale",
    "to_internal_scale",
    "update_rating",
]
