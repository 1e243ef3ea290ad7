# src/glickoladder/rating/scale.py

"""Conversion between the public Glicko scale and the internal Glicko-2 scale."""

import math

# 400 / ln(10), approximately 173.7178
GLICKO2_SCALE = 400 / math.log(10)

# Centre of the public rating scale
RATING_CENTER = 1500.0


def to_internal_scale(rating: float, rd: float) -> tuple[float, float]:
    """Convert a public (rating, RD) pair to Glicko-2 (mu, phi)."""
    mu = (rating - RATING_CENTER) / GLICKO2_SCALE
    phi = rd / GLICKO2_SCALE
    return mu, phi


def from_internal_scale(mu: float, phi: float) -> tuple[float, float]:
    """Convert Glicko-2 (mu, phi) back to a public (rating, RD) pair."""
    rating = mu * GLICKO2_SCALE + RATING_CENTER
    rd = phi * GLICKO2_SCALE
    return rating, rd
