# src/glickoladder/config.py

"""Rating system settings.

Values are read from environment variables, falling back to the
Glicko-2 defaults used by the ladder.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingSettings:
    """Constants shared by every rating update in a deployment.

    Attributes:
        tau: System constant constraining volatility change (0.3 to 1.2)
        epsilon: Convergence tolerance of the volatility solver
        max_iterations: Upper bound on volatility solver iterations
        initial_rating: Seed rating for new players
        initial_rd: RD of a player who has never played
        initial_volatility: Volatility of a new player
        rd_floor: Lowest RD the ladder keeps after a match
        decay_ceiling: Highest RD reached through inactivity decay
        decay_window_days: Days of inactivity to go from floor to ceiling
    """

    tau: float = 0.5
    epsilon: float = 0.000001
    max_iterations: int = 100
    initial_rating: float = 1500.0
    initial_rd: float = 350.0
    initial_volatility: float = 0.06
    rd_floor: float = 50.0
    decay_ceiling: float = 100.0
    decay_window_days: float = 10.0

    @classmethod
    def from_env(cls) -> "RatingSettings":
        """Build settings from ``GLICKOLADDER_*`` environment variables."""
        settings = cls(
            tau=float(os.getenv("GLICKOLADDER_TAU", "0.5")),
            epsilon=float(os.getenv("GLICKOLADDER_EPSILON", "0.000001")),
            max_iterations=int(os.getenv("GLICKOLADDER_MAX_ITERATIONS", "100")),
            initial_rating=float(os.getenv("GLICKOLADDER_INITIAL_RATING", "1500")),
            initial_rd=float(os.getenv("GLICKOLADDER_INITIAL_RD", "350")),
            initial_volatility=float(
                os.getenv("GLICKOLADDER_INITIAL_VOLATILITY", "0.06")
            ),
            rd_floor=float(os.getenv("GLICKOLADDER_RD_FLOOR", "50")),
            decay_ceiling=float(os.getenv("GLICKOLADDER_DECAY_CEILING", "100")),
            decay_window_days=float(os.getenv("GLICKOLADDER_DECAY_WINDOW_DAYS", "10")),
        )
        logger.debug("Loaded rating settings", extra={"tau": settings.tau})
        return settings


@lru_cache
def get_settings() -> RatingSettings:
    """Return the process-wide settings, read once from the environment."""
    return RatingSettings.from_env()
