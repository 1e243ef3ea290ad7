# src/glickoladder/services/rating_service.py

"""Validated entry points into the rating core."""

from __future__ import annotations

import logging
from typing import Sequence

from glickoladder.exceptions import InvalidRatingDeviationError, InvalidScoreError
from glickoladder.rating.glicko2_engine import (
    Glicko2Engine,
    Glicko2Rating,
    MatchResult,
)

logger = logging.getLogger(__name__)

VALID_SCORES = (0.0, 0.5, 1.0)


def validate_results(results: Sequence[MatchResult]) -> None:
    """
    Checks the input constraints the engine assumes but does not enforce.

    Raises:
        InvalidRatingDeviationError: If an opponent RD is not positive
        InvalidScoreError: If a score is not 0, 0.5 or 1
    """
    for result in results:
        if not result.opponent_rd > 0:
            raise InvalidRatingDeviationError(result.opponent_rd)
        if result.score not in VALID_SCORES:
            raise InvalidScoreError(result.score)


def rate_player(
    player: Glicko2Rating,
    results: Sequence[MatchResult],
    engine: Glicko2Engine,
) -> Glicko2Rating:
    """Validate ``results`` and return the player's new rating triple."""
    if not player.rd > 0:
        raise InvalidRatingDeviationError(player.rd)
    validate_results(results)

    new_rating = engine.update_rating(player, results)
    logger.info(
        "Rated player",
        extra={
            "result_count": len(results),
            "rating_before": player.rating,
            "rating_after": new_rating.rating,
            "rd_after": new_rating.rd,
        },
    )
    return new_rating
