# src/glickoladder/api/rating.py

"""API endpoints for the stateless rating calculator."""

from fastapi import APIRouter, Depends

from glickoladder.config import RatingSettings, get_settings
from glickoladder.rating.decay import calculate_rd, decay_rd
from glickoladder.rating.glicko2_engine import Glicko2Engine
from glickoladder.schemas import rating as rating_schema
from glickoladder.schemas.common import RatingState
from glickoladder.services import rating_service

# - prefix="/ratings": All routes here will be prefixed with /ratings
# - tags=["Ratings"]: Groups these endpoints under "Ratings" in the API docs
router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post("/update", response_model=RatingState)
async def update_rating(
    request: rating_schema.RatingUpdateRequest,
    settings: RatingSettings = Depends(get_settings),
) -> RatingState:
    """
    Rate a player against the results of one rating period.

    - **player**: Current rating, RD and volatility
    - **results**: Games against opponents (an empty list is a no-op)

    Raises:
        422: If a score is not 0, 0.5 or 1, or an RD is not positive
        500: If the volatility solver fails to converge
    """
    new_rating = rating_service.rate_player(
        request.player.to_glicko2(),
        [result.to_result() for result in request.results],
        Glicko2Engine.from_settings(settings),
    )
    return RatingState.from_glicko2(new_rating)


@router.post("/decay", response_model=RatingState)
async def decay_rating(
    request: rating_schema.DecayRequest,
    settings: RatingSettings = Depends(get_settings),
) -> RatingState:
    """Recompute a player's RD from the time since their last match."""
    decayed = decay_rd(
        request.player.to_glicko2(),
        request.last_match_at,
        now=request.now,
        settings=settings,
    )
    return RatingState.from_glicko2(decayed)


@router.post("/rd", response_model=rating_schema.RDResponse)
async def rating_deviation(
    request: rating_schema.RDRequest,
    settings: RatingSettings = Depends(get_settings),
) -> rating_schema.RDResponse:
    """Calculate the RD alone from the time of the last match."""
    rd = calculate_rd(request.last_match_at, now=request.now, settings=settings)
    return rating_schema.RDResponse(rd=rd)
