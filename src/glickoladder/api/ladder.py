# src/glickoladder/api/ladder.py

"""API endpoints for ladder operations.

The API keeps no state: callers send the player records involved and
persist the records returned.
"""

from fastapi import APIRouter, Depends, status

from glickoladder.config import RatingSettings, get_settings
from glickoladder.schemas import leaderboard as leaderboard_schema
from glickoladder.schemas import match as match_schema
from glickoladder.schemas import player as player_schema
from glickoladder.services import ladder_service

router = APIRouter(prefix="/ladder", tags=["Ladder"])


@router.post(
    "/players",
    response_model=player_schema.LadderPlayer,
    status_code=status.HTTP_201_CREATED,
)
async def create_player(
    player_in: player_schema.PlayerCreate,
    settings: RatingSettings = Depends(get_settings),
) -> player_schema.LadderPlayer:
    """
    Create a new ladder player record.

    - **name**: The player's display name
    - **rating**: Optional seed rating (defaults to the initial rating)
    """
    return ladder_service.create_player(
        player_in.name, player_in.rating, settings=settings
    )


@router.post(
    "/matches",
    response_model=match_schema.MatchRecord,
    status_code=status.HTTP_201_CREATED,
)
async def record_match(
    match_in: match_schema.MatchCreate,
    settings: RatingSettings = Depends(get_settings),
) -> match_schema.MatchRecord:
    """
    Rate a match and return the new winner and loser records.

    Raises:
        404: If winner_id or loser_id is not among the supplied players
        422: If winner and loser are the same player
    """
    winner = ladder_service.find_player(match_in.players, match_in.winner_id)
    loser = ladder_service.find_player(match_in.players, match_in.loser_id)
    return ladder_service.record_match(
        winner,
        loser,
        draw=match_in.draw,
        played_at=match_in.played_at,
        settings=settings,
    )


@router.post(
    "/leaderboard", response_model=list[leaderboard_schema.LeaderboardEntry]
)
async def leaderboard(
    request: leaderboard_schema.LeaderboardRequest,
    settings: RatingSettings = Depends(get_settings),
) -> list[leaderboard_schema.LeaderboardEntry]:
    """
    Rank the supplied players.

    - **refresh**: Recompute each RD from inactivity before filtering
    - **now**: Reference time for the refresh (defaults to now)
    """
    players = request.players
    if request.refresh:
        players = ladder_service.refresh_rds(players, now=request.now, settings=settings)
    return ladder_service.build_leaderboard(players, settings=settings)
