# src/glickoladder/services/ladder_service.py

"""Business logic for ladder operations.

Every function here takes the caller's current records and returns new
ones. Nothing is stored: persisting the returned players and log entries,
and serializing updates to the same player, is the caller's job.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Sequence

from glickoladder.config import RatingSettings, get_settings
from glickoladder.exceptions import PlayerNotFoundError, SelfMatchError, ValidationError
from glickoladder.rating.decay import calculate_rd
from glickoladder.rating.glicko2_engine import (
    Glicko2Engine,
    Glicko2Rating,
    MatchResult,
)
from glickoladder.schemas.leaderboard import LeaderboardEntry
from glickoladder.schemas.match import ActionLogEntry, MatchRecord
from glickoladder.schemas.player import LadderPlayer

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


def create_player(
    name: str,
    seed_rating: float | None = None,
    *,
    player_id: str | None = None,
    settings: RatingSettings | None = None,
) -> LadderPlayer:
    """
    Creates a new ladder player with the initial RD and volatility.

    A new player has no rated match yet, so ``last_match_at`` is None and
    the RD sits at the "never played" ceiling.

    Raises:
        ValidationError: If the name is blank
    """
    if settings is None:
        settings = get_settings()

    clean_name = name.strip()
    if not clean_name:
        raise ValidationError("Player name must not be blank")

    player = LadderPlayer(
        id=player_id or _new_id(),
        name=clean_name,
        rating=settings.initial_rating if seed_rating is None else seed_rating,
        rd=settings.initial_rd,
        volatility=settings.initial_volatility,
    )
    logger.info(
        "Created ladder player",
        extra={"player_id": player.id, "seed_rating": player.rating},
    )
    return player


def find_player(players: Iterable[LadderPlayer], player_id: str) -> LadderPlayer:
    """
    Returns the player with ``player_id``.

    Raises:
        PlayerNotFoundError: If no player has that ID
    """
    for player in players:
        if player.id == player_id:
            return player
    raise PlayerNotFoundError(player_id)


def _as_rating(player: LadderPlayer) -> Glicko2Rating:
    return Glicko2Rating(rating=player.rating, rd=player.rd, volatility=player.volatility)


def _apply_rating(
    player: LadderPlayer,
    new_rating: Glicko2Rating,
    outcome: str,
    played_at: datetime,
    settings: RatingSettings,
) -> LadderPlayer:
    # RD never drops below the ladder floor
    update = {
        "rating": new_rating.rating,
        "rd": max(settings.rd_floor, new_rating.rd),
        "volatility": new_rating.volatility,
        "last_match_at": played_at,
        outcome: getattr(player, outcome) + 1,
    }
    return player.model_copy(update=update)


def record_match(
    winner: LadderPlayer,
    loser: LadderPlayer,
    *,
    draw: bool = False,
    played_at: datetime | None = None,
    settings: RatingSettings | None = None,
    engine: Glicko2Engine | None = None,
) -> MatchRecord:
    """
    Rates a single match between two players.

    This service is responsible for:
    1. Rejecting a player matched against themself
    2. Rating both players against snapshots taken before either update
    3. Flooring the new RD and updating win/loss/draw counts
    4. Stamping both players with the match time
    5. Producing an action log entry for the match

    Raises:
        SelfMatchError: If winner and loser are the same player
    """
    if winner.id == loser.id:
        raise SelfMatchError(winner.id)

    if settings is None:
        settings = get_settings()
    if engine is None:
        engine = Glicko2Engine.from_settings(settings)
    if played_at is None:
        played_at = datetime.now(timezone.utc)

    if draw:
        winner_score, loser_score = 0.5, 0.5
        winner_outcome, loser_outcome = "draws", "draws"
    else:
        winner_score, loser_score = 1.0, 0.0
        winner_outcome, loser_outcome = "wins", "losses"

    # Both sides are rated against the opponent's pre-match snapshot
    winner_rating = engine.update_rating(
        _as_rating(winner), [MatchResult(loser.rating, loser.rd, winner_score)]
    )
    loser_rating = engine.update_rating(
        _as_rating(loser), [MatchResult(winner.rating, winner.rd, loser_score)]
    )

    new_winner = _apply_rating(winner, winner_rating, winner_outcome, played_at, settings)
    new_loser = _apply_rating(loser, loser_rating, loser_outcome, played_at, settings)

    log_entry = ActionLogEntry(
        id=_new_id(),
        winner=winner.name,
        loser=loser.name,
        winner_id=winner.id,
        loser_id=loser.id,
        old_winner_rating=winner.rating,
        old_loser_rating=loser.rating,
        new_winner_rating=new_winner.rating,
        new_loser_rating=new_loser.rating,
        draw=draw,
        timestamp=played_at,
    )
    logger.info(
        "Match recorded",
        extra={
            "winner_id": winner.id,
            "loser_id": loser.id,
            "draw": draw,
            "winner_delta": new_winner.rating - winner.rating,
            "loser_delta": new_loser.rating - loser.rating,
        },
    )
    return MatchRecord(winner=new_winner, loser=new_loser, log_entry=log_entry)


def refresh_rds(
    players: Sequence[LadderPlayer],
    now: datetime | None = None,
    settings: RatingSettings | None = None,
) -> list[LadderPlayer]:
    """Returns new records with each player's RD recomputed from inactivity."""
    if now is None:
        now = datetime.now(timezone.utc)
    return [
        player.model_copy(
            update={"rd": calculate_rd(player.last_match_at, now=now, settings=settings)}
        )
        for player in players
    ]


def build_leaderboard(
    players: Sequence[LadderPlayer],
    max_rd: float | None = None,
    settings: RatingSettings | None = None,
) -> list[LeaderboardEntry]:
    """
    Ranks players whose RD is below ``max_rd`` by rating.

    ``max_rd`` defaults to the decay ceiling, so players who have been
    inactive for the whole decay window drop off the board. Ties are
    broken by name for a stable order.
    """
    if max_rd is None:
        max_rd = (settings or get_settings()).decay_ceiling

    visible = [player for player in players if player.rd < max_rd]
    visible.sort(key=lambda player: (-player.rating, player.name))

    logger.debug(
        "Built leaderboard",
        extra={"player_count": len(players), "visible_count": len(visible)},
    )
    return [
        LeaderboardEntry(rank=position, player=player)
        for position, player in enumerate(visible, start=1)
    ]
