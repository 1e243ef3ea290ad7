# src/glickoladder/rating/decay.py

"""
Inactivity decay for rating deviation.

A player's RD grows linearly with the days since their last rated match,
from the floor (just played) to the decay ceiling, and stays there:

    rd = min(ceiling, floor + (ceiling - floor) * elapsed_days / window_days)

A player who has never played gets the initial RD instead.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

from glickoladder.config import RatingSettings, get_settings
from glickoladder.rating.glicko2_engine import Glicko2Rating

SECONDS_PER_DAY = 60 * 60 * 24


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are treated as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def elapsed_days(last_match_at: datetime, now: datetime | None = None) -> float:
    """Days between ``last_match_at`` and ``now``, never negative."""
    if now is None:
        now = datetime.now(timezone.utc)
    seconds = (_as_utc(now) - _as_utc(last_match_at)).total_seconds()
    # Clock skew can put the last match in the future
    return max(0.0, seconds / SECONDS_PER_DAY)


def calculate_rd(
    last_match_at: datetime | None,
    now: datetime | None = None,
    settings: RatingSettings | None = None,
) -> float:
    """
    Calculate the RD a player should carry given their last match time.

    Args:
        last_match_at: When the player last played, or None if never
        now: Reference time (defaults to the current UTC time)
        settings: Decay policy (defaults to the configured settings)

    Returns:
        The initial RD for players who never played, otherwise an RD
        between the floor and the decay ceiling.

    Examples:
        calculate_rd(None)                       # -> 350.0
        calculate_rd(now - timedelta(days=0))    # -> 50.0
        calculate_rd(now - timedelta(days=5))    # -> 75.0
        calculate_rd(now - timedelta(days=30))   # -> 100.0
    """
    if settings is None:
        settings = get_settings()
    if last_match_at is None:
        return settings.initial_rd

    days = elapsed_days(last_match_at, now)
    span = settings.decay_ceiling - settings.rd_floor
    rd = settings.rd_floor + span * days / settings.decay_window_days
    return min(settings.decay_ceiling, rd)


def decay_rd(
    player: Glicko2Rating,
    last_match_at: datetime | None,
    now: datetime | None = None,
    settings: RatingSettings | None = None,
) -> Glicko2Rating:
    """Return a copy of ``player`` with RD recomputed from inactivity."""
    return dataclasses.replace(
        player, rd=calculate_rd(last_match_at, now=now, settings=settings)
    )
