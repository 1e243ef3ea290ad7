# tests/test_services.py

"""Unit tests for the ladder and rating service layers."""

from datetime import datetime, timedelta

import pytest
from glickoladder.config import RatingSettings
from glickoladder.exceptions import (
    InvalidRatingDeviationError,
    InvalidScoreError,
    PlayerNotFoundError,
    SelfMatchError,
    ValidationError,
)
from glickoladder.rating.glicko2_engine import Glicko2Engine, Glicko2Rating, MatchResult
from glickoladder.schemas.player import LadderPlayer
from glickoladder.services import ladder_service, rating_service


def _player(player_id: str, name: str, rating: float = 1500.0, rd: float = 200.0, **kw):
    return LadderPlayer(
        id=player_id, name=name, rating=rating, rd=rd, volatility=0.06, **kw
    )


# =============================================================================
# Player creation
# =============================================================================


def test_create_player_defaults(settings: RatingSettings):
    player = ladder_service.create_player("  Alice ", settings=settings)

    assert player.name == "Alice"
    assert player.rating == 1500.0
    assert player.rd == 350.0
    assert player.volatility == 0.06
    assert (player.wins, player.losses, player.draws) == (0, 0, 0)
    assert player.last_match_at is None
    assert player.id


def test_create_player_with_seed_rating_and_id(settings: RatingSettings):
    player = ladder_service.create_player(
        "Bob", 1800, player_id="p-bob", settings=settings
    )

    assert player.id == "p-bob"
    assert player.rating == 1800


def test_create_player_blank_name_raises(settings: RatingSettings):
    with pytest.raises(ValidationError):
        ladder_service.create_player("   ", settings=settings)


def test_find_player():
    alice = _player("a", "Alice")
    bob = _player("b", "Bob")

    assert ladder_service.find_player([alice, bob], "b") is bob
    with pytest.raises(PlayerNotFoundError) as exc_info:
        ladder_service.find_player([alice, bob], "zed")
    assert exc_info.value.details["player_id"] == "zed"


# =============================================================================
# Recording matches
# =============================================================================


def test_record_match_updates_both_players(now: datetime, settings: RatingSettings):
    alice = _player("a", "Alice")
    bob = _player("b", "Bob")

    record = ladder_service.record_match(alice, bob, played_at=now, settings=settings)

    assert record.winner.rating > 1500
    assert record.loser.rating < 1500
    assert record.winner.rating - 1500 == 1500 - record.loser.rating
    assert record.winner.wins == 1
    assert record.winner.losses == 0
    assert record.loser.losses == 1
    assert record.winner.last_match_at == now
    assert record.loser.last_match_at == now
    assert record.winner.rd < 200.0


def test_record_match_between_distant_ratings(now: datetime, settings: RatingSettings):
    """A result both ratings already predict leaves the favourite's rating alone."""
    champion = _player("c", "Champion", rating=8000.0, rd=50.0)
    newcomer = _player("n", "Newcomer", rating=1500.0, rd=50.0)

    record = ladder_service.record_match(
        champion, newcomer, played_at=now, settings=settings
    )

    assert record.winner.rating == 8000.0
    assert record.winner.volatility == 0.06
    assert record.winner.wins == 1
    assert record.loser.rating == 1500
    assert record.loser.losses == 1


def test_record_match_leaves_inputs_untouched(now: datetime, settings: RatingSettings):
    alice = _player("a", "Alice")
    bob = _player("b", "Bob")

    ladder_service.record_match(alice, bob, played_at=now, settings=settings)

    assert alice.rating == 1500.0
    assert alice.wins == 0
    assert bob.last_match_at is None


def test_record_match_uses_pre_match_snapshots(now: datetime, settings: RatingSettings):
    """The loser is rated against the winner's rating before the match."""
    alice = _player("a", "Alice", rating=1650.0, rd=120.0)
    bob = _player("b", "Bob", rating=1480.0, rd=90.0)
    engine = Glicko2Engine.from_settings(settings)

    record = ladder_service.record_match(alice, bob, played_at=now, settings=settings)

    expected = engine.update_rating(
        Glicko2Rating(1480.0, 90.0, 0.06), [MatchResult(1650.0, 120.0, 0.0)]
    )
    assert record.loser.rating == expected.rating
    assert record.loser.rd == pytest.approx(expected.rd)


def test_record_match_log_entry(now: datetime, settings: RatingSettings):
    alice = _player("a", "Alice")
    bob = _player("b", "Bob")

    record = ladder_service.record_match(alice, bob, played_at=now, settings=settings)
    entry = record.log_entry

    assert entry.type == "match_result"
    assert (entry.winner, entry.loser) == ("Alice", "Bob")
    assert (entry.winner_id, entry.loser_id) == ("a", "b")
    assert entry.old_winner_rating == 1500.0
    assert entry.new_winner_rating == record.winner.rating
    assert entry.new_loser_rating == record.loser.rating
    assert entry.timestamp == now
    assert entry.draw is False


def test_record_draw(now: datetime, settings: RatingSettings):
    alice = _player("a", "Alice", rating=1600.0)
    bob = _player("b", "Bob", rating=1400.0)

    record = ladder_service.record_match(
        alice, bob, draw=True, played_at=now, settings=settings
    )

    # The favourite loses ground on a draw, the underdog gains
    assert record.winner.rating < 1600
    assert record.loser.rating > 1400
    assert record.winner.draws == 1
    assert record.loser.draws == 1
    assert record.winner.wins == 0
    assert record.log_entry.draw is True


def test_record_match_floors_rd(now: datetime, settings: RatingSettings):
    alice = _player("a", "Alice", rd=30.0)
    bob = _player("b", "Bob", rd=30.0)

    record = ladder_service.record_match(alice, bob, played_at=now, settings=settings)

    assert record.winner.rd == settings.rd_floor
    assert record.loser.rd == settings.rd_floor


def test_record_match_against_self_raises(settings: RatingSettings):
    alice = _player("a", "Alice")

    with pytest.raises(SelfMatchError):
        ladder_service.record_match(alice, alice, settings=settings)


# =============================================================================
# RD refresh and leaderboard
# =============================================================================


def test_refresh_rds(now: datetime, settings: RatingSettings):
    fresh = _player("a", "Alice", last_match_at=now - timedelta(days=2))
    stale = _player("b", "Bob", last_match_at=now - timedelta(days=40))
    never = _player("c", "Cara")

    refreshed = ladder_service.refresh_rds(
        [fresh, stale, never], now=now, settings=settings
    )

    assert [p.rd for p in refreshed] == pytest.approx([60.0, 100.0, 350.0])
    assert [p.id for p in refreshed] == ["a", "b", "c"]
    assert fresh.rd == 200.0


def test_build_leaderboard_filters_and_ranks(settings: RatingSettings):
    players = [
        _player("a", "Alice", rating=1550, rd=60.0),
        _player("b", "Bob", rating=1700, rd=99.9),
        _player("c", "Cara", rating=1900, rd=100.0),
        _player("d", "Dan", rating=1550, rd=55.0),
        _player("e", "Eve", rating=1400, rd=350.0),
    ]

    board = ladder_service.build_leaderboard(players, settings=settings)

    assert [entry.player.id for entry in board] == ["b", "a", "d"]
    assert [entry.rank for entry in board] == [1, 2, 3]


def test_build_leaderboard_custom_threshold(settings: RatingSettings):
    players = [_player("a", "Alice", rd=200.0), _player("b", "Bob", rd=350.0)]

    board = ladder_service.build_leaderboard(players, max_rd=300.0, settings=settings)

    assert [entry.player.id for entry in board] == ["a"]


def test_build_leaderboard_empty(settings: RatingSettings):
    assert ladder_service.build_leaderboard([], settings=settings) == []


# =============================================================================
# Rating service validation
# =============================================================================


def test_rate_player_valid():
    engine = Glicko2Engine()
    player = Glicko2Rating(1500.0, 200.0, 0.06)

    new_rating = rating_service.rate_player(
        player, [MatchResult(1500.0, 200.0, 1.0)], engine
    )

    assert new_rating.rating > 1500


def test_rate_player_empty_results_is_identity():
    player = Glicko2Rating(1500.0, 200.0, 0.06)

    assert rating_service.rate_player(player, [], Glicko2Engine()) == player


@pytest.mark.parametrize("score", [0.7, -1.0, 2.0])
def test_rate_player_rejects_bad_score(score: float):
    with pytest.raises(InvalidScoreError) as exc_info:
        rating_service.rate_player(
            Glicko2Rating(), [MatchResult(1500.0, 200.0, score)], Glicko2Engine()
        )

    assert exc_info.value.details["score"] == score


@pytest.mark.parametrize("opponent_rd", [0.0, -20.0, float("nan")])
def test_rate_player_rejects_bad_opponent_rd(opponent_rd: float):
    with pytest.raises(InvalidRatingDeviationError):
        rating_service.rate_player(
            Glicko2Rating(), [MatchResult(1500.0, opponent_rd, 1.0)], Glicko2Engine()
        )


def test_rate_player_rejects_bad_player_rd():
    with pytest.raises(InvalidRatingDeviationError):
        rating_service.rate_player(
            Glicko2Rating(rd=0.0), [MatchResult(1500.0, 200.0, 1.0)], Glicko2Engine()
        )
