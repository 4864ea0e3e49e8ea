"""Unit tests for src/games/turns.py and src/games/match.py"""

import pytest

from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.models import MatchModel
from src.core.shared_types import Color, Status
from src.games.match import Match, Player
from src.games.turns import (
    assign_player_color,
    can_player_join,
    can_start_game,
    game_stats,
    is_player_in_game,
    next_player,
    player_color,
    player_order,
    player_with_color,
    turn_order,
    validate_player_turn,
)


def test_turn_order_follows_player_order() -> None:
    """Seats are sorted by join rank, not by list position."""
    match = Match(
        game_type="checkers",
        players=[Player("bob", "Bob", "black", 2), Player("alice", "Alice", "white", 1)],
    )
    assert turn_order(match) == ["alice", "bob"]


def test_next_player_wraps_around(hearts_match: Match) -> None:
    assert next_player(hearts_match, "p1") == "p2"
    assert next_player(hearts_match, "p3") == "p4"
    assert next_player(hearts_match, "p4") == "p1"


def test_next_player_unknown_id_starts_at_first_seat(two_player_match: Match) -> None:
    assert next_player(two_player_match, "mallory") == "alice"


def test_next_player_without_players() -> None:
    with pytest.raises(GameStateError):
        next_player(Match(game_type="chess"), "alice")


def test_can_player_join() -> None:
    match = Match(game_type="chess", players=[Player("alice", "Alice", "white", 1)])
    assert can_player_join(match)

    match.players.append(Player("bob", "Bob", "black", 2))
    assert not can_player_join(match), "match is full"

    match.players.pop()
    match.status = Status.ACTIVE
    assert not can_player_join(match), "only waiting matches accept players"


def test_can_start_game(two_player_match: Match) -> None:
    assert can_start_game(two_player_match)
    two_player_match.players.pop()
    assert not can_start_game(two_player_match)


def test_player_lookups(two_player_match: Match) -> None:
    assert is_player_in_game(two_player_match, "bob")
    assert not is_player_in_game(two_player_match, "mallory")
    assert player_order(two_player_match, "bob") == 2
    assert player_order(two_player_match, "mallory") is None
    assert player_color(two_player_match, "alice") == Color.WHITE
    assert player_with_color(two_player_match, Color.BLACK) == "bob"
    assert player_with_color(two_player_match, Color.RED) is None


@pytest.mark.parametrize(
    "order, expected",
    [(1, "white"), (2, "black"), (3, "player3")],
)
def test_assign_player_color(order: int, expected: str) -> None:
    assert assign_player_color((Color.WHITE, Color.BLACK), order) == expected


def test_validate_player_turn(two_player_match: Match) -> None:
    validate_player_turn(two_player_match, "alice")

    with pytest.raises(NotYourTurnError):
        validate_player_turn(two_player_match, "bob")

    two_player_match.status = Status.COMPLETED
    with pytest.raises(GameStateError, match="not active"):
        validate_player_turn(two_player_match, "alice")


def test_game_stats(two_player_match: Match) -> None:
    two_player_match.move_count = 7
    stats = game_stats(two_player_match, "checkers")
    assert stats == {
        "game_type": "checkers",
        "player_count": 2,
        "move_count": 7,
        "status": "active",
        "min_players": 2,
        "max_players": 2,
    }


def test_match_model_conversion(two_player_match: Match) -> None:
    """A Match survives the trip through the boundary model."""
    two_player_match.board_state = "{}"
    two_player_match.settings = {"target_score": 50}

    model = two_player_match.to_model()
    assert model.status == "active"
    assert model.players[0] == {
        "user_id": "alice",
        "username": "Alice",
        "color": "white",
        "player_order": 1,
    }

    restored = Match.from_model(model)
    assert restored.players == two_player_match.players
    assert restored.status == Status.ACTIVE
    assert restored.settings == {"target_score": 50}


def test_match_from_model_rejects_unknown_status() -> None:
    model = MatchModel(game_type="chess", status="paused", board_state="{}")
    with pytest.raises(GameStateError):
        Match.from_model(model)


def test_match_without_board_state_cannot_be_exported() -> None:
    with pytest.raises(GameStateError, match="without a board state"):
        Match(game_type="chess").to_model()
