"""
Turn order and seating rules shared by every game type.

These are plain functions over a Match, so no engine can override them.
"""

from typing import Any, Optional, Sequence

from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.shared_types import Status
from src.games.match import Match


def turn_order(match: Match) -> list[str]:
    """User ids sorted by their join-time rank."""
    return [
        player.user_id
        for player in sorted(match.players, key=lambda player: player.player_order)
    ]


def next_player(match: Match, current_player_id: str) -> str:
    """Circular successor in turn order. An unknown id starts the rotation from the first seat."""
    order = turn_order(match)
    if not order:
        raise GameStateError("Cannot determine the next player: no players seated.")
    current_index = order.index(current_player_id) if current_player_id in order else -1
    return order[(current_index + 1) % len(order)]


def can_player_join(match: Match) -> bool:
    return match.status == Status.WAITING and len(match.players) < match.max_players


def can_start_game(match: Match) -> bool:
    return match.min_players <= len(match.players) <= match.max_players


def is_player_in_game(match: Match, user_id: str) -> bool:
    return any(player.user_id == user_id for player in match.players)


def player_order(match: Match, user_id: str) -> Optional[int]:
    return next(
        (player.player_order for player in match.players if player.user_id == user_id),
        None,
    )


def player_color(match: Match, user_id: str) -> Optional[str]:
    return next(
        (player.color for player in match.players if player.user_id == user_id),
        None,
    )


def player_with_color(match: Match, color: str) -> Optional[str]:
    """Reverse lookup: the user id seated with the given color."""
    return next(
        (player.user_id for player in match.players if player.color == color),
        None,
    )


def assign_player_color(available_colors: Sequence[str], order: int) -> str:
    """The n-th seat gets the n-th available color. Seats beyond the list get a generic name."""
    if 1 <= order <= len(available_colors):
        return available_colors[order - 1]
    return f"player{order}"


def validate_player_turn(match: Match, player_id: str) -> None:
    """Guard used before submitting a move. Raises if the match is not active or it is someone else's turn."""
    if match.status != Status.ACTIVE:
        raise GameStateError(f"Game is not active. status: {match.status}")
    if match.current_player_id != player_id:
        raise NotYourTurnError(
            f"Not your turn. Waiting for player {match.current_player_id} to make a move first."
        )


def game_stats(match: Match, game_type_name: str) -> dict[str, Any]:
    return {
        "game_type": game_type_name,
        "player_count": len(match.players),
        "move_count": match.move_count,
        "status": str(match.status),
        "min_players": match.min_players,
        "max_players": match.max_players,
    }
