"""
The contract every game type must satisfy.

A game type is a class (usually a dataclass bound to one Match) exposing the constants and operations below.
The serving layer only talks to engines through this Protocol; it never inspects a board state itself.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Protocol, Self

from src.games.board_state import BoardStateModel
from src.games.match import Match

# Display-oriented projection of a board state, consumed by rendering collaborators
RenderData = dict[str, Any]

REQUIRED_CONSTANTS: tuple[str, ...] = ("GAME_TYPE_NAME", "MIN_PLAYERS", "MAX_PLAYERS")
CONTRACT_OPERATIONS: tuple[str, ...] = (
    "initial_board_state",
    "validate_move",
    "apply_move",
    "is_game_complete",
    "get_winner",
    "render_board",
    "next_player_id",
    "validate_board_state",
)


@dataclass(frozen=True)
class MoveValidation:
    """Outcome of validating a move. Rule violations are expected outcomes, so they are returned, not raised."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> Self:
        return cls(valid=True)

    @classmethod
    def reject(cls, error: str) -> Self:
        return cls(valid=False, error=error)


class GameEngine(Protocol):
    GAME_TYPE_NAME: ClassVar[str]
    GAME_DESCRIPTION: ClassVar[str]
    MIN_PLAYERS: ClassVar[int]
    MAX_PLAYERS: ClassVar[int]
    AVAILABLE_COLORS: ClassVar[tuple[str, ...]]
    BOARD_STATE: ClassVar[type[BoardStateModel]]

    match: Match

    def initial_board_state(self) -> Any:
        """A fresh, valid starting state."""
        ...

    def validate_move(self, move: Any, player_id: str, board_state: Any) -> MoveValidation:
        """Pure check. Never raises for malformed input."""
        ...

    def apply_move(
        self, move: Any, board_state: Any, player_id: Optional[str] = None
    ) -> Any:
        """
        Return a new state reflecting the move. Only call this after validate_move accepted the move.
        The input state is left untouched. Raises IllegalMoveError if the move cannot be parsed.
        """
        ...

    def is_game_complete(self, board_state: Any) -> bool: ...

    def get_winner(self, board_state: Any) -> Optional[str]:
        """User id of the winner. None while the game is running or in a draw."""
        ...

    def render_board(self, board_state: Any) -> RenderData: ...

    def next_player_id(self, player_id: str, board_state: Any) -> str:
        """Who acts after `player_id` made a move resulting in `board_state`."""
        ...

    def validate_board_state(self, board_state: Any) -> bool:
        """
        Structural sanity check, for collaborators handing in states they built themselves.
        MatchService does not call it: persisted states were produced by the engine and chess
        allows captures (a king included) that this check would reject.
        """
        ...


def missing_constants(engine_cls: type) -> list[str]:
    """Required class constants that are absent or empty"""
    return [name for name in REQUIRED_CONSTANTS if not getattr(engine_cls, name, None)]


def missing_operations(engine_cls: type) -> list[str]:
    """Contract operations the class does not implement"""
    return [
        name for name in CONTRACT_OPERATIONS if not callable(getattr(engine_cls, name, None))
    ]
