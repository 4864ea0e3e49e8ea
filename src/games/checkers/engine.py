"""
Checkers engine.

Move notation: "a3-b4" for a simple move, "a3xc5" for a capture (jump over b4).
White starts on ranks 1-3 and moves up the board (toward grid row 0), black starts on ranks 6-8 and moves down.
Forced captures and multi-jump chains are NOT enforced (see CheckersBoardState).
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Color
from src.games.board_state import Grid, copy_grid, is_8x8
from src.games.checkers.state import WHITE_MAN, CheckersBoardState, starting_grid
from src.games.engine import MoveValidation, RenderData
from src.games.match import Match
from src.games.square import Square
from src.games.turns import next_player, player_color, player_with_color

logger = logging.getLogger(__name__)

MOVE_PATTERN = re.compile(r"^([a-h][1-8])([-x])([a-h][1-8])$")

# Row a man of the given color gets crowned on
PROMOTION_ROW: dict[str, int] = {Color.WHITE: 0, Color.BLACK: 7}
# Row delta of a forward step: white moves toward row 0, black toward row 7
FORWARD: dict[str, int] = {Color.WHITE: -1, Color.BLACK: 1}


def piece_color(piece: str) -> Color:
    return Color.WHITE if piece.lower() == WHITE_MAN else Color.BLACK


def is_king(piece: str) -> bool:
    return piece.isupper()


def pieces_of(grid: Grid, color: str) -> list[Square]:
    return [
        Square.from_grid(row_idx, col_idx)
        for row_idx, row in enumerate(grid)
        for col_idx, piece in enumerate(row)
        if piece and piece_color(piece) == color
    ]


@dataclass
class CheckersEngine:
    GAME_TYPE_NAME: ClassVar[str] = "checkers"
    GAME_DESCRIPTION: ClassVar[str] = "Classic two-player checkers/draughts game"
    MIN_PLAYERS: ClassVar[int] = 2
    MAX_PLAYERS: ClassVar[int] = 2
    AVAILABLE_COLORS: ClassVar[tuple[str, ...]] = (Color.WHITE, Color.BLACK)
    BOARD_STATE: ClassVar[type[CheckersBoardState]] = CheckersBoardState

    match: Match

    def initial_board_state(self) -> CheckersBoardState:
        return CheckersBoardState(board=starting_grid())

    def validate_move(
        self, move: Any, player_id: str, board_state: CheckersBoardState
    ) -> MoveValidation:
        """
        Checks, in order:

        1. notation
        2. both squares on the board, destination on a dark square
        3. source holds a piece of the mover's color, destination is empty
        4. diagonal move
        5. simple move: one square, forward only for men.
           capture: two squares, jumping over an opposing piece.
        """
        try:
            match = MOVE_PATTERN.match(move) if isinstance(move, str) else None
            if not match:
                return MoveValidation.reject(
                    "Invalid move notation. Use format: a3-b4 or a3xc5"
                )

            from_alg, separator, to_alg = match.groups()
            is_capture = separator == "x"
            from_square = Square.from_algebraic(from_alg)
            to_square = Square.from_algebraic(to_alg)

            if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
                return MoveValidation.reject("Invalid board position")

            if not to_square.is_dark():
                return MoveValidation.reject("Can only move to dark squares")

            grid = board_state.board
            color = player_color(self.match, player_id)
            piece = grid[from_square.row][from_square.col]
            if not piece:
                return MoveValidation.reject("No piece at source position")

            if piece_color(piece) != color:
                return MoveValidation.reject("Not your piece")

            if grid[to_square.row][to_square.col] is not None:
                return MoveValidation.reject("Destination square is occupied")

            row_diff = to_square.row - from_square.row
            col_diff = to_square.col - from_square.col
            if abs(row_diff) != abs(col_diff):
                return MoveValidation.reject("Must move diagonally")

            if not is_capture:
                if abs(row_diff) != 1:
                    return MoveValidation.reject("Normal moves must be one square")
                if not is_king(piece) and row_diff != FORWARD[color]:
                    return MoveValidation.reject("Regular pieces can only move forward")
                return MoveValidation.ok()

            if abs(row_diff) != 2:
                return MoveValidation.reject(
                    "Capture moves must jump exactly two squares"
                )

            jumped = grid[from_square.row + row_diff // 2][from_square.col + col_diff // 2]
            if not jumped:
                return MoveValidation.reject("No piece to capture")

            if piece_color(jumped) == color:
                return MoveValidation.reject("Cannot capture your own piece")

            return MoveValidation.ok()
        except Exception as error:  # never raises
            logger.debug("Checkers move %r could not be validated: %s", move, error)
            return MoveValidation.reject("Move validation failed")

    def apply_move(
        self,
        move: Any,
        board_state: CheckersBoardState,
        player_id: Optional[str] = None,
    ) -> CheckersBoardState:
        match = MOVE_PATTERN.match(move) if isinstance(move, str) else None
        if not match:
            raise IllegalMoveError(f"Invalid move format: {move!r}")

        from_alg, separator, to_alg = match.groups()
        from_square = Square.from_algebraic(from_alg)
        to_square = Square.from_algebraic(to_alg)

        grid = copy_grid(board_state.board)
        piece = grid[from_square.row][from_square.col]
        if piece is None:
            raise IllegalMoveError(f"No piece at {from_alg} to move.")

        grid[to_square.row][to_square.col] = piece
        grid[from_square.row][from_square.col] = None

        if separator == "x":
            middle_row = (from_square.row + to_square.row) // 2
            middle_col = (from_square.col + to_square.col) // 2
            grid[middle_row][middle_col] = None

        if not is_king(piece) and to_square.row == PROMOTION_ROW[piece_color(piece)]:
            grid[to_square.row][to_square.col] = piece.upper()
            logger.debug("Checkers piece crowned on %s", to_alg)

        return CheckersBoardState(board=grid, must_capture=False, chain_capture=None)

    def is_game_complete(self, board_state: CheckersBoardState) -> bool:
        """One side has no pieces left."""
        return not pieces_of(board_state.board, Color.WHITE) or not pieces_of(
            board_state.board, Color.BLACK
        )

    def get_winner(self, board_state: CheckersBoardState) -> Optional[str]:
        if not self.is_game_complete(board_state):
            return None

        if not pieces_of(board_state.board, Color.WHITE):
            return player_with_color(self.match, Color.BLACK)
        if not pieces_of(board_state.board, Color.BLACK):
            return player_with_color(self.match, Color.WHITE)
        return None

    def render_board(self, board_state: CheckersBoardState) -> RenderData:
        return {
            "board": copy_grid(board_state.board),
            "orientation": Color.WHITE.value,
            "highlights": [],
            "annotations": [],
            "game_specific": {
                "must_capture": board_state.must_capture,
                "chain_capture": board_state.chain_capture,
            },
        }

    def next_player_id(self, player_id: str, board_state: CheckersBoardState) -> str:
        return next_player(self.match, player_id)

    def validate_board_state(self, board_state: CheckersBoardState) -> bool:
        return is_8x8(board_state.board)
