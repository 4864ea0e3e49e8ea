"""
Chess engine.

Validation is format-level only: the notation must parse, the destination must be on the board,
and the mover must be seated in the match. NOT enforced (known gap, not a design goal):
source ownership, blocked paths, reachability by the named piece, check, checkmate, castling,
en passant and promotion. Consequently the game never reports completion.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Color
from src.games.board_state import copy_grid, is_8x8
from src.games.chess.movement import find_piece_for_move
from src.games.chess.notation import AlgebraicMove, CoordinateMove, parse_move
from src.games.chess.pieces import count_pieces, find_king
from src.games.chess.state import STARTING_GRID, ChessBoardState
from src.games.engine import MoveValidation, RenderData
from src.games.match import Match
from src.games.square import Square
from src.games.turns import is_player_in_game, next_player

logger = logging.getLogger(__name__)


@dataclass
class ChessEngine:
    GAME_TYPE_NAME: ClassVar[str] = "Chess"
    GAME_DESCRIPTION: ClassVar[str] = "Classic two-player chess game"
    MIN_PLAYERS: ClassVar[int] = 2
    MAX_PLAYERS: ClassVar[int] = 2
    AVAILABLE_COLORS: ClassVar[tuple[str, ...]] = (Color.WHITE, Color.BLACK)
    BOARD_STATE: ClassVar[type[ChessBoardState]] = ChessBoardState

    match: Match

    def initial_board_state(self) -> ChessBoardState:
        return ChessBoardState(board=copy_grid(STARTING_GRID))

    def validate_move(
        self, move: Any, player_id: str, board_state: ChessBoardState
    ) -> MoveValidation:
        try:
            if not move or not isinstance(move, str):
                return MoveValidation.reject("Invalid move format")

            parsed = parse_move(move)
            if parsed is None:
                return MoveValidation.reject(
                    "Invalid move notation. Use format like e2-e4 or Nf3"
                )

            if not parsed.to_square.is_within_bounds():
                return MoveValidation.reject("Invalid destination square")

            if not is_player_in_game(self.match, player_id):
                return MoveValidation.reject("Player not in game")

            return MoveValidation.ok()
        except Exception as error:  # never raises
            logger.debug("Chess move %r could not be validated: %s", move, error)
            return MoveValidation.reject(f"Move validation failed: {error}")

    def apply_move(
        self,
        move: Any,
        board_state: ChessBoardState,
        player_id: Optional[str] = None,
    ) -> ChessBoardState:
        parsed = parse_move(move) if isinstance(move, str) else None
        if parsed is None:
            raise IllegalMoveError(f"Cannot apply move with invalid notation: {move!r}")

        grid = copy_grid(board_state.board)
        if isinstance(parsed, CoordinateMove):
            from_square, to_square = parsed.from_square, parsed.to_square
        else:
            from_square = self._locate_moving_piece(parsed, board_state)
            to_square = parsed.to_square

        grid[to_square.row][to_square.col] = grid[from_square.row][from_square.col]
        grid[from_square.row][from_square.col] = None

        logger.debug(
            "Chess move %s applied: %s -> %s",
            move,
            from_square.to_algebraic(),
            to_square.to_algebraic(),
        )
        return board_state.model_copy(
            update={
                "board": grid,
                "castling_rights": board_state.castling_rights.model_copy(),
                "en_passant_target": None,
                "fullmove_number": board_state.fullmove_number + 1,
            }
        )

    def is_game_complete(self, board_state: ChessBoardState) -> bool:
        # no checkmate / stalemate detection
        return False

    def get_winner(self, board_state: ChessBoardState) -> Optional[str]:
        if not self.is_game_complete(board_state):
            return None
        return None

    def render_board(self, board_state: ChessBoardState) -> RenderData:
        return {
            "board": copy_grid(board_state.board),
            "orientation": Color.WHITE.value,
            "highlights": [],
            "annotations": [],
            "game_specific": {"piece_count": count_pieces(board_state.board)},
        }

    def next_player_id(self, player_id: str, board_state: ChessBoardState) -> str:
        return next_player(self.match, player_id)

    def validate_board_state(self, board_state: ChessBoardState) -> bool:
        """8x8 grid with both kings present"""
        if not is_8x8(board_state.board):
            return False
        return (
            find_king(board_state.board, white=True) is not None
            and find_king(board_state.board, white=False) is not None
        )

    # -- PRIVATE HELPERS ---
    def _locate_moving_piece(
        self, move: AlgebraicMove, board_state: ChessBoardState
    ) -> Square:
        white_to_move = board_state.white_to_move()
        from_square = find_piece_for_move(board_state.board, move, white_to_move)
        if from_square is None:
            raise IllegalMoveError(
                f"No valid {move.piece.name.lower()} can move to {move.to_square.to_algebraic()}"
            )
        return from_square
