"""Board state of a chess match: the grid plus the counters also found in a FEN string."""

from typing import Optional

from src.games.board_state import BoardStateModel, Grid

STARTING_GRID: Grid = [
    ["r", "n", "b", "q", "k", "b", "n", "r"],
    ["p"] * 8,
    [None] * 8,
    [None] * 8,
    [None] * 8,
    [None] * 8,
    ["P"] * 8,
    ["R", "N", "B", "Q", "K", "B", "N", "R"],
]


class CastlingRights(BoardStateModel):
    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True


class ChessBoardState(BoardStateModel):
    """
    * board: row 0 is the 8th rank, column 0 the a-file
    * en_passant_target: algebraic square or None
    * fullmove_number: incremented on every accepted move; odd means white to move
    """

    board: Grid
    castling_rights: CastlingRights = CastlingRights()
    en_passant_target: Optional[str] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def white_to_move(self) -> bool:
        return self.fullmove_number % 2 == 1
