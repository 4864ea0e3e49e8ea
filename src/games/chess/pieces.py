"""Defines the chess piece symbols used on the grid (upper case: white, lower case: black)"""

from enum import Enum
from typing import Optional

from src.games.board_state import Grid


class PieceType(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


# Piece letters as written in algebraic notation. A pawn move has no letter.
NOTATION_TO_PIECE: dict[str, PieceType] = {
    "": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}


def is_white(symbol: str) -> bool:
    return symbol.isupper()


def piece_symbol(piece: PieceType, white: bool) -> str:
    return piece.value.upper() if white else piece.value


def find_king(grid: Grid, white: bool) -> Optional[tuple[int, int]]:
    """(row, col) of the king of the given side, if it is on the board"""
    king = piece_symbol(PieceType.KING, white)
    for row_idx, row in enumerate(grid):
        for col_idx, symbol in enumerate(row):
            if symbol == king:
                return row_idx, col_idx
    return None


def count_pieces(grid: Grid) -> dict[str, int]:
    symbols = [symbol for row in grid for symbol in row if symbol]
    white = sum(1 for symbol in symbols if is_white(symbol))
    black = len(symbols) - white
    return {"white": white, "black": black, "total": white + black}
