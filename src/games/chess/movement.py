"""
Geometry of piece movement, used to find which piece an algebraic move refers to.

Key idea: strategy pattern, one reachability rule per piece type.

NOTE: these rules only look at the shape of the move. They do not check whether the path is blocked,
whether the target holds a friendly piece, or whether the move leaves the own king in check.
"""

from typing import Callable, Optional

from src.games.board_state import Grid
from src.games.chess.notation import AlgebraicMove
from src.games.chess.pieces import PieceType, piece_symbol
from src.games.square import Square


def _deltas(from_square: Square, to_square: Square) -> tuple[int, int]:
    return abs(to_square.file - from_square.file), abs(to_square.rank - from_square.rank)


def knight_reaches(from_square: Square, to_square: Square) -> bool:
    """L-shape: |delta_rank| + |delta_file| = 3, moving along both"""
    d_file, d_rank = _deltas(from_square, to_square)
    return {d_file, d_rank} == {1, 2}


def bishop_reaches(from_square: Square, to_square: Square) -> bool:
    """Diagonally: |delta_rank| = |delta_file|"""
    d_file, d_rank = _deltas(from_square, to_square)
    return d_file == d_rank and d_file > 0


def rook_reaches(from_square: Square, to_square: Square) -> bool:
    """Either horizontally or vertically"""
    d_file, d_rank = _deltas(from_square, to_square)
    return (d_file == 0) != (d_rank == 0)


def queen_reaches(from_square: Square, to_square: Square) -> bool:
    return bishop_reaches(from_square, to_square) or rook_reaches(from_square, to_square)


def king_reaches(from_square: Square, to_square: Square) -> bool:
    d_file, d_rank = _deltas(from_square, to_square)
    return max(d_file, d_rank) == 1


def pawn_reaches(from_square: Square, to_square: Square) -> bool:
    """Pawn candidates are selected by `find_pawn` instead"""
    return True


# -- STRATEGY PATTERN: MOVEMENT RULES ---
ReachesFn = Callable[[Square, Square], bool]
MOVEMENT_RULES: dict[PieceType, ReachesFn] = {
    PieceType.PAWN: pawn_reaches,
    PieceType.KNIGHT: knight_reaches,
    PieceType.BISHOP: bishop_reaches,
    PieceType.ROOK: rook_reaches,
    PieceType.QUEEN: queen_reaches,
    PieceType.KING: king_reaches,
}


def find_piece_for_move(
    grid: Grid, move: AlgebraicMove, white_to_move: bool
) -> Optional[Square]:
    """Square of the piece that makes the algebraic move, or None if no piece of that type fits."""
    if move.piece == PieceType.PAWN:
        return find_pawn(grid, move, white_to_move)

    symbol = piece_symbol(move.piece, white_to_move)
    reaches = MOVEMENT_RULES[move.piece]
    for row_idx, row in enumerate(grid):
        for col_idx, occupant in enumerate(row):
            if occupant != symbol:
                continue
            square = Square.from_grid(row_idx, col_idx)
            if _matches_hint(square, move) and reaches(square, move.to_square):
                return square
    return None


def find_pawn(grid: Grid, move: AlgebraicMove, white_to_move: bool) -> Optional[Square]:
    """
    Pawns are looked up backwards from the target square:

    1. one square back on the same file
    2. two squares back, if the target is on the double-step rank (4th for white, 5th for black)

    A capture with a file hint ("exd5") looks one square back on the hinted file instead.
    """
    pawn = piece_symbol(PieceType.PAWN, white_to_move)
    # white moves UP the board, black moves DOWN
    direction = 1 if white_to_move else -1
    target = move.to_square

    if move.from_file is not None and move.from_file != target.file:
        candidates = [Square(move.from_file, target.rank - direction)]
    else:
        candidates = [Square(target.file, target.rank - direction)]
        double_step_rank = 4 if white_to_move else 5
        if target.rank == double_step_rank:
            candidates.append(Square(target.file, target.rank - 2 * direction))

    for square in candidates:
        if square.is_within_bounds() and grid[square.row][square.col] == pawn:
            return square
    return None


def _matches_hint(square: Square, move: AlgebraicMove) -> bool:
    if move.from_file is not None and square.file != move.from_file:
        return False
    if move.from_rank is not None and square.rank != move.from_rank:
        return False
    return True
