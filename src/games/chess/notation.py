"""
Parsing of the two accepted move notations

* coordinate: "e2-e4" (whatever stands on e2 goes to e4)
* algebraic: "Nf3", "Bxd7", "e4", "exd5", "Nbd2", "e8=Q", "Qh5+" (castling, "O-O", is not supported)
"""

import re
from dataclasses import dataclass
from typing import Optional

from src.games.chess.pieces import NOTATION_TO_PIECE, PieceType
from src.games.square import Square

COORDINATE_PATTERN = re.compile(r"^([a-h][1-8])-([a-h][1-8])$")
ALGEBRAIC_PATTERN = re.compile(
    r"^([NBRQK]?)([a-h]?[1-8]?)(x?)([a-h][1-8])(=[NBRQ])?(\+|#)?$"
)


@dataclass(frozen=True)
class CoordinateMove:
    from_square: Square
    to_square: Square


@dataclass(frozen=True)
class AlgebraicMove:
    piece: PieceType
    to_square: Square
    # disambiguation: "b" in Nbd2, "e" in exd5, "1" in R1a3
    from_file: Optional[int] = None
    from_rank: Optional[int] = None
    is_capture: bool = False


ChessMove = CoordinateMove | AlgebraicMove


def parse_move(notation: str) -> Optional[ChessMove]:
    """None if the text matches neither notation"""
    text = notation.strip()

    coordinate = COORDINATE_PATTERN.match(text)
    if coordinate:
        return CoordinateMove(
            from_square=Square.from_algebraic(coordinate.group(1)),
            to_square=Square.from_algebraic(coordinate.group(2)),
        )

    algebraic = ALGEBRAIC_PATTERN.match(text)
    if algebraic:
        piece_letter, hint, capture, to_square, _promotion, _check = algebraic.groups()
        from_file, from_rank = _parse_hint(hint)
        return AlgebraicMove(
            piece=NOTATION_TO_PIECE[piece_letter],
            to_square=Square.from_algebraic(to_square),
            from_file=from_file,
            from_rank=from_rank,
            is_capture=capture == "x",
        )
    return None


def _parse_hint(hint: str) -> tuple[Optional[int], Optional[int]]:
    from_file: Optional[int] = None
    from_rank: Optional[int] = None
    for character in hint:
        if character.isdigit():
            from_rank = int(character)
        else:
            from_file = ord(character) - ord("a") + 1
    return from_file, from_rank
