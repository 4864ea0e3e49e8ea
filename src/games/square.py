"""
A square on an 8x8 board

(placed in its own module as both the chess and checkers engines need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Both board games are played on 8x8. Grid row 0 holds rank 8, grid row 7 holds rank 1.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        file = ord(sq[0]) - ord("a") + 1
        rank = int(sq[1:])
        return cls(file, rank)

    @classmethod
    def from_grid(cls, row: int, col: int) -> Square:
        return cls(file=col + 1, rank=BOARD_DIMENSIONS[1] - row)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    @property
    def row(self) -> int:
        """Index into the grid of a board state (top row first)"""
        return BOARD_DIMENSIONS[1] - self.rank

    @property
    def col(self) -> int:
        return self.file - 1

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """a1 is dark, so dark squares are the ones where row + col is odd"""
        return (self.row + self.col) % 2 == 1
