"""Board state of a checkers match."""

from typing import Optional

from src.games.board_state import BoardStateModel, Grid

WHITE_MAN = "w"
BLACK_MAN = "b"


def starting_grid() -> Grid:
    """Men on the dark squares of the three rows closest to each player. Black at the top, white at the bottom."""
    grid: Grid = [[None] * 8 for _ in range(8)]
    for row in range(8):
        for col in range(8):
            if (row + col) % 2 == 0:
                continue
            if row < 3:
                grid[row][col] = BLACK_MAN
            elif row > 4:
                grid[row][col] = WHITE_MAN
    return grid


class CheckersBoardState(BoardStateModel):
    """
    * board: 'w' / 'b' are men, 'W' / 'B' are kings. Row 0 is the 8th rank.
    * must_capture / chain_capture: part of the persisted shape, but forced captures and
      multi-jump chains are NOT enforced. Every applied move resets them.
    """

    board: Grid
    must_capture: bool = False
    chain_capture: Optional[str] = None
