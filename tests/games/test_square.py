"""Unit tests for /src/games/square.py"""

from string import ascii_lowercase

import pytest

from src.games.square import BOARD_DIMENSIONS, Square


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file - 1]}{rank}")
        for file in range(1, 9)
        for rank in range(1, 9)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 1, rank 1, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


@pytest.mark.parametrize(
    "notation, row, col",
    [("a8", 0, 0), ("h8", 0, 7), ("a1", 7, 0), ("h1", 7, 7), ("e4", 4, 4)],
)
def test_grid_indices(notation: str, row: int, col: int) -> None:
    """Row 0 of the grid holds the 8th rank, column 0 the a-file."""
    square = Square.from_algebraic(notation)
    assert (square.row, square.col) == (row, col)
    assert Square.from_grid(row, col) == square


@pytest.mark.parametrize(
    "notation, dark",
    [("a1", True), ("b1", False), ("h8", True), ("a8", False), ("b4", True), ("c5", True)],
)
def test_dark_squares(notation: str, dark: bool) -> None:
    assert Square.from_algebraic(notation).is_dark() is dark


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(1, BOARD_DIMENSIONS[0] + 1):
        for rank in range(1, BOARD_DIMENSIONS[1] + 1):
            assert Square(file, rank).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0] + 1, BOARD_DIMENSIONS[1] + 1).is_within_bounds()
    assert not Square(-1, -1).is_within_bounds()
    assert not Square(1, 0).is_within_bounds()
