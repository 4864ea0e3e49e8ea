"""Unit tests for src/games/checkers/"""

from typing import Optional

import pytest

from src.core.exceptions import IllegalMoveError
from src.games.board_state import Grid
from src.games.checkers.engine import CheckersEngine, is_king, piece_color, pieces_of
from src.games.checkers.state import BLACK_MAN, WHITE_MAN, CheckersBoardState, starting_grid
from src.games.match import Match
from src.games.square import Square


@pytest.fixture
def engine(two_player_match: Match) -> CheckersEngine:
    return CheckersEngine(two_player_match)


@pytest.fixture
def start(engine: CheckersEngine) -> CheckersBoardState:
    return engine.initial_board_state()


def board_with(pieces: dict[str, str]) -> CheckersBoardState:
    """Board holding only the given pieces, ex. {"a3": "w", "b4": "b"}"""
    grid: Grid = [[None] * 8 for _ in range(8)]
    for notation, piece in pieces.items():
        square = Square.from_algebraic(notation)
        grid[square.row][square.col] = piece
    return CheckersBoardState(board=grid)


def at(state: CheckersBoardState, notation: str) -> Optional[str]:
    square = Square.from_algebraic(notation)
    return state.board[square.row][square.col]


def test_starting_grid() -> None:
    """12 men per side, all on dark squares. White on ranks 1-3, black on ranks 6-8."""
    grid = starting_grid()
    white = pieces_of(grid, "white")
    black = pieces_of(grid, "black")
    assert len(white) == 12
    assert len(black) == 12
    assert all(square.is_dark() for square in white + black)
    assert {square.rank for square in white} == {1, 2, 3}
    assert {square.rank for square in black} == {6, 7, 8}


def test_piece_helpers() -> None:
    assert piece_color(WHITE_MAN) == "white"
    assert piece_color("B") == "black"
    assert is_king("W") and is_king("B")
    assert not is_king(WHITE_MAN) and not is_king(BLACK_MAN)


# --- VALIDATION ---
@pytest.mark.parametrize("player, move", [("alice", "a3-b4"), ("alice", "c3-d4"), ("bob", "b6-a5")])
def test_valid_opening_moves(
    engine: CheckersEngine, start: CheckersBoardState, player: str, move: str
) -> None:
    result = engine.validate_move(move, player, start)
    assert result.valid, result.error


@pytest.mark.parametrize(
    "player, move, error",
    [
        ("alice", "a3b4", "Invalid move notation. Use format: a3-b4 or a3xc5"),
        ("alice", 17, "Invalid move notation. Use format: a3-b4 or a3xc5"),
        ("alice", "a3-a4", "Can only move to dark squares"),
        ("alice", "b4-a5", "No piece at source position"),
        ("alice", "b6-a5", "Not your piece"),
        ("alice", "b2-c3", "Destination square is occupied"),
        ("alice", "a3-c5", "Normal moves must be one square"),
        ("alice", "a3xc5", "No piece to capture"),
        ("bob", "a3-b4", "Not your piece"),
        ("mallory", "a3-b4", "Not your piece"),
    ],
)
def test_rejected_moves(
    engine: CheckersEngine,
    start: CheckersBoardState,
    player: str,
    move: object,
    error: str,
) -> None:
    result = engine.validate_move(move, player, start)
    assert not result.valid
    assert result.error == error


def test_must_move_diagonally(engine: CheckersEngine) -> None:
    state = board_with({"c3": "w"})
    result = engine.validate_move("c3-c5", "alice", state)
    assert result.error == "Must move diagonally"


def test_men_only_move_forward(engine: CheckersEngine) -> None:
    state = board_with({"d4": "w", "e5": "b"})
    assert engine.validate_move("d4-c3", "alice", state).error == "Regular pieces can only move forward"
    assert engine.validate_move("e5-f6", "bob", state).error == "Regular pieces can only move forward"


def test_kings_move_backward(engine: CheckersEngine) -> None:
    state = board_with({"d4": "W"})
    assert engine.validate_move("d4-c3", "alice", state).valid


def test_capture_rules(engine: CheckersEngine) -> None:
    state = board_with({"a3": "w", "b4": "b", "c3": "w", "d4": "w"})
    assert engine.validate_move("a3xc5", "alice", state).valid
    assert engine.validate_move("c3xe5", "alice", state).error == "Cannot capture your own piece"
    assert (
        engine.validate_move("a3xd6", "alice", state).error
        == "Capture moves must jump exactly two squares"
    )


def test_validate_never_raises(engine: CheckersEngine, start: CheckersBoardState) -> None:
    for move in [None, "", "z9-z8", {"type": "play"}, ["a3", "b4"], "a3-b4-c5"]:
        result = engine.validate_move(move, "alice", start)
        assert result.valid is False


# --- STATE TRANSITIONS ---
def test_apply_simple_move(engine: CheckersEngine, start: CheckersBoardState) -> None:
    after = engine.apply_move("a3-b4", start, "alice")
    assert at(after, "b4") == WHITE_MAN
    assert at(after, "a3") is None
    # input untouched
    assert at(start, "a3") == WHITE_MAN
    assert at(start, "b4") is None


def test_apply_capture_removes_jumped_piece(engine: CheckersEngine) -> None:
    state = board_with({"a3": "w", "b4": "b", "h8": "b"})
    after = engine.apply_move("a3xc5", state, "alice")
    assert at(after, "c5") == WHITE_MAN
    assert at(after, "a3") is None
    assert at(after, "b4") is None
    assert not after.must_capture
    assert after.chain_capture is None


def test_capture_onto_back_rank_crowns(engine: CheckersEngine) -> None:
    state = board_with({"b6": "w", "c7": "b", "a1": "b"})
    after = engine.apply_move("b6xd8", state, "alice")
    assert at(after, "d8") == "W"
    assert at(after, "c7") is None


def test_black_crowned_on_first_rank(engine: CheckersEngine) -> None:
    state = board_with({"c2": "b", "h8": "w"})
    after = engine.apply_move("c2-b1", state, "bob")
    assert at(after, "b1") == "B"


def test_apply_malformed_move_raises(engine: CheckersEngine, start: CheckersBoardState) -> None:
    with pytest.raises(IllegalMoveError):
        engine.apply_move("a3 to b4", start)
    with pytest.raises(IllegalMoveError):
        engine.apply_move("a4-b5", start)


# --- COMPLETION / RENDERING ---
def test_game_complete_when_one_side_is_gone(engine: CheckersEngine, start: CheckersBoardState) -> None:
    assert not engine.is_game_complete(start)
    assert engine.get_winner(start) is None

    only_white = board_with({"d4": "w", "f6": "W"})
    assert engine.is_game_complete(only_white)
    assert engine.get_winner(only_white) == "alice"

    only_black = board_with({"e5": "b"})
    assert engine.get_winner(only_black) == "bob"


def test_render_board(engine: CheckersEngine, start: CheckersBoardState) -> None:
    render = engine.render_board(start)
    assert render["board"] == start.board
    assert render["game_specific"] == {"must_capture": False, "chain_capture": None}


def test_next_player_and_board_validation(engine: CheckersEngine, start: CheckersBoardState) -> None:
    assert engine.next_player_id("alice", start) == "bob"
    assert engine.validate_board_state(start)
    assert not engine.validate_board_state(CheckersBoardState(board=start.board[:4]))
