"""
Text serialization of board states.

Every game type defines its own board state as a pydantic model deriving from BoardStateModel.
The persisted form is JSON with camelCase keys, which is lossless: serialize(deserialize(text)) == text.
"""

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidBoardStateError

# 8x8 boards: None marks an empty square, otherwise a single piece symbol
Grid = list[list[str | None]]

StateT = TypeVar("StateT", bound="BoardStateModel")


class BoardStateModel(BaseModel):
    """Base class for the per-game board states. Only the owning engine reads the fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


def serialize_board_state(board_state: BoardStateModel) -> str:
    return board_state.model_dump_json(by_alias=True)


def deserialize_board_state(model: type[StateT], serialized_state: str) -> StateT:
    """Parse persisted text back into the board state of the given game type."""
    try:
        return model.model_validate_json(serialized_state)
    except ValidationError as error:
        raise InvalidBoardStateError(
            f"Invalid board state format for {model.__name__}: {error.error_count()} error(s)"
        ) from error


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def is_8x8(grid: Grid) -> bool:
    return len(grid) == 8 and all(len(row) == 8 for row in grid)
