"""
Hearts moves are structured objects:

* {"type": "pass", "cards": [{"suit": "hearts", "rank": "Q"}, ...]}
* {"type": "play", "card": {"suit": "clubs", "rank": "2"}}
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from src.games.hearts.cards import Card


class PassMove(BaseModel):
    type: Literal["pass"] = "pass"
    cards: list[Card]


class PlayMove(BaseModel):
    type: Literal["play"] = "play"
    card: Card


HeartsMove = Annotated[PassMove | PlayMove, Field(discriminator="type")]

_move_adapter: TypeAdapter[PassMove | PlayMove] = TypeAdapter(HeartsMove)


def parse_move(move: Any) -> PassMove | PlayMove:
    """Accepts the dict form or an already constructed move. Raises pydantic.ValidationError otherwise."""
    if isinstance(move, (PassMove, PlayMove)):
        return move
    return _move_adapter.validate_python(move)
