"""
The common match-state structure every engine is bound to.

Players and turn bookkeeping live here; the board state is kept in its serialized (text) form,
only the engine of the match's game type knows how to interpret it.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Self
from uuid import UUID

from src.core.exceptions import GameStateError
from src.core.models import MatchModel
from src.core.shared_types import Status


@dataclass(frozen=True)
class Player:
    """A seat in a match. `player_order` (1-based) and `color` are assigned at join time and never change."""

    user_id: str
    username: str
    color: str
    player_order: int

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(
            user_id=record["user_id"],
            username=record["username"],
            color=record["color"],
            player_order=int(record["player_order"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "color": self.color,
            "player_order": self.player_order,
        }


@dataclass
class Match:
    game_type: str
    id: Optional[UUID] = None
    status: Status = Status.WAITING
    current_player_id: Optional[str] = None
    move_count: int = 0
    settings: dict[str, Any] = field(default_factory=dict)
    players: list[Player] = field(default_factory=list)
    board_state: Optional[str] = None
    winner: Optional[str] = None
    # Filled in by the GameRegistry from the engine's constants
    min_players: int = 2
    max_players: int = 2

    @classmethod
    def from_model(cls, model: MatchModel, match_id: Optional[UUID] = None) -> Self:
        """Define how to construct a Match from the information the Service layer actually has"""
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. Pick one from {','.join(status.value for status in Status)}"
            )

        return cls(
            game_type=model.game_type,
            id=match_id,
            status=Status(model.status),
            current_player_id=model.current_player_id,
            move_count=model.move_count,
            settings=dict(model.settings),
            players=[Player.from_record(record) for record in model.players],
            board_state=model.board_state,
            winner=model.winner,
        )

    def to_model(self) -> MatchModel:
        """Encode back into a format the Service layer uses"""
        if self.board_state is None:
            raise GameStateError("Cannot export a match without a board state.")
        return MatchModel(
            game_type=self.game_type,
            status=str(self.status),
            board_state=self.board_state,
            players=[player.to_record() for player in self.players],
            settings=dict(self.settings),
            current_player_id=self.current_player_id,
            move_count=self.move_count,
            winner=self.winner,
        )
