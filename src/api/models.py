"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status

# Chess / checkers moves are notation strings, Hearts moves are structured objects
MovePayload = str | dict[str, Any]


# --- REQUEST MODELS ---
class CreateMatchRequest(BaseModel):
    game_type: str
    player_id: str
    username: str
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("player_id", "username")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player id and username cannot be blank.")
        return value


class JoinMatchRequest(BaseModel):
    match_id: UUID
    player_id: str
    username: str

    @field_validator("player_id", "username")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player id and username cannot be blank.")
        return value


class MoveRequest(BaseModel):
    match_id: UUID
    player_id: str
    move: MovePayload

    @field_validator("move")
    @classmethod
    def validate_move_payload(cls, value: MovePayload) -> MovePayload:
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise InvalidRequestError("Cannot interpret an empty move.")
        return value


class GetMatchRequest(BaseModel):
    match_id: UUID


class DeleteMatchRequest(BaseModel):
    match_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    user_id: str
    username: str
    color: str
    player_order: int


class MatchResponse(BaseModel):
    match_id: UUID
    game_type: str
    status: Status
    current_player_id: Optional[str]
    move_count: int
    players: list[PlayerResponse]
    render_data: dict[str, Any]
    winner: Optional[str] = None
    game_complete: bool = False
    stats: dict[str, Any] = Field(default_factory=dict)


class GameTypeResponse(BaseModel):
    type: str
    name: str
    description: str
    min_players: int
    max_players: int
