"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type aliases to make MatchModel easier to read
PlayerRecord = dict[str, Any]
SerializedBoardState = str


@dataclass
class MatchModel:
    """Transport-safe representation of a match used between API, Service, DB, and Game layers."""

    game_type: str
    status: str
    board_state: SerializedBoardState
    players: list[PlayerRecord] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    current_player_id: Optional[str] = None
    move_count: int = 0
    winner: Optional[str] = None
