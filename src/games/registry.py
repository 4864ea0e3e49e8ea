"""
Registry of the supported game types.

Maps a game type identifier ("chess", "checkers", "hearts", ...) to its engine class.
Engines can be added or removed at runtime; a candidate is checked against the GameEngine contract
before it is inserted.

Usage:
    registry = get_game_registry()
    engine = registry.create_game_instance("checkers", match)
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from src.core.exceptions import EngineRegistrationError, UnsupportedGameTypeError
from src.core.shared_types import GameType
from src.games.board_state import deserialize_board_state, serialize_board_state
from src.games.checkers.engine import CheckersEngine
from src.games.chess.engine import ChessEngine
from src.games.engine import GameEngine, RenderData, missing_constants, missing_operations
from src.games.hearts.engine import HeartsEngine
from src.games.match import Match

logger = logging.getLogger(__name__)

# Global bounds on the player count, whatever the game type
MIN_PLAYER_COUNT = 1
MAX_PLAYER_COUNT = 10


@dataclass(frozen=True)
class GameTypeInfo:
    type: str
    name: str
    description: str
    min_players: int
    max_players: int


@dataclass(frozen=True)
class ConfigurationValidation:
    valid: bool
    error: Optional[str] = None


class GameRegistry:
    """
    Mutable table of engine classes, keyed by game type.

    Attributes:
        _engines: game type -> engine class
    """

    def __init__(self, engines: Optional[dict[str, type[GameEngine]]] = None) -> None:
        self._engines: dict[str, type[GameEngine]] = {}
        for game_type, engine_cls in (engines or {}).items():
            self.register(game_type, engine_cls)

    # --- QUERIES ---
    def supported_game_types(self) -> list[GameTypeInfo]:
        return [self._info(game_type, cls) for game_type, cls in self._engines.items()]

    def game_type_info(self, game_type: str) -> Optional[GameTypeInfo]:
        engine_cls = self._engines.get(game_type)
        return self._info(game_type, engine_cls) if engine_cls else None

    def is_supported(self, game_type: str) -> bool:
        return game_type in self._engines

    # --- CONSTRUCTION ---
    def create_game(self, game_type: str, match: Match) -> GameEngine:
        """
        Bind a new engine to the match.

        The match's player bounds are always taken from the engine's constants, whatever the caller set.
        Raises UnsupportedGameTypeError for unknown types.
        """
        engine_cls = self._engines.get(game_type)
        if engine_cls is None:
            raise UnsupportedGameTypeError(f"Unsupported game type: {game_type}")

        match.min_players = engine_cls.MIN_PLAYERS
        match.max_players = engine_cls.MAX_PLAYERS
        return engine_cls(match=match)

    def create_game_instance(self, game_type: str, match: Match) -> GameEngine:
        """Same as create_game, but also initializes the board state if the match has none yet."""
        engine = self.create_game(game_type, match)
        if match.board_state is None:
            match.board_state = serialize_board_state(engine.initial_board_state())
        return engine

    def render_board(self, game_type: str, serialized_state: str) -> RenderData:
        """Render data of a persisted board state, without needing the match it belongs to."""
        engine = self.create_game(game_type, Match(game_type=game_type))
        board_state = deserialize_board_state(engine.BOARD_STATE, serialized_state)
        return engine.render_board(board_state)

    # --- CONFIGURATION ---
    def validate_configuration(
        self, game_type: str, settings: Optional[dict[str, Any]] = None
    ) -> ConfigurationValidation:
        """
        Check a proposed player count configuration.

        `settings` may hold "min_players" / "max_players" overrides. Missing values default to the engine's bounds.
        """
        engine_cls = self._engines.get(game_type)
        if engine_cls is None:
            return ConfigurationValidation(False, f"Unsupported game type: {game_type}")

        settings = settings or {}
        min_players = settings.get("min_players") or engine_cls.MIN_PLAYERS
        max_players = settings.get("max_players") or engine_cls.MAX_PLAYERS

        for count in (min_players, max_players):
            # bool is an int subclass, but never a player count
            if (
                isinstance(count, bool)
                or not isinstance(count, int)
                or not MIN_PLAYER_COUNT <= count <= MAX_PLAYER_COUNT
            ):
                return ConfigurationValidation(
                    False,
                    f"Player count must be between {MIN_PLAYER_COUNT} and {MAX_PLAYER_COUNT}",
                )
            if not engine_cls.MIN_PLAYERS <= count <= engine_cls.MAX_PLAYERS:
                return ConfigurationValidation(
                    False,
                    f"{engine_cls.GAME_TYPE_NAME} supports "
                    f"{engine_cls.MIN_PLAYERS}-{engine_cls.MAX_PLAYERS} players",
                )

        if min_players > max_players:
            return ConfigurationValidation(
                False, "Minimum players cannot exceed maximum players"
            )

        return ConfigurationValidation(True)

    # --- REGISTRATION ---
    def register(self, game_type: str, engine_cls: type) -> None:
        """
        Add (or replace) an engine class.

        Raises:
            EngineRegistrationError: if a required constant is missing or a contract operation is not implemented.
        """
        if missing_constants(engine_cls):
            raise EngineRegistrationError(
                "Game class must define GAME_TYPE_NAME, MIN_PLAYERS, and MAX_PLAYERS"
            )

        missing = missing_operations(engine_cls)
        if missing:
            raise EngineRegistrationError(
                f"Game class must implement the GameEngine contract. Missing: {', '.join(missing)}"
            )

        if game_type in self._engines:
            logger.info("Replacing game engine for %s: %s", game_type, engine_cls.__name__)
        else:
            logger.info("Registered game engine: %s (%s)", engine_cls.__name__, game_type)
        self._engines[game_type] = engine_cls

    def unregister(self, game_type: str) -> bool:
        """Remove an engine. Returns whether anything was removed."""
        removed = self._engines.pop(game_type, None) is not None
        if removed:
            logger.info("Unregistered game engine for: %s", game_type)
        return removed

    # -- PRIVATE HELPERS ---
    def _info(self, game_type: str, engine_cls: type[GameEngine]) -> GameTypeInfo:
        return GameTypeInfo(
            type=game_type,
            name=engine_cls.GAME_TYPE_NAME,
            description=getattr(engine_cls, "GAME_DESCRIPTION", ""),
            min_players=engine_cls.MIN_PLAYERS,
            max_players=engine_cls.MAX_PLAYERS,
        )


_default_registry: Optional[GameRegistry] = None


def get_game_registry() -> GameRegistry:
    """Lazily built registry with the built-in game types."""
    global _default_registry
    if _default_registry is None:
        _default_registry = GameRegistry(
            {
                GameType.CHESS: ChessEngine,
                GameType.CHECKERS: CheckersEngine,
                GameType.HEARTS: HeartsEngine,
            }
        )
    return _default_registry


def reset_game_registry() -> None:
    """Drop the default registry, so runtime registrations do not leak between callers (ex. tests)."""
    global _default_registry
    _default_registry = None
