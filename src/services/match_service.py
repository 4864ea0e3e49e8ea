"""Orchestration of communication from API layer to game engines and persistence layer (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateMatchRequest,
    DeleteMatchRequest,
    GameTypeResponse,
    GetMatchRequest,
    JoinMatchRequest,
    MatchResponse,
    MoveRequest,
    PlayerResponse,
)
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    RepositoryError,
    UnsupportedGameTypeError,
)
from src.core.models import MatchModel
from src.core.shared_types import Status
from src.db.repository import MatchRepository
from src.games.board_state import deserialize_board_state, serialize_board_state
from src.games.engine import GameEngine
from src.games.match import Match, Player
from src.games.registry import GameRegistry, get_game_registry
from src.games.turns import (
    assign_player_color,
    can_player_join,
    can_start_game,
    game_stats,
    is_player_in_game,
    turn_order,
    validate_player_turn,
)

logger = logging.getLogger(__name__)


class MatchService:
    """Orchestration of layers for every registered game type."""

    def __init__(
        self, repository: MatchRepository, registry: GameRegistry | None = None
    ) -> None:
        self.repo = repository
        self.registry = registry or get_game_registry()

    # -- API routes logic ---
    def list_game_types(self) -> list[GameTypeResponse]:
        return [
            GameTypeResponse(
                type=info.type,
                name=info.name,
                description=info.description,
                min_players=info.min_players,
                max_players=info.max_players,
            )
            for info in self.registry.supported_game_types()
        ]

    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """First player requested to create a new match. The creator takes the first seat."""
        if not self.registry.is_supported(request.game_type):
            raise UnsupportedGameTypeError(f"Unsupported game type: {request.game_type}")

        validation = self.registry.validate_configuration(
            request.game_type, request.settings
        )
        if not validation.valid:
            raise InvalidRequestError(validation.error)

        # Engine fills in the player bounds and the starting board state
        match = Match(game_type=request.game_type, settings=dict(request.settings))
        engine = self.registry.create_game_instance(request.game_type, match)
        self._seat_player(match, engine, request.player_id, request.username)

        stored_model, match_id = self.repo.create_match(match.to_model())
        logger.info(
            "Match %s (%s) created by %s", match_id, request.game_type, request.player_id
        )
        return self._create_match_response(match_id, stored_model)

    def join_match(self, request: JoinMatchRequest) -> MatchResponse:
        """Another player requested to join. The match starts once enough players are seated."""
        match, engine = self._load_match(request.match_id)

        if is_player_in_game(match, request.player_id):
            raise GameStateError("Player already in this game")
        if not can_player_join(match):
            raise GameStateError("Game cannot accept new players")

        self._seat_player(match, engine, request.player_id, request.username)

        with_player_seated = match.to_model()
        self.repo.update_match(request.match_id, with_player_seated)
        logger.info(
            "Player %s joined match %s (%d/%d seated)",
            request.player_id,
            request.match_id,
            len(match.players),
            match.max_players,
        )
        return self._create_match_response(request.match_id, with_player_seated)

    def make_move(self, request: MoveRequest) -> MatchResponse:
        """
        Make a move attempt.

        Raises:
            GameStateError / NotYourTurnError: the match is not active, or another player is to move.
            IllegalMoveError: the engine rejected the move (the engine's reason is the message).
        """
        match, engine = self._load_match(request.match_id)
        validate_player_turn(match, request.player_id)

        board_state = deserialize_board_state(engine.BOARD_STATE, match.board_state)
        validation = engine.validate_move(request.move, request.player_id, board_state)
        if not validation.valid:
            logger.debug(
                "Move %r by %s rejected: %s", request.move, request.player_id, validation.error
            )
            raise IllegalMoveError(validation.error)

        new_state = engine.apply_move(request.move, board_state, request.player_id)
        match.board_state = serialize_board_state(new_state)
        match.move_count += 1

        if engine.is_game_complete(new_state):
            match.status = Status.COMPLETED
            match.winner = engine.get_winner(new_state)
            match.current_player_id = None
            logger.info("Match %s completed, winner: %s", request.match_id, match.winner)
        else:
            match.current_player_id = engine.next_player_id(request.player_id, new_state)

        after_move = match.to_model()
        self.repo.update_match(request.match_id, after_move)
        return self._create_match_response(request.match_id, after_move)

    def get_match_state(self, request: GetMatchRequest) -> MatchResponse:
        """
        Retrieve current match state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        match_model = self._fetch_match(request.match_id)
        return self._create_match_response(request.match_id, match_model)

    def delete_match(self, request: DeleteMatchRequest) -> None:
        """Handle a request to delete a Match record."""
        if self.repo.delete_match(request.match_id) is None:
            raise RepositoryError(f"Match with {request.match_id=} not found.")
        logger.info("Match %s deleted", request.match_id)

    # -- Internal helpers --
    def _seat_player(
        self, match: Match, engine: GameEngine, user_id: str, username: str
    ) -> None:
        """Add a player with the next seat and color. Starts the match once the minimum is reached."""
        order = len(match.players) + 1
        match.players.append(
            Player(
                user_id=user_id,
                username=username,
                color=assign_player_color(engine.AVAILABLE_COLORS, order),
                player_order=order,
            )
        )

        if match.status == Status.WAITING and can_start_game(match):
            match.status = Status.ACTIVE
            match.current_player_id = turn_order(match)[0]
            logger.info("Match with %d players started", len(match.players))

    def _load_match(self, match_id: UUID) -> tuple[Match, GameEngine]:
        """Fetch the record and bind the engine of its game type to it."""
        match = Match.from_model(self._fetch_match(match_id), match_id=match_id)
        engine = self.registry.create_game_instance(match.game_type, match)
        return match, engine

    def _create_match_response(self, match_id: UUID, model: MatchModel) -> MatchResponse:
        """Convert info in MatchModel to a MatchResponse (for match with given ID.)"""
        match = Match.from_model(model, match_id=match_id)
        engine = self.registry.create_game(match.game_type, match)
        board_state = deserialize_board_state(engine.BOARD_STATE, model.board_state)

        return MatchResponse(
            match_id=match_id,
            game_type=model.game_type,
            status=match.status,
            current_player_id=model.current_player_id,
            move_count=model.move_count,
            players=[PlayerResponse(**player.to_record()) for player in match.players],
            render_data=engine.render_board(board_state),
            winner=model.winner,
            game_complete=engine.is_game_complete(board_state),
            stats=game_stats(match, engine.GAME_TYPE_NAME),
        )

    def _fetch_match(self, match_id: UUID) -> MatchModel:
        """Attempt to find the match in the repository and raise error if it fails."""
        match_model = self.repo.get_match(match_id)
        if match_model is None:
            raise RepositoryError(f"Match with {match_id=} not found.")
        return match_model
