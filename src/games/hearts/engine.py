"""
Hearts engine.

Phases: passing -> playing -> round_complete -> (passing | playing | game_complete)

* passing: every player passes three cards, in any order. Once all four passed, the cards are
  handed over according to the passing direction and the holder of the two of clubs leads.
* playing: strict rotation. Tricks go to the highest card of the led suit.
* round_complete: after the 13th trick the round is scored (with the moon shot exception),
  the passing direction rotates and a new hand is dealt, unless someone reached the target score.

Hearts is a penalty game: the lowest cumulative score wins.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from pydantic import ValidationError

from src.core.config import get_settings
from src.core.exceptions import IllegalMoveError, InvalidRequestError
from src.core.shared_types import Color
from src.games.engine import MoveValidation, RenderData
from src.games.hearts.cards import (
    HAND_SIZE,
    NUM_PLAYERS,
    TWO_OF_CLUBS,
    Card,
    Suit,
    deal_shuffled,
    new_deck,
)
from src.games.hearts.moves import PassMove, PlayMove, parse_move
from src.games.hearts.rules import (
    holder_of,
    is_penalty_card,
    moon_shooter,
    next_passing_direction,
    pass_receiver,
    round_score_increments,
    trick_points,
    trick_winner,
)
from src.games.hearts.state import (
    GameSettings,
    HeartsBoardState,
    PassingDirection,
    Phase,
    PlayedCard,
    Trick,
)
from src.games.match import Match
from src.games.turns import next_player, player_order

logger = logging.getLogger(__name__)

CARDS_TO_PASS = 3


@dataclass
class HeartsEngine:
    GAME_TYPE_NAME: ClassVar[str] = "hearts"
    GAME_DESCRIPTION: ClassVar[str] = "Classic four-player trick-taking card game"
    MIN_PLAYERS: ClassVar[int] = 4
    MAX_PLAYERS: ClassVar[int] = 4
    AVAILABLE_COLORS: ClassVar[tuple[str, ...]] = (
        Color.RED,
        Color.BLUE,
        Color.GREEN,
        Color.YELLOW,
    )
    BOARD_STATE: ClassVar[type[HeartsBoardState]] = HeartsBoardState

    match: Match
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def initial_board_state(self) -> HeartsBoardState:
        return HeartsBoardState(
            player_hands=deal_shuffled(self.rng),
            game_settings=self._game_settings(),
        )

    # --- VALIDATION ---
    def validate_move(
        self, move: Any, player_id: str, board_state: HeartsBoardState
    ) -> MoveValidation:
        try:
            seat = self._seat(player_id)
            if seat is None:
                return MoveValidation.reject("Player not in game")

            try:
                parsed = parse_move(move)
            except ValidationError as error:
                return MoveValidation.reject(
                    f"Invalid move format: {error.errors()[0]['msg']}"
                )

            if board_state.phase == Phase.PASSING:
                return self._validate_pass(parsed, seat, board_state)
            if board_state.phase == Phase.PLAYING:
                return self._validate_play(parsed, seat, board_state)
            return MoveValidation.reject("Invalid game phase for moves")
        except Exception as error:  # never raises
            logger.debug("Hearts move %r could not be validated: %s", move, error)
            return MoveValidation.reject("Move validation failed")

    def _validate_pass(
        self, move: PassMove | PlayMove, seat: int, board_state: HeartsBoardState
    ) -> MoveValidation:
        if not isinstance(move, PassMove):
            return MoveValidation.reject("Must specify pass move type")

        if len(move.cards) != CARDS_TO_PASS:
            return MoveValidation.reject(f"Must pass exactly {CARDS_TO_PASS} cards")

        if board_state.passed_cards[seat]:
            return MoveValidation.reject("Already passed cards this round")

        hand = board_state.player_hands[seat]
        for card in move.cards:
            if card not in hand:
                return MoveValidation.reject(f"Don't have card: {card}")

        if len(set(move.cards)) != len(move.cards):
            return MoveValidation.reject("Cannot pass duplicate cards")

        return MoveValidation.ok()

    def _validate_play(
        self, move: PassMove | PlayMove, seat: int, board_state: HeartsBoardState
    ) -> MoveValidation:
        if not isinstance(move, PlayMove):
            return MoveValidation.reject("Must specify play move type")

        if move.card not in board_state.player_hands[seat]:
            return MoveValidation.reject(f"Don't have card: {move.card}")

        if self.expected_seat(board_state) != seat:
            return MoveValidation.reject("Not your turn")

        return self._validate_suit_rules(move.card, seat, board_state)

    def _validate_suit_rules(
        self, card: Card, seat: int, board_state: HeartsBoardState
    ) -> MoveValidation:
        """
        Leading:
        * the first trick of a round opens with the two of clubs
        * no hearts before hearts are broken, unless the hand holds nothing else

        Following:
        * follow the led suit when possible
        * no hearts / queen of spades on the first trick, unless the hand holds nothing else
        * no hearts discarded before hearts are broken, unless the hand holds nothing else
        """
        hand = board_state.player_hands[seat]
        trick = board_state.current_trick
        only_hearts_left = all(c.suit == Suit.HEARTS for c in hand)

        if not trick.cards:
            if board_state.is_first_trick() and card != TWO_OF_CLUBS:
                return MoveValidation.reject("First trick must start with 2 of clubs")

            if (
                card.suit == Suit.HEARTS
                and not board_state.hearts_broken
                and not only_hearts_left
            ):
                return MoveValidation.reject(
                    "Cannot lead with hearts until hearts are broken"
                )
            return MoveValidation.ok()

        led_suit = trick.cards[0].card.suit
        if card.suit == led_suit:
            return MoveValidation.ok()

        if any(c.suit == led_suit for c in hand):
            return MoveValidation.reject(f"Must follow suit ({led_suit})")

        if (
            board_state.is_first_trick()
            and is_penalty_card(card)
            and not all(is_penalty_card(c) for c in hand)
        ):
            return MoveValidation.reject(
                "Cannot play hearts or queen of spades on first trick"
            )

        if card.suit == Suit.HEARTS and not board_state.hearts_broken and not only_hearts_left:
            return MoveValidation.reject(
                "Cannot discard hearts until hearts are broken"
            )

        return MoveValidation.ok()

    # --- STATE TRANSITIONS ---
    def apply_move(
        self,
        move: Any,
        board_state: HeartsBoardState,
        player_id: Optional[str] = None,
    ) -> HeartsBoardState:
        """`player_id` defaults to the match's current player."""
        actor = player_id or self.match.current_player_id
        seat = self._seat(actor) if actor else None
        if seat is None:
            raise IllegalMoveError(f"Player {actor!r} is not seated in this match.")

        try:
            parsed = parse_move(move)
        except ValidationError as error:
            raise IllegalMoveError(f"Invalid move format: {move!r}") from error

        new_state = board_state.model_copy(deep=True)
        if new_state.phase == Phase.PASSING and isinstance(parsed, PassMove):
            self._apply_pass(parsed, seat, new_state)
        elif new_state.phase == Phase.PLAYING and isinstance(parsed, PlayMove):
            self._apply_play(parsed, seat, new_state)
        else:
            raise IllegalMoveError(
                f"Invalid game phase for a {parsed.type} move: {board_state.phase}"
            )
        return new_state

    def _apply_pass(self, move: PassMove, seat: int, state: HeartsBoardState) -> None:
        hand = state.player_hands[seat]
        for card in move.cards:
            if card not in hand:
                raise IllegalMoveError(f"Cannot pass {card}: not in hand")
            hand.remove(card)
        state.passed_cards[seat] = list(move.cards)

        if all(len(passed) == CARDS_TO_PASS for passed in state.passed_cards):
            self._exchange_passed_cards(state)
            state.phase = Phase.PLAYING
            state.current_trick = Trick(leader=holder_of(state.player_hands, TWO_OF_CLUBS))
            logger.debug(
                "Hearts passing complete (%s), seat %s leads",
                state.passing_direction,
                state.current_trick.leader,
            )

    def _exchange_passed_cards(self, state: HeartsBoardState) -> None:
        for giver, passed in enumerate(state.passed_cards):
            receiver = pass_receiver(giver, state.passing_direction)
            if receiver is None:
                continue
            state.player_hands[receiver].extend(passed)
        state.passed_cards = [[] for _ in range(NUM_PLAYERS)]

    def _apply_play(self, move: PlayMove, seat: int, state: HeartsBoardState) -> None:
        hand = state.player_hands[seat]
        if move.card not in hand:
            raise IllegalMoveError(f"Cannot play {move.card}: not in hand")
        hand.remove(move.card)
        state.current_trick.cards.append(PlayedCard(player=seat, card=move.card))

        if move.card.suit == Suit.HEARTS:
            state.hearts_broken = True

        if len(state.current_trick.cards) == NUM_PLAYERS:
            self._complete_trick(state)

    def _complete_trick(self, state: HeartsBoardState) -> None:
        cards = state.current_trick.cards
        winner = trick_winner(cards).player

        state.tricks_won[winner].append(cards)
        state.round_scores[winner] += trick_points(cards)
        state.current_trick = Trick(leader=winner, winner=winner)

        if state.tricks_played() == HAND_SIZE:
            self._complete_round(state)

    def _complete_round(self, state: HeartsBoardState) -> None:
        state.phase = Phase.ROUND_COMPLETE
        shooter = moon_shooter(state.round_scores)
        increments = round_score_increments(
            state.round_scores, state.game_settings.moon_shot_penalty
        )
        state.scores = [score + extra for score, extra in zip(state.scores, increments)]
        logger.info(
            "Hearts round %s complete: round scores %s, totals %s%s",
            state.round,
            state.round_scores,
            state.scores,
            f" (seat {shooter} shot the moon)" if shooter is not None else "",
        )

        state.round_scores = [0] * NUM_PLAYERS
        state.tricks_won = [[] for _ in range(NUM_PLAYERS)]
        state.hearts_broken = False
        state.round += 1
        state.passing_direction = next_passing_direction(state.passing_direction)

        if self._target_reached(state):
            state.phase = Phase.GAME_COMPLETE
            return

        state.player_hands = deal_shuffled(self.rng)
        if state.passing_direction == PassingDirection.NONE:
            state.phase = Phase.PLAYING
            state.current_trick = Trick(leader=holder_of(state.player_hands, TWO_OF_CLUBS))
        else:
            state.phase = Phase.PASSING
            state.current_trick = Trick()

    # --- COMPLETION ---
    def is_game_complete(self, board_state: HeartsBoardState) -> bool:
        return board_state.phase == Phase.GAME_COMPLETE or self._target_reached(board_state)

    def get_winner(self, board_state: HeartsBoardState) -> Optional[str]:
        """Lowest cumulative score. Ties go to the lower seat."""
        if not self.is_game_complete(board_state):
            return None

        best_seat = board_state.scores.index(min(board_state.scores))
        return self._user_at_seat(best_seat)

    # --- TURNS / RENDERING ---
    def expected_seat(self, board_state: HeartsBoardState) -> Optional[int]:
        """Seat expected to act next. While passing: the first seat that did not pass yet."""
        if board_state.phase == Phase.PASSING:
            return next(
                (seat for seat, passed in enumerate(board_state.passed_cards) if not passed),
                None,
            )

        trick = board_state.current_trick
        if not trick.cards:
            return trick.leader
        return (trick.cards[-1].player + 1) % NUM_PLAYERS

    def next_player_id(self, player_id: str, board_state: HeartsBoardState) -> str:
        seat = self.expected_seat(board_state)
        user_id = self._user_at_seat(seat) if seat is not None else None
        return user_id or next_player(self.match, player_id)

    def render_board(self, board_state: HeartsBoardState) -> RenderData:
        return {
            "phase": board_state.phase.value,
            "round": board_state.round,
            "scores": list(board_state.scores),
            "round_scores": list(board_state.round_scores),
            "current_trick": board_state.current_trick.model_dump(mode="json"),
            "hearts_broken": board_state.hearts_broken,
            "passing_direction": board_state.passing_direction.value,
            "game_specific": {
                "hand_size": [len(hand) for hand in board_state.player_hands],
                "tricks_won": [len(tricks) for tricks in board_state.tricks_won],
            },
        }

    def validate_board_state(self, board_state: HeartsBoardState) -> bool:
        """Four hands and scores, non-negative scores, and (mid-round) an exact partition of the deck"""
        if len(board_state.player_hands) != NUM_PLAYERS:
            return False
        if len(board_state.scores) != NUM_PLAYERS or min(board_state.scores) < 0:
            return False
        if board_state.phase in (Phase.PASSING, Phase.PLAYING):
            cards = board_state.all_cards()
            return len(cards) == len(set(cards)) and set(cards) == set(new_deck())
        return True

    # -- PRIVATE HELPERS ---
    def _seat(self, user_id: str) -> Optional[int]:
        order = player_order(self.match, user_id)
        return order - 1 if order is not None else None

    def _user_at_seat(self, seat: int) -> Optional[str]:
        return next(
            (
                player.user_id
                for player in self.match.players
                if player.player_order == seat + 1
            ),
            None,
        )

    def _target_reached(self, board_state: HeartsBoardState) -> bool:
        target = board_state.game_settings.target_score
        return any(score >= target for score in board_state.scores)

    def _game_settings(self) -> GameSettings:
        """
        Configured defaults, overridable per match.

        Raises:
            InvalidRequestError: if an override is not an integer.
        """
        defaults = get_settings()
        try:
            return GameSettings(
                target_score=self.match.settings.get(
                    "target_score", defaults.hearts_target_score
                ),
                moon_shot_penalty=self.match.settings.get(
                    "moon_shot_penalty", defaults.hearts_moon_shot_penalty
                ),
            )
        except ValidationError as error:
            raise InvalidRequestError(f"Invalid Hearts settings: {error}") from error
