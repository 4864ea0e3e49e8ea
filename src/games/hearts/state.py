"""Board state of a Hearts match."""

from enum import StrEnum
from typing import Optional

from pydantic import Field

from src.games.board_state import BoardStateModel
from src.games.hearts.cards import NUM_PLAYERS, Card


class Phase(StrEnum):
    PASSING = "passing"
    PLAYING = "playing"
    # transient: set while a finished round is scored, never persisted between moves
    ROUND_COMPLETE = "round_complete"
    GAME_COMPLETE = "game_complete"


class PassingDirection(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    ACROSS = "across"
    NONE = "none"


# Rotation of the passing direction from one round to the next
PASSING_CYCLE: tuple[PassingDirection, ...] = (
    PassingDirection.LEFT,
    PassingDirection.RIGHT,
    PassingDirection.ACROSS,
    PassingDirection.NONE,
)


class PlayedCard(BoardStateModel):
    """`player` is the seat index: player_order - 1"""

    player: int
    card: Card


class Trick(BoardStateModel):
    cards: list[PlayedCard] = Field(default_factory=list)
    leader: Optional[int] = None
    winner: Optional[int] = None


class GameSettings(BoardStateModel):
    target_score: int = 100
    moon_shot_penalty: int = 26


def _per_player() -> list:
    return [[] for _ in range(NUM_PLAYERS)]


def _zero_scores() -> list[int]:
    return [0] * NUM_PLAYERS


class HeartsBoardState(BoardStateModel):
    """
    All per-player lists are indexed by seat (player_order - 1).

    * passed_cards: the three cards each player passes this round (empty until they passed)
    * tricks_won: the completed tricks each player took this round
    * round_scores: penalty points taken this round, scores: cumulative
    """

    phase: Phase = Phase.PASSING
    round: int = 1
    player_hands: list[list[Card]]
    passed_cards: list[list[Card]] = Field(default_factory=_per_player)
    current_trick: Trick = Field(default_factory=Trick)
    tricks_won: list[list[list[PlayedCard]]] = Field(default_factory=_per_player)
    scores: list[int] = Field(default_factory=_zero_scores)
    round_scores: list[int] = Field(default_factory=_zero_scores)
    hearts_broken: bool = False
    passing_direction: PassingDirection = PassingDirection.LEFT
    game_settings: GameSettings = Field(default_factory=GameSettings)

    def all_cards(self) -> list[Card]:
        """Every card currently held, being passed, or played this round"""
        cards = [card for hand in self.player_hands for card in hand]
        cards.extend(card for passed in self.passed_cards for card in passed)
        cards.extend(
            played.card
            for tricks in self.tricks_won
            for trick in tricks
            for played in trick
        )
        cards.extend(played.card for played in self.current_trick.cards)
        return cards

    def tricks_played(self) -> int:
        return sum(len(tricks) for tricks in self.tricks_won)

    def is_first_trick(self) -> bool:
        return self.tricks_played() == 0
