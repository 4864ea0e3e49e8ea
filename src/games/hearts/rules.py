"""Card comparison, scoring and passing rules of Hearts. Pure functions, no board state mutation."""

from typing import Optional, Sequence

from src.games.hearts.cards import (
    NUM_PLAYERS,
    QUEEN_OF_SPADES,
    RANK_ORDER,
    Card,
    Suit,
)
from src.games.hearts.state import PASSING_CYCLE, PassingDirection, PlayedCard

# Points in a full deck: 13 hearts + the queen of spades
MOON_SHOT_POINTS = 26

# Seat offset of the receiver of passed cards
PASS_OFFSETS: dict[PassingDirection, int] = {
    PassingDirection.LEFT: 1,
    PassingDirection.RIGHT: 3,
    PassingDirection.ACROSS: 2,
}


def compare_cards(first: Card, second: Card) -> int:
    """Rank difference only. Positive if `first` is higher."""
    return RANK_ORDER.index(first.rank) - RANK_ORDER.index(second.rank)


def card_points(card: Card) -> int:
    if card.suit == Suit.HEARTS:
        return 1
    if card == QUEEN_OF_SPADES:
        return 13
    return 0


def is_penalty_card(card: Card) -> bool:
    return card_points(card) > 0


def trick_points(cards: Sequence[PlayedCard]) -> int:
    return sum(card_points(played.card) for played in cards)


def trick_winner(cards: Sequence[PlayedCard]) -> PlayedCard:
    """Highest card of the suit that was led. Off-suit cards never win."""
    led_suit = cards[0].card.suit
    winner = cards[0]
    for played in cards[1:]:
        if played.card.suit == led_suit and compare_cards(played.card, winner.card) > 0:
            winner = played
    return winner


def pass_receiver(giver: int, direction: PassingDirection) -> Optional[int]:
    """Seat receiving the cards of `giver`. None when nobody passes this round."""
    offset = PASS_OFFSETS.get(direction)
    if offset is None:
        return None
    return (giver + offset) % NUM_PLAYERS


def next_passing_direction(direction: PassingDirection) -> PassingDirection:
    return PASSING_CYCLE[(PASSING_CYCLE.index(direction) + 1) % len(PASSING_CYCLE)]


def holder_of(hands: Sequence[Sequence[Card]], card: Card) -> Optional[int]:
    return next((seat for seat, hand in enumerate(hands) if card in hand), None)


def moon_shooter(round_scores: Sequence[int]) -> Optional[int]:
    return next(
        (seat for seat, score in enumerate(round_scores) if score == MOON_SHOT_POINTS),
        None,
    )


def round_score_increments(
    round_scores: Sequence[int], moon_shot_penalty: int
) -> list[int]:
    """
    What each player adds to their cumulative score at the end of a round.
    Shooting the moon: everyone else takes the penalty and the shooter takes nothing.
    """
    shooter = moon_shooter(round_scores)
    if shooter is None:
        return list(round_scores)
    return [
        0 if seat == shooter else moon_shot_penalty for seat in range(len(round_scores))
    ]
