"""Cards, the deck, shuffling and dealing."""

import random
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Suit(StrEnum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(StrEnum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


# Lowest to highest
RANK_ORDER: tuple[Rank, ...] = tuple(Rank)

NUM_PLAYERS = 4
HAND_SIZE = 13


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"


TWO_OF_CLUBS = Card(suit=Suit.CLUBS, rank=Rank.TWO)
QUEEN_OF_SPADES = Card(suit=Suit.SPADES, rank=Rank.QUEEN)


def new_deck() -> list[Card]:
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def shuffle(deck: list[Card], rng: random.Random) -> list[Card]:
    """Fisher-Yates shuffle on a copy of the deck"""
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def deal(deck: list[Card]) -> list[list[Card]]:
    """Deal one card at a time around the table: 13 cards to each of the four hands"""
    hands: list[list[Card]] = [[] for _ in range(NUM_PLAYERS)]
    for i, card in enumerate(deck):
        hands[i % NUM_PLAYERS].append(card)
    return hands


def deal_shuffled(rng: random.Random) -> list[list[Card]]:
    return deal(shuffle(new_deck(), rng))
