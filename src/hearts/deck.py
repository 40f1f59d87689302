"""
Hearts deck: 52 cards (4 suits × 13 ranks).
Card values 2..14 (J=11, Q=12, K=13, A=14) drive trick comparison.
Point cards: every heart (1 point) and the Queen of Spades (13 points).
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Sequence


class Suit(IntEnum):
    """Hearts, Diamonds, Clubs, Spades. Order used for sorting hands."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Rank(Enum):
    """Symbolic ranks; the value is the canonical symbol used at the boundary."""
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


_FACE_VALUES = {Rank.JACK: 11, Rank.QUEEN: 12, Rank.KING: 13, Rank.ACE: 14}

HEART_POINTS = 1
QUEEN_OF_SPADES_POINTS = 13
TOTAL_POINTS = 13 * HEART_POINTS + QUEEN_OF_SPADES_POINTS  # 26 per hand


def rank_value(rank: Rank) -> int:
    """Numeric value of a rank: face value for 2..10, J=11, Q=12, K=13, A=14."""
    if rank in _FACE_VALUES:
        return _FACE_VALUES[rank]
    return int(rank.value)


@dataclass(frozen=True)
class Card:
    """
    A single playing card. ``value`` is always derived from ``rank``; equality
    and hashing only look at (suit, rank).
    """

    suit: Suit
    rank: Rank
    value: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Unknown suit: {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Unknown rank: {self.rank!r}")
        expected = rank_value(self.rank)
        if self.value == 0:
            object.__setattr__(self, "value", expected)
        elif self.value != expected:
            raise ValueError(f"Value {self.value} does not match rank {self.rank.value}")

    def __str__(self) -> str:
        suit_char = "♥♦♣♠"[self.suit]
        return f"{self.rank.value}{suit_char}"

    def __repr__(self) -> str:
        return str(self)


TWO_OF_CLUBS = Card(Suit.CLUBS, Rank.TWO)
QUEEN_OF_SPADES = Card(Suit.SPADES, Rank.QUEEN)


def build_deck() -> list[Card]:
    """Build a full 52-card deck, suit-major then rank order (not shuffled)."""
    deck: list[Card] = []
    for s in Suit:
        for r in Rank:
            deck.append(Card(s, r))
    return deck


def shuffle(deck: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a shuffled copy of ``deck``; the input is left untouched."""
    if rng is None:
        rng = random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def deal(deck: Sequence[Card], num_hands: int = 4) -> list[list[Card]]:
    """
    Deal round-robin: card i goes to hand i % num_hands.
    A 52-card deck gives 13 cards per hand; shorter decks differ by at most one.
    """
    hands: list[list[Card]] = [[] for _ in range(num_hands)]
    for i, card in enumerate(deck):
        hands[i % num_hands].append(card)
    return hands


def sort_hand(hand: Iterable[Card]) -> list[Card]:
    """New list sorted by suit (enum order), then ascending value."""
    return sorted(hand, key=lambda c: (int(c.suit), c.value))


def is_point_card(card: Card) -> bool:
    return card.suit == Suit.HEARTS or card == QUEEN_OF_SPADES


def card_points(card: Card) -> int:
    if card.suit == Suit.HEARTS:
        return HEART_POINTS
    if card == QUEEN_OF_SPADES:
        return QUEEN_OF_SPADES_POINTS
    return 0


def trick_points(trick: Iterable[Card]) -> int:
    """1 point per heart plus 13 for the Queen of Spades."""
    return sum(card_points(c) for c in trick)
