"""
Trick-taking: legal moves and trick winner.
Hearts rules: 2♣ opens the hand, no points on the first trick, hearts cannot
be led until broken, follow suit when possible, highest card of the led suit wins.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from .deck import Card, Suit, TWO_OF_CLUBS, is_point_card, trick_points


class TrickWinner(NamedTuple):
    winner_seat: int
    points: int


def has_suit(hand: Sequence[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def is_valid_play(
    card: Card,
    hand: Sequence[Card],
    current_trick: Sequence[Card],
    hearts_broken: bool,
    is_first_trick: bool,
) -> bool:
    """
    True if ``card`` may be played from ``hand`` onto ``current_trick``.
    Hand membership is not checked here (see flow.can_play_card).
    """
    if is_first_trick:
        if not current_trick:
            return card == TWO_OF_CLUBS
        # No exception for a hand holding only point cards
        if is_point_card(card):
            return False

    if not current_trick:
        if card.suit == Suit.HEARTS and not hearts_broken:
            # Forced lead: nothing but hearts left
            return all(c.suit == Suit.HEARTS for c in hand)
        return True

    led_suit = current_trick[0].suit
    if has_suit(hand, led_suit):
        return card.suit == led_suit
    return True


def legal_plays(
    hand: Sequence[Card],
    current_trick: Sequence[Card],
    hearts_broken: bool,
    is_first_trick: bool,
) -> list[Card]:
    """Cards of ``hand`` (in hand order) that may legally be played now."""
    return [
        c
        for c in hand
        if is_valid_play(c, hand, current_trick, hearts_broken, is_first_trick)
    ]


def determine_trick_winner(trick: Sequence[Card], trick_leader: int) -> TrickWinner:
    """
    Seat that wins the trick, plus the trick's points.
    trick: cards in play order, the first one played by ``trick_leader``.
    """
    if not trick:
        return TrickWinner(trick_leader, 0)
    led_suit = trick[0].suit
    best_pos = 0
    best_value = trick[0].value
    for pos, c in enumerate(trick[1:], start=1):
        if c.suit == led_suit and c.value > best_value:
            best_value = c.value
            best_pos = pos
    return TrickWinner((trick_leader + best_pos) % 4, trick_points(trick))
