"""
Card passing before each hand.
Direction rotates with the hand number: left, right, across, hold (no pass).
Each seat picks 3 cards from its own hand; once all 4 have picked, the cards
move together and every hand is re-sorted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .deck import Card, sort_hand
from .flow import CARDS_PER_HAND, NUM_SEATS, InvariantViolation, MatchState

CARDS_TO_PASS = 3


class PassingDirection(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    ACROSS = "ACROSS"
    HOLD = "HOLD"

    @property
    def offset(self) -> int:
        """Seats between giver and receiver: LEFT 1, RIGHT 3, ACROSS 2, HOLD 0."""
        return _OFFSETS[self]


_OFFSETS = {
    PassingDirection.LEFT: 1,
    PassingDirection.RIGHT: NUM_SEATS - 1,
    PassingDirection.ACROSS: 2,
    PassingDirection.HOLD: 0,
}

# hand_number % 4 -> direction
_ROTATION = (
    PassingDirection.LEFT,
    PassingDirection.RIGHT,
    PassingDirection.ACROSS,
    PassingDirection.HOLD,
)


def passing_direction_for(hand_number: int) -> PassingDirection:
    return _ROTATION[hand_number % 4]


@dataclass
class PassingState:
    """Selections for one hand, one slot per seat (None until the seat picks)."""

    direction: PassingDirection
    selected_cards: list[list[Card] | None] = field(
        default_factory=lambda: [None] * NUM_SEATS
    )
    is_complete: bool = False


def new_passing_state(hand_number: int) -> PassingState:
    return PassingState(direction=passing_direction_for(hand_number))


def validate_passing_cards(cards: Sequence[Card], hand: Sequence[Card]) -> bool:
    """Exactly 3 distinct cards, all from ``hand``."""
    if not isinstance(cards, (list, tuple)):
        return False
    if not all(isinstance(c, Card) for c in cards):
        return False
    if len(cards) != CARDS_TO_PASS:
        return False
    if len(set(cards)) != CARDS_TO_PASS:
        return False
    return all(c in hand for c in cards)


def has_player_selected(passing_state: PassingState, seat: int) -> bool:
    cards = passing_state.selected_cards[seat]
    return cards is not None and len(cards) == CARDS_TO_PASS


def players_ready_to_pass(passing_state: PassingState) -> int:
    return sum(1 for seat in range(NUM_SEATS) if has_player_selected(passing_state, seat))


def select_cards_for_passing(
    state: MatchState,
    passing_state: PassingState,
    seat: int,
    cards: Sequence[Card],
) -> PassingState | None:
    """
    Record ``seat``'s 3 cards. Returns the updated PassingState, or None if the
    hand is a hold hand, the selection is malformed, or the seat already picked.
    Hands are not touched until execute_passing_phase.
    """
    if passing_state.direction == PassingDirection.HOLD:
        return None
    if has_player_selected(passing_state, seat):
        return None
    if not validate_passing_cards(cards, state.players[seat].hand):
        return None

    passing_state.selected_cards[seat] = list(cards)
    passing_state.is_complete = players_ready_to_pass(passing_state) == NUM_SEATS
    return passing_state


def source_seat(dest: int, direction: PassingDirection) -> int:
    """Seat whose selection ends up in ``dest``'s hand."""
    return (dest - direction.offset + NUM_SEATS) % NUM_SEATS


def execute_passing_phase(state: MatchState, passing_state: PassingState) -> MatchState | None:
    """
    Move every selection to its receiver and re-sort all hands.
    Hold hands are a no-op; an incomplete selection returns None.
    """
    if passing_state.direction == PassingDirection.HOLD:
        return state
    if not passing_state.is_complete:
        return None

    new_hands: list[list[Card]] = []
    for dest, player in enumerate(state.players):
        given = passing_state.selected_cards[dest] or []
        kept = [c for c in player.hand if c not in given]
        received = passing_state.selected_cards[source_seat(dest, passing_state.direction)] or []
        new_hands.append(kept + list(received))

    for seat, hand in enumerate(new_hands):
        if len(hand) != CARDS_PER_HAND:
            raise InvariantViolation(
                f"Seat {seat} would hold {len(hand)} cards after passing"
            )

    for player, hand in zip(state.players, new_hands):
        player.hand = sort_hand(hand)
    return state
