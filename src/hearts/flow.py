"""
Match state and the transition functions that drive it:
initialize → deal → (pass) → play/finish tricks ×13 → score → next hand.

Functions mutate the given MatchState in place and return it. Illegal game
actions return None; configuration errors and broken invariants raise.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

from .deck import Card, Suit, TWO_OF_CLUBS, build_deck, deal, shuffle, sort_hand
from .play import determine_trick_winner, is_valid_play

logger = logging.getLogger(__name__)

NUM_SEATS = 4
CARDS_PER_HAND = 13
TRICKS_PER_HAND = 13


class InvalidPlayerCount(ValueError):
    """Hearts needs exactly 4 distinct seat ids and 4 names."""


class InvariantViolation(RuntimeError):
    """Engine state is inconsistent (internal bug, not a player error)."""


@dataclass
class Player:
    id: str
    name: str
    hand: list[Card] = field(default_factory=list)
    score: int = 0  # points taken in the current hand


class TrickRecord(NamedTuple):
    leader: int
    cards: tuple[Card, ...]
    winner: int
    points: int


@dataclass
class MatchState:
    """Mutable state of one match; reused across hands."""

    players: list[Player]
    current_trick: list[Card] = field(default_factory=list)
    trick_leader: int = 0
    hearts_broken: bool = False
    scores: dict[str, int] = field(default_factory=dict)
    hand_number: int = 0
    is_first_trick: bool = True
    tricks_played: int = 0
    # Cards won by each seat in the current hand
    taken: list[list[Card]] = field(default_factory=lambda: [[] for _ in range(NUM_SEATS)])
    last_trick: TrickRecord | None = None


def initialize_match(seat_ids: Sequence[str], seat_names: Sequence[str]) -> MatchState:
    """Fresh match state with empty hands and zero scores."""
    if len(seat_ids) != NUM_SEATS or len(seat_names) != NUM_SEATS:
        raise InvalidPlayerCount(
            f"Hearts requires exactly {NUM_SEATS} players "
            f"(got {len(seat_ids)} ids, {len(seat_names)} names)"
        )
    if len(set(seat_ids)) != NUM_SEATS:
        raise InvalidPlayerCount(f"Seat ids must be distinct: {list(seat_ids)}")
    players = [Player(id=pid, name=name) for pid, name in zip(seat_ids, seat_names)]
    return MatchState(players=players, scores={pid: 0 for pid in seat_ids})


def deal_new_hand(state: MatchState, rng: random.Random | None = None) -> MatchState:
    """Shuffle a new deck, deal sorted hands, reset the per-hand fields."""
    hands = deal(shuffle(build_deck(), rng=rng), NUM_SEATS)
    for player, hand in zip(state.players, hands):
        player.hand = sort_hand(hand)
        player.score = 0
    state.current_trick = []
    state.hearts_broken = False
    state.is_first_trick = True
    state.tricks_played = 0
    state.taken = [[] for _ in range(NUM_SEATS)]
    state.last_trick = None
    return state


def start_new_hand(state: MatchState, rng: random.Random | None = None) -> MatchState:
    state.hand_number += 1
    return deal_new_hand(state, rng=rng)


def find_starting_player(state: MatchState) -> int:
    """Seat holding the two of clubs."""
    for seat, player in enumerate(state.players):
        if TWO_OF_CLUBS in player.hand:
            return seat
    raise InvariantViolation("No seat holds the two of clubs")


def current_turn(state: MatchState) -> int:
    return (state.trick_leader + len(state.current_trick)) % NUM_SEATS


def play_card(state: MatchState, seat: int, card: Card) -> MatchState | None:
    """
    Apply ``card`` from ``seat`` to the current trick. Turn order is not
    checked here; see can_play_card.
    """
    player = state.players[seat]
    if card not in player.hand:
        return None
    if not is_valid_play(
        card,
        player.hand,
        state.current_trick,
        state.hearts_broken,
        state.is_first_trick,
    ):
        return None
    player.hand.remove(card)
    state.current_trick.append(card)
    if card.suit == Suit.HEARTS and not state.hearts_broken:
        state.hearts_broken = True
        logger.debug("Hearts broken by seat %d (%s)", seat, card)
    return state


def finish_trick(state: MatchState) -> MatchState:
    """Resolve the current trick: credit points, winner leads next."""
    winner = determine_trick_winner(state.current_trick, state.trick_leader)
    trick_cards = tuple(state.current_trick)
    state.players[winner.winner_seat].score += winner.points
    state.taken[winner.winner_seat].extend(trick_cards)
    state.last_trick = TrickRecord(
        leader=state.trick_leader,
        cards=trick_cards,
        winner=winner.winner_seat,
        points=winner.points,
    )
    state.trick_leader = winner.winner_seat
    state.current_trick = []
    state.tricks_played += 1
    state.is_first_trick = False
    return state


def is_hand_complete(state: MatchState) -> bool:
    return state.tricks_played == TRICKS_PER_HAND


def can_play_card(state: MatchState, seat: int, card: Card) -> bool:
    """Turn order, hand membership and the Hearts play rules combined."""
    if seat != current_turn(state):
        return False
    player = state.players[seat]
    if card not in player.hand:
        return False
    return is_valid_play(
        card,
        player.hand,
        state.current_trick,
        state.hearts_broken,
        state.is_first_trick,
    )
