"""
Match orchestration: one HeartsMatch owns one MatchState, the current
PassingState and the phase, and exposes the call surface used by a session
layer (pass selection, card play, valid moves, per-seat views).

Phases: WAITING_FOR_PLAYERS → INITIALIZING → PASSING ⇄ PLAYING → SCORING →
PASSING | PLAYING (next hand) | FINISHED.

Not thread-safe: callers must serialize every call on a given instance.
"""
from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .deck import Card
from .flow import (
    NUM_SEATS,
    InvalidPlayerCount,
    MatchState,
    TrickRecord,
    can_play_card,
    deal_new_hand,
    find_starting_player,
    finish_trick,
    initialize_match,
    is_hand_complete,
    play_card,
    start_new_hand,
)
from .passing import (
    PassingDirection,
    PassingState,
    execute_passing_phase,
    has_player_selected,
    new_passing_state,
    players_ready_to_pass,
    select_cards_for_passing,
)
from .play import legal_plays
from .scoring import HandResult, get_winner, is_game_over, score_hand

logger = logging.getLogger(__name__)


class Phase(Enum):
    WAITING_FOR_PLAYERS = "WAITING_FOR_PLAYERS"
    INITIALIZING = "INITIALIZING"
    PASSING = "PASSING"
    PLAYING = "PLAYING"
    SCORING = "SCORING"
    FINISHED = "FINISHED"


@dataclass
class MatchConfig:
    """Configuration for a single match."""

    max_score: int = 100
    # Used to build the shuffling rng when none is injected
    seed: int | None = None


@dataclass
class SeatView:
    """Public information about one seat."""

    seat: int
    id: str
    name: str
    card_count: int
    score: int  # cumulative
    hand_points: int  # taken so far in this hand


@dataclass
class ClientGameState:
    """What one seat is allowed to see."""

    seat: int
    phase: Phase
    hand_number: int
    passing_direction: PassingDirection | None
    current_player_index: int
    trick_leader: int
    current_trick: list[Card]
    hearts_broken: bool
    tricks_played: int
    players: list[SeatView]
    hand: list[Card]
    valid_moves: list[Card] = field(default_factory=list)
    passing_selection: list[Card] | None = None
    last_trick: TrickRecord | None = None
    winner: str | None = None


def _is_seat(seat: object) -> bool:
    return isinstance(seat, int) and not isinstance(seat, bool) and 0 <= seat < NUM_SEATS


class HeartsMatch:
    """
    Stateful 4-seat Hearts match.

    Usage:
        match = HeartsMatch(["a", "b", "c", "d"], ["Ann", "Bob", "Cat", "Dan"])
        match.select_cards_for_passing(0, cards)
        match.play_card(seat, card)

    Constructed with fewer than 4 seats, the match waits in WAITING_FOR_PLAYERS
    until ``add_player`` fills the table.
    """

    def __init__(
        self,
        seat_ids: Sequence[str] = (),
        seat_names: Sequence[str] = (),
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if len(seat_ids) != len(seat_names):
            raise InvalidPlayerCount(
                f"Got {len(seat_ids)} seat ids but {len(seat_names)} names"
            )
        if len(seat_ids) > NUM_SEATS:
            raise InvalidPlayerCount(f"Hearts seats at most {NUM_SEATS} players")
        if len(set(seat_ids)) != len(seat_ids):
            raise InvalidPlayerCount(f"Seat ids must be distinct: {list(seat_ids)}")

        self.config = config or MatchConfig()
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self._seat_ids: list[str] = list(seat_ids)
        self._seat_names: list[str] = list(seat_names)
        self._state: MatchState | None = None
        self._passing_state: PassingState | None = None
        self._phase = Phase.WAITING_FOR_PLAYERS
        self._current_player_index = -1
        self._hand_results: list[HandResult] = []

        if len(self._seat_ids) == NUM_SEATS:
            self._start_match()

    # ---- lobby ----

    def add_player(self, seat_id: str, name: str) -> int | None:
        """Seat a player while waiting; returns the seat index or None."""
        if self._phase != Phase.WAITING_FOR_PLAYERS:
            return None
        if seat_id in self._seat_ids:
            return None
        self._seat_ids.append(seat_id)
        self._seat_names.append(name)
        seat = len(self._seat_ids) - 1
        logger.debug("Seat %d taken by %s", seat, seat_id)
        if len(self._seat_ids) == NUM_SEATS:
            self._start_match()
        return seat

    # ---- phase transitions ----

    def _set_phase(self, phase: Phase) -> None:
        logger.debug("Phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase

    def _start_match(self) -> None:
        self._set_phase(Phase.INITIALIZING)
        self._state = initialize_match(self._seat_ids, self._seat_names)
        deal_new_hand(self._state, rng=self._rng)
        self._begin_hand()

    def _begin_hand(self) -> None:
        assert self._state is not None
        if self._state.hand_number % 4 != 3:
            self._passing_state = new_passing_state(self._state.hand_number)
            self._current_player_index = -1
            self._set_phase(Phase.PASSING)
        else:
            self._start_playing_phase()

    def _start_playing_phase(self) -> None:
        assert self._state is not None
        self._passing_state = None
        starter = find_starting_player(self._state)
        self._state.trick_leader = starter
        self._current_player_index = starter
        self._set_phase(Phase.PLAYING)

    def _score_hand(self) -> None:
        assert self._state is not None
        result = score_hand(self._state)
        self._hand_results.append(result)
        logger.info(
            "Hand %d scored: %s -> totals %s",
            result.hand_number,
            list(result.applied),
            [self._state.scores[p.id] for p in self._state.players],
        )
        if is_game_over(self._state, self.config.max_score):
            self._current_player_index = -1
            self._set_phase(Phase.FINISHED)
            logger.info("Match finished, winner %s", get_winner(self._state))
        else:
            start_new_hand(self._state, rng=self._rng)
            self._begin_hand()

    # ---- actions ----

    def select_cards_for_passing(self, seat: int, cards: Sequence[Card]) -> bool:
        if self._phase != Phase.PASSING or self._passing_state is None or not _is_seat(seat):
            return False
        if not isinstance(cards, (list, tuple)):
            return False
        assert self._state is not None
        updated = select_cards_for_passing(self._state, self._passing_state, seat, list(cards))
        if updated is None:
            logger.debug("Rejected passing selection from seat %d: %r", seat, cards)
            return False
        self._passing_state = updated

        if updated.is_complete:
            if execute_passing_phase(self._state, updated) is None:
                return False
            self._start_playing_phase()
        return True

    def play_card(self, seat: int, card: Card) -> bool:
        if self._phase != Phase.PLAYING or not _is_seat(seat):
            return False
        if seat != self._current_player_index:
            return False
        assert self._state is not None
        if not can_play_card(self._state, seat, card) or play_card(self._state, seat, card) is None:
            logger.debug("Rejected play %s from seat %d", card, seat)
            return False

        if len(self._state.current_trick) == NUM_SEATS:
            finish_trick(self._state)
            if is_hand_complete(self._state):
                self._set_phase(Phase.SCORING)
                self._score_hand()
            else:
                self._current_player_index = self._state.trick_leader
        else:
            self._current_player_index = (self._current_player_index + 1) % NUM_SEATS
        return True

    # ---- queries ----

    def get_current_phase(self) -> Phase:
        return self._phase

    def get_current_player_index(self) -> int:
        return self._current_player_index

    def get_current_passing_direction(self) -> PassingDirection | None:
        if self._passing_state is None:
            return None
        return self._passing_state.direction

    def has_player_selected_passing_cards(self, seat: int) -> bool:
        if self._passing_state is None or not _is_seat(seat):
            return False
        return has_player_selected(self._passing_state, seat)

    def get_players_ready_to_pass(self) -> int:
        if self._passing_state is None:
            return 0
        return players_ready_to_pass(self._passing_state)

    def get_winner(self) -> str | None:
        if self._phase != Phase.FINISHED or self._state is None:
            return None
        return get_winner(self._state)

    def get_hand_results(self) -> list[HandResult]:
        return list(self._hand_results)

    def get_valid_moves(self, seat: int) -> list[Card]:
        if self._phase != Phase.PLAYING or not _is_seat(seat):
            return []
        if seat != self._current_player_index:
            return []
        assert self._state is not None
        return legal_plays(
            self._state.players[seat].hand,
            self._state.current_trick,
            self._state.hearts_broken,
            self._state.is_first_trick,
        )

    def get_game_state(self) -> MatchState | None:
        """Full snapshot (every hand visible). Server-side use only."""
        if self._state is None:
            return None
        return copy.deepcopy(self._state)

    def get_client_game_state(self, seat: int) -> ClientGameState | None:
        """Projection for ``seat``: own hand only, card counts for the others."""
        if self._state is None or not _is_seat(seat):
            return None
        state = self._state
        players = [
            SeatView(
                seat=i,
                id=p.id,
                name=p.name,
                card_count=len(p.hand),
                score=state.scores[p.id],
                hand_points=p.score,
            )
            for i, p in enumerate(state.players)
        ]
        selection = None
        if self._passing_state is not None:
            own = self._passing_state.selected_cards[seat]
            selection = list(own) if own is not None else None
        return ClientGameState(
            seat=seat,
            phase=self._phase,
            hand_number=state.hand_number,
            passing_direction=self.get_current_passing_direction(),
            current_player_index=self._current_player_index,
            trick_leader=state.trick_leader,
            current_trick=list(state.current_trick),
            hearts_broken=state.hearts_broken,
            tricks_played=state.tricks_played,
            players=players,
            hand=list(state.players[seat].hand),
            valid_moves=self.get_valid_moves(seat),
            passing_selection=selection,
            last_trick=state.last_trick,
            winner=self.get_winner(),
        )
