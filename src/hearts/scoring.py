"""
Score calculation at the end of a hand.
26 points per hand (13 hearts + Queen of Spades 13). Taking all 26 is
"shooting the moon": the shooter scores 0 and everyone else 26.
Lowest cumulative score wins once someone reaches the limit.
"""
from __future__ import annotations

import logging
from typing import NamedTuple

from .deck import TOTAL_POINTS
from .flow import MatchState

logger = logging.getLogger(__name__)


class HandResult(NamedTuple):
    """Per-seat scores of one hand, before and after the moon rule."""

    hand_number: int
    raw: tuple[int, ...]
    applied: tuple[int, ...]
    moon_shooter: int | None


def apply_moon_rule(raw: tuple[int, ...]) -> tuple[tuple[int, ...], int | None]:
    """Return (applied scores, shooter seat or None)."""
    for seat, points in enumerate(raw):
        if points == TOTAL_POINTS:
            applied = tuple(0 if s == seat else TOTAL_POINTS for s in range(len(raw)))
            return applied, seat
    return raw, None


def score_hand(state: MatchState) -> HandResult:
    """Add this hand's points (moon rule applied) to the cumulative scores."""
    raw = tuple(p.score for p in state.players)
    applied, shooter = apply_moon_rule(raw)
    for player, points in zip(state.players, applied):
        state.scores[player.id] += points
    if shooter is not None:
        logger.info(
            "Hand %d: %s shot the moon", state.hand_number, state.players[shooter].name
        )
    return HandResult(
        hand_number=state.hand_number,
        raw=raw,
        applied=applied,
        moon_shooter=shooter,
    )


def is_game_over(state: MatchState, max_score: int) -> bool:
    return any(score >= max_score for score in state.scores.values())


def get_winner(state: MatchState) -> str:
    """Seat id with the lowest cumulative score; ties go to the lower seat."""
    best_id = state.players[0].id
    best_score = state.scores[best_id]
    for player in state.players[1:]:
        if state.scores[player.id] < best_score:
            best_id = player.id
            best_score = state.scores[player.id]
    return best_id
