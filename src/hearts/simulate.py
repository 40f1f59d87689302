"""
Self-play harness: drive HeartsMatch end to end with uniformly random legal
calls (random 3-card passes, random valid moves). Used to exercise the engine
and collect simple aggregate numbers; there is no strategy here.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .flow import MatchState
from .game import HeartsMatch, MatchConfig, Phase
from .passing import CARDS_TO_PASS

SEAT_IDS = ("P0", "P1", "P2", "P3")
SEAT_NAMES = ("North", "East", "South", "West")


@dataclass
class SimulationConfig:
    """Configuration for a batch of random matches."""

    matches: int = 10
    max_score: int = 100
    seed: int = 0
    # Guard against a stuck engine; a match needs far fewer calls
    max_steps: int = 100_000


@dataclass
class MatchSummary:
    final_scores: List[int]
    winner: str
    hands: int
    moon_shots: int
    steps: int


@dataclass
class SimulationSummary:
    matches: List[MatchSummary] = field(default_factory=list)
    # Final snapshot of the most recent match
    last_state: MatchState | None = None

    def wins_by_seat(self) -> Dict[str, int]:
        wins = {sid: 0 for sid in SEAT_IDS}
        for m in self.matches:
            wins[m.winner] += 1
        return wins

    def mean_scores(self) -> List[float]:
        if not self.matches:
            return [0.0] * len(SEAT_IDS)
        n = float(len(self.matches))
        return [sum(m.final_scores[i] for m in self.matches) / n for i in range(len(SEAT_IDS))]

    def to_dict(self) -> Dict[str, Any]:
        hands = [m.hands for m in self.matches]
        return {
            "matches": len(self.matches),
            "wins_by_seat": self.wins_by_seat(),
            "mean_scores": self.mean_scores(),
            "hands_min": min(hands) if hands else 0,
            "hands_mean": sum(hands) / len(hands) if hands else 0.0,
            "hands_max": max(hands) if hands else 0,
            "moon_shots": sum(m.moon_shots for m in self.matches),
        }


def _random_step(match: HeartsMatch, rng: random.Random) -> None:
    phase = match.get_current_phase()
    if phase == Phase.PASSING:
        for seat in range(len(SEAT_IDS)):
            if match.has_player_selected_passing_cards(seat):
                continue
            view = match.get_client_game_state(seat)
            assert view is not None
            cards = rng.sample(view.hand, CARDS_TO_PASS)
            if not match.select_cards_for_passing(seat, cards):
                raise RuntimeError(f"Engine rejected a valid pass from seat {seat}")
            return
    elif phase == Phase.PLAYING:
        seat = match.get_current_player_index()
        legal = match.get_valid_moves(seat)
        if not legal:
            raise RuntimeError(f"No legal plays available for seat {seat}")
        if not match.play_card(seat, rng.choice(legal)):
            raise RuntimeError(f"Engine rejected a legal play from seat {seat}")
    else:
        raise RuntimeError(f"Cannot act in phase {phase.value}")


def run_random_match(
    max_score: int = 100,
    rng: random.Random | None = None,
    max_steps: int = 100_000,
) -> tuple[HeartsMatch, MatchSummary]:
    """Play one full match with random legal calls; returns the match and a summary."""
    if rng is None:
        rng = random.Random()
    match = HeartsMatch(
        list(SEAT_IDS),
        list(SEAT_NAMES),
        config=MatchConfig(max_score=max_score),
        rng=rng,
    )
    steps = 0
    while match.get_current_phase() != Phase.FINISHED:
        if steps >= max_steps:
            raise RuntimeError(f"Match did not finish within {max_steps} steps")
        _random_step(match, rng)
        steps += 1

    state = match.get_game_state()
    assert state is not None
    results = match.get_hand_results()
    winner = match.get_winner()
    assert winner is not None
    summary = MatchSummary(
        final_scores=[state.scores[sid] for sid in SEAT_IDS],
        winner=winner,
        hands=len(results),
        moon_shots=sum(1 for r in results if r.moon_shooter is not None),
        steps=steps,
    )
    return match, summary


def run_simulation(cfg: SimulationConfig) -> SimulationSummary:
    rng = random.Random(cfg.seed)
    summary = SimulationSummary()
    for _ in range(cfg.matches):
        match, m = run_random_match(cfg.max_score, rng=rng, max_steps=cfg.max_steps)
        summary.matches.append(m)
        summary.last_state = match.get_game_state()
    return summary


__all__ = [
    "SimulationConfig",
    "MatchSummary",
    "SimulationSummary",
    "run_random_match",
    "run_simulation",
]
