"""
Command-line interface for exercising the Hearts engine.

Usage examples (after installing in editable mode):

    hearts simulate --matches 50 --max-score 100 --seed 7 --output runs/sim.json
    hearts deal --seed 3
    hearts deal --seed 3 --json
"""
from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Optional

from . import __version__
from .flow import find_starting_player, deal_new_hand, initialize_match
from .persistence import match_state_to_dict, match_state_to_json
from .simulate import SEAT_IDS, SEAT_NAMES, SimulationConfig, run_simulation


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play full matches with random legal moves and summarize the results.",
    )
    parser.add_argument(
        "--matches",
        type=int,
        default=10,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--max-score",
        type=int,
        default=100,
        help="A match ends once any seat reaches this cumulative score.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for shuffles and move choice.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional JSON file for the summary.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    cfg = SimulationConfig(matches=args.matches, max_score=args.max_score, seed=args.seed)
    summary = run_simulation(cfg)

    for i, m in enumerate(summary.matches, start=1):
        print(
            f"[match {i}/{cfg.matches}] hands={m.hands} "
            f"scores={m.final_scores} winner={m.winner} moon_shots={m.moon_shots}",
            flush=True,
        )

    data = summary.to_dict()
    mean = ", ".join(f"{sid}={s:.1f}" for sid, s in zip(SEAT_IDS, data["mean_scores"]))
    print(f"Mean final scores: {mean}")
    print(f"Wins by seat: {data['wins_by_seat']}")
    print(f"Moon shots: {data['moon_shots']}")

    if args.output:
        out_file = Path(args.output)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        data["config"] = {"matches": cfg.matches, "max_score": cfg.max_score, "seed": cfg.seed}
        if summary.last_state is not None:
            data["final_match_state"] = match_state_to_dict(summary.last_state)
        with out_file.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        print(f"Saved summary to {out_file.resolve()}")


def _add_deal_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "deal",
        help="Deal one hand and print the four sorted hands.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the shuffle.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the dealt match state as a JSON snapshot instead of a table.",
    )
    parser.set_defaults(func=_cmd_deal)


def _cmd_deal(args: argparse.Namespace) -> None:
    state = initialize_match(list(SEAT_IDS), list(SEAT_NAMES))
    deal_new_hand(state, rng=random.Random(args.seed))
    if args.json:
        print(match_state_to_json(state))
        return
    for seat, player in enumerate(state.players):
        cards = " ".join(str(c) for c in player.hand)
        print(f"{seat} {player.name:<6} {cards}")
    print(f"Two of clubs: seat {find_starting_player(state)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hearts", description="Hearts engine CLI.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine phase transitions and hand scores.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_deal_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
