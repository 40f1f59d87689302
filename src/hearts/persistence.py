"""
Match snapshot serialization for caches and transport.

Cards cross the boundary as canonical suit/rank symbols; ``value`` is always
recomputed from the rank and a mismatching client-supplied value is rejected.
The engine itself never writes these anywhere.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from .deck import Card, Rank, Suit
from .flow import NUM_SEATS, MatchState, Player, TrickRecord
from .game import ClientGameState

SCHEMA_VERSION = 1


def card_to_dict(card: Card) -> Dict[str, Any]:
    return {"suit": card.suit.name, "rank": card.rank.value, "value": card.value}


def card_from_dict(d: Dict[str, Any]) -> Card:
    """
    Parse a card payload. ``suit`` must be a Suit name ("HEARTS", ...), ``rank``
    a Rank symbol ("2".."10", "J", "Q", "K", "A"). ``value`` is optional.
    """
    if not isinstance(d, dict):
        raise ValueError(f"Card payload must be an object: {d!r}")
    suit_name = d.get("suit")
    rank_symbol = d.get("rank")
    if not isinstance(suit_name, str) or suit_name not in Suit.__members__:
        raise ValueError(f"Unknown suit: {suit_name!r}")
    try:
        rank = Rank(rank_symbol)
    except ValueError:
        raise ValueError(f"Unknown rank: {rank_symbol!r}") from None
    card = Card(Suit[suit_name], rank)
    if "value" in d and d["value"] != card.value:
        raise ValueError(f"Value {d['value']!r} does not match {card}")
    return card


def cards_to_list(cards: List[Card]) -> List[Dict[str, Any]]:
    return [card_to_dict(c) for c in cards]


def cards_from_list(items: List[Dict[str, Any]]) -> List[Card]:
    return [card_from_dict(d) for d in items]


def _trick_to_dict(trick: TrickRecord) -> Dict[str, Any]:
    return {
        "leader": trick.leader,
        "cards": cards_to_list(list(trick.cards)),
        "winner": trick.winner,
        "points": trick.points,
    }


def _trick_from_dict(d: Dict[str, Any]) -> TrickRecord:
    return TrickRecord(
        leader=int(d["leader"]),
        cards=tuple(cards_from_list(d["cards"])),
        winner=int(d["winner"]),
        points=int(d["points"]),
    )


def _player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "hand": cards_to_list(player.hand),
        "score": player.score,
    }


def _player_from_dict(d: Dict[str, Any]) -> Player:
    return Player(
        id=d["id"],
        name=d["name"],
        hand=cards_from_list(d.get("hand", [])),
        score=int(d.get("score", 0)),
    )


def match_state_to_dict(state: MatchState) -> Dict[str, Any]:
    """Serialize a MatchState to a JSON-compatible dict."""
    return {
        "schema_version": SCHEMA_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "players": [_player_to_dict(p) for p in state.players],
        "current_trick": cards_to_list(state.current_trick),
        "trick_leader": state.trick_leader,
        "hearts_broken": state.hearts_broken,
        "scores": dict(state.scores),
        "hand_number": state.hand_number,
        "is_first_trick": state.is_first_trick,
        "tricks_played": state.tricks_played,
        "taken": [cards_to_list(t) for t in state.taken],
        "last_trick": _trick_to_dict(state.last_trick) if state.last_trick else None,
    }


def match_state_from_dict(d: Dict[str, Any]) -> MatchState:
    """Restore a MatchState from match_state_to_dict output."""
    version = d.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version {version}")
    players = [_player_from_dict(p) for p in d["players"]]
    if len(players) != NUM_SEATS:
        raise ValueError(f"Expected {NUM_SEATS} players, got {len(players)}")
    taken = [cards_from_list(t) for t in d.get("taken", [[] for _ in range(NUM_SEATS)])]
    last_trick = d.get("last_trick")
    return MatchState(
        players=players,
        current_trick=cards_from_list(d.get("current_trick", [])),
        trick_leader=int(d.get("trick_leader", 0)),
        hearts_broken=bool(d.get("hearts_broken", False)),
        scores={k: int(v) for k, v in d["scores"].items()},
        hand_number=int(d.get("hand_number", 0)),
        is_first_trick=bool(d.get("is_first_trick", True)),
        tricks_played=int(d.get("tricks_played", 0)),
        taken=taken,
        last_trick=_trick_from_dict(last_trick) if last_trick else None,
    )


def match_state_to_json(state: MatchState) -> str:
    return json.dumps(match_state_to_dict(state), indent=2)


def match_state_from_json(s: str) -> MatchState:
    return match_state_from_dict(json.loads(s))


def client_state_to_dict(view: ClientGameState) -> Dict[str, Any]:
    """Outbound message body for one seat."""
    return {
        "seat": view.seat,
        "phase": view.phase.value,
        "hand_number": view.hand_number,
        "passing_direction": view.passing_direction.value if view.passing_direction else None,
        "current_player_index": view.current_player_index,
        "trick_leader": view.trick_leader,
        "current_trick": cards_to_list(view.current_trick),
        "hearts_broken": view.hearts_broken,
        "tricks_played": view.tricks_played,
        "players": [
            {
                "seat": p.seat,
                "id": p.id,
                "name": p.name,
                "card_count": p.card_count,
                "score": p.score,
                "hand_points": p.hand_points,
            }
            for p in view.players
        ],
        "hand": cards_to_list(view.hand),
        "valid_moves": cards_to_list(view.valid_moves),
        "passing_selection": (
            cards_to_list(view.passing_selection) if view.passing_selection is not None else None
        ),
        "last_trick": _trick_to_dict(view.last_trick) if view.last_trick else None,
        "winner": view.winner,
    }


__all__ = [
    "card_to_dict",
    "card_from_dict",
    "cards_to_list",
    "cards_from_list",
    "match_state_to_dict",
    "match_state_from_dict",
    "match_state_to_json",
    "match_state_from_json",
    "client_state_to_dict",
    "SCHEMA_VERSION",
]
