"""Tests for card and snapshot serialization."""
import json
import random

import pytest

from hearts.deck import Card, QUEEN_OF_SPADES, Rank, Suit, build_deck
from hearts.game import HeartsMatch
from hearts.persistence import (
    card_from_dict,
    card_to_dict,
    client_state_to_dict,
    match_state_from_dict,
    match_state_from_json,
    match_state_to_dict,
    match_state_to_json,
)
from hearts.simulate import _random_step

IDS = ["a", "b", "c", "d"]
NAMES = ["Ann", "Bob", "Cat", "Dan"]


def _mid_hand_match() -> HeartsMatch:
    match = HeartsMatch(IDS, NAMES, rng=random.Random(17))
    rng = random.Random(17)
    # 4 passing steps + 6 plays: second trick in progress
    for _ in range(10):
        _random_step(match, rng)
    return match


def test_card_to_dict():
    assert card_to_dict(QUEEN_OF_SPADES) == {"suit": "SPADES", "rank": "Q", "value": 12}
    assert card_to_dict(Card(Suit.HEARTS, Rank.TEN))["rank"] == "10"


def test_card_from_dict_recomputes_value():
    card = card_from_dict({"suit": "HEARTS", "rank": "A"})
    assert card == Card(Suit.HEARTS, Rank.ACE)
    assert card.value == 14
    for c in build_deck():
        assert card_from_dict(card_to_dict(c)) == c


@pytest.mark.parametrize(
    "payload",
    [
        {"suit": "hearts", "rank": "A"},
        {"suit": "STARS", "rank": "A"},
        {"suit": "HEARTS", "rank": "1"},
        {"suit": "HEARTS", "rank": 10},
        {"suit": "HEARTS", "rank": "A", "value": 99},
        {"rank": "A"},
        None,
        "QS",
        ["Q", "SPADES"],
    ],
)
def test_card_from_dict_rejects_bad_payload(payload):
    with pytest.raises(ValueError):
        card_from_dict(payload)


def test_match_state_round_trip_json():
    match = _mid_hand_match()
    state = match.get_game_state()
    restored = match_state_from_json(match_state_to_json(state))
    assert [p.hand for p in restored.players] == [p.hand for p in state.players]
    assert restored.current_trick == state.current_trick
    assert restored.trick_leader == state.trick_leader
    assert restored.scores == state.scores
    assert restored.tricks_played == state.tricks_played
    assert restored.is_first_trick == state.is_first_trick
    assert restored.hearts_broken == state.hearts_broken
    assert restored.last_trick == state.last_trick
    assert restored.taken == state.taken


def test_match_state_rejects_other_schema_version():
    d = match_state_to_dict(_mid_hand_match().get_game_state())
    d["schema_version"] = 99
    with pytest.raises(ValueError):
        match_state_from_dict(d)


def test_client_state_to_dict_is_json_and_private():
    match = _mid_hand_match()
    seat = match.get_current_player_index()
    d = client_state_to_dict(match.get_client_game_state(seat))
    json.dumps(d)
    assert d["phase"] == "PLAYING"
    assert d["seat"] == seat
    assert len(d["hand"]) == len(match.get_game_state().players[seat].hand)
    assert d["valid_moves"]
    assert all("hand" not in p for p in d["players"])
    assert d["last_trick"] is not None
