"""Tests for the HeartsMatch orchestrator."""
import random

import pytest

from hearts.deck import TWO_OF_CLUBS
from hearts.flow import InvalidPlayerCount
from hearts.game import HeartsMatch, MatchConfig, Phase
from hearts.passing import PassingDirection
from hearts.simulate import _random_step

IDS = ["a", "b", "c", "d"]
NAMES = ["Ann", "Bob", "Cat", "Dan"]


def _match(seed: int = 0, max_score: int = 100) -> HeartsMatch:
    return HeartsMatch(IDS, NAMES, config=MatchConfig(max_score=max_score), rng=random.Random(seed))


def _hand(match: HeartsMatch, seat: int):
    view = match.get_client_game_state(seat)
    assert view is not None
    return view.hand


def _pass_all(match: HeartsMatch):
    picks = [_hand(match, s)[:3] for s in range(4)]
    for seat in range(4):
        assert match.select_cards_for_passing(seat, picks[seat])
    return picks


def _total_cards(match: HeartsMatch) -> int:
    state = match.get_game_state()
    return (
        sum(len(p.hand) for p in state.players)
        + len(state.current_trick)
        + sum(len(t) for t in state.taken)
    )


def test_constructor_deals_and_starts_passing():
    match = _match()
    assert match.get_current_phase() == Phase.PASSING
    assert match.get_current_passing_direction() == PassingDirection.LEFT
    assert match.get_current_player_index() == -1
    state = match.get_game_state()
    assert state.hand_number == 0
    assert [p.id for p in state.players] == IDS
    assert all(len(p.hand) == 13 for p in state.players)


def test_constructor_rejects_bad_configuration():
    with pytest.raises(InvalidPlayerCount):
        HeartsMatch(IDS, NAMES[:3])
    with pytest.raises(InvalidPlayerCount):
        HeartsMatch(IDS + ["e"], NAMES + ["Eve"])
    with pytest.raises(InvalidPlayerCount):
        HeartsMatch(["a", "a"], ["Ann", "Ann"])


def test_lobby_waits_for_four_players():
    match = HeartsMatch(rng=random.Random(1))
    assert match.get_current_phase() == Phase.WAITING_FOR_PLAYERS
    assert match.get_game_state() is None
    assert match.get_client_game_state(0) is None
    assert match.add_player("a", "Ann") == 0
    assert match.add_player("a", "Again") is None
    assert match.add_player("b", "Bob") == 1
    assert match.add_player("c", "Cat") == 2
    assert match.get_current_phase() == Phase.WAITING_FOR_PLAYERS
    assert match.add_player("d", "Dan") == 3
    assert match.get_current_phase() == Phase.PASSING
    assert match.add_player("e", "Eve") is None


def test_partial_construction_then_fill():
    match = HeartsMatch(IDS[:2], NAMES[:2], rng=random.Random(2))
    assert match.get_current_phase() == Phase.WAITING_FOR_PLAYERS
    match.add_player("c", "Cat")
    match.add_player("d", "Dan")
    assert match.get_current_phase() == Phase.PASSING
    assert [p.name for p in match.get_game_state().players] == NAMES


def test_passing_rejections():
    match = _match()
    hand0 = _hand(match, 0)
    assert not match.select_cards_for_passing(0, hand0[:2])
    assert not match.select_cards_for_passing(0, [hand0[0], hand0[1], _hand(match, 1)[0]])
    assert not match.select_cards_for_passing(7, hand0[:3])
    assert not match.select_cards_for_passing(0, None)
    assert not match.select_cards_for_passing(0, [{"suit": "CLUBS", "rank": "2"}] * 3)
    assert not match.has_player_selected_passing_cards(0)
    assert match.select_cards_for_passing(0, hand0[:3])
    assert not match.select_cards_for_passing(0, hand0[3:6])
    assert match.has_player_selected_passing_cards(0)
    assert not match.has_player_selected_passing_cards(1)
    assert match.get_players_ready_to_pass() == 1


def test_passing_left_round_trip_then_playing():
    match = _match(seed=5)
    picks = _pass_all(match)
    assert match.get_current_phase() == Phase.PLAYING
    assert match.get_current_passing_direction() is None
    for seat in range(4):
        receiver = _hand(match, (seat + 1) % 4)
        assert all(c in receiver for c in picks[seat])
        assert len(_hand(match, seat)) == 13
    starter = match.get_current_player_index()
    assert TWO_OF_CLUBS in _hand(match, starter)


def test_no_play_during_passing():
    match = _match()
    for seat in range(4):
        if TWO_OF_CLUBS in _hand(match, seat):
            assert not match.play_card(seat, TWO_OF_CLUBS)
    assert match.get_valid_moves(0) == []


def test_turn_order_and_valid_moves():
    match = _match(seed=8)
    _pass_all(match)
    starter = match.get_current_player_index()
    assert match.get_valid_moves(starter) == [TWO_OF_CLUBS]
    other = (starter + 1) % 4
    assert match.get_valid_moves(other) == []
    assert not match.play_card(other, _hand(match, other)[0])
    assert match.play_card(starter, TWO_OF_CLUBS)
    assert match.get_current_player_index() == other
    assert not match.play_card(starter, _hand(match, starter)[0])


def test_illegal_card_rejected_without_state_change():
    match = _match(seed=9)
    _pass_all(match)
    starter = match.get_current_player_index()
    not_two = [c for c in _hand(match, starter) if c != TWO_OF_CLUBS][0]
    before = match.get_game_state()
    assert not match.play_card(starter, not_two)
    after = match.get_game_state()
    assert after.current_trick == before.current_trick
    assert [p.hand for p in after.players] == [p.hand for p in before.players]


def test_client_state_hides_other_hands():
    match = _match(seed=3)
    _pass_all(match)
    starter = match.get_current_player_index()
    view = match.get_client_game_state(starter)
    assert view.seat == starter
    assert view.phase == Phase.PLAYING
    assert view.hand == match.get_game_state().players[starter].hand
    assert view.valid_moves == [TWO_OF_CLUBS]
    assert [p.card_count for p in view.players] == [13, 13, 13, 13]
    assert not hasattr(view.players[0], "hand")
    other = match.get_client_game_state((starter + 2) % 4)
    assert other.valid_moves == []
    assert TWO_OF_CLUBS not in other.hand
    assert match.get_client_game_state(4) is None


def test_client_state_shows_own_passing_selection():
    match = _match()
    picks = _hand(match, 1)[:3]
    match.select_cards_for_passing(1, picks)
    assert match.get_client_game_state(1).passing_selection == picks
    assert match.get_client_game_state(2).passing_selection is None


def test_game_state_is_a_snapshot():
    match = _match()
    snap = match.get_game_state()
    snap.players[0].hand.clear()
    assert len(_hand(match, 0)) == 13


def test_cards_conserved_through_hands():
    match = _match(seed=21)
    rng = random.Random(21)
    seen_hands = set()
    while match.get_current_phase() != Phase.FINISHED:
        assert _total_cards(match) == 52
        seen_hands.add(match.get_game_state().hand_number)
        _random_step(match, rng)
        if len(seen_hands) > 2:
            break


def test_hold_hand_skips_passing():
    match = _match(seed=4, max_score=1000)
    rng = random.Random(4)
    while match.get_game_state().hand_number < 3:
        _random_step(match, rng)
    assert match.get_game_state().hand_number == 3
    assert match.get_current_phase() == Phase.PLAYING
    assert match.get_current_passing_direction() is None
    assert not match.select_cards_for_passing(0, _hand(match, 0)[:3])
    assert TWO_OF_CLUBS in _hand(match, match.get_current_player_index())
    assert len(match.get_hand_results()) == 3


def test_full_match_finishes_with_winner(caplog):
    match = _match(seed=12, max_score=60)
    rng = random.Random(12)
    phases = set()
    steps = 0
    with caplog.at_level("DEBUG", logger="hearts.game"):
        while match.get_current_phase() != Phase.FINISHED:
            phases.add(match.get_current_phase())
            assert match.get_winner() is None
            _random_step(match, rng)
            steps += 1
            assert steps < 10_000

    # SCORING is transient: entered and left inside the hand's last play_card
    assert phases == {Phase.PASSING, Phase.PLAYING}
    assert "Phase PLAYING -> SCORING" in caplog.text
    assert "Phase SCORING -> PASSING" in caplog.text
    assert "Phase SCORING -> FINISHED" in caplog.text
    state = match.get_game_state()
    assert max(state.scores.values()) >= 60
    winner = match.get_winner()
    assert state.scores[winner] == min(state.scores.values())
    results = match.get_hand_results()
    assert sum(sum(r.applied) for r in results) == sum(state.scores.values())
    for r in results:
        assert sum(r.raw) == 26

    # Nothing moves once finished
    assert match.get_current_player_index() == -1
    for seat in range(4):
        assert match.get_valid_moves(seat) == []
        for card in _hand(match, seat):
            assert not match.play_card(seat, card)
        assert not match.select_cards_for_passing(seat, _hand(match, seat)[:3])
    assert match.get_game_state().scores == state.scores
    assert match.get_client_game_state(0).winner == winner
