"""Hearts game engine (4 seats, standard passing rotation, shoot the moon)."""

__version__ = "0.1.0"

from .deck import (
    Card,
    Rank,
    Suit,
    QUEEN_OF_SPADES,
    TWO_OF_CLUBS,
    build_deck,
    deal,
    is_point_card,
    rank_value,
    shuffle,
    sort_hand,
    trick_points,
)
from .play import TrickWinner, determine_trick_winner, is_valid_play, legal_plays
from .flow import (
    InvalidPlayerCount,
    InvariantViolation,
    MatchState,
    Player,
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
    new_passing_state,
    passing_direction_for,
    select_cards_for_passing,
)
from .scoring import HandResult, get_winner, is_game_over, score_hand
from .game import ClientGameState, HeartsMatch, MatchConfig, Phase, SeatView
from .persistence import (
    card_from_dict,
    card_to_dict,
    client_state_to_dict,
    match_state_from_dict,
    match_state_from_json,
    match_state_to_dict,
    match_state_to_json,
)
