"""
Card shuffling and dealing utilities.
"""

import random
from typing import List, Optional

from .comparator import sort_hand
from .constants import (
    ORDINARY_RANKS, SUIT_ORDER, WILD_PLACEHOLDER_SUIT, WILD_RANK,
    card_id_for, wildcard_id,
)
from .errors import INVALID_PLAYER_COUNT, raise_error
from .models import Card, Player
from .rules import ABSOLUTE_MAX_PLAYERS, ABSOLUTE_MIN_PLAYERS, RuleConfig, default_rules


def create_deck(wildcard_count: int = 2) -> List[Card]:
    """Create a fresh, ordered deck of cards."""
    deck = []

    # Standard 52 cards
    for suit in SUIT_ORDER:
        for rank in ORDINARY_RANKS:
            deck.append(Card(id=card_id_for(rank, suit), suit=suit, rank=rank))

    for i in range(wildcard_count):
        deck.append(Card(
            id=wildcard_id(i + 1),
            suit=WILD_PLACEHOLDER_SUIT,
            rank=WILD_RANK,
            is_wild=True
        ))

    return deck


def shuffle_deck(deck: List[Card], seed: Optional[int] = None) -> List[Card]:
    """
    Shuffle a deck deterministically if seed is provided.

    Args:
        deck: Cards to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    # random.shuffle is an unbiased Fisher-Yates permutation
    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(deck_copy)
    else:
        random.shuffle(deck_copy)

    return deck_copy


def validate_player_count(player_count: int, rules: RuleConfig = default_rules):
    """Raise INVALID_PLAYER_COUNT unless the count is playable."""
    if not isinstance(player_count, int) or isinstance(player_count, bool):
        raise_error(INVALID_PLAYER_COUNT, f"Player count must be an integer, got {player_count!r}")
    if not ABSOLUTE_MIN_PLAYERS <= player_count <= ABSOLUTE_MAX_PLAYERS or not rules.validate_player_count(player_count):
        raise_error(
            INVALID_PLAYER_COUNT,
            f"Invalid number of players: {player_count}. "
            f"Must be {rules.min_players}-{rules.max_players}."
        )


def deal_cards(deck: List[Card], player_count: int, rules: RuleConfig = default_rules) -> List[List[Card]]:
    """
    Deal every card round-robin to ``player_count`` hands.

    Card ``i`` goes to hand ``i % player_count``, so hand sizes differ by at
    most one. Each hand comes back sorted by suit then rank.

    Raises:
        GameError: INVALID_PLAYER_COUNT outside the configured range
    """
    validate_player_count(player_count, rules)

    hands: List[List[Card]] = [[] for _ in range(player_count)]
    for i, card in enumerate(deck):
        hands[i % player_count].append(card)

    return [sort_hand(hand) for hand in hands]


def create_players(hands: List[List[Card]]) -> List[Player]:
    """Seat one player per dealt hand."""
    return [
        Player(id=f"player{i + 1}", name=f"Player {i + 1}", hand=hand)
        for i, hand in enumerate(hands)
    ]
