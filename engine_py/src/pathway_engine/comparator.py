"""
Suit cycling and hand ordering.

Rank order only affects how hands are displayed; it never decides whether a
play is legal.
"""

from typing import Iterable, List, Tuple

from .constants import RANK_ORDER, SUIT_ORDER, Rank, Suit


def get_suit_index(suit: Suit) -> int:
    """Get the position of a suit in the cyclic pathway order."""
    try:
        return SUIT_ORDER.index(suit)
    except ValueError:
        raise ValueError(f"Invalid suit: {suit}")


def get_rank_index(rank: Rank) -> int:
    """Get the position of a rank in the display ordering."""
    try:
        return RANK_ORDER.index(rank)
    except ValueError:
        raise ValueError(f"Invalid rank: {rank}")


def suit_after(suit: Suit) -> Suit:
    """
    Get the suit that follows ``suit`` in the pathway cycle.

    The last suit wraps around to the first.
    """
    return SUIT_ORDER[(get_suit_index(suit) + 1) % len(SUIT_ORDER)]


def hand_sort_key(card) -> Tuple[int, int]:
    """Sort key by nominal (suit, rank), so declared Jokers keep their slot."""
    return get_suit_index(card.suit), get_rank_index(card.rank)


def sort_hand(cards: Iterable) -> List:
    """Return the cards ordered by suit, then rank."""
    return sorted(cards, key=hand_sort_key)
