"""Game constants and utilities"""

from enum import Enum
from typing import Dict, List


class Suit(str, Enum):
    """The four suits, declared in cyclic pathway order."""
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    JOKER = "X"


SUIT_ORDER: List[Suit] = [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]
RANK_ORDER: List[Rank] = [
    Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN, Rank.EIGHT,
    Rank.NINE, Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE, Rank.JOKER,
]
ORDINARY_RANKS: List[Rank] = [r for r in RANK_ORDER if r != Rank.JOKER]

OPENING_SUIT = Suit.CLUBS
LAST_SUIT = Suit.SPADES
WILD_PLACEHOLDER_SUIT = Suit.CLUBS

# Special ranks
SKIP_RANK = Rank.KING
REVERSE_RANK = Rank.JACK
SCAFFOLD_RANK = Rank.QUEEN
MUTATE_RANK = Rank.ACE
WILD_RANK = Rank.JOKER

WILDCARD_PREFIX = "JOKER"

# Effects
EFFECT_SKIP = "king_inhibit"
EFFECT_REVERSE = "jack_feedback"
EFFECT_SCAFFOLD = "queen_scaffold"
EFFECT_MUTATE = "ace_mutation"

# Phases
PHASE_SETUP = "setup"
PHASE_PLAYING = "playing"
PHASE_FINISHED = "finished"

SUIT_SYMBOLS: Dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_NAMES: Dict[Suit, str] = {
    Suit.CLUBS: "Ligands (Clubs ♣)",
    Suit.DIAMONDS: "Receptors (Diamonds ♦)",
    Suit.HEARTS: "Transducers (Hearts ♥)",
    Suit.SPADES: "Responses (Spades ♠)",
}

SPECIAL_CARD_EFFECTS: Dict[Rank, str] = {
    Rank.JACK: "Jack (Reverse): Reverses play direction. The next player continues the pathway with the normally expected next suit.",
    Rank.QUEEN: "Queen (Scaffold): Play this Queen, then play any number of additional cards of the Queen's suit before finalizing.",
    Rank.KING: "King (Inhibit): Skips the next player's turn.",
    Rank.ACE: "Ace (Mutate): Forces the next 3 cards played to be of the Ace's suit, then the pathway continues from the suit after it.",
    Rank.JOKER: "Joker (Wild): Played as any rank. Its suit is fixed by the current pathway requirement.",
}


def card_id_for(rank: Rank, suit: Suit) -> str:
    return f"{rank.value}{suit.value}"


def wildcard_id(index: int) -> str:
    return f"{WILDCARD_PREFIX}{index}"


def format_suit(suit: Suit) -> str:
    return SUIT_SYMBOLS[suit]


def format_card(rank: Rank, suit: Suit) -> str:
    """Human readable label, e.g. ``Q of ♥``."""
    return f"{rank.value} of {SUIT_SYMBOLS[suit]}"
