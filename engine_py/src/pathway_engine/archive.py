"""Pathway completion and the archive of finished runs."""

from typing import Optional

from .constants import LAST_SUIT, OPENING_SUIT, Suit
from .models import GameState


def completes_pathway(state: GameState, suit: Suit) -> bool:
    """A pathway completes on the last suit once no mutation is outstanding."""
    return suit == LAST_SUIT and state.force_suit is None and bool(state.pathway)


def archive_pathway(state: GameState) -> int:
    """
    Move the whole pathway into the archive and restart from the opening suit.

    This function mutates the state.

    Returns:
        Number of cards archived
    """
    run = " → ".join(card.label() for card in state.pathway)
    moved = len(state.pathway)
    state.archive.extend(state.pathway)
    state.pathway = []
    state.expected_suit = OPENING_SUIT
    state.add_log(f"RESPONSE ACHIEVED: Pathway {run} complete. Signals archived.")
    return moved


def archive_if_complete(state: GameState, suit: Suit) -> Optional[int]:
    if not completes_pathway(state, suit):
        return None
    return archive_pathway(state)
