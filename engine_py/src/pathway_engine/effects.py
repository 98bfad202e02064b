"""
Special card effects implementation.

Each ``apply_*`` function mutates the state it is given; the engine only
ever hands them a working copy.
"""

from dataclasses import replace
from typing import Optional

from .comparator import suit_after
from .constants import (
    EFFECT_MUTATE, EFFECT_REVERSE, EFFECT_SCAFFOLD, EFFECT_SKIP, LAST_SUIT,
    MUTATE_RANK, OPENING_SUIT, REVERSE_RANK, SCAFFOLD_RANK, SKIP_RANK,
    SUIT_NAMES, Rank, Suit, format_suit,
)
from .models import ForceSuit, GameState, Player, Scaffold


def get_effect_for_rank(rank: Rank) -> Optional[str]:
    """Get the special effect for a given rank."""
    effect_map = {
        SKIP_RANK: EFFECT_SKIP,
        REVERSE_RANK: EFFECT_REVERSE,
        SCAFFOLD_RANK: EFFECT_SCAFFOLD,
        MUTATE_RANK: EFFECT_MUTATE,
    }
    return effect_map.get(rank)


def mutation_resume_suit(suit: Suit) -> Suit:
    """Suit the pathway continues with once a mutation of ``suit`` completes."""
    if suit == LAST_SUIT:
        return OPENING_SUIT
    return suit_after(suit)


def apply_force_suit_progress(state: GameState, suit: Suit) -> Optional[Suit]:
    """
    Count a played card against an active mutation.

    Args:
        state: Working game state
        suit: Effective suit of the card just played

    Returns:
        The resume suit if this play completed the mutation, otherwise None
    """
    mutation = state.force_suit
    if mutation is None or suit != mutation.suit:
        return None

    remaining = mutation.remaining - 1
    if remaining > 0:
        state.force_suit = replace(mutation, remaining=remaining)
        state.add_log(f"MUTATION: {remaining} more {SUIT_NAMES[mutation.suit]} signals required.")
        return None

    state.force_suit = None
    state.add_log(f"MUTATION: Final {SUIT_NAMES[mutation.suit]} card played.")
    return mutation.resume_suit


def apply_skip(state: GameState, player: Player, suit: Suit) -> int:
    """
    Apply King Inhibit effect - the next player in turn order loses a turn.

    Returns:
        Number of extra players to skip
    """
    state.add_log(f"King (Inhibitor) {format_suit(suit)} played by {player.name}! Next operative's turn skipped.")
    return 1


def apply_reverse(state: GameState, player: Player, suit: Suit):
    """Apply Jack Feedback effect - play direction flips."""
    state.direction = -state.direction
    state.add_log(f"Jack (Feedback Loop) {format_suit(suit)} played by {player.name}! Signal flow reversed.")


def apply_scaffold(state: GameState, player: Player, suit: Suit):
    """
    Apply Queen Scaffold effect - the player keeps the turn and must extend
    with the Queen's suit until they finalize.

    A Queen played inside an open scaffold keeps it open with its pending skips.
    """
    if state.scaffold is None:
        state.scaffold = Scaffold(suit=suit, player_id=player.id)
    state.expected_suit = suit
    state.add_log(f"Queen (Scaffold) {format_suit(suit)} played! {player.name} can extend with more {SUIT_NAMES[suit]}.")


def apply_mutation(state: GameState, player: Player, suit: Suit):
    """
    Apply Ace Mutation effect - the next cards must all be of the Ace's suit.

    Replaces any mutation already in progress.
    """
    state.force_suit = ForceSuit(
        suit=suit,
        remaining=state.config.mutation_length,
        resume_suit=mutation_resume_suit(suit)
    )
    state.expected_suit = suit
    state.add_log(
        f"Ace (Mutation) {format_suit(suit)} played by {player.name}! "
        f"ALERT: Next {state.config.mutation_length} signals must be {SUIT_NAMES[suit]}."
    )


def add_scaffold_skips(state: GameState, skips: int):
    """Defer skips earned while extending a scaffold until it is finalized."""
    if state.scaffold is not None and skips:
        state.scaffold = replace(state.scaffold, skips=state.scaffold.skips + skips)
