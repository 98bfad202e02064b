"""
Legality checks for card plays and turn actions.
"""

from typing import List, Optional

from .constants import OPENING_SUIT, PHASE_FINISHED, PHASE_PLAYING, SUIT_NAMES, Suit
from .errors import (
    CARD_NOT_FOUND, ILLEGAL_ACTION_FOR_STATE, INVALID_WILD_DECLARATION,
    NOT_YOUR_TURN, SUIT_MISMATCH,
)
from .models import Card, GameState


class ValidationResult:
    """Result of play validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        card: Optional[Card] = None,
        required_suit: Optional[Suit] = None,
        needs_declaration: bool = False
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.card = card
        self.required_suit = required_suit
        self.needs_declaration = needs_declaration

    @classmethod
    def success(cls, card: Card, required_suit: Suit) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, card=card, required_suit=required_suit)

    @classmethod
    def declaration_needed(cls, card: Card, required_suit: Suit) -> 'ValidationResult':
        """The card is an undeclared wildcard; resolution must wait."""
        return cls(valid=False, card=card, required_suit=required_suit, needs_declaration=True)

    @classmethod
    def error(cls, error_code: str, error_message: str, card: Optional[Card] = None) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message, card=card)


def required_suit(state: GameState) -> Suit:
    """
    Get the suit the next card must carry.

    An open scaffold pins its own suit. Otherwise an active mutation forces
    its suit, an empty pathway must open with the opening suit, and anything
    else follows the stored expected suit.
    """
    if state.scaffold is not None:
        return state.scaffold.suit
    if state.force_suit is not None:
        return state.force_suit.suit
    if not state.pathway:
        return OPENING_SUIT
    return state.expected_suit


def check_action_allowed(state: GameState, allow_pending: bool = False) -> ValidationResult:
    """Reject any turn action outside live play or while a Joker awaits declaration."""
    if state.phase == PHASE_FINISHED:
        return ValidationResult.error(ILLEGAL_ACTION_FOR_STATE, "The game is over. Start a new game to keep playing.")
    if state.phase != PHASE_PLAYING:
        return ValidationResult.error(ILLEGAL_ACTION_FOR_STATE, "No game in progress.")
    if state.pending_declaration is not None and not allow_pending:
        return ValidationResult.error(
            ILLEGAL_ACTION_FOR_STATE,
            "A Joker declaration is pending. Declare or cancel it first."
        )
    return ValidationResult(valid=True)


def validate_play(state: GameState, player_id: str, card_id: str) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current game state
        player_id: ID of player attempting the play
        card_id: ID of the card being played

    Returns:
        ValidationResult with validation outcome
    """
    pending = state.pending_declaration
    allowed = check_action_allowed(state, allow_pending=pending is not None and pending.card_id == card_id)
    if not allowed.valid:
        return allowed

    current = state.current_player
    if current is None or current.id != player_id:
        return ValidationResult.error(
            NOT_YOUR_TURN,
            f"It's not your turn (current turn: {current.name if current else None})"
        )

    card = current.find_card(card_id)
    if card is None:
        return ValidationResult.error(CARD_NOT_FOUND, f"Card {card_id} is not in {current.name}'s hand")

    suit = required_suit(state)

    if card.is_wild and not card.is_declared:
        return ValidationResult.declaration_needed(card, suit)

    if card.is_wild:
        if card.effective_suit != suit:
            return ValidationResult.error(
                INVALID_WILD_DECLARATION,
                f"Invalid Joker declaration. Declared: {SUIT_NAMES[card.effective_suit]}, "
                f"required: {SUIT_NAMES[suit]}. Joker reset.",
                card=card
            )
        return ValidationResult.success(card, suit)

    if card.suit != suit:
        if state.scaffold is not None:
            message = f"Queen scaffold: must play {SUIT_NAMES[suit]} or finalize the scaffold."
        else:
            message = (
                f"Pathway mismatch. Expected: {SUIT_NAMES[suit]}, played: {SUIT_NAMES[card.suit]}. "
                "Absorb the pathway or play a valid card."
            )
        return ValidationResult.error(SUIT_MISMATCH, message, card=card)

    return ValidationResult.success(card, suit)


def can_meet_suit(card: Card, suit: Suit) -> bool:
    # Any Joker counts: a wrongly declared one is reset on play and can be redeclared
    return card.is_wild or card.suit == suit


def can_pass(state: GameState) -> bool:
    """
    Check whether the current player may bypass their turn.

    Only allowed on an empty pathway with no open scaffold, when nothing in
    hand can meet the required opening suit.
    """
    if not check_action_allowed(state).valid:
        return False
    if state.pathway or state.scaffold is not None:
        return False
    suit = required_suit(state)
    return not any(can_meet_suit(card, suit) for card in state.current_player.hand)


def playable_cards(state: GameState) -> List[str]:
    """
    IDs of the current player's cards that would be accepted right now.

    Undeclared Jokers are included since playing them opens the declaration.
    """
    if not check_action_allowed(state).valid:
        return []
    player = state.current_player
    return [
        card.id for card in player.hand
        if validate_play(state, player.id, card.id).valid
        or (card.is_wild and not card.is_declared)
    ]
