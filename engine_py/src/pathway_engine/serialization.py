"""
State serialization for the presentation layer.
"""

from typing import Any, Dict, Optional

from .constants import PHASE_PLAYING, SPECIAL_CARD_EFFECTS
from .models import Card, GameState, Player
from .validate import can_pass, playable_cards, required_suit


def serialize_card(card: Card) -> Dict[str, Any]:
    """Serialize a card, including any Joker declaration."""
    return {
        "id": card.id,
        "suit": card.suit.value,
        "rank": card.rank.value,
        "is_wild": card.is_wild,
        "declared_suit": card.declared_suit.value if card.declared_suit else None,
        "declared_rank": card.declared_rank.value if card.declared_rank else None,
        "label": card.label(),
        "effect": SPECIAL_CARD_EFFECTS.get(card.effective_rank),
    }


def serialize_player(player: Player, show_hand: bool) -> Dict[str, Any]:
    serialized = {
        "id": player.id,
        "name": player.name,
        "hand_count": player.hand_count,
    }
    if show_hand:
        serialized["hand"] = [serialize_card(c) for c in player.hand]
    return serialized


def snapshot(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a read-only snapshot of the game for rendering.

    Args:
        state: Game state to serialize
        viewer_id: When given, only this player's hand is revealed;
            other players show a card count only

    Returns:
        Plain dictionary, detached from the live state
    """
    current = state.current_player
    in_play = current is not None and state.phase == PHASE_PLAYING
    viewer_is_current = in_play and (viewer_id is None or viewer_id == current.id)

    sanitized = {
        "version": state.version,
        "phase": state.phase,
        "current_player": current.id if current else None,
        "direction": state.direction,
        "expected_suit": state.expected_suit.value,
        "required_suit": required_suit(state).value if in_play else None,
        "pathway": [serialize_card(c) for c in state.pathway],
        "archive": [serialize_card(c) for c in state.archive],
        "force_suit": None,
        "scaffold": None,
        "pending_declaration": None,
        "selected_card_id": state.selected_card_id,
        "winner": state.winner,
        "players": [
            serialize_player(p, show_hand=viewer_id is None or p.id == viewer_id)
            for p in state.players
        ],
        "log": list(state.log),
        "playable_cards": playable_cards(state) if viewer_is_current else [],
        "can_pass": can_pass(state) if in_play else False,
        "rules": state.config.model_dump(),
    }

    if state.force_suit:
        sanitized["force_suit"] = {
            "suit": state.force_suit.suit.value,
            "remaining": state.force_suit.remaining,
            "resume_suit": state.force_suit.resume_suit.value,
        }

    if state.scaffold:
        sanitized["scaffold"] = {
            "suit": state.scaffold.suit.value,
            "player_id": state.scaffold.player_id,
            "skips": state.scaffold.skips,
        }

    if state.pending_declaration:
        sanitized["pending_declaration"] = {
            "card_id": state.pending_declaration.card_id,
            "required_suit": state.pending_declaration.required_suit.value,
        }

    return sanitized
