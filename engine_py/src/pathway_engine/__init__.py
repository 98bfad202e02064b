"""
Cascade Pathway rules engine.
"""

from .constants import Rank, Suit
from .engine import (
    ActionResult,
    GameSession,
    attempt_play,
    cancel_wildcard_declaration,
    declare_wildcard,
    finalize_scaffold,
    pass_turn,
    restart_game,
    select_card,
    start_game,
    take_pathway,
)
from .models import Card, GameState, Player
from .rules import RuleConfig, create_rules, default_rules

__version__ = "1.0.0"

__all__ = [
    "ActionResult",
    "Card",
    "GameSession",
    "GameState",
    "Player",
    "Rank",
    "RuleConfig",
    "Suit",
    "attempt_play",
    "cancel_wildcard_declaration",
    "create_rules",
    "declare_wildcard",
    "default_rules",
    "finalize_scaffold",
    "pass_turn",
    "restart_game",
    "select_card",
    "start_game",
    "take_pathway",
]
