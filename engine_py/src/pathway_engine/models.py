"""Game models and data structures"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import PHASE_SETUP, OPENING_SUIT, Rank, Suit, format_card
from .rules import RuleConfig, default_rules


@dataclass
class Card:
    id: str
    suit: Suit
    rank: Rank
    is_wild: bool = False
    declared_suit: Optional[Suit] = None  # wildcards only
    declared_rank: Optional[Rank] = None  # wildcards only

    def __post_init__(self):
        if self.is_wild and self.rank != Rank.JOKER:
            raise ValueError(f"Only the wildcard rank may be wild, got {self.rank.value}")

    @property
    def effective_suit(self) -> Suit:
        return self.declared_suit or self.suit

    @property
    def effective_rank(self) -> Rank:
        return self.declared_rank or self.rank

    @property
    def is_declared(self) -> bool:
        return self.declared_suit is not None

    def clear_declaration(self):
        self.declared_suit = None
        self.declared_rank = None

    def label(self) -> str:
        if self.is_wild and not self.is_declared:
            return "Joker"
        return format_card(self.effective_rank, self.effective_suit)


@dataclass
class Player:
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)

    def find_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.hand if c.id == card_id), None)

    @property
    def hand_count(self) -> int:
        return len(self.hand)


@dataclass(frozen=True)
class ForceSuit:
    """Ace mutation: ``remaining`` more cards of ``suit`` must be played."""
    suit: Suit
    remaining: int
    resume_suit: Suit


@dataclass(frozen=True)
class Scaffold:
    """Queen extend-turn obligation, suit pinned when the Queen is played."""
    suit: Suit
    player_id: str
    skips: int = 0  # Kings played while extending, applied on finalize


@dataclass(frozen=True)
class PendingDeclaration:
    card_id: str
    required_suit: Suit


@dataclass
class GameState:
    config: RuleConfig = field(default_factory=lambda: default_rules)
    version: int = 0
    phase: str = PHASE_SETUP  # setup|playing|finished
    players: List[Player] = field(default_factory=list)
    current_index: int = 0
    direction: int = 1  # +1 or -1
    expected_suit: Suit = OPENING_SUIT
    pathway: List[Card] = field(default_factory=list)
    archive: List[Card] = field(default_factory=list)
    force_suit: Optional[ForceSuit] = None
    scaffold: Optional[Scaffold] = None
    pending_declaration: Optional[PendingDeclaration] = None
    selected_card_id: Optional[str] = None
    winner: Optional[str] = None
    log: List[str] = field(default_factory=list)  # most recent first

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_index]

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def add_log(self, message: str):
        stamp = time.strftime("%H:%M:%S")
        self.log.insert(0, f"[{stamp}] {message}")
        del self.log[self.config.log_limit:]

    def increment_version(self):
        self.version += 1
