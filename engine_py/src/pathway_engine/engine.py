"""
Turn and suit state machine.

Every transition takes a ``GameState`` and returns an ``ActionResult`` with a
new state; the input state is never modified. ``GameSession`` owns the live
state for one table and is the surface the presentation layer talks to.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .archive import archive_if_complete
from .comparator import sort_hand, suit_after
from .constants import (
    EFFECT_MUTATE, EFFECT_REVERSE, EFFECT_SCAFFOLD, EFFECT_SKIP, OPENING_SUIT,
    PHASE_PLAYING, SUIT_NAMES, WILD_RANK, Rank, Suit,
)
from .effects import (
    add_scaffold_skips, apply_force_suit_progress, apply_mutation, apply_reverse,
    apply_scaffold, apply_skip, get_effect_for_rank,
)
from .errors import (
    CARD_NOT_FOUND, ILLEGAL_ACTION_FOR_STATE, INVALID_EVENT, INVALID_WILD_DECLARATION,
    GameError,
)
from .events import (
    CancelDeclarationEvent, DeclareEvent, FinalizeScaffoldEvent, InboundEvent,
    OutboundEvent, PassEvent, PlayEvent, RequestStateEvent, SelectEvent, StartEvent,
    TakePathwayEvent, create_declaration_required_event, create_error_event,
    create_state_full_event, parse_inbound_event,
)
from .models import Card, ForceSuit, GameState, PendingDeclaration, Player, Scaffold
from .rules import RuleConfig, default_rules
from .serialization import snapshot
from .shuffle import create_deck, create_players, deal_cards, shuffle_deck
from .validate import (
    can_pass, check_action_allowed, playable_cards, required_suit, validate_play,
)
from .win import check_win

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of a single command."""
    success: bool
    state: GameState
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    awaiting_declaration: bool = False


def _reject(state: GameState, code: str, message: str, *, copied: bool = False) -> ActionResult:
    """Log a rule violation and hand back the (otherwise unchanged) state."""
    new_state = state if copied else copy.deepcopy(state)
    new_state.add_log(message)
    logger.debug("Rejected action [%s]: %s", code, message)
    return ActionResult(success=False, state=new_state, error_code=code, error_message=message)


def _accept(state: GameState, action: str) -> ActionResult:
    state.increment_version()
    logger.info("Applied %s (version %d)", action, state.version)
    return ActionResult(success=True, state=state)


def _announce_turn(state: GameState):
    player = state.current_player
    mutation = state.force_suit
    if mutation is not None:
        state.add_log(
            f"MUTATION ACTIVE: {player.name}'s turn. "
            f"Play {SUIT_NAMES[mutation.suit]} ({mutation.remaining} more)."
        )
    else:
        state.add_log(f"{player.name}'s turn. Pathway expects: {SUIT_NAMES[required_suit(state)]}.")


def _advance_turn(state: GameState, skips: int = 0):
    """Step ``direction`` around the table once, plus once per skipped player."""
    n = len(state.players)
    idx = state.current_index
    for _ in range(skips + 1):
        idx = (idx + state.direction) % n
    state.current_index = idx
    state.selected_card_id = None
    _announce_turn(state)


def start_game(
    player_count: int,
    rules: Optional[RuleConfig] = None,
    seed: Optional[int] = None,
    deck: Optional[List[Card]] = None
) -> ActionResult:
    """
    Deal a new game.

    Args:
        player_count: Number of seats, 2-6
        rules: Rule configuration, defaults to ``default_rules``
        seed: Shuffle seed, falls back to ``rules.seed``
        deck: Pre-ordered deck to deal without shuffling

    Returns:
        ActionResult holding the freshly dealt state
    """
    rules = rules or default_rules
    state = GameState(config=rules)

    if deck is None:
        deck = shuffle_deck(create_deck(rules.wildcard_count), seed if seed is not None else rules.seed)
    else:
        deck = copy.deepcopy(deck)

    try:
        hands = deal_cards(deck, player_count, rules)
    except GameError as e:
        return _reject(state, e.code, f"Error: {e.message}", copied=True)

    state.players = create_players(hands)
    state.phase = PHASE_PLAYING
    state.add_log(
        f"Game initialized: {player_count} players. "
        f"{state.players[0].name}, activate the pathway with {SUIT_NAMES[OPENING_SUIT]}."
    )
    return _accept(state, f"start_game({player_count})")


def restart_game(state: GameState, player_count: int, seed: Optional[int] = None, deck: Optional[List[Card]] = None) -> ActionResult:
    """Start a new game from an existing table; a bad player count keeps the old game."""
    result = start_game(player_count, rules=state.config, seed=seed, deck=deck)
    if not result.success:
        return _reject(state, result.error_code, result.error_message)
    return result


def select_card(state: GameState, card_id: Optional[str]) -> ActionResult:
    """Mark a card in the current hand as selected. No rule effect."""
    allowed = check_action_allowed(state)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)

    new_state = copy.deepcopy(state)
    player = new_state.current_player
    if card_id is None:
        new_state.selected_card_id = None
        new_state.add_log(f"{player.name} clears the selection.")
        return _accept(new_state, "select_card(None)")

    card = player.find_card(card_id)
    if card is None:
        return _reject(state, CARD_NOT_FOUND, f"Card {card_id} is not in {player.name}'s hand")

    new_state.selected_card_id = card_id
    new_state.add_log(f"{player.name} selects {card.label()}.")
    return _accept(new_state, f"select_card({card_id})")


def attempt_play(state: GameState, player_id: str, card_id: str) -> ActionResult:
    """
    Play a card from ``player_id``'s hand onto the pathway.

    An undeclared Joker does not resolve: the result comes back with
    ``awaiting_declaration`` set and ``declare_wildcard`` must follow.
    """
    new_state = copy.deepcopy(state)
    validation = validate_play(new_state, player_id, card_id)

    if validation.needs_declaration:
        new_state.pending_declaration = PendingDeclaration(card_id=card_id, required_suit=validation.required_suit)
        new_state.selected_card_id = card_id
        new_state.add_log(
            f"Joker (Wild Mutation) selected. Declare its rank as {SUIT_NAMES[validation.required_suit]}."
        )
        new_state.increment_version()
        logger.info("Joker %s awaiting declaration", card_id)
        return ActionResult(success=False, state=new_state, awaiting_declaration=True)

    if not validation.valid:
        if validation.error_code == INVALID_WILD_DECLARATION:
            validation.card.clear_declaration()
            new_state.pending_declaration = None
            new_state.selected_card_id = None
            new_state.increment_version()
            return _reject(new_state, validation.error_code, validation.error_message, copied=True)
        return _reject(state, validation.error_code, validation.error_message)

    player = new_state.current_player
    card = validation.card
    player.hand.remove(card)
    new_state.pathway.append(card)
    new_state.pending_declaration = None
    new_state.selected_card_id = None
    new_state.add_log(f"{player.name} transmits {card.label()}.")

    if not check_win(new_state, player):
        _resolve_play(new_state, player, card)

    return _accept(new_state, f"attempt_play({player_id}, {card_id})")


def _resolve_play(state: GameState, player: Player, card: Card):
    """Apply the played card's effects, then hand the turn on unless a scaffold holds it."""
    suit = card.effective_suit
    extending = state.scaffold is not None

    resume_suit = apply_force_suit_progress(state, suit)

    skips = 0
    effect = get_effect_for_rank(card.effective_rank)
    if effect == EFFECT_SCAFFOLD:
        apply_scaffold(state, player, suit)
        return
    if effect == EFFECT_SKIP:
        skips = apply_skip(state, player, suit)
    elif effect == EFFECT_REVERSE:
        apply_reverse(state, player, suit)
    elif effect == EFFECT_MUTATE:
        apply_mutation(state, player, suit)

    if extending:
        add_scaffold_skips(state, skips)
        state.expected_suit = state.scaffold.suit
        return

    if state.force_suit is not None:
        state.expected_suit = state.force_suit.suit
    elif resume_suit is not None:
        state.expected_suit = resume_suit
    else:
        state.expected_suit = suit_after(suit)

    archive_if_complete(state, suit)
    _advance_turn(state, skips)


def declare_wildcard(
    state: GameState,
    card_id: str,
    suit: Union[Suit, str],
    rank: Union[Rank, str]
) -> ActionResult:
    """
    Stamp the pending Joker's declaration and resume the play.

    The suit is recorded as given; a suit other than the required one is
    rejected by the resumed play, which resets the Joker.
    """
    allowed = check_action_allowed(state, allow_pending=True)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)

    pending = state.pending_declaration
    if pending is None or pending.card_id != card_id:
        return _reject(state, ILLEGAL_ACTION_FOR_STATE, f"No declaration is pending for {card_id}.")

    try:
        suit = Suit(suit)
        rank = Rank(rank)
    except ValueError as e:
        return _reject(state, INVALID_WILD_DECLARATION, f"Invalid Joker declaration: {e}")
    if rank == WILD_RANK:
        return _reject(state, INVALID_WILD_DECLARATION, "A Joker must be declared as an ordinary rank.")

    new_state = copy.deepcopy(state)
    player = new_state.current_player
    card = player.find_card(card_id)
    card.declared_suit = suit
    card.declared_rank = rank
    new_state.pending_declaration = None
    new_state.selected_card_id = card_id
    new_state.add_log(f"{player.name} declares Joker mutation as {rank.value} of {SUIT_NAMES[suit]}.")

    return attempt_play(new_state, player.id, card_id)


def cancel_wildcard_declaration(state: GameState) -> ActionResult:
    """Drop a pending Joker declaration; the Joker stays in hand, unselected."""
    allowed = check_action_allowed(state, allow_pending=True)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)
    if state.pending_declaration is None:
        return _reject(state, ILLEGAL_ACTION_FOR_STATE, "No Joker declaration to cancel.")

    new_state = copy.deepcopy(state)
    new_state.pending_declaration = None
    new_state.selected_card_id = None
    new_state.add_log("Joker declaration cancelled.")
    return _accept(new_state, "cancel_wildcard_declaration")


def finalize_scaffold(state: GameState) -> ActionResult:
    """
    Close the open Queen scaffold and hand the turn on.

    The next suit follows the scaffold's suit unless a mutation is still
    active, in which case the mutation's suit stays in force.
    """
    allowed = check_action_allowed(state)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)
    if state.scaffold is None:
        return _reject(state, ILLEGAL_ACTION_FOR_STATE, "No Queen scaffold is open.")

    new_state = copy.deepcopy(state)
    scaffold = new_state.scaffold
    new_state.scaffold = None

    mutation = new_state.force_suit
    if mutation is not None:
        new_state.expected_suit = mutation.suit
        new_state.add_log(
            f"Queen's Scaffold complete. MUTATION ACTIVE: {mutation.remaining} more {SUIT_NAMES[mutation.suit]}."
        )
    else:
        new_state.expected_suit = suit_after(scaffold.suit)
        new_state.add_log(f"Queen's Scaffold complete. Next expected: {SUIT_NAMES[new_state.expected_suit]}.")

    archive_if_complete(new_state, scaffold.suit)
    _advance_turn(new_state, scaffold.skips)
    return _accept(new_state, "finalize_scaffold")


def take_pathway(state: GameState) -> ActionResult:
    """Current player absorbs the whole pathway into their hand."""
    allowed = check_action_allowed(state)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)
    if not state.pathway:
        return _reject(state, ILLEGAL_ACTION_FOR_STATE, "Pathway clear. No signals to absorb.")

    new_state = copy.deepcopy(state)
    player = new_state.current_player
    absorbed = " → ".join(c.label() for c in new_state.pathway)
    player.hand = sort_hand(player.hand + new_state.pathway)
    new_state.pathway = []
    new_state.expected_suit = OPENING_SUIT
    new_state.force_suit = None
    new_state.scaffold = None
    new_state.add_log(f"{player.name} absorbs pathway: {absorbed}.")

    _advance_turn(new_state)
    return _accept(new_state, "take_pathway")


def pass_turn(state: GameState) -> ActionResult:
    """Bypass the turn when nothing in hand can open the pathway."""
    allowed = check_action_allowed(state)
    if not allowed.valid:
        return _reject(state, allowed.error_code, allowed.error_message)
    if state.pathway or state.scaffold is not None:
        return _reject(state, ILLEGAL_ACTION_FOR_STATE, "Only an empty pathway can be bypassed.")
    if not can_pass(state):
        suit = required_suit(state)
        return _reject(
            state,
            ILLEGAL_ACTION_FOR_STATE,
            f"{state.current_player.name} holds a card that can open with {SUIT_NAMES[suit]}."
        )

    new_state = copy.deepcopy(state)
    new_state.add_log(f"{new_state.current_player.name} has no valid initiating signals and skips turn.")
    _advance_turn(new_state)
    return _accept(new_state, "pass_turn")


def apply_event(state: GameState, event: InboundEvent) -> ActionResult:
    """Dispatch a parsed inbound event to its transition."""
    if isinstance(event, StartEvent):
        return restart_game(state, event.player_count, seed=event.seed)
    if isinstance(event, SelectEvent):
        return select_card(state, event.card_id)
    if isinstance(event, PlayEvent):
        return attempt_play(state, event.player_id, event.card_id)
    if isinstance(event, DeclareEvent):
        return declare_wildcard(state, event.card_id, event.suit, event.rank)
    if isinstance(event, CancelDeclarationEvent):
        return cancel_wildcard_declaration(state)
    if isinstance(event, FinalizeScaffoldEvent):
        return finalize_scaffold(state)
    if isinstance(event, TakePathwayEvent):
        return take_pathway(state)
    if isinstance(event, PassEvent):
        return pass_turn(state)
    return _reject(state, INVALID_EVENT, f"Unsupported event: {event.type}")


class GameSession:
    """
    One table's live game.

    Holds the only mutable reference to the state; everything handed out
    through the query surface is either immutable or a copy.
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules or default_rules
        self._state = GameState(config=self.rules)

    def _apply(self, result: ActionResult) -> ActionResult:
        self._state = result.state
        return result

    # Commands

    def start_game(self, player_count: int, seed: Optional[int] = None, deck: Optional[List[Card]] = None) -> ActionResult:
        return self._apply(restart_game(self._state, player_count, seed=seed, deck=deck))

    def select_card(self, card_id: Optional[str]) -> ActionResult:
        return self._apply(select_card(self._state, card_id))

    def attempt_play(self, player_id: str, card_id: str) -> ActionResult:
        return self._apply(attempt_play(self._state, player_id, card_id))

    def declare_wildcard(self, card_id: str, suit: Union[Suit, str], rank: Union[Rank, str]) -> ActionResult:
        return self._apply(declare_wildcard(self._state, card_id, suit, rank))

    def cancel_wildcard_declaration(self) -> ActionResult:
        return self._apply(cancel_wildcard_declaration(self._state))

    def finalize_scaffold(self) -> ActionResult:
        return self._apply(finalize_scaffold(self._state))

    def take_pathway(self) -> ActionResult:
        return self._apply(take_pathway(self._state))

    def pass_turn(self) -> ActionResult:
        return self._apply(pass_turn(self._state))

    def handle_event(self, data: Dict[str, Any]) -> OutboundEvent:
        """
        Apply a raw command payload and describe the outcome.

        Returns:
            DeclarationRequiredEvent while a Joker waits for its rank,
            ErrorEvent for malformed payloads and rule violations,
            otherwise StateFullEvent with a fresh snapshot
        """
        try:
            event = parse_inbound_event(data)
        except ValueError as e:
            logger.warning("Dropped malformed event: %s", e)
            return create_error_event(INVALID_EVENT, str(e))

        if isinstance(event, RequestStateEvent):
            return create_state_full_event(self.snapshot(event.viewer_id))

        result = self._apply(apply_event(self._state, event))
        if result.awaiting_declaration:
            pending = result.state.pending_declaration
            return create_declaration_required_event(pending.card_id, pending.required_suit)
        if not result.success:
            return create_error_event(result.error_code, result.error_message)
        return create_state_full_event(self.snapshot())

    # Queries

    @property
    def state(self) -> GameState:
        """A copy of the current state."""
        return copy.deepcopy(self._state)

    def snapshot(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        return snapshot(self._state, viewer_id)

    @property
    def phase(self) -> str:
        return self._state.phase

    @property
    def current_player(self) -> Optional[Player]:
        player = self._state.current_player
        return copy.deepcopy(player) if player else None

    @property
    def hands(self) -> Dict[str, List[Card]]:
        return {p.id: copy.deepcopy(p.hand) for p in self._state.players}

    @property
    def pathway(self) -> List[Card]:
        return copy.deepcopy(self._state.pathway)

    @property
    def archive(self) -> List[Card]:
        return copy.deepcopy(self._state.archive)

    @property
    def expected_suit(self) -> Suit:
        return self._state.expected_suit

    @property
    def required_suit(self) -> Suit:
        return required_suit(self._state)

    @property
    def direction(self) -> int:
        return self._state.direction

    @property
    def force_suit(self) -> Optional[ForceSuit]:
        return self._state.force_suit

    @property
    def scaffold(self) -> Optional[Scaffold]:
        return self._state.scaffold

    @property
    def pending_declaration(self) -> Optional[PendingDeclaration]:
        return self._state.pending_declaration

    @property
    def selected_card_id(self) -> Optional[str]:
        return self._state.selected_card_id

    @property
    def winner(self) -> Optional[str]:
        return self._state.winner

    @property
    def log(self) -> List[str]:
        return list(self._state.log)

    def playable_cards(self) -> List[str]:
        return playable_cards(self._state)

    def can_pass(self) -> bool:
        return can_pass(self._state)
