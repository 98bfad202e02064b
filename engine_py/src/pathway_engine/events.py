"""
Command and notification event models for the presentation layer.
"""

import time
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .constants import Rank, Suit


class EventType(str, Enum):
    """Inbound event types."""
    START = "start"
    SELECT = "select"
    PLAY = "play"
    DECLARE = "declare"
    CANCEL_DECLARATION = "cancel_declaration"
    FINALIZE_SCAFFOLD = "finalize_scaffold"
    TAKE_PATHWAY = "take_pathway"
    PASS = "pass"
    REQUEST_STATE = "request_state"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    STATE_FULL = "state_full"
    DECLARATION_REQUIRED = "declaration_required"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    INVALID_EVENT = "INVALID_EVENT"
    INVALID_PLAYER_COUNT = "INVALID_PLAYER_COUNT"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    INVALID_WILD_DECLARATION = "INVALID_WILD_DECLARATION"
    SUIT_MISMATCH = "SUIT_MISMATCH"
    ILLEGAL_ACTION_FOR_STATE = "ILLEGAL_ACTION_FOR_STATE"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class StartEvent(BaseEvent):
    """Start (or restart) a game."""
    type: EventType = EventType.START
    player_count: int
    seed: Optional[int] = None


class SelectEvent(BaseEvent):
    """Highlight a card in the current hand; ``None`` clears the selection."""
    type: EventType = EventType.SELECT
    card_id: Optional[str] = None


class PlayEvent(BaseEvent):
    """Play a card event."""
    type: EventType = EventType.PLAY
    player_id: str = Field(..., min_length=1)
    card_id: str = Field(..., min_length=1)


class DeclareEvent(BaseEvent):
    """Joker declaration event."""
    type: EventType = EventType.DECLARE
    card_id: str = Field(..., min_length=1)
    suit: Suit
    rank: Rank


class CancelDeclarationEvent(BaseEvent):
    type: EventType = EventType.CANCEL_DECLARATION


class FinalizeScaffoldEvent(BaseEvent):
    type: EventType = EventType.FINALIZE_SCAFFOLD


class TakePathwayEvent(BaseEvent):
    type: EventType = EventType.TAKE_PATHWAY


class PassEvent(BaseEvent):
    """Pass (bypass) turn event."""
    type: EventType = EventType.PASS


class RequestStateEvent(BaseEvent):
    """Request full state event."""
    type: EventType = EventType.REQUEST_STATE
    viewer_id: Optional[str] = None


# Union type for all inbound events
InboundEvent = Union[
    StartEvent,
    SelectEvent,
    PlayEvent,
    DeclareEvent,
    CancelDeclarationEvent,
    FinalizeScaffoldEvent,
    TakePathwayEvent,
    PassEvent,
    RequestStateEvent
]


# Outbound event models
class StateFullEvent(BaseModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]
    timestamp: float


class DeclarationRequiredEvent(BaseModel):
    """A Joker was played and needs its rank declared."""
    type: OutboundEventType = OutboundEventType.DECLARATION_REQUIRED
    card_id: str
    required_suit: Suit
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str
    timestamp: float


# Union type for all outbound events
OutboundEvent = Union[
    StateFullEvent,
    DeclarationRequiredEvent,
    ErrorEvent
]


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from the presentation layer

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_map = {
        EventType.START: StartEvent,
        EventType.SELECT: SelectEvent,
        EventType.PLAY: PlayEvent,
        EventType.DECLARE: DeclareEvent,
        EventType.CANCEL_DECLARATION: CancelDeclarationEvent,
        EventType.FINALIZE_SCAFFOLD: FinalizeScaffoldEvent,
        EventType.TAKE_PATHWAY: TakePathwayEvent,
        EventType.PASS: PassEvent,
        EventType.REQUEST_STATE: RequestStateEvent,
    }

    event_class = event_map[event_type]

    try:
        return event_class(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {str(e)}")


def create_error_event(code: Union[ErrorCode, str], message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(
        code=ErrorCode(code),
        message=message,
        timestamp=time.time()
    )


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(
        state=state,
        timestamp=time.time()
    )


def create_declaration_required_event(card_id: str, required_suit: Suit) -> DeclarationRequiredEvent:
    """Create a declaration request event."""
    return DeclarationRequiredEvent(
        card_id=card_id,
        required_suit=required_suit,
        timestamp=time.time()
    )
