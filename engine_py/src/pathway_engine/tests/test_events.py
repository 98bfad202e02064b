"""
Test command events and state snapshots.
"""

import pytest

from pathway_engine.constants import PHASE_PLAYING, Rank, Suit
from pathway_engine.engine import GameSession
from pathway_engine.events import (
    DeclarationRequiredEvent, DeclareEvent, ErrorCode, ErrorEvent, OutboundEventType,
    PlayEvent, StartEvent, StateFullEvent, parse_inbound_event,
)
from pathway_engine.models import Card
from pathway_engine.serialization import snapshot


def card(code: str) -> Card:
    if code.startswith("JOKER"):
        return Card(id=code, suit=Suit.CLUBS, rank=Rank.JOKER, is_wild=True)
    return Card(id=code, suit=Suit(code[-1]), rank=Rank(code[:-1]))


@pytest.fixture
def session():
    """Two-player table: player1 holds 2C, JOKER1, 5D; player2 holds 3D, 4H, 6S."""
    game = GameSession()
    deck = [card(c) for c in ["2C", "3D", "JOKER1", "4H", "5D", "6S"]]
    game.start_game(2, deck=deck)
    return game


def test_parse_inbound_event():
    """Test raw payloads parse into their event models."""
    event = parse_inbound_event({"type": "play", "player_id": "player1", "card_id": "2C"})
    assert isinstance(event, PlayEvent)
    assert event.card_id == "2C"

    event = parse_inbound_event({"type": "declare", "card_id": "JOKER1", "suit": "H", "rank": "Q"})
    assert isinstance(event, DeclareEvent)
    assert event.suit == Suit.HEARTS
    assert event.rank == Rank.QUEEN

    event = parse_inbound_event({"type": "start", "player_count": 4, "seed": 3})
    assert isinstance(event, StartEvent)


@pytest.mark.parametrize("payload", [
    {},
    {"type": "shuffle"},
    {"type": "play", "player_id": "player1"},
    {"type": "declare", "card_id": "JOKER1", "suit": "Z", "rank": "7"},
    ["play"],
])
def test_parse_rejects_malformed_events(payload):
    """Test malformed payloads raise ValueError."""
    with pytest.raises(ValueError):
        parse_inbound_event(payload)


def test_handle_play_event(session):
    """Test an accepted play answers with a full snapshot."""
    outbound = session.handle_event({"type": "play", "player_id": "player1", "card_id": "2C"})
    assert isinstance(outbound, StateFullEvent)
    assert outbound.type == OutboundEventType.STATE_FULL
    assert [c["id"] for c in outbound.state["pathway"]] == ["2C"]
    assert outbound.state["expected_suit"] == "D"
    assert outbound.state["current_player"] == "player2"


def test_handle_rejected_event(session):
    """Test a rule violation answers with its error code."""
    outbound = session.handle_event({"type": "play", "player_id": "player1", "card_id": "5D"})
    assert isinstance(outbound, ErrorEvent)
    assert outbound.code == ErrorCode.SUIT_MISMATCH

    outbound = session.handle_event({"type": "play", "player_id": "player2", "card_id": "3D"})
    assert outbound.code == ErrorCode.NOT_YOUR_TURN


def test_handle_malformed_event(session):
    """Test malformed payloads leave the game untouched."""
    version = session.snapshot()["version"]
    outbound = session.handle_event({"type": "nonsense"})
    assert isinstance(outbound, ErrorEvent)
    assert outbound.code == ErrorCode.INVALID_EVENT
    assert session.snapshot()["version"] == version


def test_handle_declaration_flow(session):
    """Test a Joker play asks for a declaration, then the declaration resolves it."""
    outbound = session.handle_event({"type": "play", "player_id": "player1", "card_id": "JOKER1"})
    assert isinstance(outbound, DeclarationRequiredEvent)
    assert outbound.card_id == "JOKER1"
    assert outbound.required_suit == Suit.CLUBS

    outbound = session.handle_event({"type": "declare", "card_id": "JOKER1", "suit": "C", "rank": "9"})
    assert isinstance(outbound, StateFullEvent)
    assert outbound.state["pathway"][0]["declared_rank"] == "9"
    assert outbound.state["pathway"][0]["label"] == "9 of ♣"


def test_handle_cancel_and_select(session):
    """Test cancel and select events."""
    session.handle_event({"type": "play", "player_id": "player1", "card_id": "JOKER1"})
    outbound = session.handle_event({"type": "cancel_declaration"})
    assert isinstance(outbound, StateFullEvent)
    assert outbound.state["pending_declaration"] is None

    outbound = session.handle_event({"type": "select", "card_id": "5D"})
    assert outbound.state["selected_card_id"] == "5D"


def test_handle_start_event():
    """Test a start event deals a new game, and a bad count is refused."""
    game = GameSession()
    outbound = game.handle_event({"type": "start", "player_count": 7})
    assert isinstance(outbound, ErrorEvent)
    assert outbound.code == ErrorCode.INVALID_PLAYER_COUNT

    outbound = game.handle_event({"type": "start", "player_count": 3, "seed": 1})
    assert isinstance(outbound, StateFullEvent)
    assert outbound.state["phase"] == PHASE_PLAYING
    assert len(outbound.state["players"]) == 3


def test_request_state_hides_other_hands(session):
    """Test a viewer only sees their own hand."""
    outbound = session.handle_event({"type": "request_state", "viewer_id": "player2"})
    players = outbound.state["players"]
    assert "hand" not in players[0]
    assert players[0]["hand_count"] == 3
    assert [c["id"] for c in players[1]["hand"]] == ["3D", "4H", "6S"]
    # Not player2's turn
    assert outbound.state["playable_cards"] == []


def test_snapshot_contents(session):
    """Test the snapshot carries the rules view of the table."""
    state = session.snapshot()
    assert state["phase"] == PHASE_PLAYING
    assert state["required_suit"] == "C"
    assert state["direction"] == 1
    assert state["force_suit"] is None
    assert state["scaffold"] is None
    assert state["playable_cards"] == ["2C", "JOKER1"]
    assert state["can_pass"] is False
    assert state["rules"]["mutation_length"] == 3
    assert all("hand" in p for p in state["players"])

    hand = state["players"][0]["hand"]
    assert hand[0]["effect"] is None
    assert hand[1]["effect"].startswith("Joker (Wild)")


def test_snapshot_is_detached(session):
    """Test changing a snapshot does not reach the live game."""
    state = session.state
    data = snapshot(state)
    data["pathway"].append({"id": "AS"})
    data["players"][0]["hand"].clear()
    assert session.pathway == []
    assert len(session.hands["player1"]) == 3
