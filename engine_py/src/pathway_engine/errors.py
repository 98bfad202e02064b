# engine_py/src/pathway_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
INVALID_PLAYER_COUNT = "INVALID_PLAYER_COUNT"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
CARD_NOT_FOUND = "CARD_NOT_FOUND"
INVALID_WILD_DECLARATION = "INVALID_WILD_DECLARATION"
SUIT_MISMATCH = "SUIT_MISMATCH"
ILLEGAL_ACTION_FOR_STATE = "ILLEGAL_ACTION_FOR_STATE"
INVALID_EVENT = "INVALID_EVENT"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
