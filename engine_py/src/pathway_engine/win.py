# engine_py/src/pathway_engine/win.py

from .constants import PHASE_FINISHED
from .models import GameState, Player


def check_win(state: GameState, player: Player) -> bool:
    """
    Record ``player`` as the winner if their hand is empty.

    This function mutates the state: a win freezes the game by moving it to
    the finished phase, after which only a new game is accepted.

    Args:
        state: The working GameState
        player: The player who just played a card

    Returns:
        True if the player has won
    """
    if player.hand:
        return False

    state.winner = player.id
    state.phase = PHASE_FINISHED
    state.pending_declaration = None
    state.selected_card_id = None
    state.add_log(f"SYSTEM HALT! {player.name} has successfully transmitted all signals and WINS!")
    return True
