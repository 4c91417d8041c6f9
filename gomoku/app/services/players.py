from typing import Optional

from gomoku.app.engine.board import Cell
from gomoku.app.engine.exceptions import ConfigurationError
from gomoku.app.models.enums import PlayerType

def computer_side_for(player_x: PlayerType, player_o: PlayerType) -> Optional[Cell]:
    """Which side the computer plays, or None for human vs human."""
    if player_x == PlayerType.COMPUTER and player_o == PlayerType.COMPUTER:
        raise ConfigurationError("At least one player must be human")
    if player_x == PlayerType.COMPUTER:
        return Cell.X
    if player_o == PlayerType.COMPUTER:
        return Cell.O
    return None
