class GameError(Exception):
    """Base class for recoverable game errors."""


class InvalidMoveError(GameError):
    """Target cell is occupied or outside the board."""


class GameStateError(GameError):
    """Operation is not allowed in the current game state (e.g. game over)."""


class ConfigurationError(GameError):
    """Board dimensions, win length or a setting is out of range."""
