from fastapi import HTTPException, status

from gomoku.app.engine.exceptions import (
    GameError, InvalidMoveError, GameStateError, ConfigurationError,
)

def to_http_error(exc: Exception) -> HTTPException:
    """Maps engine and service errors onto HTTP responses."""
    if isinstance(exc, GameStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, (InvalidMoveError, ConfigurationError, GameError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
