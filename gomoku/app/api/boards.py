from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from gomoku.app.api.errors import to_http_error
from gomoku.app.core.database import get_db
from gomoku.app.engine.exceptions import GameError
from gomoku.app.schemas.game_schema import GameResponse, LoadBoardRequest, SavedBoardResponse
from gomoku.app.services import persistence_service
from gomoku.app.services.game_service import game_service, GameState
from gomoku.app.services.players import computer_side_for

router = APIRouter()

@router.get("", response_model=List[str])
async def list_boards(db: AsyncSession = Depends(get_db)):
    """Saved board names, newest first."""
    return await persistence_service.list_boards(db)

@router.put("/{name}", response_model=SavedBoardResponse)
async def save_board(name: str, game_id: int, db: AsyncSession = Depends(get_db)):
    """Store the current board of a live game under `name` (overwrites)."""
    try:
        session = game_service.get_session(game_id)
    except ValueError as e:
        raise to_http_error(e)

    try:
        async with session.lock:
            return await persistence_service.save_board(db, name, session.board)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.post("/{name}/load", response_model=GameResponse)
async def load_board(name: str, players: LoadBoardRequest, db: AsyncSession = Depends(get_db)):
    """Start a new game from a saved board."""
    try:
        board = await persistence_service.load_board(db, name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if board is None:
        raise HTTPException(status_code=404, detail=f"Board '{name}' not found")

    try:
        computer_side = computer_side_for(players.player_x, players.player_o)
        session = await game_service.create_game(
            db, board.rows, board.cols, board.win_length,
            computer_side=computer_side, board=board,
        )
    except GameError as e:
        raise to_http_error(e)
    return GameState(session)

@router.delete("/{name}")
async def delete_board(name: str, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await persistence_service.delete_board(db, name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Board '{name}' not found")
    return {"message": f"Board '{name}' deleted"}
