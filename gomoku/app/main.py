import logging
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from contextlib import asynccontextmanager

from gomoku.app.core.database import get_db, init_models
from gomoku.app.core.settings import settings_store
from gomoku.app.api.errors import to_http_error
from gomoku.app.api.boards import router as boards_router
from gomoku.app.api.settings import router as settings_router
from gomoku.app.api.stats import router as stats_router
from gomoku.app.engine.exceptions import GameError
from gomoku.app.schemas.game_schema import GameCreate, GameResponse, HistoryActionResponse, MoveRequest
from gomoku.app.services.game_service import game_service
from gomoku.app.services.players import computer_side_for

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# --- LIFESPAN MANAGER ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the tables exist
    logger.info("Initializing database tables")
    await init_models()
    yield
# -------------------------------------------------

app = FastAPI(title="Gomoku", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"], # Allow Vite (5173) and React default (3000)
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(boards_router, prefix="/boards", tags=["Boards"])
app.include_router(stats_router, prefix="/stats", tags=["Stats"])
app.include_router(settings_router, prefix="/settings", tags=["Settings"])

@app.post("/games", response_model=GameResponse)
async def create_game(game_data: GameCreate, db: AsyncSession = Depends(get_db)):
    settings = settings_store.get()
    # Only omitted fields fall back, an explicit 0 is rejected by the board
    rows = settings.board_size if game_data.rows is None else game_data.rows
    cols = settings.board_size if game_data.cols is None else game_data.cols
    win_length = settings.win_length if game_data.win_length is None else game_data.win_length

    try:
        computer_side = computer_side_for(game_data.player_x, game_data.player_o)
        session = await game_service.create_game(db, rows, cols, win_length, computer_side=computer_side)
    except GameError as e:
        raise to_http_error(e)

    return game_service.get_state(session.id)

@app.get("/games", response_model=List[GameResponse])
async def list_games():
    return game_service.list_games()

@app.get("/games/{game_id}", response_model=GameResponse)
async def get_game(game_id: int):
    try:
        return game_service.get_state(game_id)
    except ValueError as e:
        raise to_http_error(e)

@app.post("/games/{game_id}/moves", response_model=GameResponse)
async def play_move(game_id: int, move: MoveRequest, db: AsyncSession = Depends(get_db)):
    """Human move. In a game against the computer the reply is included."""
    try:
        return await game_service.play_human_move(db, game_id, move.row, move.col)
    except (GameError, ValueError) as e:
        raise to_http_error(e)

@app.post("/games/{game_id}/computer-move", response_model=GameResponse)
async def play_computer_move(game_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await game_service.play_computer_move(db, game_id)
    except (GameError, ValueError) as e:
        raise to_http_error(e)

@app.post("/games/{game_id}/undo", response_model=HistoryActionResponse)
async def undo_move(game_id: int):
    try:
        changed, state = await game_service.undo(game_id)
    except (GameError, ValueError) as e:
        raise to_http_error(e)
    return HistoryActionResponse(changed=changed, game=GameResponse.model_validate(state))

@app.post("/games/{game_id}/redo", response_model=HistoryActionResponse)
async def redo_move(game_id: int, db: AsyncSession = Depends(get_db)):
    try:
        changed, state = await game_service.redo(db, game_id)
    except (GameError, ValueError) as e:
        raise to_http_error(e)
    return HistoryActionResponse(changed=changed, game=GameResponse.model_validate(state))

@app.post("/games/{game_id}/reset", response_model=GameResponse)
async def reset_game(game_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await game_service.reset(db, game_id)
    except (GameError, ValueError) as e:
        raise to_http_error(e)

if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(app, host=os.getenv("GOMOKU_HOST", "127.0.0.1"), port=int(os.getenv("GOMOKU_PORT", "8000")))
