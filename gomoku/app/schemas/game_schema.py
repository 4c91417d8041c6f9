from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime

from gomoku.app.models.enums import PlayerType, Difficulty

class MoveRecord(BaseModel):
    row: int
    col: int
    side: str

class GameCreate(BaseModel):
    # Dimensions default to the settings store when omitted
    rows: Optional[int] = None
    cols: Optional[int] = None
    win_length: Optional[int] = None
    player_x: PlayerType = PlayerType.HUMAN
    player_o: PlayerType = PlayerType.COMPUTER

class MoveRequest(BaseModel):
    row: int
    col: int

class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game_id: int
    rows: int
    cols: int
    win_length: int
    board: List[List[str]]
    current_side: str
    status: str
    winner: Optional[str] = None
    is_game_over: bool
    computer_side: Optional[str] = None
    history: List[MoveRecord]
    last_move: Optional[MoveRecord] = None
    can_undo: bool
    can_redo: bool

class HistoryActionResponse(BaseModel):
    changed: bool
    game: GameResponse

class SavedBoardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    rows: int
    columns: int
    win_length: int
    created_at: Optional[datetime] = None

class LoadBoardRequest(BaseModel):
    player_x: PlayerType = PlayerType.HUMAN
    player_o: PlayerType = PlayerType.COMPUTER

class StatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_games: int
    x_wins: int
    o_wins: int
    draws: int
    x_win_rate: float
    o_win_rate: float
    draw_rate: float
    average_duration_seconds: float
    shortest_game_seconds: float
    longest_game_seconds: float

class SettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    board_size: int
    win_length: int
    ai_difficulty: Difficulty
    sound_enabled: bool
    animations_enabled: bool

class SettingsUpdate(BaseModel):
    # Range checks happen in the settings store so they surface as configuration errors
    board_size: Optional[int] = None
    win_length: Optional[int] = None
    ai_difficulty: Optional[Difficulty] = None
    sound_enabled: Optional[bool] = None
    animations_enabled: Optional[bool] = None
