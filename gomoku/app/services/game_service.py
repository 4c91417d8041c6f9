"""
Game Service - Centralized Game Logic

This service is the single source of truth for live game sessions.
It handles:
- Session creation (human vs human, human vs computer)
- Move processing (human and computer)
- Undo / redo / reset
- Reporting finished games to the statistics counter

Sessions live in memory. Every mutation of a session runs under that
session's lock. Computer moves are searched on a copy of the board in a
worker thread, so the event loop keeps serving other requests meanwhile
and state reads only ever see played stones.
"""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from gomoku.app.core.events import game_events
from gomoku.app.engine.board import Board, Cell
from gomoku.app.engine.exceptions import GameStateError
from gomoku.app.engine.rules import RulesEngine, GameStatus
from gomoku.app.engine.search import SearchEngine
from gomoku.app.services import statistics_service

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    id: int
    board: Board
    engine: RulesEngine
    computer_side: Optional[Cell] = None
    search: Optional[SearchEngine] = None
    started_at: float = field(default_factory=time.monotonic)
    outcome_recorded: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.computer_side is not None
            and not self.engine.is_game_over
            and self.engine.current_side is self.computer_side
        )


class GameState:
    """Represents the current state of a game for API responses"""
    def __init__(self, session: GameSession):
        engine = session.engine
        self.game_id = session.id
        self.rows = session.board.rows
        self.cols = session.board.cols
        self.win_length = session.board.win_length
        self.board = session.board.to_matrix()
        self.current_side = str(engine.current_side)
        self.status = str(engine.status)
        self.winner = str(engine.winner) if engine.winner else None
        self.is_game_over = engine.is_game_over
        self.computer_side = str(session.computer_side) if session.computer_side else None
        self.history = [
            {"row": row, "col": col, "side": side} for row, col, side in engine.get_move_list()
        ]
        self.last_move = self.history[-1] if self.history else None
        self.can_undo = engine.can_undo
        self.can_redo = engine.can_redo


class GameService:
    """Centralized service for all game operations"""

    def __init__(self):
        self.sessions: Dict[int, GameSession] = {}
        self._ids = itertools.count(1)

    # --- Session lifecycle ---

    async def create_game(
        self,
        db: AsyncSession,
        rows: int,
        cols: int,
        win_length: int,
        computer_side: Optional[Cell] = None,
        board: Optional[Board] = None,
    ) -> GameSession:
        """
        Create a new session. Pass `board` to continue from a loaded position,
        otherwise a blank board is built from the dimensions.
        """
        if board is None:
            board = Board(rows, cols, win_length)
            engine = RulesEngine(board)
        else:
            engine = RulesEngine.from_board(board)

        session = GameSession(
            id=next(self._ids),
            board=board,
            engine=engine,
            computer_side=computer_side,
            search=SearchEngine(side=computer_side) if computer_side else None,
        )
        # A position loaded already finished is never reported
        session.outcome_recorded = engine.is_game_over
        self.sessions[session.id] = session
        logger.info("Game %d created (%dx%d, computer=%s)", session.id, board.rows, board.cols, computer_side)

        # Computer opens when it holds the side to move
        if session.is_computer_turn:
            async with session.lock:
                await self._play_computer_turn(db, session)

        return session

    def get_session(self, game_id: int) -> GameSession:
        session = self.sessions.get(game_id)
        if session is None:
            raise ValueError(f"Game {game_id} not found")
        return session

    def get_state(self, game_id: int) -> GameState:
        return GameState(self.get_session(game_id))

    def list_games(self) -> List[GameState]:
        return [GameState(s) for s in self.sessions.values()]

    # --- Moves ---

    async def play_human_move(self, db: AsyncSession, game_id: int, row: int, col: int) -> GameState:
        """Apply a human move, then let the computer answer if it is its turn."""
        session = self.get_session(game_id)
        async with session.lock:
            if session.is_computer_turn:
                raise GameStateError("It's the computer's turn")

            session.engine.apply_move(row, col)
            await self._report_if_finished(db, session)

            if session.is_computer_turn:
                await self._play_computer_turn(db, session)

            return GameState(session)

    async def play_computer_move(self, db: AsyncSession, game_id: int) -> GameState:
        """Explicitly ask the computer to play, e.g. after an undo handed it the turn."""
        session = self.get_session(game_id)
        async with session.lock:
            if not session.is_computer_turn:
                raise GameStateError("It's not the computer's turn")
            await self._play_computer_turn(db, session)
            return GameState(session)

    async def _play_computer_turn(self, db: AsyncSession, session: GameSession):
        # Trial stones go on a copy, the session board only holds played stones
        start_time = time.time()
        move = await asyncio.to_thread(session.search.select_move, session.board.copy())
        duration = round(time.time() - start_time, 3)

        if move is None:
            logger.warning("Game %d: computer found no move", session.id)
            return

        session.engine.apply_move(*move)
        logger.info("Game %d: computer played %s in %.3fs", session.id, move, duration)
        await self._report_if_finished(db, session)

    # --- History ---

    async def undo(self, game_id: int) -> Tuple[bool, GameState]:
        session = self.get_session(game_id)
        async with session.lock:
            changed = session.engine.undo()
            return changed, GameState(session)

    async def redo(self, db: AsyncSession, game_id: int) -> Tuple[bool, GameState]:
        session = self.get_session(game_id)
        async with session.lock:
            changed = session.engine.redo()
            if changed:
                await self._report_if_finished(db, session)
            return changed, GameState(session)

    async def reset(self, db: AsyncSession, game_id: int) -> GameState:
        session = self.get_session(game_id)
        async with session.lock:
            session.engine.reset()
            session.started_at = time.monotonic()
            session.outcome_recorded = False
            if session.is_computer_turn:
                await self._play_computer_turn(db, session)
            return GameState(session)

    # --- Completion ---

    async def _report_if_finished(self, db: AsyncSession, session: GameSession):
        if not session.engine.is_game_over or session.outcome_recorded:
            return
        session.outcome_recorded = True
        winner = session.engine.winner if session.engine.status is GameStatus.WON else None
        await game_events.notify_complete(db, session, winner)


async def record_finished_game(db: AsyncSession, session: GameSession, winner: Optional[Cell]):
    duration = time.monotonic() - session.started_at
    await statistics_service.record_outcome(db, winner, duration)


game_events.subscribe_complete(record_finished_game)

# Singleton instance
game_service = GameService()
