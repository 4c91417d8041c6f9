"""
Persistence Service - Named Board Storage

Saves and restores boards by a caller-chosen name. Boards are stored with
Board.encode(), so a load reproduces dimensions, win length and every cell.
Move history is not stored: a loaded board starts a fresh undo history.
"""

import logging
from typing import List, Optional
from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from gomoku.app.engine.board import Board
from gomoku.app.models.board_model import SavedBoard

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Board name must not be blank")
    return cleaned


async def save_board(db: AsyncSession, name: str, board: Board) -> SavedBoard:
    """Insert or overwrite the board stored under `name`."""
    name = _clean_name(name)
    try:
        result = await db.execute(select(SavedBoard).where(SavedBoard.name == name))
        record = result.scalar_one_or_none()

        if record is None:
            record = SavedBoard(name=name)
            db.add(record)

        record.rows = board.rows
        record.columns = board.cols
        record.win_length = board.win_length
        record.board_data = board.encode()
        record.created_at = func.now()

        await db.commit()
        await db.refresh(record)
    except Exception:
        logger.exception("Failed to save board '%s'", name)
        await db.rollback()
        raise

    logger.info("Board '%s' saved", name)
    return record


async def load_board(db: AsyncSession, name: str) -> Optional[Board]:
    name = _clean_name(name)
    result = await db.execute(select(SavedBoard).where(SavedBoard.name == name))
    record = result.scalar_one_or_none()

    if record is None:
        logger.warning("No board found with name '%s'", name)
        return None

    board = Board.decode(record.board_data)
    if (board.rows, board.cols) != (record.rows, record.columns):
        raise ValueError(f"Stored board '{name}' is inconsistent with its recorded dimensions")

    logger.info("Board '%s' loaded", name)
    return board


async def list_boards(db: AsyncSession) -> List[str]:
    """Saved board names, newest first."""
    result = await db.execute(
        select(SavedBoard.name).order_by(SavedBoard.created_at.desc(), SavedBoard.name)
    )
    names = list(result.scalars().all())
    logger.info("Retrieved %d board names", len(names))
    return names


async def delete_board(db: AsyncSession, name: str) -> bool:
    name = _clean_name(name)
    result = await db.execute(delete(SavedBoard).where(SavedBoard.name == name))
    await db.commit()

    if result.rowcount:
        logger.info("Board '%s' deleted", name)
        return True

    logger.warning("No board found with name '%s' to delete", name)
    return False
