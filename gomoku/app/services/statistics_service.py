import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from gomoku.app.engine.board import Cell
from gomoku.app.models.statistics_model import GameStatistics

logger = logging.getLogger(__name__)

STATS_ROW_ID = 1


@dataclass
class StatisticsSummary:
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

    def as_text(self) -> str:
        lines = [
            "=== Gomoku Game Statistics ===",
            f"Total Games: {self.total_games}",
            f"X Wins: {self.x_wins} ({self.x_win_rate:.1f}%)",
            f"O Wins: {self.o_wins} ({self.o_win_rate:.1f}%)",
            f"Draws: {self.draws} ({self.draw_rate:.1f}%)",
        ]
        if self.total_games > 0:
            lines.append(f"Average Game Duration: {self.average_duration_seconds:.1f} seconds")
            lines.append(f"Shortest Game: {self.shortest_game_seconds:.1f} seconds")
            lines.append(f"Longest Game: {self.longest_game_seconds:.1f} seconds")
        return "\n".join(lines)


async def get_or_create_stats(db: AsyncSession) -> GameStatistics:
    result = await db.execute(select(GameStatistics).where(GameStatistics.id == STATS_ROW_ID))
    stats = result.scalar_one_or_none()
    if not stats:
        stats = GameStatistics(
            id=STATS_ROW_ID, total_games=0, x_wins=0, o_wins=0, draws=0,
            total_duration_seconds=0.0, shortest_game_seconds=0.0, longest_game_seconds=0.0,
        )
        db.add(stats)
        # We don't commit here, we let the caller commit transactionally
    return stats


def _percent(part: int, total: int) -> float:
    return part / total * 100.0 if total > 0 else 0.0


def summarize(stats: GameStatistics) -> StatisticsSummary:
    total = stats.total_games or 0
    return StatisticsSummary(
        total_games=total,
        x_wins=stats.x_wins or 0,
        o_wins=stats.o_wins or 0,
        draws=stats.draws or 0,
        x_win_rate=_percent(stats.x_wins or 0, total),
        o_win_rate=_percent(stats.o_wins or 0, total),
        draw_rate=_percent(stats.draws or 0, total),
        average_duration_seconds=(stats.total_duration_seconds or 0.0) / total if total > 0 else 0.0,
        shortest_game_seconds=stats.shortest_game_seconds or 0.0,
        longest_game_seconds=stats.longest_game_seconds or 0.0,
    )


async def record_outcome(db: AsyncSession, winner: Optional[Cell], duration_seconds: float) -> StatisticsSummary:
    """
    Adds one finished game. winner: Cell.X, Cell.O, or None for a draw.
    """
    stats = await get_or_create_stats(db)
    duration = max(0.0, float(duration_seconds))

    stats.total_games = (stats.total_games or 0) + 1
    stats.total_duration_seconds = (stats.total_duration_seconds or 0.0) + duration

    # The first game always sets the shortest time
    if stats.total_games == 1 or duration < stats.shortest_game_seconds:
        stats.shortest_game_seconds = duration
    if duration > (stats.longest_game_seconds or 0.0):
        stats.longest_game_seconds = duration

    if winner is Cell.X:
        stats.x_wins = (stats.x_wins or 0) + 1
    elif winner is Cell.O:
        stats.o_wins = (stats.o_wins or 0) + 1
    else:
        stats.draws = (stats.draws or 0) + 1

    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Recorded game outcome: %s in %.1fs", winner or "draw", duration)
    return summarize(stats)


async def get_statistics(db: AsyncSession) -> StatisticsSummary:
    result = await db.execute(select(GameStatistics).where(GameStatistics.id == STATS_ROW_ID))
    stats = result.scalar_one_or_none()
    if stats is None:
        return summarize(GameStatistics(total_games=0, x_wins=0, o_wins=0, draws=0))
    return summarize(stats)


async def reset_statistics(db: AsyncSession) -> StatisticsSummary:
    stats = await get_or_create_stats(db)
    stats.total_games = 0
    stats.x_wins = 0
    stats.o_wins = 0
    stats.draws = 0
    stats.total_duration_seconds = 0.0
    stats.shortest_game_seconds = 0.0
    stats.longest_game_seconds = 0.0
    await db.commit()
    logger.info("Statistics reset")
    return summarize(stats)
