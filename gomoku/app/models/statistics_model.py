from sqlalchemy import Column, Integer, Float, DateTime
from sqlalchemy.sql import func
from gomoku.app.core.database import Base

class GameStatistics(Base):
    """Running totals for finished games. A single row with id=1."""
    __tablename__ = "game_statistics"

    id = Column(Integer, primary_key=True)
    total_games = Column(Integer, default=0)
    x_wins = Column(Integer, default=0)
    o_wins = Column(Integer, default=0)
    draws = Column(Integer, default=0)

    total_duration_seconds = Column(Float, default=0.0)
    shortest_game_seconds = Column(Float, default=0.0)
    longest_game_seconds = Column(Float, default=0.0)

    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
