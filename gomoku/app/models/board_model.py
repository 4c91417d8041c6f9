from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from gomoku.app.core.database import Base

class SavedBoard(Base):
    __tablename__ = "saved_boards"

    name = Column(String(255), primary_key=True, index=True)
    rows = Column(Integer, nullable=False)
    columns = Column(Integer, nullable=False)
    win_length = Column(Integer, nullable=False, default=5)

    # Board.encode() output, header line included
    board_data = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
