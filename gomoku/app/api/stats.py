from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gomoku.app.core.database import get_db
from gomoku.app.schemas.game_schema import StatisticsResponse
from gomoku.app.services import statistics_service

router = APIRouter()

@router.get("", response_model=StatisticsResponse)
async def get_statistics(db: AsyncSession = Depends(get_db)):
    """Running totals over every finished game."""
    return await statistics_service.get_statistics(db)

@router.get("/summary")
async def get_statistics_summary(db: AsyncSession = Depends(get_db)):
    summary = await statistics_service.get_statistics(db)
    return {"summary": summary.as_text()}

@router.delete("", response_model=StatisticsResponse)
async def reset_statistics(db: AsyncSession = Depends(get_db)):
    return await statistics_service.reset_statistics(db)
