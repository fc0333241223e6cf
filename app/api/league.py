from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import get_settings
from app.schemas.league import LeagueDataResponse
from app.services.league_data import build_league_data

router = APIRouter(prefix="/league", tags=["league"])


@router.get("", response_model=LeagueDataResponse)
async def get_league_data(
    season: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """Full season snapshot: results, standings, averages, schedule and leaderboards."""
    if season is None:
        season = get_settings().current_season
    return await build_league_data(db, season)
