from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import get_settings
from app.schemas.team import TeamDetailResponse
from app.services.team_overview import build_team_detail
from app.utils.error_messages import get_error_message

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/{team_name}", response_model=TeamDetailResponse)
async def get_team_detail(
    team_name: str,
    season: str | None = Query(default=None),
    lang: str = Query(default="en", pattern="^(de|en)$"),
    db: AsyncSession = Depends(get_db),
):
    """Get roster, match reports, schedule and comparison data for one team."""
    if season is None:
        season = get_settings().current_season

    detail = await build_team_detail(db, team_name, season)
    if detail is None:
        raise HTTPException(status_code=404, detail=get_error_message("team_not_found", lang))
    return detail
