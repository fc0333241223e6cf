from fastapi import APIRouter

from app.api.league import router as league_router
from app.api.teams import router as teams_router
from app.api.sync import router as sync_router

api_router = APIRouter()

# Dashboard reads
api_router.include_router(league_router)
api_router.include_router(teams_router)

# Source provider sync
api_router.include_router(sync_router)
