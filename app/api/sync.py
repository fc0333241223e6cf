import asyncio
import logging
import traceback

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_source_client
from app.config import get_settings
from app.exceptions import SourceFetchError
from app.schemas.sync import SyncErrorResponse, SyncResponse
from app.services.source_client import SourceProviderClient
from app.services.sync import SyncOrchestrator
from app.utils.error_messages import get_error_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sync", tags=["sync"])


def _error_response(status_code: int, message: str) -> JSONResponse:
    settings = get_settings()
    body = SyncErrorResponse(
        error=message,
        traceback=traceback.format_exc() if settings.environment != "production" else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "",
    response_model=SyncResponse,
    responses={
        500: {"model": SyncErrorResponse},
        502: {"model": SyncErrorResponse},
        504: {"model": SyncErrorResponse},
    },
)
async def trigger_sync(
    full: bool = Query(default=False),
    season: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
    client: SourceProviderClient = Depends(get_source_client),
):
    """
    Sync league data from the source provider.

    Incremental by default (rounds past the highest stored one); ``full=true``
    re-syncs the whole season. Not safe to run concurrently with itself.
    """
    settings = get_settings()
    orchestrator = SyncOrchestrator(db, client, season)

    try:
        result = await asyncio.wait_for(
            orchestrator.sync(full_sync=full),
            timeout=settings.sync_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error(f"Sync exceeded {settings.sync_timeout_seconds}s and was aborted")
        return _error_response(504, get_error_message("sync_timeout"))
    except SourceFetchError as e:
        return _error_response(502, f"{get_error_message('source_unavailable')}: {e}")
    except Exception as e:
        logger.exception("Sync failed")
        return _error_response(500, f"{get_error_message('sync_failed')}: {e}")

    return SyncResponse(
        message=f"Successfully synced {result.records_updated} records",
        records_updated=result.records_updated,
        matchdays_synced=result.matchdays_synced,
        mode=result.mode,
    )
