import httpx
import logging
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from app.config import get_settings
from app.exceptions import SourceFetchError
from app.schemas.source import ClubVenueInfo, SourceSnapshot, SpecialStats

logger = logging.getLogger(__name__)

# Exceptions to retry on
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.ConnectError,
    httpx.RemoteProtocolError,
)


class SourceProviderClient:
    """Client for the league data provider (structured league JSON + special stats)."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        settings = get_settings()
        self.base_url = (base_url or settings.source_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.source_api_timeout_seconds

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
    ) -> httpx.Response:
        """
        Make an HTTP request with automatic retry on transient failures.

        Retries up to 3 times with exponential backoff (2s, 4s, 8s...)
        on connection timeouts, read timeouts, and connection errors.
        """
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await getattr(client, method)(
                url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response

    async def _get_json(
        self, path: str, params: dict | None = None, allow_not_found: bool = False
    ) -> Any:
        """GET ``path`` and decode JSON, mapping transport and HTTP failures to SourceFetchError."""
        url = f"{self.base_url}{path}"
        try:
            response = await self._make_request("get", url, params=params)
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if allow_not_found and status_code == 404:
                return None
            raise SourceFetchError(
                f"Source provider returned HTTP {status_code} for {path}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            raise SourceFetchError(f"Source provider unreachable ({path}): {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise SourceFetchError(f"Source provider returned invalid JSON for {path}") from e

    async def fetch_snapshot(self, season: str, min_round: int | None = None) -> SourceSnapshot:
        """
        Fetch the league snapshot for a season.

        Args:
            season: Season string, e.g. "2025/26"
            min_round: Only request matchdays with round >= min_round

        Returns:
            Parsed SourceSnapshot
        """
        params: dict[str, Any] = {"season": season}
        if min_round is not None:
            params["min_round"] = min_round

        data = await self._get_json("/league", params=params)
        try:
            snapshot = SourceSnapshot.model_validate(data or {})
        except ValidationError as e:
            raise SourceFetchError(f"Source provider returned a malformed snapshot: {e}") from e

        logger.info(
            f"Fetched snapshot for {season}: {len(snapshot.matchdays)} matchdays, "
            f"{len(snapshot.latest_matches)} detailed matches"
        )
        return snapshot

    async def fetch_special_stats(self, team_name: str, season: str) -> SpecialStats:
        """Fetch 180s and high finishes for one team."""
        data = await self._get_json(
            f"/teams/{quote(team_name, safe='')}/special-stats",
            params={"season": season},
        )
        try:
            return SpecialStats.model_validate(data or {})
        except ValidationError as e:
            raise SourceFetchError(f"Malformed special stats for {team_name}: {e}") from e

    async def fetch_club_venue(self, team_name: str, season: str) -> ClubVenueInfo | None:
        """Fetch club venue info for one team. Returns None when the provider has none."""
        data = await self._get_json(
            f"/teams/{quote(team_name, safe='')}/venue",
            params={"season": season},
            allow_not_found=True,
        )
        if not data:
            return None
        try:
            return ClubVenueInfo.model_validate(data)
        except ValidationError as e:
            raise SourceFetchError(f"Malformed venue for {team_name}: {e}") from e
