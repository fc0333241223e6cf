"""
Sync orchestrator service.

Coordinates sync operations across all sync services,
ensuring correct order of operations and handling dependencies.
"""
import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import PersistenceError
from app.models import SyncLog
from app.schemas.sync import SyncMode, SyncResult, SyncStatus
from app.services.source_client import SourceProviderClient
from app.services.sync.match_sync import MatchSyncService
from app.services.sync.player_sync import PlayerSyncService
from app.services.sync.stats_sync import StatsSyncService
from app.services.sync.team_sync import TeamSyncService

logger = logging.getLogger(__name__)

ABORTED_MESSAGE = "sync aborted: time limit exceeded"


class SyncOrchestrator:
    """
    Orchestrates a sync run across all sync services.

    Operations run in a fixed order to satisfy foreign key dependencies:
    1. Teams - no dependencies, any failure is fatal
    2. Team averages
    3. Matchdays and matches
    4. Player statistics
    5. Special stats (180s, high finishes, venues) - per-team failures skipped
    6. Future schedule
    7. Match detail (singles/doubles) - per-match failures skipped
    8. Standings - recomputed over every stored match of the season

    Exactly one SyncLog row is written per run, including runs cancelled by
    a caller's time limit. Concurrent runs on the same
    season are not guarded against; callers must serialize them.
    """

    def __init__(
        self,
        db: AsyncSession,
        client: SourceProviderClient,
        season: str | None = None,
    ):
        """
        Initialize the orchestrator with all sync services.

        Args:
            db: SQLAlchemy async session
            client: Source provider client
            season: Season to sync (defaults to settings.current_season)
        """
        self.db = db
        self.client = client

        # Initialize specialized sync services
        self.teams = TeamSyncService(db, client, season)
        self.matches = MatchSyncService(db, client, season)
        self.players = PlayerSyncService(db, client, season)
        self.stats = StatsSyncService(db, client, season)
        self.season = self.teams.season

    async def sync(self, full_sync: bool = False) -> SyncResult:
        """
        Run one sync.

        Args:
            full_sync: Re-fetch the whole season instead of rounds past the frontier

        Returns:
            SyncResult with record/matchday counts and the mode used

        Raises:
            SourceFetchError: provider unreachable or non-2xx
            PersistenceError: unrecoverable store failure
        """
        mode = SyncMode.FULL if full_sync else SyncMode.INCREMENTAL
        logger.info(f"Starting {mode.value} sync for season {self.season}")

        try:
            result = await self._run(mode)
        except asyncio.CancelledError:
            logger.error(f"{mode.value.capitalize()} sync for season {self.season} was aborted")
            await asyncio.shield(self._abort(mode))
            raise
        except Exception as e:
            logger.error(f"{mode.value.capitalize()} sync for season {self.season} failed: {e}")
            await self.db.rollback()
            await self._write_log(mode, SyncStatus.ERROR, 0, str(e))
            if isinstance(e, SQLAlchemyError):
                raise PersistenceError(str(e)) from e
            raise

        await self._write_log(mode, SyncStatus.SUCCESS, result.records_updated)
        logger.info(
            f"Sync complete: {result.records_updated} records, "
            f"{result.matchdays_synced} matchdays ({mode.value})"
        )
        return result

    async def _run(self, mode: SyncMode) -> SyncResult:
        frontier = await self.matches.get_frontier()
        min_round = frontier + 1 if mode == SyncMode.INCREMENTAL else None

        snapshot = await self.client.fetch_snapshot(self.season, min_round=min_round)
        if mode == SyncMode.INCREMENTAL:
            # The provider may ignore min_round
            snapshot = snapshot.model_copy(update={
                "matchdays": [md for md in snapshot.matchdays if md.round > frontier],
            })
        logger.info(
            f"Frontier for {self.season} is round {frontier}; "
            f"{len(snapshot.matchdays)} matchdays to sync"
        )

        team_map = await self.teams.load_team_map()
        synced_teams = await self.teams.sync_teams(snapshot.team_names())
        team_map.update(synced_teams)

        records = len(synced_teams)
        records += await self.stats.sync_team_averages(snapshot.team_averages, team_map)
        records += await self.matches.sync_matchdays(snapshot.matchdays, team_map)
        records += await self.players.sync_player_statistics(snapshot.player_stats, team_map)
        records += await self.players.sync_special_stats(synced_teams)
        records += await self.stats.sync_future_schedule(snapshot.future_schedule, team_map)
        records += await self.matches.sync_match_details(snapshot.latest_matches, team_map)
        records += await self.stats.sync_standings()

        return SyncResult(
            records_updated=records,
            matchdays_synced=len(snapshot.matchdays),
            mode=mode,
        )

    async def _abort(self, mode: SyncMode) -> None:
        """Roll back a cancelled run and record it as failed."""
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback of aborted sync failed: {e}")
        await self._write_log(mode, SyncStatus.ERROR, 0, ABORTED_MESSAGE)

    async def _write_log(
        self,
        mode: SyncMode,
        status: SyncStatus,
        records_updated: int,
        error_message: str | None = None,
    ) -> None:
        """Append the SyncLog row for this run."""
        try:
            self.db.add(SyncLog(
                sync_type=mode.value,
                season=self.season,
                status=status.value,
                records_updated=records_updated,
                error_message=error_message,
            ))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to write sync log ({status.value}): {e}")
            if status == SyncStatus.SUCCESS:
                raise PersistenceError(f"Failed to write sync log: {e}") from e
