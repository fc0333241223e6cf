"""
Sync services module.

This module contains specialized services for synchronizing league data
from the source provider into the local database.

Services:
- TeamSyncService: Team identity (upsert with manual fallback)
- MatchSyncService: Matchdays, matches, singles/doubles detail
- PlayerSyncService: Players, player statistics, 180s, high finishes, venues
- StatsSyncService: Team averages, future schedule, standings
- SyncOrchestrator: Coordinates a full or incremental sync run
"""
from app.services.sync.base import BaseSyncService, is_constraint_mismatch
from app.services.sync.team_sync import TeamSyncService
from app.services.sync.match_sync import MatchSyncService
from app.services.sync.player_sync import PlayerSyncService
from app.services.sync.stats_sync import StatsSyncService
from app.services.sync.orchestrator import SyncOrchestrator

__all__ = [
    # Base
    "BaseSyncService",
    "is_constraint_mismatch",
    # Services
    "TeamSyncService",
    "MatchSyncService",
    "PlayerSyncService",
    "StatsSyncService",
    "SyncOrchestrator",
]
