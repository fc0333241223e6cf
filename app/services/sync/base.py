"""
Base class and utilities for sync services.

Contains shared logic used across all sync service implementations:
dialect-aware upserts, constraint-mismatch detection and player lookups.
"""
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.models import Player
from app.services.source_client import SourceProviderClient
from app.utils.date_helpers import utcnow

logger = logging.getLogger(__name__)

# SQLSTATE raised by PostgreSQL when ON CONFLICT names columns without a unique index
INVALID_CONFLICT_TARGET_SQLSTATE = "42P10"

CONSTRAINT_MISMATCH_MESSAGES = (
    "no unique or exclusion constraint matching the on conflict specification",
    "on conflict clause does not match any primary key or unique constraint",
)


def is_constraint_mismatch(error: DBAPIError) -> bool:
    """Tell whether a DB error means the upsert's conflict target has no unique index."""
    orig = getattr(error, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == INVALID_CONFLICT_TARGET_SQLSTATE:
        return True
    message = str(orig if orig is not None else error).lower()
    return any(text in message for text in CONSTRAINT_MISMATCH_MESSAGES)


# ==================== Base Sync Service ====================

class BaseSyncService:
    """
    Base class for all sync services.

    Provides common functionality:
    - Database session and source client access
    - Season/division defaults from settings
    - INSERT .. ON CONFLICT DO UPDATE for PostgreSQL and SQLite
    - Player identity upsert
    """

    def __init__(
        self,
        db: AsyncSession,
        client: SourceProviderClient,
        season: str | None = None,
    ):
        """
        Initialize the sync service.

        Args:
            db: SQLAlchemy async session
            client: Source provider client
            season: Season to sync (defaults to settings.current_season)
        """
        settings = get_settings()
        self.db = db
        self.client = client
        self.season = season or settings.current_season
        self.division = settings.league_division

    def _insert(self, model: Any):
        """Dialect-specific INSERT supporting on_conflict_do_update."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite.insert(model)
        return postgresql.insert(model)

    async def _upsert(
        self,
        model: Any,
        values: dict[str, Any],
        index_elements: list[str],
        update_fields: list[str] | None = None,
    ) -> int:
        """
        Insert ``values`` or update the row matching ``index_elements``.

        Returns:
            Primary key of the inserted or updated row
        """
        if update_fields is None:
            update_fields = [k for k in values if k not in index_elements]

        stmt = self._insert(model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=index_elements,
            set_={field: stmt.excluded[field] for field in update_fields},
        ).returning(model.id)

        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def upsert_player(self, name: str, team_id: int) -> int:
        """Get or create a player keyed on (name, team, season)."""
        return await self._upsert(
            Player,
            {
                "name": name,
                "team_id": team_id,
                "season": self.season,
                "updated_at": utcnow(),
            },
            index_elements=["name", "team_id", "season"],
        )

    async def find_player_id(self, name: str, team_id: int) -> int | None:
        """Look up an existing player without creating one."""
        result = await self.db.execute(
            select(Player.id).where(
                Player.name == name,
                Player.team_id == team_id,
                Player.season == self.season,
            )
        )
        return result.scalar_one_or_none()
