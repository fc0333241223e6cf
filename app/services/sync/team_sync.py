"""
Team sync service.

Handles team identity: the (name, season) upsert and its manual fallback for
stores that lack a unique index on that pair.
"""
import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError

from app.exceptions import ConstraintMismatchError
from app.models import Team
from app.services.sync.base import BaseSyncService, is_constraint_mismatch
from app.utils.date_helpers import utcnow

logger = logging.getLogger(__name__)


class TeamSyncService(BaseSyncService):
    """
    Service for syncing teams.

    Every team write commits on its own so a rejected upsert can be rolled
    back without losing earlier teams.
    """

    async def load_team_map(self) -> dict[str, int]:
        """Map team names to ids for every team already stored for the season."""
        result = await self.db.execute(
            select(Team.name, Team.id)
            .where(Team.season == self.season)
            .order_by(Team.updated_at, Team.id)
        )
        return {name: team_id for name, team_id in result.all()}

    async def sync_teams(self, team_names: Iterable[str]) -> dict[str, int]:
        """
        Save every team name for the season.

        Any failure is fatal: teams are a prerequisite for everything else.

        Returns:
            Mapping of team name to team id for the saved teams
        """
        team_map: dict[str, int] = {}
        for name in team_names:
            if not name or name in team_map:
                continue
            team_map[name] = await self.save_team_with_fallback(name, self.division, self.season)

        logger.info(f"Synced {len(team_map)} teams for season {self.season}")
        return team_map

    async def save_team_with_fallback(
        self, name: str, division: str | None, season: str
    ) -> int:
        """
        Upsert a team on (name, season), falling back to ``resolve_team``
        when the store has no unique index for that conflict target.

        Calling twice with the same input leaves at most one row per
        (name, season) whichever path was taken.
        """
        try:
            return await self._upsert_team(name, division, season)
        except ConstraintMismatchError:
            logger.debug(f"Team upsert for '{name}' rejected, resolving manually")
            return await self.resolve_team(name, division, season)

    async def _upsert_team(self, name: str, division: str | None, season: str) -> int:
        """Single atomic upsert. Raises ConstraintMismatchError if the store can't honour it."""
        try:
            team_id = await self._upsert(
                Team,
                {
                    "name": name,
                    "division": division,
                    "season": season,
                    "updated_at": utcnow(),
                },
                index_elements=["name", "season"],
            )
        except DBAPIError as e:
            await self.db.rollback()
            if is_constraint_mismatch(e):
                raise ConstraintMismatchError(
                    f"No unique constraint on teams(name, season): {e.orig}"
                ) from e
            raise

        await self.db.commit()
        return team_id

    async def resolve_team(self, name: str, division: str | None, season: str) -> int:
        """
        Three-branch team resolution:

        1. exact (name, season) match: refresh its division
        2. same name in another season, most recently updated first:
           move it to ``season``/``division`` in place
        3. nothing found: insert a new row
        """
        result = await self.db.execute(
            select(Team)
            .where(Team.name == name, Team.season == season)
            .order_by(Team.updated_at.desc(), Team.id.desc())
            .limit(1)
        )
        team = result.scalar_one_or_none()
        if team is not None:
            if team.division != division:
                team.division = division
                await self.db.commit()
            return team.id

        result = await self.db.execute(
            select(Team)
            .where(Team.name == name)
            .order_by(Team.updated_at.desc(), Team.id.desc())
            .limit(1)
        )
        team = result.scalar_one_or_none()
        if team is not None:
            logger.info(f"Team '{name}': rolling over from {team.season} to {season}")
            team.season = season
            team.division = division
            team.updated_at = utcnow()
            await self.db.commit()
            return team.id

        team = Team(name=name, division=division, season=season)
        self.db.add(team)
        await self.db.commit()
        return team.id
