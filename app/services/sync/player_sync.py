"""
Player sync service.

Handles players, their season statistics and the per-team special stats
(180s, high finishes) plus the club venue fetched alongside them.
"""
import logging
from collections import Counter
from collections.abc import Iterable

from sqlalchemy import delete

from app.models import ClubVenue, HighFinish, OneEighty, PlayerStatistic
from app.schemas.source import SourcePlayerStat
from app.services.sync.base import BaseSyncService
from app.utils.date_helpers import utcnow

logger = logging.getLogger(__name__)


class PlayerSyncService(BaseSyncService):
    """Service for syncing players, player statistics and special stats."""

    async def sync_player_statistics(
        self, player_stats: Iterable[SourcePlayerStat], team_map: dict[str, int]
    ) -> int:
        """
        Upsert each player on (name, team, season) and overwrite their
        season statistics row.

        Returns:
            Number of player statistics synced
        """
        count = 0
        for stat in player_stats:
            team_id = team_map.get(stat.team)
            if team_id is None:
                logger.debug(f"Player {stat.name}: unknown team '{stat.team}', skipping")
                continue

            player_id = await self.upsert_player(stat.name, team_id)
            await self._upsert(
                PlayerStatistic,
                {
                    "player_id": player_id,
                    "season": self.season,
                    "average": stat.average,
                    "singles_won": stat.singles_won,
                    "singles_lost": stat.singles_lost,
                    "singles_percentage": stat.singles_percentage,
                    "doubles_won": stat.doubles_won,
                    "doubles_lost": stat.doubles_lost,
                    "doubles_percentage": stat.doubles_percentage,
                    "combined_percentage": stat.combined_percentage,
                    "updated_at": utcnow(),
                },
                index_elements=["player_id", "season"],
            )
            count += 1

        await self.db.commit()
        logger.info(f"Synced {count} player statistics for season {self.season}")
        return count

    async def sync_special_stats(self, team_map: dict[str, int]) -> int:
        """
        Fetch and save 180s, high finishes and club venue for every team.

        A failure for one team is logged and the next team is processed.
        The venue is committed separately, so a venue failure keeps the
        team's 180s and high finishes.

        Returns:
            Number of records written
        """
        count = 0
        for team_name, team_id in team_map.items():
            try:
                count += await self.sync_team_special_stats(team_name, team_id)
            except Exception as e:
                await self.db.rollback()
                logger.warning(f"Failed to sync special stats for {team_name}: {e}")

            try:
                count += await self.sync_club_venue(team_name, team_id)
            except Exception as e:
                await self.db.rollback()
                logger.warning(f"Failed to sync club venue for {team_name}: {e}")
        logger.info(f"Synced {count} special stat records for season {self.season}")
        return count

    async def sync_team_special_stats(self, team_name: str, team_id: int) -> int:
        """Save 180s and high finishes for one team, committing on success."""
        stats = await self.client.fetch_special_stats(team_name, self.season)
        count = 0

        for entry in stats.one_eightys:
            player_id = await self.find_player_id(entry.player_name, team_id)
            if player_id is None:
                logger.debug(f"180s: unknown player {entry.player_name} ({team_name})")
                continue
            await self._upsert(
                OneEighty,
                {
                    "player_id": player_id,
                    "team_id": team_id,
                    "season": self.season,
                    "count": entry.count,
                },
                index_elements=["player_id", "season"],
            )
            count += 1

        for entry in stats.high_finishes:
            player_id = await self.find_player_id(entry.player_name, team_id)
            if player_id is None:
                logger.debug(f"High finishes: unknown player {entry.player_name} ({team_name})")
                continue

            await self.db.execute(
                delete(HighFinish).where(
                    HighFinish.player_id == player_id,
                    HighFinish.season == self.season,
                )
            )
            for finish, finish_count in Counter(entry.finishes).items():
                self.db.add(HighFinish(
                    player_id=player_id,
                    team_id=team_id,
                    season=self.season,
                    finish=finish,
                    count=finish_count,
                ))
                count += 1

        await self.db.commit()
        return count

    async def sync_club_venue(self, team_name: str, team_id: int) -> int:
        """Save the club venue for one team. Returns 1 if a venue was written."""
        venue = await self.client.fetch_club_venue(team_name, self.season)
        if venue is None:
            return 0

        await self._upsert(
            ClubVenue,
            {
                "team_id": team_id,
                "name": venue.name,
                "address": venue.address,
                "phone": venue.phone,
                "zipcode": venue.zipcode,
            },
            index_elements=["team_id"],
        )
        await self.db.commit()
        return 1
