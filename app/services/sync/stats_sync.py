"""
Stats sync service.

Handles team averages, the future schedule and the league standings
write-back.
"""
import logging
from collections.abc import Iterable

from app.models import FutureMatch, LeagueStanding, TeamAverage
from app.schemas.source import SourceFutureMatch, SourceTeamAverage
from app.services.standings import calculate_standings, load_season_matchdays
from app.services.sync.base import BaseSyncService
from app.utils.date_helpers import parse_source_date, utcnow
from app.utils.numbers import parse_win_loss

logger = logging.getLogger(__name__)


class StatsSyncService(BaseSyncService):
    """
    Service for syncing per-team aggregates and derived standings.

    Handles:
    - Team averages (overwritten every sync)
    - Future schedule
    - League standings, always recomputed over the whole season
    """

    async def sync_team_averages(
        self, team_averages: dict[str, SourceTeamAverage], team_map: dict[str, int]
    ) -> int:
        """
        Overwrite each team's season averages.

        "W-L" strings are split into won/lost counts; missing parts count as 0.

        Returns:
            Number of team averages synced
        """
        count = 0
        for team_name, stats in team_averages.items():
            team_id = team_map.get(team_name)
            if team_id is None:
                continue

            singles_won, singles_lost = parse_win_loss(stats.singles)
            doubles_won, doubles_lost = parse_win_loss(stats.doubles)
            await self._upsert(
                TeamAverage,
                {
                    "team_id": team_id,
                    "season": self.season,
                    "average": stats.average,
                    "singles_won": singles_won,
                    "singles_lost": singles_lost,
                    "doubles_won": doubles_won,
                    "doubles_lost": doubles_lost,
                    "updated_at": utcnow(),
                },
                index_elements=["team_id", "season"],
            )
            count += 1

        await self.db.commit()
        logger.info(f"Synced {count} team averages for season {self.season}")
        return count

    async def sync_future_schedule(
        self, schedule: Iterable[SourceFutureMatch], team_map: dict[str, int]
    ) -> int:
        """
        Upsert upcoming fixtures on (round, home team, away team, season).

        Returns:
            Number of fixtures synced
        """
        count = 0
        for fixture in schedule:
            home_id = team_map.get(fixture.home_team)
            away_id = team_map.get(fixture.away_team)
            if home_id is None or away_id is None:
                continue

            await self._upsert(
                FutureMatch,
                {
                    "round": fixture.round,
                    "date": parse_source_date(fixture.date),
                    "home_team_id": home_id,
                    "away_team_id": away_id,
                    "season": self.season,
                },
                index_elements=["round", "home_team_id", "away_team_id", "season"],
            )
            count += 1

        await self.db.commit()
        logger.info(f"Synced {count} future fixtures for season {self.season}")
        return count

    async def sync_standings(self) -> int:
        """
        Recompute the league table from every stored match of the season
        and write it back.

        Returns:
            Number of standings rows written
        """
        matchdays, team_ids = await load_season_matchdays(self.db, self.season)
        table = calculate_standings(matchdays, team_ids)

        for entry in table:
            await self._upsert(
                LeagueStanding,
                {
                    "team_id": entry.team_id,
                    "season": self.season,
                    "position": entry.position,
                    "played": entry.played,
                    "points": entry.points,
                    "legs_for": entry.legs_for,
                    "legs_against": entry.legs_against,
                    "goal_diff": entry.goal_diff,
                    "updated_at": utcnow(),
                },
                index_elements=["team_id", "season"],
            )

        await self.db.commit()
        logger.info(f"Synced standings for season {self.season}: {len(table)} teams")
        return len(table)
