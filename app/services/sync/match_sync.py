"""
Match sync service.

Handles matchdays, match results and the per-game detail (singles/doubles)
of each match.
"""
import logging
from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import RecordPersistError
from app.models import DoublesGame, Match, Matchday, SinglesGame
from app.schemas.source import MatchDetail, SourceMatchday
from app.services.sync.base import BaseSyncService
from app.utils.checkouts import join_checkouts
from app.utils.date_helpers import parse_source_date

logger = logging.getLogger(__name__)


class MatchSyncService(BaseSyncService):
    """
    Service for syncing matchdays, matches and game detail.

    Singles and doubles are replaced wholesale per match: game order and
    scores can shift between provider scrapes.
    """

    async def get_frontier(self) -> int:
        """Highest stored round for the season, 0 when nothing is stored."""
        result = await self.db.execute(
            select(func.max(Matchday.round)).where(Matchday.season == self.season)
        )
        return result.scalar_one_or_none() or 0

    async def sync_matchdays(
        self, matchdays: Iterable[SourceMatchday], team_map: dict[str, int]
    ) -> int:
        """
        Upsert matchdays on (round, season) and their matches on
        (matchday, home team, away team).

        Returns:
            Number of matches synced
        """
        count = 0
        for matchday in matchdays:
            matchday_id = await self._upsert(
                Matchday,
                {
                    "round": matchday.round,
                    "date": parse_source_date(matchday.date),
                    "season": self.season,
                },
                index_elements=["round", "season"],
            )

            for match in matchday.matches:
                home_id = team_map.get(match.home_team)
                away_id = team_map.get(match.away_team)
                if home_id is None or away_id is None:
                    logger.debug(
                        f"Round {matchday.round}: unknown team in "
                        f"{match.home_team} vs {match.away_team}, skipping"
                    )
                    continue

                await self._upsert(
                    Match,
                    {
                        "matchday_id": matchday_id,
                        "home_team_id": home_id,
                        "away_team_id": away_id,
                        "home_sets": match.home_sets,
                        "away_sets": match.away_sets,
                        "home_legs": match.home_legs,
                        "away_legs": match.away_legs,
                        "season": self.season,
                    },
                    index_elements=["matchday_id", "home_team_id", "away_team_id"],
                )
                count += 1

        await self.db.commit()
        logger.info(f"Synced {count} matches for season {self.season}")
        return count

    async def sync_match_details(
        self, details: Iterable[MatchDetail], team_map: dict[str, int]
    ) -> int:
        """
        Replace singles/doubles for every detailed match.

        A failing match is rolled back, logged with its team names and
        skipped; the remaining matches still sync.

        Returns:
            Number of games written
        """
        count = 0
        for detail in details:
            try:
                count += await self.sync_match_detail(detail, team_map)
            except Exception as e:
                await self.db.rollback()
                logger.error(
                    f"Failed to sync detail for round {detail.matchday} "
                    f"{detail.home_team} vs {detail.away_team}: {e}"
                )
        logger.info(f"Synced {count} games for season {self.season}")
        return count

    async def _find_match_id(self, detail: MatchDetail, home_id: int, away_id: int) -> int | None:
        result = await self.db.execute(
            select(Match.id)
            .join(Matchday, Match.matchday_id == Matchday.id)
            .where(
                Matchday.round == detail.matchday,
                Matchday.season == self.season,
                Match.home_team_id == home_id,
                Match.away_team_id == away_id,
            )
        )
        return result.scalar_one_or_none()

    async def sync_match_detail(self, detail: MatchDetail, team_map: dict[str, int]) -> int:
        """
        Delete and re-insert the games of one match, committing on success.

        Returns 0 without writing when the match or its teams are not stored yet.

        Raises:
            RecordPersistError: the store rejected one of the writes
        """
        try:
            return await self._replace_games(detail, team_map)
        except SQLAlchemyError as e:
            raise RecordPersistError(
                f"Could not store games: {e}",
                context={
                    "round": detail.matchday,
                    "home_team": detail.home_team,
                    "away_team": detail.away_team,
                },
            ) from e

    async def _replace_games(self, detail: MatchDetail, team_map: dict[str, int]) -> int:
        home_id = team_map.get(detail.home_team)
        away_id = team_map.get(detail.away_team)
        if home_id is None or away_id is None:
            logger.debug(f"Detail {detail.home_team} vs {detail.away_team}: unknown team")
            return 0

        match_id = await self._find_match_id(detail, home_id, away_id)
        if match_id is None:
            logger.debug(
                f"Detail {detail.home_team} vs {detail.away_team}: "
                f"no stored match in round {detail.matchday}"
            )
            return 0

        await self.db.execute(delete(SinglesGame).where(SinglesGame.match_id == match_id))
        await self.db.execute(delete(DoublesGame).where(DoublesGame.match_id == match_id))

        count = 0
        for i, single in enumerate(detail.singles):
            home_player_id = await self.upsert_player(single.home_player, home_id)
            away_player_id = await self.upsert_player(single.away_player, away_id)
            self.db.add(SinglesGame(
                match_id=match_id,
                home_player_id=home_player_id,
                away_player_id=away_player_id,
                home_score=single.home_score,
                away_score=single.away_score,
                home_average=single.home_average,
                away_average=single.away_average,
                home_checkouts=join_checkouts(single.home_checkouts),
                away_checkouts=join_checkouts(single.away_checkouts),
                game_order=i + 1,
            ))
            count += 1

        for i, double in enumerate(detail.doubles):
            names = [*double.home_players[:2], *double.away_players[:2]]
            if len(names) != 4 or not all(names):
                logger.debug(
                    f"Doubles {i + 1} of {detail.home_team} vs {detail.away_team}: "
                    f"incomplete pairs, skipping"
                )
                continue

            hp1, hp2, ap1, ap2 = names
            self.db.add(DoublesGame(
                match_id=match_id,
                home_player1_id=await self.upsert_player(hp1, home_id),
                home_player2_id=await self.upsert_player(hp2, home_id),
                away_player1_id=await self.upsert_player(ap1, away_id),
                away_player2_id=await self.upsert_player(ap2, away_id),
                home_score=double.home_score,
                away_score=double.away_score,
                game_order=i + 1,
            ))
            count += 1

        await self.db.commit()
        return count
