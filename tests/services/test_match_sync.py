from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.exceptions import RecordPersistError
from app.models import Matchday, Player, SinglesGame
from app.schemas.source import MatchDetail, SourceMatch, SourceMatchday
from app.services.sync import MatchSyncService, TeamSyncService

SEASON = "2025/26"


async def _setup(session) -> tuple[MatchSyncService, dict[str, int]]:
    team_map = await TeamSyncService(session, Mock(), SEASON).sync_teams(
        ["Dart Lions", "Bulls Eye"]
    )
    service = MatchSyncService(session, Mock(), SEASON)
    await service.sync_matchdays(
        [SourceMatchday(round=1, date="12.09.2025", matches=[
            SourceMatch(home_team="Dart Lions", away_team="Bulls Eye", home_sets=6, away_sets=3),
        ])],
        team_map,
    )
    return service, team_map


def _detail(**overrides) -> MatchDetail:
    payload = {
        "matchday": 1,
        "homeTeam": "Dart Lions",
        "awayTeam": "Bulls Eye",
        "singles": [
            {"homePlayer": "Anna Berger", "awayPlayer": "Ben Huber",
             "homeScore": 3, "awayScore": 1, "homeCheckouts": [18]},
        ],
        "doubles": [
            {"homePlayers": ["Anna Berger", "Carl Maier"], "awayPlayers": ["Ben Huber"],
             "homeScore": 3, "awayScore": 0},
        ],
    }
    payload.update(overrides)
    return MatchDetail.model_validate(payload)


@pytest.mark.asyncio
class TestMatchSyncService:
    async def test_frontier(self, test_session):
        service = MatchSyncService(test_session, Mock(), SEASON)
        assert await service.get_frontier() == 0

        await _setup(test_session)

        assert await service.get_frontier() == 1
        assert await MatchSyncService(test_session, Mock(), "2024/25").get_frontier() == 0

    async def test_matchday_date_parsed(self, test_session):
        await _setup(test_session)

        stored = await test_session.scalar(select(Matchday.date))
        assert stored.isoformat() == "2025-09-12"

    async def test_incomplete_doubles_pair_skipped(self, test_session):
        service, team_map = await _setup(test_session)

        count = await service.sync_match_detail(_detail(), team_map)

        assert count == 1
        assert await test_session.scalar(select(func.count()).select_from(Player)) == 2

    async def test_detail_for_unknown_match_is_ignored(self, test_session):
        service, team_map = await _setup(test_session)

        assert await service.sync_match_detail(_detail(matchday=7), team_map) == 0
        assert await service.sync_match_detail(_detail(homeTeam="Guests"), team_map) == 0
        assert await test_session.scalar(select(func.count()).select_from(SinglesGame)) == 0

    async def test_resync_replaces_games(self, test_session):
        service, team_map = await _setup(test_session)
        await service.sync_match_detail(_detail(), team_map)

        await service.sync_match_detail(_detail(singles=[
            {"homePlayer": "Carl Maier", "awayPlayer": "Ben Huber", "homeScore": 0, "awayScore": 3},
            {"homePlayer": "Anna Berger", "awayPlayer": "Dora Wolf", "homeScore": 3, "awayScore": 2},
        ]), team_map)

        result = await test_session.execute(
            select(SinglesGame.game_order, SinglesGame.home_score).order_by(SinglesGame.game_order)
        )
        assert [tuple(row) for row in result.all()] == [(1, 0), (2, 3)]

    async def test_store_error_wrapped_with_context(self, test_session):
        service, team_map = await _setup(test_session)
        service.upsert_player = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception()))

        with pytest.raises(RecordPersistError) as exc_info:
            await service.sync_match_detail(_detail(), team_map)

        assert exc_info.value.context == {
            "round": 1, "home_team": "Dart Lions", "away_team": "Bulls Eye",
        }
