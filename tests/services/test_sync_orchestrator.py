import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from app.exceptions import SourceFetchError
from app.models import (
    ClubVenue,
    DoublesGame,
    FutureMatch,
    HighFinish,
    LeagueStanding,
    Match,
    Matchday,
    OneEighty,
    Player,
    PlayerStatistic,
    SinglesGame,
    SyncLog,
    Team,
    TeamAverage,
)
from app.schemas.source import SourceSnapshot
from app.schemas.sync import SyncMode
from app.services.sync import SyncOrchestrator

SEASON = "2025/26"

COUNTED_MODELS = (
    Team, Player, Matchday, Match, SinglesGame, DoublesGame, TeamAverage,
    PlayerStatistic, LeagueStanding, FutureMatch, OneEighty, HighFinish, ClubVenue,
)


async def _count(session, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


async def _row_counts(session) -> dict[str, int]:
    return {model.__name__: await _count(session, model) for model in COUNTED_MODELS}


async def _standings(session) -> list[tuple]:
    result = await session.execute(
        select(Team.name, LeagueStanding.position, LeagueStanding.points, LeagueStanding.goal_diff)
        .join(Team, LeagueStanding.team_id == Team.id)
        .where(LeagueStanding.season == SEASON)
        .order_by(LeagueStanding.position)
    )
    return [tuple(row) for row in result.all()]


async def _sync_logs(session) -> list[tuple]:
    result = await session.execute(
        select(SyncLog.sync_type, SyncLog.status, SyncLog.records_updated, SyncLog.error_message)
        .order_by(SyncLog.id)
    )
    return [tuple(row) for row in result.all()]


@pytest.mark.asyncio
class TestFullSync:
    async def test_full_sync_populates_store(self, test_session, fake_source_client):
        orchestrator = SyncOrchestrator(test_session, fake_source_client, SEASON)

        result = await orchestrator.sync(full_sync=True)

        assert result.mode == SyncMode.FULL
        assert result.matchdays_synced == 2
        assert result.records_updated == 29
        fake_source_client.fetch_snapshot.assert_awaited_once_with(SEASON, min_round=None)

        assert await _row_counts(test_session) == {
            "Team": 4,
            "Player": 7,
            "Matchday": 2,
            "Match": 4,
            "SinglesGame": 5,
            "DoublesGame": 1,
            "TeamAverage": 3,
            "PlayerStatistic": 2,
            "LeagueStanding": 4,
            "FutureMatch": 2,
            "OneEighty": 1,
            "HighFinish": 2,
            "ClubVenue": 1,
        }

    async def test_standings_written_back(self, test_session, fake_source_client):
        await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(full_sync=True)

        assert await _standings(test_session) == [
            ("Checkout Kings", 1, 12, 9),
            ("Dart Lions", 2, 11, 7),
            ("Triple Twenty", 3, 8, -3),
            ("Bulls Eye", 4, 5, -13),
        ]

    async def test_games_keep_order_and_checkouts(self, test_session, fake_source_client):
        await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(full_sync=True)

        result = await test_session.execute(
            select(SinglesGame.game_order, SinglesGame.home_checkouts, SinglesGame.away_checkouts)
            .join(Match, SinglesGame.match_id == Match.id)
            .join(Team, Match.away_team_id == Team.id)
            .where(Team.name == "Triple Twenty")
            .order_by(SinglesGame.game_order)
        )
        assert [tuple(row) for row in result.all()] == [
            (1, "15, 21, 24", None),
            (2, "36", "22, 25, 29"),
        ]

    async def test_team_averages_split_win_loss(self, test_session, fake_source_client):
        await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(full_sync=True)

        result = await test_session.execute(
            select(
                TeamAverage.singles_won, TeamAverage.singles_lost,
                TeamAverage.doubles_won, TeamAverage.doubles_lost,
            )
            .join(Team, TeamAverage.team_id == Team.id)
            .where(Team.name == "Checkout Kings")
        )
        assert tuple(result.one()) == (9, 5, 0, 0)

    async def test_high_finishes_grouped_by_value(self, test_session, fake_source_client):
        await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(full_sync=True)

        result = await test_session.execute(
            select(HighFinish.finish, HighFinish.count).order_by(HighFinish.finish.desc())
        )
        assert [tuple(row) for row in result.all()] == [(120, 2), (101, 1)]

    async def test_second_full_sync_is_idempotent(self, test_session, fake_source_client):
        orchestrator = SyncOrchestrator(test_session, fake_source_client, SEASON)
        await orchestrator.sync(full_sync=True)
        counts = await _row_counts(test_session)
        standings = await _standings(test_session)

        await orchestrator.sync(full_sync=True)

        assert await _row_counts(test_session) == counts
        assert await _standings(test_session) == standings
        assert [log[:2] for log in await _sync_logs(test_session)] == [
            ("full", "success"),
            ("full", "success"),
        ]


@pytest.mark.asyncio
class TestIncrementalSync:
    async def test_first_incremental_sync_starts_from_round_one(
        self, test_session, fake_source_client
    ):
        result = await SyncOrchestrator(test_session, fake_source_client, SEASON).sync()

        assert result.mode == SyncMode.INCREMENTAL
        assert result.matchdays_synced == 2
        fake_source_client.fetch_snapshot.assert_awaited_once_with(SEASON, min_round=1)

    async def test_requests_rounds_past_frontier(self, test_session, fake_source_client):
        orchestrator = SyncOrchestrator(test_session, fake_source_client, SEASON)
        await orchestrator.sync(full_sync=True)
        counts = await _row_counts(test_session)

        result = await orchestrator.sync()

        fake_source_client.fetch_snapshot.assert_awaited_with(SEASON, min_round=3)
        # Provider ignored min_round and sent rounds 1-2 again; they are filtered out
        assert result.matchdays_synced == 0
        assert await _row_counts(test_session) == counts
        assert await _standings(test_session) == [
            ("Checkout Kings", 1, 12, 9),
            ("Dart Lions", 2, 11, 7),
            ("Triple Twenty", 3, 8, -3),
            ("Bulls Eye", 4, 5, -13),
        ]

    async def test_new_round_extends_table(
        self, test_session, fake_source_client, league_payload
    ):
        orchestrator = SyncOrchestrator(test_session, fake_source_client, SEASON)
        await orchestrator.sync(full_sync=True)

        league_payload["matchdays"].append({
            "round": 3,
            "date": "10.10.2025",
            "matches": [
                {"homeTeam": "Checkout Kings", "awayTeam": "Dart Lions",
                 "homeSets": 2, "awaySets": 7, "homeLegs": 8, "awayLegs": 15},
            ],
        })
        fake_source_client.fetch_snapshot = AsyncMock(
            return_value=SourceSnapshot.model_validate(league_payload)
        )

        result = await orchestrator.sync()

        assert result.matchdays_synced == 1
        assert await _count(test_session, Matchday) == 3
        assert (await _standings(test_session))[0] == ("Dart Lions", 1, 18, 14)


@pytest.mark.asyncio
class TestSyncFailures:
    async def test_failed_match_detail_does_not_block_others(
        self, test_session, fake_source_client
    ):
        orchestrator = SyncOrchestrator(test_session, fake_source_client, SEASON)
        original = orchestrator.matches.sync_match_detail

        async def flaky(detail, team_map):
            if detail.away_team == "Triple Twenty":
                raise RuntimeError("corrupt detail")
            return await original(detail, team_map)

        orchestrator.matches.sync_match_detail = flaky

        result = await orchestrator.sync(full_sync=True)

        # 29 records minus the two singles of the failing match
        assert result.records_updated == 27
        assert await _count(test_session, SinglesGame) == 3
        assert await _count(test_session, Match) == 4
        assert (await _sync_logs(test_session))[0][:2] == ("full", "success")
        # Standings still count the failing match's result
        assert await _standings(test_session) == [
            ("Checkout Kings", 1, 12, 9),
            ("Dart Lions", 2, 11, 7),
            ("Triple Twenty", 3, 8, -3),
            ("Bulls Eye", 4, 5, -13),
        ]

    async def test_failed_venue_keeps_special_stats(self, test_session, fake_source_client):
        fake_source_client.fetch_club_venue = AsyncMock(
            side_effect=SourceFetchError("venue down", status_code=500)
        )

        result = await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(
            full_sync=True
        )

        # 29 records minus the Checkout Kings venue
        assert result.records_updated == 28
        assert await _count(test_session, OneEighty) == 1
        assert await _count(test_session, HighFinish) == 2
        assert await _count(test_session, ClubVenue) == 0
        assert await _count(test_session, LeagueStanding) == 4

    async def test_failed_special_stats_for_one_team_are_skipped(
        self, test_session, fake_source_client
    ):
        fake_source_client.fetch_special_stats = AsyncMock(
            side_effect=SourceFetchError("stats down", status_code=500)
        )

        result = await SyncOrchestrator(test_session, fake_source_client, SEASON).sync(
            full_sync=True
        )

        # 29 records minus one 180s row and two high finish rows
        assert result.records_updated == 26
        assert await _count(test_session, OneEighty) == 0
        assert await _count(test_session, HighFinish) == 0
        assert await _count(test_session, ClubVenue) == 1
        assert (await _sync_logs(test_session))[0][:2] == ("full", "success")

    async def test_time_limit_writes_error_log(self, test_session, fake_source_client):
        async def slow_snapshot(season, min_round=None):
            await asyncio.sleep(5)

        fake_source_client.fetch_snapshot = AsyncMock(side_effect=slow_snapshot)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(
                SyncOrchestrator(test_session, fake_source_client, SEASON).sync(),
                timeout=0.1,
            )

        assert await _sync_logs(test_session) == [
            ("incremental", "error", 0, "sync aborted: time limit exceeded"),
        ]
        assert await _count(test_session, Team) == 0

    async def test_source_failure_logs_error_and_raises(self, test_session, fake_source_client):
        fake_source_client.fetch_snapshot = AsyncMock(
            side_effect=SourceFetchError("provider down", status_code=503)
        )

        with pytest.raises(SourceFetchError):
            await SyncOrchestrator(test_session, fake_source_client, SEASON).sync()

        assert await _sync_logs(test_session) == [
            ("incremental", "error", 0, "provider down"),
        ]
        assert await _count(test_session, Team) == 0
