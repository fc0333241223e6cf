"""Season snapshot for the league dashboard, built from the store."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import get_settings
from app.models import (
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
    TeamAverage,
)
from app.schemas.league import LeagueDataResponse, LeagueMeta, LeagueResults
from app.schemas.source import (
    DoublesGameDetail,
    MatchDetail,
    SinglesGameDetail,
    SourceFutureMatch,
    SourcePlayerStat,
    SourceTeamAverage,
)
from app.schemas.stats import HighFinishLeader, OneEightyLeader, StandingEntry
from app.services import statistics
from app.services.standings import calculate_standings, load_season_matchdays
from app.utils.checkouts import parse_checkouts
from app.utils.date_helpers import format_source_date, utcnow

logger = logging.getLogger(__name__)


def _name(obj) -> str:
    return obj.name if obj is not None else ""


async def load_match_details(db: AsyncSession, season: str) -> list[MatchDetail]:
    """Rebuild per-game match detail for every stored match, ordered by round."""
    result = await db.execute(
        select(Match)
        .join(Matchday, Match.matchday_id == Matchday.id)
        .where(Match.season == season)
        .options(
            selectinload(Match.matchday),
            selectinload(Match.home_team),
            selectinload(Match.away_team),
            selectinload(Match.singles_games).selectinload(SinglesGame.home_player),
            selectinload(Match.singles_games).selectinload(SinglesGame.away_player),
            selectinload(Match.doubles_games).selectinload(DoublesGame.home_player1),
            selectinload(Match.doubles_games).selectinload(DoublesGame.home_player2),
            selectinload(Match.doubles_games).selectinload(DoublesGame.away_player1),
            selectinload(Match.doubles_games).selectinload(DoublesGame.away_player2),
        )
        .order_by(Matchday.round, Match.id)
        .execution_options(populate_existing=True)
    )

    details = []
    for match in result.scalars().all():
        singles = [
            SinglesGameDetail(
                home_player=_name(sg.home_player),
                away_player=_name(sg.away_player),
                home_score=sg.home_score or 0,
                away_score=sg.away_score or 0,
                home_average=sg.home_average or 0.0,
                away_average=sg.away_average or 0.0,
                home_checkouts=parse_checkouts(sg.home_checkouts),
                away_checkouts=parse_checkouts(sg.away_checkouts),
            )
            for sg in sorted(match.singles_games, key=lambda g: g.game_order)
        ]
        doubles = [
            DoublesGameDetail(
                home_players=[_name(dg.home_player1), _name(dg.home_player2)],
                away_players=[_name(dg.away_player1), _name(dg.away_player2)],
                home_score=dg.home_score or 0,
                away_score=dg.away_score or 0,
            )
            for dg in sorted(match.doubles_games, key=lambda g: g.game_order)
        ]
        details.append(MatchDetail(
            matchday=match.matchday.round,
            date=format_source_date(match.matchday.date),
            home_team=_name(match.home_team),
            away_team=_name(match.away_team),
            home_sets=match.home_sets or 0,
            away_sets=match.away_sets or 0,
            singles=singles,
            doubles=doubles,
        ))
    return details


async def _load_standings(
    db: AsyncSession, season: str, matchdays, team_ids: dict[str, int]
) -> list[StandingEntry]:
    result = await db.execute(
        select(LeagueStanding)
        .where(LeagueStanding.season == season)
        .options(selectinload(LeagueStanding.team))
        .order_by(LeagueStanding.position)
    )
    rows = result.scalars().all()
    if not rows:
        # Nothing written back yet, derive from the stored matches
        return calculate_standings(matchdays, team_ids)

    return [
        StandingEntry(
            team_name=_name(row.team),
            team_id=row.team_id,
            played=row.played,
            points=row.points,
            legs_for=row.legs_for,
            legs_against=row.legs_against,
            goal_diff=row.goal_diff,
            position=row.position,
        )
        for row in rows
    ]


async def _load_team_averages(db: AsyncSession, season: str) -> dict[str, SourceTeamAverage]:
    result = await db.execute(
        select(TeamAverage)
        .where(TeamAverage.season == season)
        .options(selectinload(TeamAverage.team))
    )
    averages = {}
    for row in result.scalars().all():
        if row.team is None:
            continue
        averages[row.team.name] = SourceTeamAverage(
            average=row.average,
            singles=f"{row.singles_won}-{row.singles_lost}",
            doubles=f"{row.doubles_won}-{row.doubles_lost}",
        )
    return averages


async def _load_player_stats(db: AsyncSession, season: str) -> list[SourcePlayerStat]:
    result = await db.execute(
        select(PlayerStatistic)
        .where(PlayerStatistic.season == season)
        .options(selectinload(PlayerStatistic.player).selectinload(Player.team))
    )
    stats = [
        SourcePlayerStat(
            name=_name(row.player),
            team=_name(row.player.team) if row.player else "",
            average=row.average,
            singles_won=row.singles_won,
            singles_lost=row.singles_lost,
            singles_percentage=row.singles_percentage,
            doubles_won=row.doubles_won,
            doubles_lost=row.doubles_lost,
            doubles_percentage=row.doubles_percentage,
            combined_percentage=row.combined_percentage,
        )
        for row in result.scalars().all()
    ]
    return sorted(stats, key=lambda s: s.combined_percentage or 0.0, reverse=True)


async def _load_future_schedule(db: AsyncSession, season: str) -> list[SourceFutureMatch]:
    result = await db.execute(
        select(FutureMatch)
        .where(FutureMatch.season == season)
        .options(selectinload(FutureMatch.home_team), selectinload(FutureMatch.away_team))
        .order_by(FutureMatch.round, FutureMatch.id)
    )
    return [
        SourceFutureMatch(
            round=row.round,
            date=format_source_date(row.date),
            home_team=_name(row.home_team),
            away_team=_name(row.away_team),
        )
        for row in result.scalars().all()
    ]


async def _load_top_180s(db: AsyncSession, season: str, limit: int) -> list[OneEightyLeader]:
    result = await db.execute(
        select(OneEighty)
        .where(OneEighty.season == season, OneEighty.count > 0)
        .options(selectinload(OneEighty.player), selectinload(OneEighty.team))
        .order_by(OneEighty.count.desc(), OneEighty.id)
        .limit(limit)
    )
    return [
        OneEightyLeader(player=_name(row.player), team=_name(row.team), count=row.count)
        for row in result.scalars().all()
    ]


async def _load_top_high_finishes(
    db: AsyncSession, season: str, limit: int
) -> list[HighFinishLeader]:
    result = await db.execute(
        select(HighFinish)
        .where(HighFinish.season == season)
        .options(selectinload(HighFinish.player), selectinload(HighFinish.team))
        .order_by(HighFinish.finish.desc(), HighFinish.id)
        .limit(limit)
    )
    return [
        HighFinishLeader(
            player=_name(row.player),
            team=_name(row.team),
            finish=row.finish,
            count=row.count,
        )
        for row in result.scalars().all()
    ]


async def build_league_data(
    db: AsyncSession, season: str, limit: int = statistics.DEFAULT_LIMIT
) -> LeagueDataResponse:
    """
    Assemble the full season snapshot: results, standings, averages,
    schedule, match detail and every leaderboard.

    Sections without data come back empty rather than failing the read.
    """
    settings = get_settings()

    matchdays, team_ids = await load_season_matchdays(db, season)
    details = await load_match_details(db, season)

    response = LeagueDataResponse(
        results=LeagueResults(matchdays=matchdays),
        standings=await _load_standings(db, season, matchdays, team_ids),
        team_averages=await _load_team_averages(db, season),
        player_stats=await _load_player_stats(db, season),
        future_schedule=await _load_future_schedule(db, season),
        latest_matches=details,
        best_legs=statistics.best_legs(details, limit, settings.best_legs_max_darts),
        weekly_average_wins=statistics.weekly_average_wins(details, limit),
        highest_matchday_averages=statistics.highest_matchday_averages(details, limit),
        winning_streaks=statistics.winning_streaks(details, limit),
        top_180s=await _load_top_180s(db, season, limit),
        top_high_finishes=await _load_top_high_finishes(db, season, limit),
        meta=LeagueMeta(season=season, timestamp=utcnow()),
    )
    logger.info(
        f"Built league data for {season}: {len(matchdays)} matchdays, "
        f"{len(details)} matches"
    )
    return response
