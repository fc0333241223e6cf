"""Helper functions for the team detail endpoint."""

from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import (
    ClubVenue,
    FutureMatch,
    HighFinish,
    OneEighty,
    Player,
    PlayerStatistic,
    Team,
    TeamAverage,
)
from app.schemas.source import MatchDetail, SinglesGameDetail, SourceMatchday
from app.schemas.team import (
    ComparisonEntry,
    MatchAverages,
    MatchReport,
    MatchReportDetails,
    PlayerAverage,
    PlayerHighFinishes,
    PlayerOneEighties,
    ReportDoubles,
    ReportSingles,
    RosterPlayer,
    ScheduleEntry,
    ScorePair,
    TeamDetailResponse,
    TeamRecord,
    VenueResponse,
)
from app.services.league_data import load_match_details
from app.services.standings import calculate_standings, load_season_matchdays
from app.utils.checkouts import join_checkouts


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _singles_side(game: SinglesGameDetail, is_home: bool) -> tuple:
    """(our player, their player, our checkouts, their checkouts)"""
    if is_home:
        return game.home_player, game.away_player, game.home_checkouts, game.away_checkouts
    return game.away_player, game.home_player, game.away_checkouts, game.home_checkouts


def build_match_report(detail: MatchDetail, is_home: bool) -> MatchReport:
    """
    Build one match report from our team's perspective.

    The lineup follows the playing order S1, S2, D1, D2, S3, S4.
    """
    lineup: list[str] = []
    checkouts: list[str] = []

    def add_singles(index: int) -> None:
        if index >= len(detail.singles):
            return
        ours, theirs, our_checkouts, their_checkouts = _singles_side(detail.singles[index], is_home)
        if ours:
            lineup.append(ours)
        if ours and our_checkouts:
            checkouts.append(f"{ours}: {join_checkouts(our_checkouts)}")
        if theirs and their_checkouts:
            checkouts.append(f"{theirs}: {join_checkouts(their_checkouts)}")

    def add_doubles(index: int) -> None:
        if index >= len(detail.doubles):
            return
        game = detail.doubles[index]
        pair = game.home_players if is_home else game.away_players
        names = " / ".join(name for name in pair if name)
        if names:
            lineup.append(names)

    add_singles(0)
    add_singles(1)
    add_doubles(0)
    add_doubles(1)
    add_singles(2)
    add_singles(3)

    singles = [
        ReportSingles(
            home_player=g.home_player,
            away_player=g.away_player,
            home_score=g.home_score,
            away_score=g.away_score,
        )
        for g in detail.singles
    ]
    doubles = [
        ReportDoubles(
            home_players=g.home_players,
            away_players=g.away_players,
            home_score=g.home_score,
            away_score=g.away_score,
        )
        for g in detail.doubles
    ]
    total_legs = ScorePair(
        home=sum(g.home_score for g in singles) + sum(g.home_score for g in doubles),
        away=sum(g.away_score for g in singles) + sum(g.away_score for g in doubles),
    )

    our_sets, their_sets = (
        (detail.home_sets, detail.away_sets) if is_home else (detail.away_sets, detail.home_sets)
    )
    return MatchReport(
        matchday=detail.matchday,
        lineup=lineup,
        checkouts=checkouts,
        opponent=detail.away_team if is_home else detail.home_team,
        score=f"{our_sets}:{their_sets}",
        is_home_match=is_home,
        details=MatchReportDetails(
            singles=singles,
            doubles=doubles,
            total_legs=total_legs,
            total_sets=ScorePair(home=detail.home_sets, away=detail.away_sets),
        ),
    )


def build_match_averages(detail: MatchDetail, is_home: bool) -> MatchAverages:
    ours = [
        PlayerAverage(
            player_name=g.home_player if is_home else g.away_player,
            average=g.home_average if is_home else g.away_average,
        )
        for g in detail.singles
    ]
    theirs = [
        PlayerAverage(
            player_name=g.away_player if is_home else g.home_player,
            average=g.away_average if is_home else g.home_average,
        )
        for g in detail.singles
    ]
    return MatchAverages(
        matchday=detail.matchday,
        opponent=detail.away_team if is_home else detail.home_team,
        team_average=_mean([p.average for p in ours]),
        player_averages=ours,
        opponent_average=_mean([p.average for p in theirs]),
        opponent_player_averages=theirs,
    )


def team_record(matchdays: list[SourceMatchday], team_name: str) -> TeamRecord:
    """Win/draw/loss count by sets for one team."""
    record = TeamRecord()
    for matchday in matchdays:
        for match in matchday.matches:
            if match.home_team == team_name:
                ours, theirs = match.home_sets, match.away_sets
            elif match.away_team == team_name:
                ours, theirs = match.away_sets, match.home_sets
            else:
                continue

            if ours > theirs:
                record.wins += 1
            elif ours == theirs:
                record.draws += 1
            else:
                record.losses += 1
    return record


async def _load_roster(db: AsyncSession, team_id: int, season: str) -> list[RosterPlayer]:
    result = await db.execute(
        select(PlayerStatistic)
        .join(Player, PlayerStatistic.player_id == Player.id)
        .where(PlayerStatistic.season == season, Player.team_id == team_id)
        .options(selectinload(PlayerStatistic.player))
    )
    roster = [
        RosterPlayer(
            player_name=row.player.name,
            average=row.average,
            singles=f"{row.singles_won}-{row.singles_lost}",
            singles_won=row.singles_won,
            singles_lost=row.singles_lost,
            doubles_won=row.doubles_won,
            doubles_lost=row.doubles_lost,
            total_games=row.singles_won + row.singles_lost + row.doubles_won + row.doubles_lost,
        )
        for row in result.scalars().all()
    ]
    return sorted(roster, key=lambda p: p.average or 0.0, reverse=True)


async def _load_comparison(db: AsyncSession, season: str) -> list[ComparisonEntry]:
    result = await db.execute(
        select(TeamAverage)
        .where(TeamAverage.season == season)
        .options(selectinload(TeamAverage.team))
    )
    return [
        ComparisonEntry(
            team_name=row.team.name,
            average=row.average,
            singles=f"{row.singles_won}-{row.singles_lost}",
            doubles=f"{row.doubles_won}-{row.doubles_lost}",
        )
        for row in result.scalars().all()
        if row.team is not None
    ]


async def _load_one_eighties(
    db: AsyncSession, team_id: int, season: str
) -> list[PlayerOneEighties]:
    result = await db.execute(
        select(OneEighty)
        .where(OneEighty.season == season, OneEighty.team_id == team_id)
        .options(selectinload(OneEighty.player))
        .order_by(OneEighty.count.desc(), OneEighty.id)
    )
    return [
        PlayerOneEighties(player_name=row.player.name, count=row.count)
        for row in result.scalars().all()
    ]


async def _load_high_finishes(
    db: AsyncSession, team_id: int, season: str
) -> list[PlayerHighFinishes]:
    result = await db.execute(
        select(HighFinish)
        .where(HighFinish.season == season, HighFinish.team_id == team_id)
        .options(selectinload(HighFinish.player))
        .order_by(HighFinish.finish.desc(), HighFinish.id)
    )
    grouped: dict[str, list[int]] = {}
    for row in result.scalars().all():
        grouped.setdefault(row.player.name, []).extend([row.finish] * row.count)

    return [
        PlayerHighFinishes(player_name=name, finishes=sorted(finishes, reverse=True))
        for name, finishes in grouped.items()
    ]


async def _load_schedule(
    db: AsyncSession, team_id: int, season: str, today: date
) -> list[ScheduleEntry]:
    result = await db.execute(
        select(FutureMatch)
        .where(
            FutureMatch.season == season,
            FutureMatch.date >= today,
            or_(FutureMatch.home_team_id == team_id, FutureMatch.away_team_id == team_id),
        )
        .options(selectinload(FutureMatch.home_team), selectinload(FutureMatch.away_team))
        .order_by(FutureMatch.date, FutureMatch.round)
    )
    fixtures = result.scalars().all()
    if not fixtures:
        return []

    # One query for every host's venue
    host_ids = {fixture.home_team_id for fixture in fixtures}
    venue_result = await db.execute(select(ClubVenue).where(ClubVenue.team_id.in_(host_ids)))
    venues = {venue.team_id: venue for venue in venue_result.scalars().all()}

    schedule = []
    for fixture in fixtures:
        is_home = fixture.home_team_id == team_id
        opponent = fixture.away_team if is_home else fixture.home_team
        venue = venues.get(fixture.home_team_id)
        schedule.append(ScheduleEntry(
            round=fixture.round,
            date=fixture.date,
            opponent=opponent.name if opponent else "",
            venue="Home" if is_home else "Away",
            address=(venue.address or "") if venue else "",
            location=(venue.zipcode or "") if venue else "",
        ))
    return schedule


async def build_team_detail(
    db: AsyncSession, team_name: str, season: str, today: date | None = None
) -> TeamDetailResponse | None:
    """Assemble the team detail view. Returns None when the team is unknown for the season."""
    result = await db.execute(
        select(Team)
        .where(Team.name == team_name, Team.season == season)
        .order_by(Team.updated_at.desc(), Team.id.desc())
        .limit(1)
    )
    team = result.scalar_one_or_none()
    if team is None:
        return None

    venue_result = await db.execute(select(ClubVenue).where(ClubVenue.team_id == team.id))
    venue = venue_result.scalar_one_or_none()

    matchdays, team_ids = await load_season_matchdays(db, season)
    table = calculate_standings(matchdays, team_ids)
    position = next((entry.position for entry in table if entry.team_id == team.id), None)

    details = [
        d for d in await load_match_details(db, season)
        if team.name in (d.home_team, d.away_team)
    ]
    # Latest first
    details.reverse()

    return TeamDetailResponse(
        team_name=team.name,
        division=team.division,
        season=season,
        players=await _load_roster(db, team.id, season),
        match_reports=[build_match_report(d, d.home_team == team.name) for d in details],
        match_averages=[build_match_averages(d, d.home_team == team.name) for d in details],
        league_position=position,
        team_standings=team_record(matchdays, team.name),
        club_venue=VenueResponse(
            name=venue.name, address=venue.address, phone=venue.phone, zipcode=venue.zipcode
        ) if venue else None,
        comparison_data=await _load_comparison(db, season),
        one_eightys=await _load_one_eighties(db, team.id, season),
        high_finishes=await _load_high_finishes(db, team.id, season),
        schedule=await _load_schedule(db, team.id, season, today or date.today()),
    )
