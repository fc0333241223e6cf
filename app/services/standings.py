"""Standings calculation: league table derived from match results."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Match, Matchday, Team
from app.schemas.source import SourceMatch, SourceMatchday
from app.schemas.stats import StandingEntry
from app.utils.date_helpers import format_source_date

logger = logging.getLogger(__name__)

# Sets per match by convention; not enforced.
EXPECTED_MAX_SETS = 9


def calculate_standings(
    matchdays: Iterable[SourceMatchday],
    team_ids: dict[str, int],
) -> list[StandingEntry]:
    """
    Build the league table from every match of the season.

    Each side of a match gets ``played += 1``, ``points += sets won`` and its
    legs for/against. Matches whose teams are not in ``team_ids`` are skipped.
    Sorted by points desc, then leg difference desc; the sort is stable so
    full ties keep first-seen order.
    """
    stats: dict[str, StandingEntry] = {}

    for matchday in matchdays:
        for match in matchday.matches:
            home_id = team_ids.get(match.home_team)
            away_id = team_ids.get(match.away_team)
            if home_id is None or away_id is None:
                continue

            if match.home_sets + match.away_sets > EXPECTED_MAX_SETS:
                logger.warning(
                    f"Round {matchday.round}: {match.home_team} vs {match.away_team} "
                    f"has {match.home_sets + match.away_sets} sets"
                )

            home = stats.setdefault(
                match.home_team, StandingEntry(team_name=match.home_team, team_id=home_id)
            )
            away = stats.setdefault(
                match.away_team, StandingEntry(team_name=match.away_team, team_id=away_id)
            )

            home.played += 1
            away.played += 1
            home.points += match.home_sets
            away.points += match.away_sets
            home.legs_for += match.home_legs
            home.legs_against += match.away_legs
            away.legs_for += match.away_legs
            away.legs_against += match.home_legs

    for entry in stats.values():
        entry.goal_diff = entry.legs_for - entry.legs_against

    table = sorted(stats.values(), key=lambda s: (-s.points, -s.goal_diff))
    for position, entry in enumerate(table, start=1):
        entry.position = position

    return table


async def load_season_matchdays(
    db: AsyncSession, season: str
) -> tuple[list[SourceMatchday], dict[str, int]]:
    """
    Load every stored matchday of a season with its match results.

    Returns:
        (matchdays ordered by round, team name -> team id for the teams involved)
    """
    result = await db.execute(
        select(Matchday)
        .where(Matchday.season == season)
        .options(
            selectinload(Matchday.matches).selectinload(Match.home_team),
            selectinload(Matchday.matches).selectinload(Match.away_team),
        )
        .order_by(Matchday.round)
        .execution_options(populate_existing=True)
    )
    matchdays = result.scalars().all()

    team_ids: dict[str, int] = {}
    parsed: list[SourceMatchday] = []
    for matchday in matchdays:
        matches = []
        for match in matchday.matches:
            home: Team = match.home_team
            away: Team = match.away_team
            team_ids.setdefault(home.name, home.id)
            team_ids.setdefault(away.name, away.id)
            matches.append(SourceMatch(
                home_team=home.name,
                away_team=away.name,
                home_sets=match.home_sets or 0,
                away_sets=match.away_sets or 0,
                home_legs=match.home_legs or 0,
                away_legs=match.away_legs or 0,
            ))
        parsed.append(SourceMatchday(
            round=matchday.round,
            date=format_source_date(matchday.date),
            matches=matches,
        ))

    return parsed, team_ids
