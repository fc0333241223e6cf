from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.source import (
    MatchDetail,
    SourceFutureMatch,
    SourceMatchday,
    SourcePlayerStat,
    SourceTeamAverage,
)
from app.schemas.stats import (
    BestLegEntry,
    HighFinishLeader,
    MatchdayAverageEntry,
    OneEightyLeader,
    StandingEntry,
    WeeklyAverageWinEntry,
    WinningStreakEntry,
)


class LeagueResults(CamelModel):
    matchdays: list[SourceMatchday] = []


class LeagueMeta(CamelModel):
    source: str = "database"
    season: str
    timestamp: datetime


class LeagueDataResponse(CamelModel):
    results: LeagueResults
    standings: list[StandingEntry] = []
    team_averages: dict[str, SourceTeamAverage] = {}
    player_stats: list[SourcePlayerStat] = []
    future_schedule: list[SourceFutureMatch] = []
    latest_matches: list[MatchDetail] = []
    best_legs: list[BestLegEntry] = []
    weekly_average_wins: list[WeeklyAverageWinEntry] = []
    highest_matchday_averages: list[MatchdayAverageEntry] = []
    winning_streaks: list[WinningStreakEntry] = []
    top_180s: list[OneEightyLeader] = Field(default=[], alias="top180s")
    top_high_finishes: list[HighFinishLeader] = []
    meta: LeagueMeta
