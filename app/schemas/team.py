import datetime

from app.schemas.base import CamelModel


class RosterPlayer(CamelModel):
    player_name: str
    average: float | None = None
    singles: str  # "W-L"
    singles_won: int = 0
    singles_lost: int = 0
    doubles_won: int = 0
    doubles_lost: int = 0
    total_games: int = 0


class ReportSingles(CamelModel):
    home_player: str
    away_player: str
    home_score: int = 0
    away_score: int = 0


class ReportDoubles(CamelModel):
    home_players: list[str]
    away_players: list[str]
    home_score: int = 0
    away_score: int = 0


class ScorePair(CamelModel):
    home: int = 0
    away: int = 0


class MatchReportDetails(CamelModel):
    singles: list[ReportSingles] = []
    doubles: list[ReportDoubles] = []
    total_legs: ScorePair
    total_sets: ScorePair


class MatchReport(CamelModel):
    matchday: int
    lineup: list[str] = []
    checkouts: list[str] = []  # "Player: 16, 24"
    opponent: str
    score: str  # "ours:theirs"
    is_home_match: bool
    details: MatchReportDetails


class PlayerAverage(CamelModel):
    player_name: str
    average: float = 0.0


class MatchAverages(CamelModel):
    matchday: int
    opponent: str
    team_average: float = 0.0
    player_averages: list[PlayerAverage] = []
    opponent_average: float = 0.0
    opponent_player_averages: list[PlayerAverage] = []


class TeamRecord(CamelModel):
    wins: int = 0
    draws: int = 0
    losses: int = 0


class ComparisonEntry(CamelModel):
    team_name: str
    average: float | None = None
    singles: str
    doubles: str


class PlayerOneEighties(CamelModel):
    player_name: str
    count: int


class PlayerHighFinishes(CamelModel):
    player_name: str
    finishes: list[int]


class VenueResponse(CamelModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    zipcode: str | None = None


class ScheduleEntry(CamelModel):
    round: int
    date: datetime.date | None = None
    opponent: str
    venue: str  # Home | Away
    address: str = ""
    location: str = ""
    match_type: str = "League"


class TeamDetailResponse(CamelModel):
    team_name: str
    division: str | None = None
    season: str
    players: list[RosterPlayer] = []
    match_reports: list[MatchReport] = []
    match_averages: list[MatchAverages] = []
    league_position: int | None = None
    team_standings: TeamRecord
    club_venue: VenueResponse | None = None
    comparison_data: list[ComparisonEntry] = []
    one_eightys: list[PlayerOneEighties] = []
    high_finishes: list[PlayerHighFinishes] = []
    schedule: list[ScheduleEntry] = []
