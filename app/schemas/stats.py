from app.schemas.base import CamelModel


class StandingEntry(CamelModel):
    team_name: str
    team_id: int
    played: int = 0
    points: int = 0
    legs_for: int = 0
    legs_against: int = 0
    goal_diff: int = 0
    position: int = 0


class BestLegEntry(CamelModel):
    player: str
    team: str
    checkout: int
    count: int = 1


class WeeklyAverageWinEntry(CamelModel):
    player: str
    team: str
    count: int = 1


class MatchdayAverageEntry(CamelModel):
    player: str
    team: str
    average: float
    matchday: int


class PlayerStreak(CamelModel):
    player: str
    team: str
    current_streak: int = 0
    max_streak: int = 0


class WinningStreakEntry(CamelModel):
    player: str
    team: str
    streak: int


class OneEightyLeader(CamelModel):
    player: str
    team: str
    count: int


class HighFinishLeader(CamelModel):
    player: str
    team: str
    finish: int
    count: int
