from app.models.team import Team
from app.models.player import Player
from app.models.matchday import Matchday
from app.models.match import Match
from app.models.singles_game import SinglesGame
from app.models.doubles_game import DoublesGame
from app.models.team_average import TeamAverage
from app.models.player_statistic import PlayerStatistic
from app.models.league_standing import LeagueStanding
from app.models.sync_log import SyncLog

# Special stats and schedule
from app.models.future_match import FutureMatch
from app.models.one_eighty import OneEighty
from app.models.high_finish import HighFinish
from app.models.club_venue import ClubVenue

__all__ = [
    "Team",
    "Player",
    "Matchday",
    "Match",
    "SinglesGame",
    "DoublesGame",
    "TeamAverage",
    "PlayerStatistic",
    "LeagueStanding",
    "SyncLog",
    # Special stats and schedule
    "FutureMatch",
    "OneEighty",
    "HighFinish",
    "ClubVenue",
]
