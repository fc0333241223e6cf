"""
League leaderboards derived from per-game match detail.

All functions are pure and work on MatchDetail records, whether they were
parsed from a provider snapshot or rebuilt from the store. Only singles games
count towards these leaderboards.
"""

from collections.abc import Iterable, Iterator

from app.schemas.source import MatchDetail, SinglesGameDetail
from app.schemas.stats import (
    BestLegEntry,
    MatchdayAverageEntry,
    PlayerStreak,
    WeeklyAverageWinEntry,
    WinningStreakEntry,
)

DEFAULT_LIMIT = 5
DEFAULT_MAX_DARTS = 100


def _sides(match: MatchDetail, game: SinglesGameDetail) -> Iterator[tuple]:
    """Yield (player, team, score, opponent_score, average, checkouts) for both sides."""
    yield (
        game.home_player, match.home_team, game.home_score, game.away_score,
        game.home_average, game.home_checkouts,
    )
    yield (
        game.away_player, match.away_team, game.away_score, game.home_score,
        game.away_average, game.away_checkouts,
    )


def _group_by_matchday(matches: Iterable[MatchDetail]) -> dict[int, list[MatchDetail]]:
    grouped: dict[int, list[MatchDetail]] = {}
    for match in matches:
        grouped.setdefault(match.matchday, []).append(match)
    return grouped


def best_legs(
    matches: Iterable[MatchDetail],
    limit: int = DEFAULT_LIMIT,
    max_darts: int = DEFAULT_MAX_DARTS,
) -> list[BestLegEntry]:
    """
    Lowest checkouts of the season.

    Repeated (player, checkout) pairs are counted into one entry. Values
    outside ``1..max_darts`` are discarded.
    """
    entries: dict[tuple[str, int], BestLegEntry] = {}

    for match in matches:
        for game in match.singles:
            for player, team, _, _, _, checkouts in _sides(match, game):
                for checkout in checkouts:
                    if checkout <= 0 or checkout > max_darts:
                        continue
                    key = (player, checkout)
                    if key in entries:
                        entries[key].count += 1
                    else:
                        entries[key] = BestLegEntry(player=player, team=team, checkout=checkout)

    ranked = sorted(entries.values(), key=lambda e: e.checkout)
    return ranked[:limit]


def weekly_average_wins(
    matches: Iterable[MatchDetail], limit: int = DEFAULT_LIMIT
) -> list[WeeklyAverageWinEntry]:
    """
    Count how often each player had the best singles average of a matchday.

    Within a matchday the first strictly higher average wins, so a later
    equal average does not replace the leader.
    """
    wins: dict[str, WeeklyAverageWinEntry] = {}

    for day_matches in _group_by_matchday(matches).values():
        best_player, best_team, best_average = "", "", 0.0
        for match in day_matches:
            for game in match.singles:
                for player, team, _, _, average, _ in _sides(match, game):
                    if average > best_average:
                        best_player, best_team, best_average = player, team, average

        if not best_player:
            continue
        if best_player in wins:
            wins[best_player].count += 1
        else:
            wins[best_player] = WeeklyAverageWinEntry(player=best_player, team=best_team)

    ranked = sorted(wins.values(), key=lambda e: -e.count)
    return ranked[:limit]


def highest_matchday_averages(
    matches: Iterable[MatchDetail], limit: int = DEFAULT_LIMIT
) -> list[MatchdayAverageEntry]:
    """
    Best per-matchday player averages.

    A player's matchday average is the mean of their positive singles
    averages that matchday. The same player may appear for several matchdays.
    """
    results: list[MatchdayAverageEntry] = []

    for matchday, day_matches in _group_by_matchday(matches).items():
        per_player: dict[str, tuple[str, list[float]]] = {}
        for match in day_matches:
            for game in match.singles:
                for player, team, _, _, average, _ in _sides(match, game):
                    if average > 0:
                        per_player.setdefault(player, (team, []))[1].append(average)

        for player, (team, averages) in per_player.items():
            results.append(
                MatchdayAverageEntry(
                    player=player,
                    team=team,
                    average=sum(averages) / len(averages),
                    matchday=matchday,
                )
            )

    ranked = sorted(results, key=lambda e: -e.average)
    return ranked[:limit]


def track_streaks(matches: Iterable[MatchDetail]) -> dict[str, PlayerStreak]:
    """
    Walk singles results in ascending matchday order and track win streaks.

    A win extends ``current_streak`` (and ``max_streak`` when exceeded); a
    loss or draw resets ``current_streak`` to 0.
    """
    streaks: dict[str, PlayerStreak] = {}

    for match in sorted(matches, key=lambda m: m.matchday):
        for game in match.singles:
            for player, team, score, opponent_score, _, _ in _sides(match, game):
                if not player:
                    continue
                streak = streaks.get(player)
                if streak is None:
                    streak = streaks[player] = PlayerStreak(player=player, team=team)

                if score > opponent_score:
                    streak.current_streak += 1
                    streak.max_streak = max(streak.max_streak, streak.current_streak)
                else:
                    streak.current_streak = 0

    return streaks


def winning_streaks(
    matches: Iterable[MatchDetail], limit: int = DEFAULT_LIMIT
) -> list[WinningStreakEntry]:
    """Longest singles winning streaks of the season, players without a win excluded."""
    ranked = sorted(
        (s for s in track_streaks(matches).values() if s.max_streak > 0),
        key=lambda s: -s.max_streak,
    )
    return [
        WinningStreakEntry(player=s.player, team=s.team, streak=s.max_streak)
        for s in ranked[:limit]
    ]
