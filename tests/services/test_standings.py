from itertools import permutations

import pytest

from app.schemas.source import SourceMatch, SourceMatchday
from app.services.standings import calculate_standings, load_season_matchdays


TEAM_IDS = {"Dart Lions": 1, "Bulls Eye": 2, "Triple Twenty": 3, "Checkout Kings": 4}


def _match(home, away, home_sets, away_sets, home_legs, away_legs) -> SourceMatch:
    return SourceMatch(
        home_team=home,
        away_team=away,
        home_sets=home_sets,
        away_sets=away_sets,
        home_legs=home_legs,
        away_legs=away_legs,
    )


def _season() -> list[SourceMatchday]:
    return [
        SourceMatchday(round=1, matches=[
            _match("Dart Lions", "Bulls Eye", 6, 3, 14, 9),
            _match("Triple Twenty", "Checkout Kings", 4, 5, 11, 12),
        ]),
        SourceMatchday(round=2, matches=[
            _match("Dart Lions", "Triple Twenty", 5, 4, 12, 10),
            _match("Bulls Eye", "Checkout Kings", 2, 7, 7, 15),
        ]),
        SourceMatchday(round=3, matches=[
            _match("Checkout Kings", "Dart Lions", 3, 6, 9, 13),
        ]),
    ]


class TestCalculateStandings:
    def test_accumulates_sets_and_legs_for_both_sides(self):
        table = calculate_standings(_season(), TEAM_IDS)
        by_name = {entry.team_name: entry for entry in table}

        lions = by_name["Dart Lions"]
        assert lions.team_id == 1
        assert lions.played == 3
        assert lions.points == 17
        assert lions.legs_for == 39
        assert lions.legs_against == 28
        assert lions.goal_diff == 11

        kings = by_name["Checkout Kings"]
        assert kings.played == 3
        assert kings.points == 15
        assert kings.legs_for == 36
        assert kings.legs_against == 31

    def test_positions_are_dense_and_ordered_by_points(self):
        table = calculate_standings(_season(), TEAM_IDS)

        assert [entry.team_name for entry in table] == [
            "Dart Lions", "Checkout Kings", "Triple Twenty", "Bulls Eye",
        ]
        assert [entry.position for entry in table] == [1, 2, 3, 4]

    def test_points_tie_broken_by_leg_difference(self):
        matchdays = [
            SourceMatchday(round=1, matches=[
                _match("Dart Lions", "Bulls Eye", 5, 4, 11, 10),
                _match("Triple Twenty", "Checkout Kings", 5, 4, 14, 8),
            ]),
        ]

        table = calculate_standings(matchdays, TEAM_IDS)

        assert table[0].team_name == "Triple Twenty"
        assert table[1].team_name == "Dart Lions"

    def test_order_independent_of_matchday_and_match_order(self):
        expected = [
            (e.team_name, e.points, e.goal_diff, e.position)
            for e in calculate_standings(_season(), TEAM_IDS)
        ]

        for ordering in permutations(_season()):
            shuffled = [
                SourceMatchday(round=md.round, matches=list(reversed(md.matches)))
                for md in ordering
            ]
            table = calculate_standings(shuffled, TEAM_IDS)
            assert [
                (e.team_name, e.points, e.goal_diff, e.position) for e in table
            ] == expected

    def test_matches_with_unknown_teams_are_skipped(self):
        matchdays = [
            SourceMatchday(round=1, matches=[
                _match("Dart Lions", "Guest Team", 9, 0, 18, 0),
                _match("Dart Lions", "Bulls Eye", 4, 5, 10, 11),
            ]),
        ]

        table = calculate_standings(matchdays, TEAM_IDS)

        assert [e.team_name for e in table] == ["Bulls Eye", "Dart Lions"]
        assert table[1].played == 1

    def test_empty_season_gives_empty_table(self):
        assert calculate_standings([], TEAM_IDS) == []


@pytest.mark.asyncio
class TestLoadSeasonMatchdays:
    async def test_empty_store(self, test_session):
        matchdays, team_ids = await load_season_matchdays(test_session, "2025/26")

        assert matchdays == []
        assert team_ids == {}
