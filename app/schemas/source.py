"""
Source provider payloads.

The provider speaks camelCase JSON; fields here are snake_case with a camel
alias so the same models validate raw provider payloads and are built
directly from store rows by the read services.
"""
from typing import Any

from pydantic import field_validator, model_validator

from app.schemas.base import CamelModel
from app.utils.checkouts import parse_checkouts
from app.utils.numbers import to_finite_float, to_int


class SourceModel(CamelModel):
    """Provider payload; validates camelCase input by alias."""


class SourceMatch(SourceModel):
    home_team: str
    away_team: str
    home_sets: int = 0
    away_sets: int = 0
    home_legs: int = 0
    away_legs: int = 0

    @field_validator("home_sets", "away_sets", "home_legs", "away_legs", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int:
        return to_int(value)


class SourceMatchday(SourceModel):
    round: int
    date: str | None = None
    matches: list[SourceMatch] = []


class SourceTeamAverage(SourceModel):
    average: float | None = None
    singles: str | None = None  # "W-L"
    doubles: str | None = None  # "W-L"

    @field_validator("average", mode="before")
    @classmethod
    def _coerce_average(cls, value: Any) -> float | None:
        return to_finite_float(value)


class SourcePlayerStat(SourceModel):
    name: str
    team: str
    average: float | None = None
    singles_won: int = 0
    singles_lost: int = 0
    singles_percentage: float | None = None
    doubles_won: int = 0
    doubles_lost: int = 0
    doubles_percentage: float | None = None
    combined_percentage: float | None = None

    @field_validator("singles_won", "singles_lost", "doubles_won", "doubles_lost", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int:
        return to_int(value)

    @field_validator(
        "average", "singles_percentage", "doubles_percentage", "combined_percentage",
        mode="before",
    )
    @classmethod
    def _coerce_float(cls, value: Any) -> float | None:
        return to_finite_float(value)


class SourceFutureMatch(SourceModel):
    round: int
    date: str | None = None
    home_team: str
    away_team: str


class SinglesGameDetail(SourceModel):
    home_player: str = ""
    away_player: str = ""
    home_score: int = 0
    away_score: int = 0
    home_average: float = 0.0
    away_average: float = 0.0
    home_checkouts: list[int] = []
    away_checkouts: list[int] = []

    @field_validator("home_score", "away_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int:
        return to_int(value)

    @field_validator("home_average", "away_average", mode="before")
    @classmethod
    def _coerce_average(cls, value: Any) -> float:
        return to_finite_float(value) or 0.0

    @field_validator("home_checkouts", "away_checkouts", mode="before")
    @classmethod
    def _parse_checkouts(cls, value: Any) -> list[int]:
        return parse_checkouts(value)


class DoublesGameDetail(SourceModel):
    home_players: list[str] = []
    away_players: list[str] = []
    home_score: int = 0
    away_score: int = 0

    @field_validator("home_score", "away_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int:
        return to_int(value)


class MatchDetail(SourceModel):
    """Per-game detail of one match; the input shape of the statistics layer."""

    matchday: int
    date: str | None = None
    home_team: str
    away_team: str
    home_sets: int = 0
    away_sets: int = 0
    singles: list[SinglesGameDetail] = []
    doubles: list[DoublesGameDetail] = []


class SourceSnapshot(SourceModel):
    matchdays: list[SourceMatchday] = []
    team_averages: dict[str, SourceTeamAverage] = {}
    player_stats: list[SourcePlayerStat] = []
    future_schedule: list[SourceFutureMatch] = []
    latest_matches: list[MatchDetail] = []

    @model_validator(mode="before")
    @classmethod
    def _unwrap_results(cls, data: Any) -> Any:
        # Older provider builds nest matchdays under "results"
        if isinstance(data, dict) and "matchdays" not in data:
            results = data.get("results")
            if isinstance(results, dict) and "matchdays" in results:
                data = {**data, "matchdays": results["matchdays"]}
        return data

    def team_names(self) -> list[str]:
        """All team names referenced anywhere in the snapshot, first-seen order."""
        names: dict[str, None] = {}
        for matchday in self.matchdays:
            for match in matchday.matches:
                names.setdefault(match.home_team)
                names.setdefault(match.away_team)
        for name in self.team_averages:
            names.setdefault(name)
        for fixture in self.future_schedule:
            names.setdefault(fixture.home_team)
            names.setdefault(fixture.away_team)
        for detail in self.latest_matches:
            names.setdefault(detail.home_team)
            names.setdefault(detail.away_team)
        names.pop("", None)
        return list(names)


class OneEightyEntry(SourceModel):
    player_name: str
    count: int = 0


class HighFinishEntry(SourceModel):
    player_name: str
    finishes: list[int] = []


class SpecialStats(SourceModel):
    one_eightys: list[OneEightyEntry] = []
    high_finishes: list[HighFinishEntry] = []


class ClubVenueInfo(SourceModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    zipcode: str | None = None
