import pytest
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base
from app.api.deps import get_db  # Import from where routes actually use it
from app.schemas.source import ClubVenueInfo, SourceSnapshot, SpecialStats


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
SEASON = "2025/26"


# Note: Using pytest-asyncio's built-in event_loop fixture (asyncio_mode = auto)


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Data Fixtures ---

def _singles(home, away, home_score, away_score, home_avg, away_avg, home_co, away_co):
    return {
        "homePlayer": home,
        "awayPlayer": away,
        "homeScore": home_score,
        "awayScore": away_score,
        "homeAverage": home_avg,
        "awayAverage": away_avg,
        "homeCheckouts": home_co,
        "awayCheckouts": away_co,
    }


def _doubles(home_pair, away_pair, home_score, away_score):
    return {
        "homePlayers": home_pair,
        "awayPlayers": away_pair,
        "homeScore": home_score,
        "awayScore": away_score,
    }


@pytest.fixture
def league_payload() -> dict:
    """Provider payload for a four-team league after two matchdays (camelCase, as served)."""
    return {
        "matchdays": [
            {
                "round": 1,
                "date": "12.09.2025",
                "matches": [
                    {"homeTeam": "Dart Lions", "awayTeam": "Bulls Eye",
                     "homeSets": 6, "awaySets": 3, "homeLegs": 14, "awayLegs": 9},
                    {"homeTeam": "Triple Twenty", "awayTeam": "Checkout Kings",
                     "homeSets": 4, "awaySets": 5, "homeLegs": 11, "awayLegs": 12},
                ],
            },
            {
                "round": 2,
                "date": "26.09.2025",
                "matches": [
                    {"homeTeam": "Dart Lions", "awayTeam": "Triple Twenty",
                     "homeSets": 5, "awaySets": 4, "homeLegs": 12, "awayLegs": 10},
                    {"homeTeam": "Bulls Eye", "awayTeam": "Checkout Kings",
                     "homeSets": 2, "awaySets": 7, "homeLegs": 7, "awayLegs": 15},
                ],
            },
        ],
        "teamAverages": {
            "Dart Lions": {"average": 52.4, "singles": "10-4", "doubles": "3-1"},
            "Bulls Eye": {"average": 44.9, "singles": "5-9", "doubles": "1-3"},
            "Checkout Kings": {"average": 50.1, "singles": "9-5"},
        },
        "playerStats": [
            {"name": "Anna Berger", "team": "Dart Lions", "average": 55.2,
             "singlesWon": 4, "singlesLost": 0, "singlesPercentage": 100.0,
             "doublesWon": 2, "doublesLost": 0, "doublesPercentage": 100.0,
             "combinedPercentage": 100.0},
            {"name": "Ben Huber", "team": "Bulls Eye", "average": 46.3,
             "singlesWon": 1, "singlesLost": 3, "singlesPercentage": 25.0,
             "doublesWon": 0, "doublesLost": 2, "doublesPercentage": 0.0,
             "combinedPercentage": 16.7},
            {"name": "Ghost Player", "team": "Unknown Club", "average": 40.0},
        ],
        "futureSchedule": [
            {"round": 3, "date": "10.10.2025", "homeTeam": "Checkout Kings", "awayTeam": "Dart Lions"},
            {"round": 3, "date": "10.10.2025", "homeTeam": "Bulls Eye", "awayTeam": "Triple Twenty"},
        ],
        "latestMatches": [
            {
                "matchday": 1, "date": "12.09.2025",
                "homeTeam": "Dart Lions", "awayTeam": "Bulls Eye",
                "homeSets": 6, "awaySets": 3,
                "singles": [
                    _singles("Anna Berger", "Ben Huber", 3, 1, 55.2, 48.1, [18, 21, 24], [30]),
                    _singles("Carl Maier", "Dora Wolf", 2, 3, 47.0, 51.5, [24, 27], [19, 27, 33]),
                ],
                "doubles": [
                    _doubles(["Anna Berger", "Carl Maier"], ["Ben Huber", "Dora Wolf"], 3, 2),
                ],
            },
            {
                "matchday": 2, "date": "26.09.2025",
                "homeTeam": "Dart Lions", "awayTeam": "Triple Twenty",
                "homeSets": 5, "awaySets": 4,
                "singles": [
                    _singles("Anna Berger", "Emil Gruber", 3, 0, 58.9, 41.2, "15, 21, 24", ""),
                    _singles("Carl Maier", "Fritz Lang", 1, 3, 44.0, 49.7, [36], [22, 25, 29]),
                ],
                "doubles": [],
            },
            {
                "matchday": 2, "date": "26.09.2025",
                "homeTeam": "Bulls Eye", "awayTeam": "Checkout Kings",
                "homeSets": 2, "awaySets": 7,
                "singles": [
                    _singles("Ben Huber", "Hans Koch", 0, 3, 43.5, 53.0, [], [20, 23, 26]),
                ],
                "doubles": [],
            },
        ],
    }


@pytest.fixture
def source_snapshot(league_payload) -> SourceSnapshot:
    return SourceSnapshot.model_validate(league_payload)


@pytest.fixture
def fake_source_client(source_snapshot):
    """Source provider stand-in returning the sample league."""

    async def fetch_special_stats(team_name, season):
        if team_name == "Dart Lions":
            return SpecialStats.model_validate({
                "oneEightys": [{"playerName": "Anna Berger", "count": 2}],
                "highFinishes": [{"playerName": "Anna Berger", "finishes": [120, 120, 101]}],
            })
        return SpecialStats()

    async def fetch_club_venue(team_name, season):
        if team_name == "Checkout Kings":
            return ClubVenueInfo(
                name="Kings Pub", address="Hauptstrasse 1", phone="01 234", zipcode="1010"
            )
        return None

    return SimpleNamespace(
        fetch_snapshot=AsyncMock(return_value=source_snapshot),
        fetch_special_stats=AsyncMock(side_effect=fetch_special_stats),
        fetch_club_venue=AsyncMock(side_effect=fetch_club_venue),
    )
