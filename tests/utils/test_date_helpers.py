from datetime import date, datetime

from app.utils.date_helpers import format_source_date, parse_source_date, utcnow
from app.utils.numbers import parse_win_loss


def test_parse_provider_date():
    assert parse_source_date("12.09.2025") == date(2025, 9, 12)
    assert parse_source_date("3.1.2026") == date(2026, 1, 3)


def test_parse_iso_and_date_objects():
    assert parse_source_date("2025-09-12") == date(2025, 9, 12)
    assert parse_source_date(date(2025, 9, 12)) == date(2025, 9, 12)
    assert parse_source_date(datetime(2025, 9, 12, 19, 30)) == date(2025, 9, 12)


def test_parse_invalid_returns_none():
    assert parse_source_date(None) is None
    assert parse_source_date("") is None
    assert parse_source_date("31.02.2025") is None
    assert parse_source_date(20250912) is None


def test_format_round_trip():
    assert format_source_date(date(2025, 9, 12)) == "12.09.2025"
    assert format_source_date(None) == ""


def test_parse_win_loss():
    assert parse_win_loss("12-4") == (12, 4)
    assert parse_win_loss("7") == (7, 0)
    assert parse_win_loss("") == (0, 0)
    assert parse_win_loss(None) == (0, 0)
    assert parse_win_loss("x-3") == (0, 3)


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is not None
