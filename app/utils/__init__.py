"""Utility functions."""

from app.utils.checkouts import join_checkouts, parse_checkouts
from app.utils.date_helpers import format_source_date, parse_source_date
from app.utils.numbers import parse_win_loss, to_finite_float

__all__ = [
    "join_checkouts",
    "parse_checkouts",
    "format_source_date",
    "parse_source_date",
    "parse_win_loss",
    "to_finite_float",
]
