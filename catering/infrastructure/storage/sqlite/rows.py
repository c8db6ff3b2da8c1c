"""Helpers for converting SQLite column values."""

from datetime import date, datetime


def parse_datetime(value: str | None) -> datetime:
    """Parse an ISO timestamp column, falling back to now for bad data."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return datetime.utcnow()
    return datetime.utcnow()


def parse_optional_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def parse_date(value: str | None) -> date | None:
    """Parse a date column; accepts full timestamps too."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except (ValueError, TypeError):
        return None


def iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
