"""Date utilities for spendtrack.

Pure functions for date range calculations and formatting, plus the pandas
based normalizer used for user-entered dates.
"""

from datetime import date, datetime, timedelta, timezone

import pandas as pd

from spendtrack.domain.models import Month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_of(day: date) -> Month:
    """Get the YYYY-MM month containing a day."""
    return Month(day.strftime("%Y-%m"))


def trailing_window_start(today: date, days: int = 30) -> str:
    """Get the exclusive lower bound of a trailing window.

    Args:
        today: Reference day.
        days: Window length in days.

    Returns:
        Date (YYYY-MM-DD) that is `days` days before today. Expenses dated
        strictly after it fall inside the window.
    """
    return (today - timedelta(days=days)).isoformat()


def utc_now_iso(now: datetime | None = None) -> str:
    """Format an instant as ISO 8601 UTC with millisecond precision.

    Args:
        now: Instant to format. If None, uses the current time.

    Returns:
        Timestamp such as "2025-01-15T12:30:00.000Z".
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_date(raw_date: str) -> str:
    """Normalize a user-entered date string to ISO format (YYYY-MM-DD).

    Uses pandas.to_datetime so ISO, European and other common formats are
    accepted. Ambiguous dates are read day-first.

    Args:
        raw_date: Raw date string.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValueError: If date cannot be parsed.
    """
    raw_date = raw_date.strip()
    try:
        # ISO input must not be reinterpreted day-first
        return date.fromisoformat(raw_date).isoformat()
    except ValueError:
        pass

    try:
        parsed_date = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed_date.strftime("%Y-%m-%d")
