"""Date utilities for spendwise.

Date normalization for user input and month labels for display.
"""

from datetime import datetime

import pandas as pd

from spendwise.domain.models import Month


def normalize_date(raw_date: str) -> str:
    """Normalize a user-supplied date to YYYY-MM-DD.

    ISO dates are taken as they are; anything else goes through
    pandas.to_datetime, which handles European (day first) and many other
    formats.

    Args:
        raw_date: Date as typed by the user.

    Returns:
        Date in YYYY-MM-DD format.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    try:
        return datetime.strptime(raw_date, "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid date '{raw_date}'") from e
    if pd.isna(parsed):
        raise ValueError(f"Invalid date '{raw_date}'")
    return parsed.strftime("%Y-%m-%d")


def month_label(month: Month) -> str:
    """Human-readable label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Label such as "January 2025".
    """
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")
