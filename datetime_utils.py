"""
Utility functions for handling date labels and dates consistently across the codebase.
Export timestamps use UTC.
"""

from datetime import datetime, timezone
from typing import Optional

# Formats tried after ISO 8601, covering the usual spreadsheet date exports
DATE_LABEL_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%Y-%m",
)


def get_utc_now() -> datetime:
    """
    Get the current datetime in UTC.

    Returns:
        datetime: Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def parse_date_label(label: str) -> Optional[datetime]:
    """
    Try to read a data point label as a calendar date.

    Args:
        label (str): The label exactly as it appeared in the pasted data

    Returns:
        Optional[datetime]: The parsed date, or None if the label is not a date
    """
    text = label.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in DATE_LABEL_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_axis_label(label: str) -> str:
    """
    Format a data point label for the X axis.

    Dates are shortened to abbreviated month and day ("Jan 5"); anything
    else is returned unchanged.
    """
    parsed = parse_date_label(label)
    if parsed is None:
        return label
    return f"{parsed.strftime('%b')} {parsed.day}"


def iso_date(dt: Optional[datetime] = None) -> str:
    """
    Format a date as YYYY-MM-DD, defaulting to today in UTC.

    Args:
        dt (Optional[datetime]): The date to format

    Returns:
        str: The ISO formatted date
    """
    if dt is None:
        dt = get_utc_now()
    return dt.strftime("%Y-%m-%d")
