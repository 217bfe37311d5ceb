"""
Release date parsing for the driver table.
"""

import re
from datetime import datetime, timezone

from ..exceptions import DateParseError


# e.g. 12 Jan 2023 or 05 Mar 2021
DATE_RE = re.compile(r'0?(?P<day>[0-9]+) (?P<month>[A-Za-z]+) (?P<year>[0-9]+)')

MONTHS = {
    'Jan': 1,
    'Feb': 2,
    'Mar': 3,
    'Apr': 4,
    'May': 5,
    'Jun': 6,
    'Jul': 7,
    'Aug': 8,
    'Sep': 9,
    'Oct': 10,
    'Nov': 11,
    'Dec': 12,
}


def parse_release_date(text: str) -> datetime:
    """
    Parse a ``D? DD Mon YYYY`` date into UTC midnight of that day.

    Parsing is strict: there is no fallback date.

    Args:
        text: Raw date text from the table cell

    Returns:
        Timezone-aware datetime at 00:00 UTC

    Raises:
        DateParseError: If the text does not match, the month is unknown or
            the calendar date does not exist
    """
    match = DATE_RE.search(text or '')
    if not match:
        raise DateParseError(text)

    month = MONTHS.get(match.group('month'))
    if month is None:
        raise DateParseError(text, f"unknown month {match.group('month')!r}")

    try:
        return datetime(
            int(match.group('year')),
            month,
            int(match.group('day')),
            tzinfo=timezone.utc,
        )
    except ValueError as e:
        raise DateParseError(text, str(e)) from e
