"""
Data models for scraped driver downloads.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC string with millisecond precision.

    Args:
        value: Timezone-aware or naive (assumed UTC) datetime

    Returns:
        String such as ``2023-03-15T00:00:00.000Z``
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


@dataclass
class DriverRecord:
    """One row of the vendor's driver download table."""

    name: str
    category: str
    importance: str
    date: datetime
    url: str
    details_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape written to disk."""
        data = {
            'name': self.name,
            'category': self.category,
            'importance': self.importance,
            'date': format_timestamp(self.date),
            'url': self.url,
        }
        if self.details_url is not None:
            data['detailsUrl'] = self.details_url
        return data


@dataclass
class RowError:
    """A table row that could not be converted into a record."""

    row_index: int
    message: str
    raw_text: str = ''


@dataclass
class ExtractionResult:
    """Outcome of a single pass over the driver table."""

    records: List[DriverRecord] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    skipped_rows: int = 0


@dataclass
class ScrapeResult:
    """Outcome of a complete scraper run."""

    product: str
    output_path: str
    records: List[DriverRecord] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
