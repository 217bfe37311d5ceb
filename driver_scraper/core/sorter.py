"""
Ordering of extracted driver records.
"""

from typing import List

from ..models import DriverRecord


def sort_records(records: List[DriverRecord]) -> List[DriverRecord]:
    """
    Sort by name ascending (case-insensitive), then by date descending.

    Both passes use Python's stable sort, so records with the same name and
    date keep their original relative order.
    """
    by_date = sorted(records, key=lambda record: record.date, reverse=True)
    return sorted(by_date, key=lambda record: record.name.lower())
