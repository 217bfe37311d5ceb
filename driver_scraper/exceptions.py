"""
Exception hierarchy for the driver scraper.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class ConfigurationError(ScraperError, ValueError):
    """Raised when a command line option or layout name is invalid."""


class DateParseError(ScraperError, ValueError):
    """Raised when a release date does not match the expected format."""

    def __init__(self, text: str, reason: str = "does not match 'D? DD Mon YYYY'",
                 row_index: Optional[int] = None):
        self.text = text
        self.reason = reason
        self.row_index = row_index
        location = f" (row {row_index})" if row_index is not None else ""
        super().__init__(f"Invalid release date {text!r}{location}: {reason}")


class ExtractionError(ScraperError):
    """Raised when a table row cannot be turned into a driver record."""

    def __init__(self, message: str, row_index: Optional[int] = None):
        self.row_index = row_index
        location = f"Row {row_index}: " if row_index is not None else ""
        super().__init__(f"{location}{message}")


class BrowserInstallError(ScraperError):
    """Raised when the Chromium build cannot be installed."""
