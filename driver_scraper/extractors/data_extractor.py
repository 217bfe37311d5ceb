"""
Data extractor that turns the rendered driver table into driver records.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup
from playwright.sync_api import Page

from ..config import DATE_POLICY_ABORT, SiteLayout
from ..exceptions import DateParseError, ExtractionError
from ..models import DriverRecord, ExtractionResult, RowError
from ..utils.helpers import clean_text, escape_spaces
from .date_parser import parse_release_date


class DataExtractor:
    """Extracts driver records from one rendered support page."""

    def __init__(self, layout: SiteLayout, date_policy: str = DATE_POLICY_ABORT,
                 expand_details: bool = False, logger: Optional[logging.Logger] = None):
        self.layout = layout
        self.date_policy = date_policy
        self.expand_details = expand_details
        self.logger = logger or logging.getLogger(__name__)
        # DOM index of the row behind each record, for details expansion
        self._record_rows: List[int] = []

    def extract(self, page: Page) -> ExtractionResult:
        """
        Extract all driver records from the current page.

        The page HTML is captured once and parsed offline. Elements matching
        the layout's hidden-text selector are dropped first, so cell text
        follows what the browser renders; text hidden only by stylesheets is
        still read. When details expansion is enabled, each record's details
        link is then read by toggling the row open and closed again in the
        live page.

        Args:
            page: Page with the driver table rendered

        Returns:
            Extraction result with records in table order
        """
        self.logger.info("Getting data from the downloads table...")
        result = self.extract_from_html(page.content())

        if self.expand_details:
            self.logger.info(f"Expanding details for {len(result.records)} rows...")
            for row_index, record in zip(self._record_rows, result.records):
                record.details_url = self._read_details_url(page, row_index)

        self.logger.info(
            f"Extracted {len(result.records)} records "
            f"({result.skipped_rows} rows skipped, {len(result.errors)} row errors)"
        )
        return result

    def extract_from_html(self, html: str) -> ExtractionResult:
        """
        Extract driver records from a page snapshot.

        Args:
            html: Page HTML

        Returns:
            Extraction result with records in table order

        Raises:
            DateParseError: If a date is malformed and the policy is ``abort``
            ExtractionError: If a row has no download link and the policy is ``abort``
        """
        soup = BeautifulSoup(html, 'html.parser')
        if self.layout.hidden_text_selector:
            for hidden in soup.select(self.layout.hidden_text_selector):
                hidden.extract()
        result = ExtractionResult()
        self._record_rows = []

        for row_index, row in enumerate(soup.select(self.layout.row_selector)):
            cells = row.select(self.layout.cell_selector)
            if len(cells) != self.layout.column_count:
                self.logger.debug(
                    f"Skipping row {row_index}: {len(cells)} cells, expected {self.layout.column_count}"
                )
                result.skipped_rows += 1
                continue

            try:
                record = self._parse_row(cells, row_index)
            except (DateParseError, ExtractionError) as e:
                if self.date_policy == DATE_POLICY_ABORT:
                    raise
                self.logger.warning(f"Skipping row {row_index}: {e}")
                result.errors.append(RowError(
                    row_index=row_index,
                    message=str(e),
                    raw_text=clean_text(row.get_text(' ')),
                ))
                continue

            result.records.append(record)
            self._record_rows.append(row_index)

        return result

    def _parse_row(self, cells, row_index: int) -> DriverRecord:
        """Build a record from the cells of one table row."""
        columns = self.layout.columns

        raw_date = clean_text(cells[columns.date].get_text(' '))
        try:
            date = parse_release_date(raw_date)
        except DateParseError as e:
            raise DateParseError(e.text, e.reason, row_index=row_index) from e

        anchor = cells[columns.download].select_one(self.layout.download_selector)
        if anchor is None or anchor.get('href') is None:
            raise ExtractionError("download link not found", row_index=row_index)

        name = clean_text(cells[columns.name].get_text(' '))
        category = clean_text(cells[columns.category].get_text(' '))
        if not name or not category:
            raise ExtractionError("empty name or category", row_index=row_index)

        return DriverRecord(
            name=name,
            category=category,
            importance=clean_text(cells[columns.importance].get_text(' ')).lower(),
            date=date,
            url=escape_spaces(anchor['href'].strip()),
        )

    def _read_details_url(self, page: Page, row_index: int) -> Optional[str]:
        """
        Open a row's details panel, read its link and close it again.

        This clicks in the live page, so it changes the page state while it
        runs.
        """
        row = page.locator(self.layout.row_selector).nth(row_index)
        toggle = row.locator(self.layout.details_toggle_selector)
        toggle.click()
        try:
            panel = row.locator(self.layout.details_panel_selector)
            link = panel.locator(self.layout.details_link_selector).first
            link.wait_for(state='visible')
            href = link.get_attribute('href')
        finally:
            toggle.click()

        if href is None:
            self.logger.debug(f"Row {row_index} has no details link")
            return None
        return escape_spaces(href.strip())
