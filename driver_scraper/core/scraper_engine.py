"""
Main scraper engine that orchestrates the entire scraping process.
"""

import logging
from typing import Callable, Optional

from ..config import ScraperConfig
from ..extractors.data_extractor import DataExtractor
from ..models import ScrapeResult
from ..utils.helpers import output_path_for
from .browser import BrowserSession, screenshot_on_exit
from .navigator import Navigator
from .sorter import sort_records
from .writer import JsonWriter


class ScraperEngine:
    """Main engine that coordinates the scraping process."""

    def __init__(self, config: ScraperConfig, logger: Optional[logging.Logger] = None,
                 session_factory: Callable[..., BrowserSession] = BrowserSession):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.session_factory = session_factory

        # Initialize components
        self.navigator = Navigator(config.layout, logger=self.logger)
        self.data_extractor = DataExtractor(
            config.layout,
            date_policy=config.date_policy,
            expand_details=config.expand_details,
            logger=self.logger,
        )
        self.writer = JsonWriter(logger=self.logger)

    @property
    def output_path(self) -> str:
        return output_path_for(self.config.output_dir, self.config.product)

    def run(self) -> ScrapeResult:
        """
        Scrape the configured product and write its driver list.

        The screenshot is taken before the browser closes on every exit
        path, and the browser is always closed.

        Returns:
            Result with the written records and any collected row errors
        """
        product = self.config.product

        with self.session_factory(self.config, logger=self.logger) as session:
            with screenshot_on_exit(session.page, self.config.screenshot_path, self.logger) as page:
                self.logger.info(f"Scraping {product}...")
                self.navigator.open(page, product)

                extraction = self.data_extractor.extract(page)
                records = extraction.records
                if self.config.layout.sort_records:
                    records = sort_records(records)

                self.writer.write(records, self.output_path)

        self.logger.info(f"Scraping completed! {len(records)} records saved to: {self.output_path}")
        return ScrapeResult(
            product=product,
            output_path=self.output_path,
            records=records,
            errors=extraction.errors,
        )
