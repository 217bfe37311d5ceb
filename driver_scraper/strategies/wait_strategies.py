"""
Strategies for deciding that the driver table has finished rendering.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from playwright.sync_api import Page

from ..config import SiteLayout
from ..exceptions import ConfigurationError


class WaitStrategy(ABC):
    """Abstract base class for table readiness strategies."""

    name = ''

    def __init__(self, layout: SiteLayout, logger: Optional[logging.Logger] = None):
        self.layout = layout
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    def wait_until_ready(self, page: Page) -> None:
        """Block until the driver table is fully present in the DOM."""
        pass


class MarkerWaitStrategy(WaitStrategy):
    """Wait for a marker cell that only appears once the data is rendered."""

    name = 'marker'

    def wait_until_ready(self, page: Page) -> None:
        if not self.layout.marker_selector:
            raise ConfigurationError(f"Layout {self.layout.name!r} has no marker selector")

        self.logger.info("Waiting for the downloads table...")
        page.wait_for_selector(self.layout.marker_selector)


class PaginationWaitStrategy(WaitStrategy):
    """Wait for the first page of rows, then ask the table for the rest."""

    name = 'paginate'

    def wait_until_ready(self, page: Page) -> None:
        if not self.layout.show_more_selector:
            raise ConfigurationError(f"Layout {self.layout.name!r} has no show-more selector")

        self.logger.info(f"Waiting for at least {self.layout.min_rows} rows in the downloads table...")
        page.wait_for_function(
            '([selector, minRows]) => document.querySelectorAll(selector).length >= minRows',
            arg=[self.layout.row_selector, self.layout.min_rows],
        )

        self.logger.info("Showing all the downloads...")
        page.wait_for_selector(self.layout.show_more_selector)
        page.click(self.layout.show_more_selector)
        page.wait_for_load_state('networkidle')


class WaitStrategyFactory:
    """Factory for creating the wait strategy a layout asks for."""

    strategies: Dict[str, Type[WaitStrategy]] = {
        MarkerWaitStrategy.name: MarkerWaitStrategy,
        PaginationWaitStrategy.name: PaginationWaitStrategy,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def get_strategy(self, layout: SiteLayout) -> WaitStrategy:
        """
        Get the wait strategy named by a layout.

        Raises:
            ConfigurationError: If the layout names an unknown strategy
        """
        strategy_class = self.strategies.get(layout.wait_strategy)
        if strategy_class is None:
            raise ConfigurationError(f"Unknown wait strategy: {layout.wait_strategy!r}")
        return strategy_class(layout, logger=self.logger)
