"""
Navigation to the product support page.
"""

import logging
from enum import Enum
from typing import Optional

from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import COOKIE_DIALOG_TIMEOUT_MS, SiteLayout
from ..strategies.wait_strategies import WaitStrategy, WaitStrategyFactory
from ..utils.validators import validate_url


class RegionState(Enum):
    """Steps of switching the site to the target region."""

    UNKNOWN = 'unknown-region'
    MENU_OPEN = 'region-menu-open'
    REGION_SELECTED = 'region-selected'
    LOCALE_CONFIRMED = 'locale-confirmed'
    NAVIGATION_COMPLETE = 'navigation-complete'


class Navigator:
    """Loads a product's support page and waits for the driver table."""

    def __init__(self, layout: SiteLayout, wait_strategy: Optional[WaitStrategy] = None,
                 logger: Optional[logging.Logger] = None):
        self.layout = layout
        self.logger = logger or logging.getLogger(__name__)
        self.wait_strategy = wait_strategy or WaitStrategyFactory(logger=self.logger).get_strategy(layout)

    def build_url(self, product: str) -> str:
        """
        Return the support page URL for a product.

        Raises:
            ConfigurationError: If the layout's template does not yield an HTTP(S) URL
        """
        url = self.layout.url_template.format(product=product)
        validate_url(url)
        return url

    def open(self, page: Page, product: str) -> None:
        """
        Bring the page to the state where the driver table is rendered.

        Args:
            page: Page to navigate
            product: Product identifier, e.g. ``optiplex-7060-desktop``
        """
        url = self.build_url(product)
        self.logger.info(f"Loading {url}...")
        page.goto(url)

        self.dismiss_cookie_dialog(page)
        self.ensure_region(page)
        self.wait_strategy.wait_until_ready(page)

    def dismiss_cookie_dialog(self, page: Page) -> bool:
        """
        Reject the cookie consent dialog if it shows up.

        Returns:
            True if the dialog was dismissed, False if it never appeared
        """
        self.logger.info("Rejecting cookies...")
        try:
            page.wait_for_selector(self.layout.cookie_selector, timeout=COOKIE_DIALOG_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            # expected in countries without cookie consent
            self.logger.debug("No cookie dialog shown")
            return False

        page.click(self.layout.cookie_selector)
        return True

    def ensure_region(self, page: Page) -> RegionState:
        """
        Switch the site to the target region and locale when needed.

        Returns:
            The final region state
        """
        selector = self.layout.region_selector
        self.logger.info(f"Selecting the {self.layout.target_region} region...")

        current = page.inner_text(selector).strip()
        if current == self.layout.target_region:
            self.logger.debug(f"Region already {current}")
            return RegionState.NAVIGATION_COMPLETE

        state = RegionState.UNKNOWN
        self.logger.debug(f"Region is {current!r}: {state.value}")

        page.hover(f"{selector} a")
        region_option = f'{selector} [data-region-id="{self.layout.region_id}"]'
        page.wait_for_selector(region_option)
        state = self._advance(RegionState.MENU_OPEN)

        page.click(region_option)
        state = self._advance(RegionState.REGION_SELECTED)

        with page.expect_navigation():
            page.click(f'{selector} a[data-locale="{self.layout.locale}"]')
            state = self._advance(RegionState.LOCALE_CONFIRMED)
        state = self._advance(RegionState.NAVIGATION_COMPLETE)

        return state

    def _advance(self, state: RegionState) -> RegionState:
        self.logger.debug(f"Region switch: {state.value}")
        return state
