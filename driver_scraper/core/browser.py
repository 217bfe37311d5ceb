"""
Browser lifecycle management using Playwright.

Two nested scopes guard every run: ``BrowserSession`` owns the browser and
always closes it, and ``screenshot_on_exit`` owns the obligation to capture
the page before it is torn down, whether or not the scrape succeeded.
"""

import logging
import os
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from ..config import DEBUG_SLOW_MO_MS, ScraperConfig
from ..exceptions import BrowserInstallError


class BrowserSession:
    """Context manager owning one Chromium instance and its single page."""

    def __init__(self, config: ScraperConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None

    def launch_options(self) -> Dict[str, Any]:
        """Return the keyword arguments for ``chromium.launch``."""
        options: Dict[str, Any] = {
            'headless': True,
            'args': ['--start-maximized'],
        }
        if self.config.debug:
            options['headless'] = False
            options['slow_mo'] = DEBUG_SLOW_MO_MS
            options['args'] = options['args'] + ['--auto-open-devtools-for-tabs']
        return options

    def __enter__(self) -> 'BrowserSession':
        self.playwright = sync_playwright().start()
        try:
            self.logger.info("Launching the browser...")
            self.browser = self.playwright.chromium.launch(**self.launch_options())
            self.logger.info(f"Launched the Chromium {self.browser.version} browser.")

            width, height = self.config.viewport
            self.logger.info(f"Setting the browser viewport to {width}x{height}...")
            context = self.browser.new_context(
                viewport={'width': width, 'height': height},
                device_scale_factor=1,
                user_agent=self.config.user_agent,
            )
            self.page = context.new_page()
            self.page.set_default_timeout(self.config.timeout_ms)
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the browser and stop Playwright."""
        try:
            if self.browser is not None:
                self.logger.info("Closing the browser...")
                self.browser.close()
        finally:
            self.browser = None
            self.page = None
            if self.playwright is not None:
                self.playwright.stop()
                self.playwright = None


def take_screenshot(page: Page, path: str, logger: Optional[logging.Logger] = None) -> None:
    """Capture a full-page screenshot, creating the target directory if needed."""
    logger = logger or logging.getLogger(__name__)
    logger.info(f"Taking a screenshot to {path}...")
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    page.screenshot(path=path, full_page=True)


@contextmanager
def screenshot_on_exit(page: Page, path: str, logger: Optional[logging.Logger] = None) -> Iterator[Page]:
    """
    Take a full-page screenshot when the block exits, however it exits.

    If the block raised, a failing screenshot is logged and the original
    exception is re-raised. Otherwise a screenshot failure propagates.
    """
    logger = logger or logging.getLogger(__name__)
    try:
        yield page
    except BaseException:
        try:
            take_screenshot(page, path, logger)
        except (PlaywrightError, OSError) as e:
            logger.error(f"Could not take the diagnostic screenshot: {e}")
        raise
    else:
        take_screenshot(page, path, logger)


def use_browsers_path(path: str) -> None:
    """Point Playwright, and any installer started from this process, at a browser cache."""
    os.environ['PLAYWRIGHT_BROWSERS_PATH'] = str(Path(path).expanduser())


def install_browser(logger: Optional[logging.Logger] = None) -> None:
    """
    Install the Chromium build pinned by the installed Playwright release.

    Playwright skips the download when the build is already cached. Call
    ``use_browsers_path`` first to install into a specific cache directory.

    Args:
        logger: Logger to report progress to

    Raises:
        BrowserInstallError: If the installer fails
    """
    logger = logger or logging.getLogger(__name__)
    logger.info("Ensuring the Chromium browser is installed...")
    try:
        result = subprocess.run(
            [sys.executable, '-m', 'playwright', 'install', 'chromium'],
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise BrowserInstallError(f"Browser installation failed: {e.stderr or e}") from e
    except OSError as e:
        raise BrowserInstallError(f"Could not run the Playwright installer: {e}") from e

    if result.stdout:
        logger.debug(result.stdout.strip())
