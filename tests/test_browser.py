"""Tests for browser lifecycle helpers."""

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from driver_scraper.config import DEBUG_SLOW_MO_MS, ScraperConfig
from driver_scraper.core.browser import BrowserSession, install_browser, screenshot_on_exit, use_browsers_path
from driver_scraper.exceptions import BrowserInstallError


class TestBrowserSession:
    """Test cases for BrowserSession."""

    def test_headless_by_default(self):
        options = BrowserSession(ScraperConfig()).launch_options()

        assert options['headless'] is True
        assert 'slow_mo' not in options

    def test_debug_shows_window_with_devtools(self):
        options = BrowserSession(ScraperConfig(debug=True)).launch_options()

        assert options['headless'] is False
        assert options['slow_mo'] == DEBUG_SLOW_MO_MS
        assert '--auto-open-devtools-for-tabs' in options['args']

    @patch('driver_scraper.core.browser.sync_playwright')
    def test_configures_page_and_closes_browser(self, mock_sync_playwright):
        playwright = mock_sync_playwright.return_value.start.return_value
        browser = playwright.chromium.launch.return_value
        context = browser.new_context.return_value
        config = ScraperConfig(viewport=(1024, 768), timeout=30)

        with BrowserSession(config) as session:
            assert session.page is context.new_page.return_value

        browser.new_context.assert_called_once_with(
            viewport={'width': 1024, 'height': 768},
            device_scale_factor=1,
            user_agent=config.user_agent,
        )
        session_page = context.new_page.return_value
        session_page.set_default_timeout.assert_called_once_with(30000)
        browser.close.assert_called_once()
        playwright.stop.assert_called_once()

    @patch('driver_scraper.core.browser.sync_playwright')
    def test_closes_browser_when_block_raises(self, mock_sync_playwright):
        playwright = mock_sync_playwright.return_value.start.return_value
        browser = playwright.chromium.launch.return_value

        with pytest.raises(ValueError):
            with BrowserSession(ScraperConfig()):
                raise ValueError("boom")

        browser.close.assert_called_once()
        playwright.stop.assert_called_once()

    @patch('driver_scraper.core.browser.sync_playwright')
    def test_stops_playwright_when_launch_fails(self, mock_sync_playwright):
        playwright = mock_sync_playwright.return_value.start.return_value
        playwright.chromium.launch.side_effect = RuntimeError("Executable doesn't exist")

        with pytest.raises(RuntimeError):
            BrowserSession(ScraperConfig()).__enter__()

        playwright.stop.assert_called_once()


class TestScreenshotOnExit:
    """Test cases for screenshot_on_exit."""

    def test_screenshot_on_success(self, tmp_path):
        page = MagicMock()
        path = str(tmp_path / "out" / "shot.png")

        with screenshot_on_exit(page, path) as yielded:
            assert yielded is page

        page.screenshot.assert_called_once_with(path=path, full_page=True)
        assert (tmp_path / "out").is_dir()

    def test_screenshot_on_failure_then_reraise(self, tmp_path):
        page = MagicMock()

        with pytest.raises(KeyError):
            with screenshot_on_exit(page, str(tmp_path / "shot.png")):
                raise KeyError("missing")

        page.screenshot.assert_called_once()

    def test_screenshot_error_propagates_on_success(self, tmp_path):
        page = MagicMock()
        page.screenshot.side_effect = PlaywrightError("Target closed")

        with pytest.raises(PlaywrightError):
            with screenshot_on_exit(page, str(tmp_path / "shot.png")):
                pass


class TestInstallBrowser:
    """Test cases for install_browser."""

    @patch('driver_scraper.core.browser.subprocess.run')
    def test_runs_playwright_installer(self, mock_run):
        mock_run.return_value = MagicMock(stdout='')

        install_browser()

        args = mock_run.call_args.args[0]
        assert args[1:] == ['-m', 'playwright', 'install', 'chromium']

    def test_uses_cache_directory(self, monkeypatch, tmp_path):
        monkeypatch.setenv('PLAYWRIGHT_BROWSERS_PATH', '/previous')

        use_browsers_path(str(tmp_path / "cache"))

        assert os.environ['PLAYWRIGHT_BROWSERS_PATH'] == str(tmp_path / "cache")

    @patch('driver_scraper.core.browser.subprocess.run')
    def test_installer_inherits_cache_directory(self, mock_run, monkeypatch, tmp_path):
        monkeypatch.setenv('PLAYWRIGHT_BROWSERS_PATH', '/previous')
        mock_run.return_value = MagicMock(stdout='')

        use_browsers_path(str(tmp_path / "cache"))
        install_browser()

        assert 'env' not in mock_run.call_args.kwargs
        assert os.environ['PLAYWRIGHT_BROWSERS_PATH'] == str(tmp_path / "cache")

    @patch('driver_scraper.core.browser.subprocess.run')
    def test_failure_raises(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, 'playwright', stderr='no space left')

        with pytest.raises(BrowserInstallError, match='no space left'):
            install_browser()
