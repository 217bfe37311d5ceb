#!/usr/bin/env python3
"""
Driver Support-Page Scraper

This application loads a vendor product-support page in a headless browser,
extracts the table of downloadable drivers and saves it as JSON, taking a
full-page screenshot of the page for audit.
"""

import argparse
import logging
import sys

from driver_scraper.config import DEFAULT_LAYOUT, DEFAULT_PRODUCT, LAYOUTS, ScraperConfig
from driver_scraper.core.browser import install_browser, use_browsers_path
from driver_scraper.core.scraper_engine import ScraperEngine
from driver_scraper.utils.logger import setup_logging


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Scrape the driver downloads of a product support page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py -p optiplex-7060-desktop --screenshot-path out/page.png
  python main.py --layout downloads-table --skip-bad-dates -v
        """
    )

    parser.add_argument(
        '-p', '--product',
        default=DEFAULT_PRODUCT,
        help=f'Product identifier (default: {DEFAULT_PRODUCT})'
    )

    parser.add_argument(
        '--layout',
        choices=sorted(LAYOUTS),
        default=DEFAULT_LAYOUT,
        help=f'Driver table layout of the support page (default: {DEFAULT_LAYOUT})'
    )

    parser.add_argument(
        '--output-dir',
        default='data',
        help='Directory for the <product>.json output (default: data)'
    )

    parser.add_argument(
        '--screenshot-path',
        default='screenshot.png',
        help='Screenshot output path (default: screenshot.png)'
    )

    parser.add_argument(
        '--viewport-size',
        default='1280x720',
        help='Browser viewport size as WIDTHxHEIGHT (default: 1280x720)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Run the browser in the foreground with DevTools and slowed-down actions'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=0,
        help='Default wait timeout in seconds, 0 waits forever (default: 0)'
    )

    parser.add_argument(
        '--expand-details',
        action='store_true',
        help='Open each row to read its details link (downloads-table layout only)'
    )

    parser.add_argument(
        '--skip-bad-dates',
        action='store_true',
        help='Report rows with malformed dates instead of aborting the scrape'
    )

    parser.add_argument(
        '--install-browser',
        action='store_true',
        help='Install the Chromium build used by Playwright before scraping'
    )

    parser.add_argument(
        '--browsers-path',
        help='Browser cache directory used by --install-browser'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point."""
    args = parse_arguments(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        config = ScraperConfig.from_args(args)

        if args.browsers_path:
            use_browsers_path(args.browsers_path)
        if args.install_browser:
            install_browser(logger=logger)

        scraper = ScraperEngine(config, logger=logger)
        result = scraper.run()

        for error in result.errors:
            logger.warning(f"Row {error.row_index} skipped: {error.message}")
        logger.info(f"Total records extracted: {len(result.records)}")

    except KeyboardInterrupt:
        logger.info("Scraping interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Scraping failed: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        sys.exit(1)


if __name__ == "__main__":
    main()
