"""
Site layouts and run configuration.

A ``SiteLayout`` describes everything that differs between the support
site's table variants: selectors, column offsets, how to tell the table is
fully rendered, and whether the result is sorted. The scraper itself has a
single code path parameterized by the selected layout.
"""

import argparse
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .exceptions import ConfigurationError
from .utils.validators import parse_viewport_size, validate_product_id


DEFAULT_PRODUCT = 'optiplex-7060-desktop'
DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/139.0.0.0 Safari/537.36'
)
SUPPORT_URL_TEMPLATE = 'https://www.dell.com/support/home/en-us/product-support/product/{product}/drivers'

COOKIE_DIALOG_TIMEOUT_MS = 5000
DEBUG_SLOW_MO_MS = 250

DATE_POLICY_ABORT = 'abort'
DATE_POLICY_COLLECT = 'collect'


@dataclass(frozen=True)
class ColumnMap:
    """Cell offsets of each field within a table row."""

    name: int
    importance: int
    date: int
    category: int
    download: int


@dataclass(frozen=True)
class SiteLayout:
    """Selectors and behavior for one variant of the driver table."""

    name: str
    row_selector: str
    cell_selector: str
    column_count: int
    columns: ColumnMap
    wait_strategy: str
    download_selector: str = '[href]'
    url_template: str = SUPPORT_URL_TEMPLATE
    sort_records: bool = True

    # marker wait
    marker_selector: Optional[str] = None

    # pagination wait
    min_rows: int = 1
    show_more_selector: Optional[str] = None

    # elements whose text is not rendered, dropped before reading cells
    hidden_text_selector: Optional[str] = '[hidden], [aria-hidden="true"], .dds__sr-only, .sr-only'

    # details expansion; the panel is located relative to the row, the link
    # relative to the panel
    details_toggle_selector: Optional[str] = None
    details_panel_selector: Optional[str] = None
    details_link_selector: Optional[str] = None

    # cookie and region dialogs
    cookie_selector: str = '[aria-label="cookieconsent"] .cc-dismiss'
    region_selector: str = 'div.mh-top div.country-selector'
    target_region: str = 'US/EN'
    region_id: str = 'Americas'
    locale: str = 'en-us'

    @property
    def supports_details(self) -> bool:
        return bool(
            self.details_toggle_selector and self.details_panel_selector and self.details_link_selector
        )


LAYOUTS: Dict[str, SiteLayout] = {
    'driver-list': SiteLayout(
        name='driver-list',
        row_selector='#driver-list-table #dnd-list-tab0 .dds__tbody .dds__tr',
        cell_selector='.dds__table__cell',
        column_count=5,
        columns=ColumnMap(name=0, importance=1, date=2, category=3, download=4),
        wait_strategy='marker',
        marker_selector='#driver-list-table #dnd-list-tab0 div.dds__td span.dds__table__cell:has-text("BIOS")',
        sort_records=True,
    ),
    'downloads-table': SiteLayout(
        name='downloads-table',
        row_selector='#downloads-table tbody tr.main-row',
        cell_selector='td',
        column_count=6,
        columns=ColumnMap(name=1, category=2, date=3, importance=4, download=5),
        wait_strategy='paginate',
        min_rows=10,
        show_more_selector='#paginationBtn',
        sort_records=False,
        details_toggle_selector='td.details-control button',
        details_panel_selector='xpath=following-sibling::tr[1]',
        details_link_selector='a.dl-details-link',
    ),
}

DEFAULT_LAYOUT = 'driver-list'


def get_layout(name: str) -> SiteLayout:
    """
    Look up a built-in site layout by name.

    Raises:
        ConfigurationError: If no layout has that name
    """
    try:
        return LAYOUTS[name]
    except KeyError:
        known = ', '.join(sorted(LAYOUTS))
        raise ConfigurationError(f"Unknown layout {name!r} (known layouts: {known})") from None


@dataclass
class ScraperConfig:
    """Settings for a single scraper run."""

    product: str = DEFAULT_PRODUCT
    layout: SiteLayout = field(default_factory=lambda: LAYOUTS[DEFAULT_LAYOUT])
    output_dir: str = 'data'
    screenshot_path: str = 'screenshot.png'
    viewport: Tuple[int, int] = (1280, 720)
    debug: bool = False
    timeout: float = 0
    date_policy: str = DATE_POLICY_ABORT
    expand_details: bool = False
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        validate_product_id(self.product)
        if self.date_policy not in (DATE_POLICY_ABORT, DATE_POLICY_COLLECT):
            raise ConfigurationError(f"Unknown date policy: {self.date_policy!r}")
        if self.timeout < 0:
            raise ConfigurationError("Timeout cannot be negative")
        if self.expand_details and not self.layout.supports_details:
            raise ConfigurationError(f"Layout {self.layout.name!r} does not support details expansion")

    @property
    def timeout_ms(self) -> float:
        """Default Playwright timeout; zero disables it."""
        return self.timeout * 1000

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'ScraperConfig':
        """Build a configuration from parsed command line arguments."""
        return cls(
            product=args.product,
            layout=get_layout(args.layout),
            output_dir=args.output_dir,
            screenshot_path=args.screenshot_path,
            viewport=parse_viewport_size(args.viewport_size),
            debug=args.debug,
            timeout=args.timeout,
            date_policy=DATE_POLICY_COLLECT if args.skip_bad_dates else DATE_POLICY_ABORT,
            expand_details=args.expand_details,
        )
