"""Pytest configuration and shared fixtures for the driver scraper tests."""

from datetime import datetime, timezone
from typing import List, Optional, Sequence
from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup, Tag
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from driver_scraper.config import LAYOUTS, SiteLayout
from driver_scraper.models import DriverRecord


# (name, importance, date, category, href)
SCENARIO_ROWS = [
    ("NVIDIA Graphics Driver", "Recommended", "15 Mar 2023", "Video", "/dl/a b.exe"),
    ("BIOS Update", "Urgent", "02 Jan 2024", "BIOS", "/dl/bios.exe"),
    ("NVIDIA Graphics Driver", "Recommended", "01 Jan 2022", "Video", "/dl/c.exe"),
]


def driver_list_row(name: str, importance: str, date: str, category: str, href: str) -> str:
    """Render one row of the driver-list table layout."""
    cells = [
        f'<div class="dds__td"><span class="dds__table__cell">{name}</span></div>',
        f'<div class="dds__td"><span class="dds__table__cell"> {importance} </span></div>',
        f'<div class="dds__td"><span class="dds__table__cell">{date}</span></div>',
        f'<div class="dds__td"><span class="dds__table__cell">{category}</span></div>',
        f'<div class="dds__td"><span class="dds__table__cell"><a href="{href}">Download</a></span></div>',
    ]
    return f'<div class="dds__tr">{"".join(cells)}</div>'


def driver_list_html(rows: Sequence[str]) -> str:
    """Wrap rendered rows in the driver-list page structure."""
    return (
        '<html><body>'
        '<div id="driver-list-table"><div id="dnd-list-tab0">'
        '<div class="dds__thead"><div class="dds__tr"><span>Name</span></div></div>'
        f'<div class="dds__tbody">{"".join(rows)}</div>'
        '</div></div>'
        '</body></html>'
    )


def downloads_table_html(rows: Sequence[tuple], missing_details: Sequence[int] = ()) -> str:
    """
    Render the downloads-table layout, each main row followed by a details row.

    Row ``i`` links to ``/details/row{i}`` unless ``i`` is in ``missing_details``.
    """
    body: List[str] = []
    for index, (name, importance, date, category, href) in enumerate(rows):
        details = '' if index in missing_details else (
            f'<a class="dl-details-link" href="/details/row{index}">Details</a>'
        )
        body.append(
            '<tr class="main-row">'
            '<td class="details-control"><button>+</button></td>'
            f'<td>{name}</td><td>{category}</td><td>{date}</td><td>{importance}</td>'
            f'<td><a href="{href}">Download</a></td>'
            '</tr>'
            '<tr class="details-row"><td colspan="6">'
            f'{details}'
            '</td></tr>'
        )
    return (
        '<html><body><table id="downloads-table">'
        '<thead><tr><th></th><th>Name</th></tr></thead>'
        f'<tbody>{"".join(body)}</tbody>'
        '</table></body></html>'
    )


@pytest.fixture
def driver_list_layout() -> SiteLayout:
    return LAYOUTS['driver-list']


@pytest.fixture
def downloads_table_layout() -> SiteLayout:
    return LAYOUTS['downloads-table']


@pytest.fixture
def scenario_html() -> str:
    """Driver-list page with the three scenario rows and a spacer row."""
    rows = [driver_list_row(*row) for row in SCENARIO_ROWS]
    rows.insert(1, '<div class="dds__tr"><span class="dds__table__cell">spacer</span></div>')
    return driver_list_html(rows)


@pytest.fixture
def mock_page(scenario_html) -> MagicMock:
    """Playwright page double serving the scenario HTML."""
    page = MagicMock()
    page.content.return_value = scenario_html
    page.inner_text.return_value = "US/EN"
    return page


def make_record(name: str, year: int, month: int = 1, day: int = 1, url: str = "/dl/x.exe") -> DriverRecord:
    return DriverRecord(
        name=name,
        category="Video",
        importance="recommended",
        date=datetime(year, month, day, tzinfo=timezone.utc),
        url=url,
    )


class FakeLocator:
    """Locator double that resolves selectors against a parsed document."""

    def __init__(self, page: 'FakePage', elements: List[Tag]):
        self.page = page
        self.elements = elements

    def locator(self, selector: str) -> 'FakeLocator':
        if selector == 'xpath=following-sibling::tr[1]':
            found = [el.find_next_sibling('tr') for el in self.elements]
            return FakeLocator(self.page, [el for el in found if el is not None])
        return FakeLocator(self.page, [match for el in self.elements for match in el.select(selector)])

    def nth(self, index: int) -> 'FakeLocator':
        return FakeLocator(self.page, self.elements[index:index + 1])

    @property
    def first(self) -> 'FakeLocator':
        return self.nth(0)

    def click(self) -> None:
        if not self.elements:
            raise PlaywrightTimeoutError("Timeout waiting for locator to click")
        self.page.clicks.append(self.elements[0])

    def wait_for(self, state: str = 'visible') -> None:
        if not self.elements:
            raise PlaywrightTimeoutError(f"Timeout waiting for locator to be {state}")

    def get_attribute(self, name: str) -> Optional[str]:
        return self.elements[0].get(name)


class FakePage:
    """Page double backed by BeautifulSoup, recording clicked elements."""

    def __init__(self, html: str):
        self.html = html
        self.soup = BeautifulSoup(html, 'html.parser')
        self.clicks: List[Tag] = []

    def content(self) -> str:
        return self.html

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, self.soup.select(selector))
