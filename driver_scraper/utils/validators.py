"""
Input validation utilities.
"""

import re
from typing import Tuple
from urllib.parse import urlparse

from ..exceptions import ConfigurationError


VIEWPORT_RE = re.compile(r'^\s*(?P<width>[0-9]+)\s*x\s*(?P<height>[0-9]+)\s*$', re.IGNORECASE)
PRODUCT_ID_RE = re.compile(r'^[A-Za-z0-9][A-Za-z0-9._-]*$')


def validate_url(url: str) -> None:
    """
    Validate URL format.

    Args:
        url: URL to validate

    Raises:
        ConfigurationError: If URL is invalid
    """
    if not url:
        raise ConfigurationError("URL cannot be empty")

    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError(f"Invalid URL format: {url}")

    if parsed.scheme not in ['http', 'https']:
        raise ConfigurationError("URL must use HTTP or HTTPS protocol")


def validate_product_id(product: str) -> None:
    """
    Validate a product identifier.

    The identifier becomes both a URL path segment and a file name, so it is
    restricted to letters, digits, dots, dashes and underscores.

    Args:
        product: Product identifier such as ``optiplex-7060-desktop``

    Raises:
        ConfigurationError: If the identifier is empty or unsafe
    """
    if not product or not PRODUCT_ID_RE.match(product):
        raise ConfigurationError(f"Invalid product identifier: {product!r}")


def parse_viewport_size(value: str) -> Tuple[int, int]:
    """
    Parse a ``WIDTHxHEIGHT`` viewport string.

    Args:
        value: Viewport size, e.g. ``1280x720``

    Returns:
        Tuple of (width, height)

    Raises:
        ConfigurationError: If the string is malformed or a dimension is zero
    """
    match = VIEWPORT_RE.match(value or '')
    if not match:
        raise ConfigurationError(f"Invalid viewport size {value!r}, expected WIDTHxHEIGHT")

    width = int(match.group('width'))
    height = int(match.group('height'))
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Viewport dimensions must be positive: {value!r}")

    return width, height
