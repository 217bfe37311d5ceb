"""
Helper utility functions.
"""

import re
from pathlib import Path


def clean_text(text: str) -> str:
    """
    Collapse runs of whitespace and trim the result.

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    if not isinstance(text, str):
        return str(text)

    return re.sub(r'\s+', ' ', text).strip()


def escape_spaces(url: str) -> str:
    """
    Percent-escape literal spaces in a URL.

    The support site emits download links with unescaped spaces in file
    names; no other character is touched.

    Args:
        url: URL as found in the page

    Returns:
        URL with every space replaced by ``%20``
    """
    return url.replace(' ', '%20')


def output_path_for(output_dir: str, product: str) -> str:
    """Return the JSON output path for a product."""
    return str(Path(output_dir) / f"{product}.json")
