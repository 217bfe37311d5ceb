"""
Driver Support-Page Scraper Package

Drives a headless browser through a vendor product-support page and
extracts the published driver downloads as structured records.
"""

__version__ = "1.0.0"
