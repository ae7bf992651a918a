"""
Lead Scraper: turns free-text lead requests into search parameters and
harvests candidate listings from a search engine results page.
"""

__version__ = "1.0.0"
