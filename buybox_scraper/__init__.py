"""Amazon buy-box scraper: resilient product page extraction with CSV reporting"""

__version__ = "1.0.0"
