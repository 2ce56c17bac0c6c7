"""Attempt-level errors raised by the product data crawler"""
from typing import Optional

from buybox_scraper.models.crawl_task import ErrorType


class AttemptError(Exception):
    """One scrape attempt failed; the retry manager decides what happens next"""

    error_type: ErrorType = ErrorType.OTHER

    def __init__(self, url: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.url = url
        self.cause = cause


class NavigationError(AttemptError):
    """Transport or timeout failure while reaching the URL"""

    error_type = ErrorType.NAVIGATION


class HttpStatusError(AttemptError):
    """Response status indicates failure (404 is tolerated)"""

    error_type = ErrorType.HTTP_STATUS

    def __init__(self, url: str, status: int):
        super().__init__(url, f"HTTP {status} for {url}")
        self.status = status


class ExtractionFault(AttemptError):
    """Unexpected fault while reading page content after navigation"""

    error_type = ErrorType.EXTRACTION
