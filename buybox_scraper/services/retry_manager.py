"""Retry manager with linear backoff, max retry count control, and error classification"""
import time
import logging
from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import (
    TimeoutError as PlaywrightTimeoutError,
    Error as PlaywrightError,
)

from buybox_scraper.config import Config, config
from buybox_scraper.exceptions import AttemptError
from buybox_scraper.models.crawl_task import ErrorType
from buybox_scraper.models.product import ProductRecord
from buybox_scraper.services.crawlers import ProductDataCrawler
from buybox_scraper.services.extractors import extract_asin

logger = logging.getLogger(__name__)


@dataclass
class RetryState:
    """Attempt counter for one URL (attempt indices 0..max_retries inclusive)"""
    max_retries: int
    attempt: int = 0

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_retries

    def advance(self) -> None:
        if not self.can_retry:
            raise RuntimeError(f"No attempts left (max_retries={self.max_retries})")
        self.attempt += 1


class RetryManager:
    """Wraps the product crawler; always returns a record, never raises"""

    def __init__(
        self,
        crawler: Optional[ProductDataCrawler] = None,
        settings: Optional[Config] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: Optional[float] = None
    ):
        self.config = settings or config
        self.crawler = crawler or ProductDataCrawler(self.config)
        self.max_retries = self.config.MAX_RETRIES if max_retries is None else max_retries
        self.base_delay = self.config.BASE_DELAY if base_delay is None else base_delay
        self.max_delay = self.config.MAX_DELAY if max_delay is None else max_delay

    def calculate_backoff(self, retry_count: int) -> float:
        """
        Calculate linear backoff delay

        Args:
            retry_count: Index of the attempt that just failed (0-indexed)

        Returns:
            Delay in seconds, capped at max_delay
        """
        return float(min(self.base_delay * (retry_count + 1), self.max_delay))

    def classify_error(self, error: Exception) -> ErrorType:
        """
        Classify error type

        Playwright 错误类型映射：
        - TimeoutError -> TIMEOUT
        - 其他 Playwright Error -> NAVIGATION
        - AttemptError 子类 -> 自身类型（导航失败时按根因细分超时）
        """
        if isinstance(error, AttemptError):
            if isinstance(error.cause, PlaywrightTimeoutError):
                return ErrorType.TIMEOUT
            return error.error_type

        if isinstance(error, PlaywrightTimeoutError):
            return ErrorType.TIMEOUT
        if isinstance(error, PlaywrightError):
            return ErrorType.NAVIGATION

        return ErrorType.OTHER

    def scrape_with_retry(self, url: str) -> ProductRecord:
        """
        Scrape one URL, retrying failed attempts

        Returns:
            The crawled record, or the terminal-failure record once
            max_retries + 1 attempts have failed
        """
        state = RetryState(max_retries=self.max_retries)

        while True:
            suffix = f" (retry {state.attempt})" if state.attempt > 0 else ""
            logger.info(f"[爬取开始] Starting to scrape: {url}{suffix}")
            try:
                return self.crawler.crawl(url)
            except Exception as e:
                error_type = self.classify_error(e)

                if not state.can_retry:
                    logger.error(
                        f"[爬取终止] Failed to scrape {url} after {state.attempt + 1} attempts "
                        f"({error_type.value}): {e}"
                    )
                    return ProductRecord.failed(url, extract_asin(url))

                delay = self.calculate_backoff(state.attempt)
                logger.warning(
                    f"[重试] {url} failed (attempt {state.attempt + 1}/{self.max_retries + 1}, "
                    f"{error_type.value}): {e}. Retrying in {delay:.2f}s..."
                )
                time.sleep(delay)
                state.advance()
