"""批量爬取管理器

按输入顺序逐个处理URL（不并发），累计运行统计并将每条记录即时写入报表
"""
import logging
import random
import time
from typing import Optional, Protocol, Sequence, Union
from pathlib import Path

from buybox_scraper.config import Config, config
from buybox_scraper.models.crawl_task import RunStatistics
from buybox_scraper.models.product import ProductRecord
from buybox_scraper.services.retry_manager import RetryManager

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    def write(self, record: ProductRecord) -> None:
        ...


class BatchManager:
    """顺序批量爬取"""

    def __init__(
        self,
        retry_manager: Optional[RetryManager] = None,
        settings: Optional[Config] = None
    ):
        self.config = settings or config
        self.retry_manager = retry_manager or RetryManager(settings=self.config)

    def pacing_delay(self) -> float:
        """两次请求之间的随机间隔（秒）"""
        return random.uniform(self.config.PACING_DELAY_MIN, self.config.PACING_DELAY_MAX)

    def run_batch(self, urls: Sequence[str], sink: ReportSink) -> RunStatistics:
        """
        依次爬取所有URL

        Args:
            urls: 产品URL列表（保持顺序，不去重）
            sink: 报表输出，每完成一条记录调用一次 write

        Returns:
            本批次的运行统计
        """
        stats = RunStatistics()
        total = len(urls)

        for index, url in enumerate(urls):
            logger.info(f"[批量进度] Processing {index + 1}/{total}: {url}")

            record = self.retry_manager.scrape_with_retry(url)
            stats.record(record)
            sink.write(record)

            if index < total - 1:
                delay = self.pacing_delay()
                logger.debug(f"[批量进度] 等待 {delay:.2f} 秒后处理下一个URL")
                time.sleep(delay)

        return stats


def log_summary(stats: RunStatistics, report_path: Union[str, Path]) -> None:
    """输出运行摘要"""
    logger.info("--- Scraping Summary ---")
    logger.info(f"Total URLs: {stats.total}")
    logger.info(f"Success: {stats.success} ({stats.success_rate:.1f}%)")
    logger.info(f"Failures: {stats.failure}")
    logger.info(f"Redirected: {stats.redirected}")
    logger.info(f"With Coupons: {stats.with_coupons}")
    logger.info(f"With Bank Discounts: {stats.with_bank_discounts}")
    logger.info(f"Results saved to {report_path}")
