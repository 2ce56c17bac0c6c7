"""产品数据爬取器

对单个产品URL执行一次爬取尝试：打开会话、导航、等待、滚动、提取字段并计算到手价
"""
import logging
import time
from typing import Dict, List, Optional, Protocol

from playwright.sync_api import Request

from buybox_scraper.config import Config, config
from buybox_scraper.exceptions import (
    AttemptError,
    ExtractionFault,
    HttpStatusError,
    NavigationError,
)
from buybox_scraper.models.product import ProductRecord, Redirected
from buybox_scraper.services.extractors import (
    ProductInfoExtractor,
    extract_asin,
    format_currency,
    net_price,
    to_number,
)
from buybox_scraper.utils.playwright_manager import PlaywrightSessionFactory

logger = logging.getLogger(__name__)

# 任一元素出现即认为页面主体已就绪
READY_SELECTORS: List[str] = [
    '#productTitle',
    '#title',
    '#wayfinding-breadcrumbs_container',
    '#nav-bb-logo',
]

# 部分产品页会误返回 404，但页面内容仍然可用
TOLERATED_STATUSES = (404,)


class SessionFactory(Protocol):
    def open_session(self):
        ...


def build_product_record(
    original_url: str,
    original_asin: str,
    final_url: str,
    final_asin: str,
    fields: Dict[str, str],
) -> ProductRecord:
    """由原始字段组装产品记录，数值字段均由对应的展示字符串推导"""
    price_numeric = to_number(fields["price"])
    coupon_numeric = to_number(fields["coupon"])
    bank_numeric = to_number(fields["bank_discount"])
    net_numeric = net_price(price_numeric, coupon_numeric, bank_numeric)

    return ProductRecord(
        original_url=original_url,
        original_asin=original_asin,
        final_url=final_url,
        final_asin=final_asin,
        redirected=Redirected.YES if final_asin != original_asin else Redirected.NO,
        title=fields["title"],
        buy_box_price=fields["price"],
        buy_box_price_numeric=price_numeric,
        rating=fields["rating"],
        review_count=fields["review_count"],
        coupon_amount=fields["coupon"],
        coupon_amount_numeric=coupon_numeric,
        max_bank_discount=fields["bank_discount"],
        max_bank_discount_numeric=bank_numeric,
        net_effective_price=format_currency(net_numeric),
        net_effective_price_numeric=net_numeric,
    )


class ProductDataCrawler:
    """从产品详情页爬取产品数据的爬取器（单次尝试，不包含重试逻辑）"""

    def __init__(
        self,
        settings: Optional[Config] = None,
        session_factory: Optional[SessionFactory] = None,
        product_info_extractor: Optional[ProductInfoExtractor] = None,
    ):
        self.config = settings or config
        self.session_factory = session_factory or PlaywrightSessionFactory(self.config)
        self.product_info_extractor = product_info_extractor or ProductInfoExtractor()

    def crawl(self, product_url: str) -> ProductRecord:
        """
        爬取单个产品页

        Args:
            product_url: 产品URL

        Returns:
            ProductRecord

        Raises:
            AttemptError: 导航失败、HTTP 状态异常或提取异常，由 retry_manager 处理重试。
                抛出前页面会话已经释放。
        """
        start_time = time.time()
        original_asin = extract_asin(product_url)

        try:
            with self.session_factory.open_session() as session:
                record = self._crawl_in_session(session, product_url, original_asin)
        except AttemptError as e:
            total_elapsed = time.time() - start_time
            logger.error(
                f"[爬取失败] {type(e).__name__} - URL: {product_url}, 错误: {e}, 总耗时: {total_elapsed:.2f}秒"
            )
            raise
        except Exception as e:
            # 会话打开或释放失败
            total_elapsed = time.time() - start_time
            logger.error(
                f"[爬取失败] 浏览器会话错误 - URL: {product_url}, 错误: {e}, 错误类型: {type(e).__name__}, 总耗时: {total_elapsed:.2f}秒"
            )
            raise NavigationError(product_url, f"Browser session failed: {e}", cause=e) from e

        total_elapsed = time.time() - start_time
        logger.info(
            f"[爬取完成] URL: {product_url}, ASIN: {record.final_asin}, 价格: {record.buy_box_price or '无'}, "
            f"到手价: {record.net_effective_price}, 总耗时: {total_elapsed:.2f}秒"
        )
        return record

    def _crawl_in_session(self, session, product_url: str, original_asin: str) -> ProductRecord:
        session.set_request_filter(self._should_block)

        try:
            response = session.navigate(
                product_url,
                wait_until='domcontentloaded',
                timeout=self.config.TIMEOUT,
            )
        except Exception as e:
            raise NavigationError(product_url, f"Navigation failed: {e}", cause=e) from e

        if not response.ok and response.status not in TOLERATED_STATUSES:
            raise HttpStatusError(product_url, response.status)

        try:
            final_url = session.current_url()
            final_asin = extract_asin(final_url)
            if final_asin != original_asin:
                logger.info(f"[重定向] {original_asin} -> {final_asin} - 最终URL: {final_url}")

            if not session.wait_for_any(READY_SELECTORS, timeout=self.config.READY_TIMEOUT):
                logger.info(f"[就绪探测] 未找到关键元素，继续执行 - URL: {product_url}")

            # 触发懒加载内容
            session.auto_scroll(
                self.config.SCROLL_STEP,
                self.config.SCROLL_INTERVAL,
                self.config.SCROLL_MAX_DISTANCE,
            )

            fields = self.product_info_extractor.extract(session)
            return build_product_record(product_url, original_asin, final_url, final_asin, fields)
        except Exception as e:
            raise ExtractionFault(product_url, f"Extraction failed: {e}", cause=e) from e

    def _should_block(self, request: Request) -> bool:
        """屏蔽图片 / 字体 / 媒体 / 样式表等静态资源"""
        return request.resource_type in self.config.BLOCKED_RESOURCE_TYPES
