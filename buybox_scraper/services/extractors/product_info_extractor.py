"""产品信息提取器

从已加载的产品详情页提取原始字段（标题、价格、评分、评论数、优惠券、银行优惠）。
每个字段独立提取，按固定顺序尝试多个提取策略，第一个成功的策略胜出。
"""
import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from buybox_scraper.models.product import ZERO_BANK_DISCOUNT
from buybox_scraper.services.extractors.field_normalizer import (
    CURRENCY_MARKER,
    to_bare_integer,
    to_currency,
    to_percent,
    to_rating,
)

logger = logging.getLogger(__name__)


class ContentQuery(Protocol):
    """按选择器读取已加载页面文本内容的能力"""

    def query_text(self, selector: str) -> Optional[str]:
        ...

    def query_all_texts(self, selector: str) -> List[str]:
        ...


# 提取策略：从页面内容查询能力到可选字符串的纯函数
ContentStrategy = Callable[[ContentQuery], Optional[str]]


def text_of(selector: str) -> ContentStrategy:
    """读取选择器第一个匹配元素的文本"""
    def _strategy(query: ContentQuery) -> Optional[str]:
        text = query.query_text(selector)
        return text.strip() if text else None
    _strategy.__name__ = f"text_of({selector})"
    return _strategy


def currency_of(selector: str) -> ContentStrategy:
    """读取文本并规范为货币金额；有文本但无可识别金额视为失败"""
    read = text_of(selector)

    def _strategy(query: ContentQuery) -> Optional[str]:
        return to_currency(read(query)) or None
    _strategy.__name__ = f"currency_of({selector})"
    return _strategy


def coupon_of(selector: str) -> ContentStrategy:
    """含货币符号时取金额，否则含 % 时取百分比"""
    read = text_of(selector)

    def _strategy(query: ContentQuery) -> Optional[str]:
        text = read(query) or ""
        if CURRENCY_MARKER in text:
            return to_currency(text) or None
        if "%" in text:
            return to_percent(text) or None
        return None
    _strategy.__name__ = f"coupon_of({selector})"
    return _strategy


def first_match(strategies: Sequence[ContentStrategy], query: ContentQuery) -> str:
    """按顺序执行策略，返回第一个非空结果；全部失败返回空串"""
    for strategy in strategies:
        value = strategy(query)
        if value:
            return value
    return ""


TITLE_STRATEGIES: List[ContentStrategy] = [
    text_of("#productTitle"),
    text_of("#title"),
    text_of("h1.a-size-large"),
]

PRICE_STRATEGIES: List[ContentStrategy] = [
    currency_of(".a-price-whole"),
    currency_of(".a-price .a-offscreen"),
    currency_of("#priceblock_ourprice"),
    currency_of("#priceblock_dealprice"),
    currency_of(".apexPriceToPay .a-offscreen"),
]

# 评分与评论数：先选第一个有文本的区域，再规范化（评分）或原样返回（评论数）
RATING_STRATEGIES: List[ContentStrategy] = [
    text_of("#averageCustomerReviews .a-icon-alt"),
    text_of(".reviewCountTextLinkedHistogram"),
]

REVIEW_COUNT_STRATEGIES: List[ContentStrategy] = [
    text_of("#acrCustomerReviewText"),
    text_of("#reviewsMedley .a-size-base"),
]

COUPON_STRATEGIES: List[ContentStrategy] = [
    coupon_of(".couponBadge"),
    coupon_of(".promotions-list .a-checkbox label"),
    coupon_of(".couponText"),
    coupon_of(".promoPriceBlockMessage"),
]

BANK_DISCOUNT_SELECTOR = "#itembox-InstantBankDiscount, .ibdPromotionTypeIcon, .a-box .a-color-success"
BANK_KEYWORDS = ("bank", "card", "upi", "instant discount")


class ProductInfoExtractor:
    """从产品详情页提取原始字段的提取器"""

    def __init__(
        self,
        title_strategies: Sequence[ContentStrategy] = tuple(TITLE_STRATEGIES),
        price_strategies: Sequence[ContentStrategy] = tuple(PRICE_STRATEGIES),
        rating_strategies: Sequence[ContentStrategy] = tuple(RATING_STRATEGIES),
        review_count_strategies: Sequence[ContentStrategy] = tuple(REVIEW_COUNT_STRATEGIES),
        coupon_strategies: Sequence[ContentStrategy] = tuple(COUPON_STRATEGIES),
        bank_discount_selector: str = BANK_DISCOUNT_SELECTOR,
    ):
        self.title_strategies = title_strategies
        self.price_strategies = price_strategies
        self.rating_strategies = rating_strategies
        self.review_count_strategies = review_count_strategies
        self.coupon_strategies = coupon_strategies
        self.bank_discount_selector = bank_discount_selector

    def extract(self, query: ContentQuery) -> Dict[str, str]:
        """
        提取产品原始字段

        Args:
            query: 已加载页面的内容查询能力

        Returns:
            字段字典（值均为字符串，缺失时为空串）：
            - title: 标题
            - price: 买家盒价格（"₹1,299.00"）
            - rating: 评分（"4.5"）
            - review_count: 评论数原始文本
            - coupon: 优惠券（"₹100" 或 "10%"）
            - bank_discount: 银行优惠，未找到时为 "₹0"

        Raises:
            页面读取过程中的异常原样抛出，由调用方包装为 ExtractionFault
        """
        result = {
            "title": first_match(self.title_strategies, query),
            "price": first_match(self.price_strategies, query),
            "rating": to_rating(first_match(self.rating_strategies, query)),
            "review_count": first_match(self.review_count_strategies, query),
            "coupon": first_match(self.coupon_strategies, query),
            "bank_discount": self._extract_bank_discount(query),
        }
        logger.debug(
            f"[字段提取] title={result['title'][:40]!r}, price={result['price']!r}, "
            f"coupon={result['coupon']!r}, bank={result['bank_discount']!r}"
        )
        return result

    def _extract_bank_discount(self, query: ContentQuery) -> str:
        """扫描候选元素，取第一个含银行关键词且能提取金额的元素"""
        for text in query.query_all_texts(self.bank_discount_selector):
            if not text:
                continue
            lowered = text.lower()
            if not any(keyword in lowered for keyword in BANK_KEYWORDS):
                continue
            amount = to_currency(text) or to_bare_integer(text)
            if amount:
                return amount if amount.startswith(CURRENCY_MARKER) else f"{CURRENCY_MARKER}{amount}"
        return ZERO_BANK_DISCOUNT
