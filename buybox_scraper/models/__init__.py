"""数据模型模块"""
from .product import (
    ProductRecord,
    Redirected,
    REPORT_FIELDS,
    SCRAPING_FAILED,
    UNKNOWN_ASIN,
    ZERO_BANK_DISCOUNT,
)
from .crawl_task import ErrorType, RunStatistics

__all__ = [
    "ProductRecord",
    "Redirected",
    "REPORT_FIELDS",
    "SCRAPING_FAILED",
    "UNKNOWN_ASIN",
    "ZERO_BANK_DISCOUNT",
    "ErrorType",
    "RunStatistics",
]
