"""爬取器模块

负责页面会话和单次产品页爬取尝试
"""
from .product_data_crawler import ProductDataCrawler, build_product_record

__all__ = [
    "ProductDataCrawler",
    "build_product_record",
]
