"""数据提取器模块

提供从产品URL提取ASIN、从产品详情页提取字段以及字段规范化的工具
"""
from .asin_extractor import extract_asin
from .field_normalizer import to_number, to_currency, to_rating, format_currency, net_price
from .product_info_extractor import ContentQuery, ProductInfoExtractor

__all__ = [
    "extract_asin",
    "to_number",
    "to_currency",
    "to_rating",
    "format_currency",
    "net_price",
    "ContentQuery",
    "ProductInfoExtractor",
]
