"""ASIN 提取器

从产品URL中提取 Amazon 标准识别号（ASIN）
"""
import re
from typing import List, Pattern

from buybox_scraper.models.product import UNKNOWN_ASIN

# 按顺序尝试：先路径形式（/dp/、/gp/product/、/product/），再查询参数形式（ASIN=）
ASIN_PATTERNS: List[Pattern[str]] = [
    re.compile(r"(?:dp|gp/product|product)/([A-Z0-9]{10})(?:[/?]|$)", re.IGNORECASE),
    re.compile(r"(?:ASIN)=([A-Z0-9]{10})(?:&|$)", re.IGNORECASE),
]


def extract_asin(url: str) -> str:
    """
    从URL中提取ASIN

    Args:
        url: 产品URL

    Returns:
        第一个匹配规则捕获的10位字母数字ASIN；均不匹配时返回 UNKNOWN_ASIN
    """
    if not url:
        return UNKNOWN_ASIN

    for pattern in ASIN_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return UNKNOWN_ASIN
