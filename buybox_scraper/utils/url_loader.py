"""URL list source"""
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

# 未提供 URL 文件时使用的内置列表
DEFAULT_URLS: List[str] = [
    "https://www.amazon.in/dp/B09G9BL5CP",
    "https://www.amazon.in/dp/B0BDJ6ZMCC",
    "https://www.amazon.in/gp/product/B07WHSR1ZG",
]


def load_urls(path: Union[str, Path], fallback: Optional[Sequence[str]] = None) -> List[str]:
    """
    读取URL列表

    文件存在时返回其中所有非空行（去除首尾空白，保持顺序，不去重）；
    否则返回 fallback（默认为内置列表）
    """
    path = Path(path)
    if not path.exists():
        urls = list(DEFAULT_URLS if fallback is None else fallback)
        logger.info(f"[URL加载] 未找到 {path}，使用内置列表 ({len(urls)} 条)")
        return urls

    with open(path, "r", encoding="utf-8") as f:
        urls = [line.strip() for line in f if line.strip()]
    logger.info(f"[URL加载] 从 {path} 读取 {len(urls)} 条URL")
    return urls
