"""Application configuration"""
import os
from typing import Any, List
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    """Application configuration

    类属性为环境变量默认值；实例可通过关键字参数单独覆盖，
    不会修改类级别的默认值，因此不同配置的批次互不影响。
    """

    # Retry configuration
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "2"))
    BASE_DELAY: float = float(os.getenv("BASE_DELAY", "1.5"))  # 秒
    MAX_DELAY: float = float(os.getenv("MAX_DELAY", "4.0"))  # 秒

    # Playwright configuration
    TIMEOUT: int = int(os.getenv("TIMEOUT", "30000"))  # 毫秒，单次导航超时
    READY_TIMEOUT: int = int(os.getenv("READY_TIMEOUT", "5000"))  # 毫秒，关键元素等待
    HEADLESS: bool = _env_bool("HEADLESS", "true")
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/97.0.4692.99 Safari/537.36"
    )
    BROWSER_TYPE: str = os.getenv("BROWSER_TYPE", "chromium")
    VIEWPORT_WIDTH: int = int(os.getenv("VIEWPORT_WIDTH", "1366"))
    VIEWPORT_HEIGHT: int = int(os.getenv("VIEWPORT_HEIGHT", "768"))
    # 为空时使用临时浏览器配置；非空时启动持久化上下文
    USER_DATA_DIR: str = os.getenv("USER_DATA_DIR", "")
    BLOCKED_RESOURCE_TYPES: List[str] = _env_list(
        "BLOCKED_RESOURCE_TYPES", "image,font,media,stylesheet"
    )

    # Lazy-load scroll configuration
    SCROLL_STEP: int = int(os.getenv("SCROLL_STEP", "200"))  # 像素
    SCROLL_INTERVAL: int = int(os.getenv("SCROLL_INTERVAL", "100"))  # 毫秒
    SCROLL_MAX_DISTANCE: int = int(os.getenv("SCROLL_MAX_DISTANCE", "3000"))  # 像素

    # Crawler pacing configuration
    PACING_DELAY_MIN: float = float(os.getenv("PACING_DELAY_MIN", "1.0"))  # 秒
    PACING_DELAY_MAX: float = float(os.getenv("PACING_DELAY_MAX", "3.0"))  # 秒

    # Input / output
    URLS_FILE: str = os.getenv("URLS_FILE", "amazon_urls.txt")
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "output")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **overrides: Any):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown config key: {key}")
            setattr(self, key, value)

    def with_overrides(self, **overrides: Any) -> "Config":
        """返回带覆盖值的新配置实例（忽略值为 None 的项）"""
        merged = {
            key: getattr(self, key)
            for key in dir(type(self))
            if key.isupper()
        }
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**merged)


config = Config()
