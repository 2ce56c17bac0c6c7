"""Playwright 页面会话管理器

为单次爬取尝试提供独占的浏览器页面会话，退出时无论成功或失败都会释放全部资源
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from playwright.sync_api import (
    sync_playwright,
    Browser,
    BrowserContext,
    Page,
    Request,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    Error as PlaywrightError,
)

from buybox_scraper.config import Config, config

logger = logging.getLogger(__name__)

# 增量滚动到底部以触发懒加载内容，滚动距离达到页面高度或上限时停止
_AUTO_SCROLL_JS = """
async ({ step, interval, maxDistance }) => {
    let totalHeight = 0;
    await new Promise((resolve) => {
        const timer = setInterval(() => {
            const scrollHeight = document.body.scrollHeight;
            window.scrollBy(0, step);
            totalHeight += step;
            if (totalHeight >= scrollHeight || totalHeight > maxDistance) {
                clearInterval(timer);
                resolve();
            }
        }, interval);
    });
    return totalHeight;
}
"""


@dataclass
class NavigationResponse:
    """导航结果"""
    status: int
    ok: bool


class PageSession:
    """对 Playwright Page 的薄封装，只暴露爬取所需的能力"""

    def __init__(self, page: Page):
        self.page = page

    def set_request_filter(self, predicate: Callable[[Request], bool]) -> None:
        """对页面所有请求生效：predicate 返回 True 的请求被中止"""
        def _route_handler(route: Route):
            try:
                if predicate(route.request):
                    return route.abort()
            except PlaywrightError as e:
                # 出现异常时回退为正常放行，避免影响主流程
                logger.debug(f"[请求过滤] 判断失败，放行请求: {e}")
            return route.continue_()

        self.page.route("**/*", _route_handler)

    def navigate(self, url: str, wait_until: str, timeout: int) -> NavigationResponse:
        response = self.page.goto(url, wait_until=wait_until, timeout=timeout)
        if response is None:
            return NavigationResponse(status=0, ok=False)
        return NavigationResponse(status=response.status, ok=response.ok)

    def current_url(self) -> str:
        return self.page.url

    def query_text(self, selector: str) -> Optional[str]:
        """第一个匹配元素的文本（去除首尾空白），不存在时返回 None"""
        locator = self.page.locator(selector).first
        if locator.count() == 0:
            return None
        text = locator.text_content()
        return text.strip() if text else None

    def query_all_texts(self, selector: str) -> List[str]:
        return self.page.locator(selector).all_text_contents()

    def wait_for_any(self, selectors: Sequence[str], timeout: int) -> bool:
        """
        等待任一关键元素出现

        尽力而为的就绪探测：超时或出错都只返回 False，不抛出异常
        """
        try:
            self.page.wait_for_selector(", ".join(selectors), timeout=timeout)
            return True
        except (PlaywrightTimeoutError, PlaywrightError) as e:
            logger.debug(f"[就绪探测] 未等到关键元素: {e}")
            return False

    def auto_scroll(self, step: int, interval: int, max_distance: int) -> int:
        """
        增量滚动页面，返回滚动的总距离

        尽力而为：脚本执行出错（如页面跳转导致执行上下文被销毁）时返回 0，不抛出异常
        """
        try:
            return self.page.evaluate(
                _AUTO_SCROLL_JS,
                {"step": step, "interval": interval, "maxDistance": max_distance},
            )
        except PlaywrightError as e:
            logger.debug(f"[懒加载滚动] 滚动失败，继续提取: {e}")
            return 0

    def close(self) -> None:
        self.page.close()


class PlaywrightSessionFactory:
    """每次尝试启动独立浏览器，并在退出时关闭"""

    LAUNCH_ARGS = [
        '--disable-gpu',
        '--disable-dev-shm-usage',
        '--disable-setuid-sandbox',
        '--no-sandbox',
        '--disable-features=IsolateOrigins,site-per-process',
    ]

    def __init__(self, settings: Optional[Config] = None):
        self.config = settings or config

    def _context_options(self) -> Dict[str, Any]:
        return {
            'user_agent': self.config.USER_AGENT,
            'viewport': {
                'width': self.config.VIEWPORT_WIDTH,
                'height': self.config.VIEWPORT_HEIGHT,
            },
            'accept_downloads': False,
        }

    @contextmanager
    def open_session(self) -> Iterator[PageSession]:
        """
        打开页面会话

        Yields:
            PageSession 对象；离开 with 块时依次关闭页面、上下文、浏览器并停止 Playwright
        """
        playwright = sync_playwright().start()
        browser: Optional[Browser] = None
        context: Optional[BrowserContext] = None
        session: Optional[PageSession] = None
        try:
            browser_type = getattr(playwright, self.config.BROWSER_TYPE)
            if self.config.USER_DATA_DIR:
                context = browser_type.launch_persistent_context(
                    self.config.USER_DATA_DIR,
                    headless=self.config.HEADLESS,
                    args=self.LAUNCH_ARGS,
                    **self._context_options(),
                )
            else:
                browser = browser_type.launch(
                    headless=self.config.HEADLESS,
                    args=self.LAUNCH_ARGS,
                )
                context = browser.new_context(**self._context_options())
            context.set_default_navigation_timeout(self.config.TIMEOUT)
            session = PageSession(context.new_page())
            logger.debug(f"[会话创建] 浏览器页面已就绪 - 浏览器: {self.config.BROWSER_TYPE}, 无头: {self.config.HEADLESS}")
            yield session
        finally:
            # 确保资源清理
            try:
                for name, resource in (("page", session), ("context", context), ("browser", browser)):
                    if resource is None:
                        continue
                    try:
                        resource.close()
                    except PlaywrightError as e:
                        logger.warning(f"[会话释放] 关闭 {name} 时出错: {e}")
            finally:
                playwright.stop()
