"""Command-line entry point"""
import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from buybox_scraper.config import Config, config
from buybox_scraper.services.batch_manager import BatchManager, log_summary
from buybox_scraper.services.report_writer import CsvReportWriter, build_report_path
from buybox_scraper.utils.url_loader import load_urls

logger = logging.getLogger(__name__)


# 配置日志系统 - 同时输出到文件和控制台
def setup_logging(log_dir: str, level: str = "INFO"):
    """配置日志系统，同时输出到文件和控制台"""
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'scraper.log')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # 文件处理器 - 每个文件最大10MB，保留5个备份
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger('playwright').setLevel(logging.WARNING)

    logging.info(f"日志系统初始化完成 - 日志文件: {log_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="批量爬取 Amazon 产品页的买家盒价格、优惠券与银行优惠，输出 CSV 报表",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例：
  buybox-scraper --urls-file amazon_urls.txt
  buybox-scraper -u urls.txt -o reports --max-retries 3 --headful
        """
    )
    parser.add_argument(
        '-u', '--urls-file',
        type=str,
        default=None,
        help=f'URL 列表文件，每行一个（默认: {config.URLS_FILE}，不存在时使用内置列表）'
    )
    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        default=None,
        help=f'报表输出目录（默认: {config.OUTPUT_DIR}）'
    )
    parser.add_argument(
        '--max-retries',
        type=int,
        default=None,
        help=f'每个URL的最大重试次数（默认: {config.MAX_RETRIES}）'
    )
    parser.add_argument(
        '--timeout',
        type=int,
        default=None,
        help=f'单次导航超时，毫秒（默认: {config.TIMEOUT}）'
    )
    parser.add_argument(
        '--headful',
        action='store_true',
        help='显示浏览器窗口'
    )
    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Config] = None) -> Config:
    """命令行参数覆盖环境变量配置（仅对本次运行生效）"""
    base = base or config
    if args.max_retries is not None and args.max_retries < 0:
        raise ValueError("--max-retries must be >= 0")
    return base.with_overrides(
        URLS_FILE=args.urls_file,
        OUTPUT_DIR=args.output_dir,
        MAX_RETRIES=args.max_retries,
        TIMEOUT=args.timeout,
        HEADLESS=False if args.headful else None,
    )


def run(settings: Config) -> int:
    urls = load_urls(settings.URLS_FILE)
    if not urls:
        logger.error("No URLs found to scrape")
        return 1

    report_path = build_report_path(settings.OUTPUT_DIR)
    logger.info(f"Starting to scrape {len(urls)} URLs...")

    with CsvReportWriter(report_path) as writer:
        stats = BatchManager(settings=settings).run_batch(urls, writer)

    log_summary(stats, report_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"错误：{e}", file=sys.stderr)
        return 2
    setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
