"""启动脚本 - 从项目根目录运行批量爬取"""
import os
import sys

if __name__ == "__main__":
    base_dir = os.path.dirname(os.path.abspath(__file__))
    os.chdir(base_dir)

    if base_dir not in sys.path:
        sys.path.insert(0, base_dir)

    from buybox_scraper.main import main

    sys.exit(main())
