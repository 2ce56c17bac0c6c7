"""CSV 报表写入

表头在打开时写入一次，之后每完成一条记录追加一行并立即刷新到磁盘
"""
import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from buybox_scraper.models.product import ProductRecord, REPORT_FIELDS

logger = logging.getLogger(__name__)


def build_report_path(output_dir: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """output/amazon_products_<时间戳>.csv，时间戳中的 ':' 和 '.' 替换为 '-'"""
    now = now or datetime.now(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    timestamp = timestamp.replace(":", "-").replace(".", "-")
    return Path(output_dir) / f"amazon_products_{timestamp}.csv"


def _format_cell(value: Any) -> Any:
    # 整数值的浮点数不输出 ".0"
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class CsvReportWriter:
    """追加写入的 CSV 报表"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # UTF-8 BOM 便于 Excel 正确显示 ₹
        self._file = open(self.path, "w", newline="", encoding="utf-8-sig")
        self._writer = csv.DictWriter(self._file, fieldnames=REPORT_FIELDS)
        self._writer.writeheader()
        self._file.flush()
        self.rows_written = 0
        logger.debug(f"[报表] 已创建报表文件: {self.path}")

    def write(self, record: ProductRecord) -> None:
        row = {column: _format_cell(value) for column, value in record.to_row().items()}
        self._writer.writerow(row)
        self._file.flush()
        self.rows_written += 1

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> "CsvReportWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
