"""Crawl run models"""
import enum
from dataclasses import dataclass

from buybox_scraper.models.product import ProductRecord, Redirected


class ErrorType(str, enum.Enum):
    """Error type enum"""
    NAVIGATION = "navigation"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    EXTRACTION = "extraction"
    OTHER = "other"


@dataclass
class RunStatistics:
    """Counters for one batch run

    success + failure == total; redirected / with_coupons / with_bank_discounts
    only count records that did not fail.
    """
    total: int = 0
    success: int = 0
    failure: int = 0
    redirected: int = 0
    with_coupons: int = 0
    with_bank_discounts: int = 0

    def record(self, product: ProductRecord) -> None:
        """Account for one completed URL"""
        self.total += 1
        if product.is_failed:
            self.failure += 1
            return

        self.success += 1
        if product.redirected == Redirected.YES:
            self.redirected += 1
        if product.has_coupon:
            self.with_coupons += 1
        if product.has_bank_discount:
            self.with_bank_discounts += 1

    @property
    def success_rate(self) -> float:
        """Success percentage (0 when nothing ran)"""
        if not self.total:
            return 0.0
        return self.success / self.total * 100
