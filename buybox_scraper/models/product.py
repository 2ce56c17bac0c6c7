"""Product record model"""
from __future__ import annotations

import enum
from dataclasses import dataclass, asdict
from typing import Any, Dict, List

SCRAPING_FAILED = "SCRAPING_FAILED"
UNKNOWN_ASIN = "UNKNOWN_ASIN"
ZERO_BANK_DISCOUNT = "₹0"

# 报表列顺序（表头即列名）
REPORT_FIELDS: List[str] = [
    "originalUrl",
    "originalAsin",
    "finalUrl",
    "finalAsin",
    "redirected",
    "title",
    "buyBoxPrice",
    "buyBoxPriceNumeric",
    "rating",
    "reviewCount",
    "couponAmount",
    "couponAmountNumeric",
    "maxBankDiscount",
    "maxBankDiscountNumeric",
    "netEffectivePrice",
    "netEffectivePriceNumeric",
]


class Redirected(str, enum.Enum):
    """Redirect flag enum"""
    YES = "Yes"
    NO = "No"
    UNKNOWN = "Unknown"


@dataclass
class ProductRecord:
    """One scraped product page (or its terminal-failure placeholder)"""
    original_url: str
    original_asin: str
    final_url: str
    final_asin: str
    redirected: Redirected
    title: str
    buy_box_price: str
    buy_box_price_numeric: float
    rating: str
    review_count: str
    coupon_amount: str
    coupon_amount_numeric: float
    max_bank_discount: str
    max_bank_discount_numeric: float
    net_effective_price: str
    net_effective_price_numeric: float

    @classmethod
    def failed(cls, original_url: str, original_asin: str) -> "ProductRecord":
        """Build the sentinel record returned after every attempt has failed"""
        return cls(
            original_url=original_url,
            original_asin=original_asin,
            final_url=SCRAPING_FAILED,
            final_asin=SCRAPING_FAILED,
            redirected=Redirected.UNKNOWN,
            title=SCRAPING_FAILED,
            buy_box_price="",
            buy_box_price_numeric=0,
            rating="",
            review_count="",
            coupon_amount="",
            coupon_amount_numeric=0,
            max_bank_discount=ZERO_BANK_DISCOUNT,
            max_bank_discount_numeric=0,
            net_effective_price="",
            net_effective_price_numeric=0,
        )

    @property
    def is_failed(self) -> bool:
        return self.final_url == SCRAPING_FAILED

    @property
    def has_coupon(self) -> bool:
        return bool(self.coupon_amount)

    @property
    def has_bank_discount(self) -> bool:
        return self.max_bank_discount != ZERO_BANK_DISCOUNT

    def to_row(self) -> Dict[str, Any]:
        """Map the record onto the report columns"""
        values = asdict(self)
        values["redirected"] = self.redirected.value
        return {
            column: values[_to_snake_case(column)]
            for column in REPORT_FIELDS
        }


def _to_snake_case(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)
