"""字段规范化

将页面上的自由文本转换为数值、货币字符串和评分字符串。
所有函数对缺失或格式错误的输入返回零值/空串，不抛出异常。
"""
import re
from typing import Optional

CURRENCY_MARKER = "₹"

_NUMBER_RE = re.compile(r"(\d+(?:,\d+)*(?:\.\d+)?)")
_CURRENCY_RE = re.compile(r"₹\s*(\d+(?:,\d+)*(?:\.\d+)?)")
_RATING_RE = re.compile(r"(\d\.\d)")
_PERCENT_RE = re.compile(r"\d+%")
_BARE_INTEGER_RE = re.compile(r"\d+")


def to_number(text: Optional[str]) -> float:
    """提取第一个数字（允许千位分隔符），去掉分隔符后解析为浮点数；无匹配返回 0"""
    if not text:
        return 0
    match = _NUMBER_RE.search(text)
    if not match:
        return 0
    return float(match.group(1).replace(",", ""))


def to_currency(text: Optional[str]) -> str:
    """提取带货币符号的金额并规范为 "₹<数字>"；无匹配返回空串"""
    if not text:
        return ""
    match = _CURRENCY_RE.search(text)
    return f"{CURRENCY_MARKER}{match.group(1)}" if match else ""


def to_rating(text: Optional[str]) -> str:
    """提取 d.d 形式的评分；无匹配返回空串"""
    if not text:
        return ""
    match = _RATING_RE.search(text)
    return match.group(1) if match else ""


def to_percent(text: Optional[str]) -> str:
    """提取 "<数字>%" 形式的百分比；无匹配返回空串"""
    if not text:
        return ""
    match = _PERCENT_RE.search(text)
    return match.group(0) if match else ""


def to_bare_integer(text: Optional[str]) -> str:
    if not text:
        return ""
    match = _BARE_INTEGER_RE.search(text)
    return match.group(0) if match else ""


def format_currency(amount: float) -> str:
    """
    按印度数字分组格式化金额，例如 123456.5 -> "₹1,23,456.5"

    最多保留三位小数，去掉末尾的 0
    """
    text = f"{max(amount, 0):.3f}".rstrip("0").rstrip(".")
    integer_part, _, fraction = text.partition(".")

    head, tail = integer_part[:-3], integer_part[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"{CURRENCY_MARKER}{grouped}"


def net_price(price: float, coupon: float, bank_discount: float) -> float:
    """到手价：max(0, 价格 - 优惠券 - 银行优惠)"""
    return max(0, price - coupon - bank_discount)
