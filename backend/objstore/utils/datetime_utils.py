"""
日期时间工具模块
统一解析COS返回的各种时间格式
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Optional

# 零值时间，表示"未知"，调用方应通过 is_zero_time 判断而不是当作纪元时间
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

RFC3339_LAYOUT = "%Y-%m-%dT%H:%M:%S%z"
RFC3339_NANO_LAYOUT = "%Y-%m-%dT%H:%M:%S.%f%z"
MILLIS_LAYOUT = "%Y-%m-%dT%H:%M:%S.%fZ"

# 秒的小数部分超过微秒精度时截断到6位
_FRACTION_PATTERN = re.compile(r"\.(\d{6})\d+")


def is_zero_time(dt: Optional[datetime]) -> bool:
    """判断时间是否为零值（未知）"""
    return dt is None or dt == ZERO_TIME


def _try_parse(value: str, layout: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, layout)
    except ValueError:
        return None


def parse_http_time(value: Optional[str]) -> datetime:
    """
    解析HTTP日期格式的时间字符串（如Last-Modified响应头）

    Args:
        value: 时间字符串，例如 "Wed, 02 Oct 2002 08:00:00 GMT"

    Returns:
        datetime: UTC时间，解析失败时返回 ZERO_TIME
    """
    if not value:
        return ZERO_TIME

    # 支持 RFC 1123、RFC 850 和 ANSI C 三种格式，解析与locale无关
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return ZERO_TIME

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_cos_time(value: Optional[str]) -> datetime:
    """
    解析COS返回的时间字符串，不会抛出异常

    依次尝试 RFC3339、带小数秒的RFC3339、毫秒精度的UTC格式，
    最后尝试HTTP日期格式，第一个解析成功的结果生效。

    Args:
        value: 时间字符串

    Returns:
        datetime: 带时区的时间，均无法解析时返回 ZERO_TIME
    """
    if not value:
        return ZERO_TIME

    value = value.strip()
    truncated = _FRACTION_PATTERN.sub(r".\1", value)

    for layout in (RFC3339_LAYOUT, RFC3339_NANO_LAYOUT):
        parsed = _try_parse(truncated, layout)
        if parsed is not None:
            return parsed

    parsed = _try_parse(truncated, MILLIS_LAYOUT)
    if parsed is not None:
        return parsed.replace(tzinfo=timezone.utc)

    return parse_http_time(value)


def format_http_time(dt: datetime) -> str:
    """
    将时间格式化为HTTP日期格式（GMT）

    Args:
        dt: 时间对象，无时区信息时按UTC处理

    Returns:
        str: 例如 "Wed, 02 Oct 2002 08:00:00 GMT"
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)
