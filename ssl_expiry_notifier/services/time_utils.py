"""
时间与时长工具函数
"""
import time
from datetime import datetime

SECONDS_PER_DAY = 60 * 60 * 24

# 固定英文名称，不受进程locale影响
DAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

# 近似单位：一年按365天，一个月按30天
DURATION_UNITS = (
    ('year', SECONDS_PER_DAY * 365),
    ('month', SECONDS_PER_DAY * 30),
    ('week', SECONDS_PER_DAY * 7),
    ('day', SECONDS_PER_DAY),
    ('hour', 60 * 60),
    ('minute', 60),
    ('second', 1),
)


def seconds_of_days(days: int) -> int:
    """获取X天对应的秒数"""
    return SECONDS_PER_DAY * days


def is_between(value: int, minimum: int, maximum: int) -> bool:
    """判断value是否在闭区间[minimum, maximum]内"""
    return minimum <= value <= maximum


def humanize_duration(seconds: int) -> str:
    """
    将秒数转换为可读的时长，例如 "4 hours"、"2 days"

    Args:
        seconds: 非负秒数

    Returns:
        str: 取能容纳该时长的最大单位，数值向下取整
    """
    for unit, unit_seconds in DURATION_UNITS:
        if seconds >= unit_seconds:
            value = int(seconds // unit_seconds)
            return f"{value} {unit}" if value == 1 else f"{value} {unit}s"

    return "0 seconds"


def is_weekend(timestamp: int) -> bool:
    """按本地时区判断时间戳是否为周六或周日"""
    return time.localtime(timestamp).tm_wday >= 5


def format_expiration_date(timestamp: int) -> str:
    """格式化为 'Sunday October 14, 2018' 形式（本地时区）"""
    date = datetime.fromtimestamp(timestamp)
    return f"{DAY_NAMES[date.weekday()]} {MONTH_NAMES[date.month - 1]} {date.day}, {date.year}"
