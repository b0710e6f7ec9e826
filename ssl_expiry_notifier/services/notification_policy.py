"""
通知决策服务
"""
from typing import Optional

from ..models import MonitorConfig
from .time_utils import seconds_of_days, is_between, is_weekend


class NotificationPolicy:
    """决定某个过期时间是否需要在当前时刻通知"""

    def __init__(self, config: Optional[MonitorConfig] = None):
        """
        初始化通知策略

        Args:
            config: 通知窗口配置，默认30天前/7天后，不启用周末抑制
        """
        self.config = config or MonitorConfig()

    def notification_window(self, expiration_time: int) -> tuple:
        """
        计算通知窗口

        Args:
            expiration_time: 过期时间戳

        Returns:
            tuple: (窗口开始, 窗口结束)，均为闭区间端点
        """
        return (
            expiration_time - seconds_of_days(self.config.before_days),
            expiration_time + seconds_of_days(self.config.after_days),
        )

    def critical_time(self, expiration_time: int) -> Optional[int]:
        """
        计算进入紧急期的时间点，critical_days未配置或为0时返回None

        Args:
            expiration_time: 过期时间戳

        Returns:
            Optional[int]: 紧急期开始时间戳
        """
        if not self.config.critical_days:
            return None
        return expiration_time - seconds_of_days(self.config.critical_days)

    def should_notify(self, now: int, expiration_time: Optional[int]) -> bool:
        """
        判断是否需要通知

        Args:
            now: 当前时间戳
            expiration_time: 过期时间戳

        Returns:
            bool: 是否需要通知
        """
        # 没有过期时间
        if not expiration_time:
            return False

        # 不在通知窗口内：太早或已过期太久
        min_time, max_time = self.notification_window(expiration_time)
        if not is_between(now, min_time, max_time):
            return False

        # 尚未进入紧急期时，周末不通知
        critical = self.critical_time(expiration_time)
        if critical is not None and is_between(now, min_time, critical) and is_weekend(now):
            return False

        return True
