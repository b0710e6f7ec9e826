"""
通知内容构建服务
"""
from typing import Dict, List

from ..models import DomainExpiration
from .notification_policy import NotificationPolicy
from .time_utils import humanize_duration, format_expiration_date

EXPIRED_LABEL = "SSL EXPIRED"
EXPIRES_IN_PREFIX = "SSL expires in "


class MessageBuilder:
    """按剩余时间对过期域名分组并生成通知文本"""

    def __init__(self, policy: NotificationPolicy):
        self.policy = policy

    @staticmethod
    def group_label(remaining: int) -> str:
        """根据剩余秒数生成分组标题"""
        if remaining > 0:
            return EXPIRES_IN_PREFIX + humanize_duration(remaining)
        return EXPIRED_LABEL

    def build_groups(self, expirations: List[DomainExpiration], now: int) -> Dict[str, List[DomainExpiration]]:
        """
        构建按过期时间分组的列表

        Args:
            expirations: 按过期时间升序排列的域名列表
            now: 当前时间戳

        Returns:
            Dict[str, List[DomainExpiration]]: 分组标题 -> 域名列表，保持首次出现顺序
        """
        groups: Dict[str, List[DomainExpiration]] = {}

        for expiration in expirations:
            if not self.policy.should_notify(now, expiration.expiration_time):
                continue

            label = self.group_label(expiration.expiration_time - now)
            groups.setdefault(label, []).append(expiration)

        return groups

    @staticmethod
    def render(groups: Dict[str, List[DomainExpiration]]) -> str:
        """
        生成通知文本

        Args:
            groups: build_groups 的结果

        Returns:
            str: 通知文本，没有需要通知的域名时为空字符串
        """
        message = ''

        for label, members in groups.items():
            message += f"{label}:\n"
            for expiration in members:
                message += f"{expiration.domain} ({format_expiration_date(expiration.expiration_time)})\n"
            message += "\n"

        return message.strip()

    def build_message(self, expirations: List[DomainExpiration], now: int) -> str:
        """分组并生成通知文本"""
        return self.render(self.build_groups(expirations, now))
