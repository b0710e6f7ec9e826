"""
SSL证书过期监控：收集过期时间并生成分组通知
"""
import time
from typing import Dict, List, Optional

from .interfaces import CertificateInfoProviderInterface, LoggerServiceInterface
from .models import DomainExpiration, MonitorConfig
from .services.expiration_collector import ExpirationCollector
from .services.message_builder import MessageBuilder
from .services.notification_policy import NotificationPolicy


class SslMonitor:
    """检查一组域名的SSL证书过期时间并生成通知文本"""

    def __init__(self, domains: List[str], provider: CertificateInfoProviderInterface,
                 config: Optional[MonitorConfig] = None, now: Optional[int] = None,
                 logger_service: Optional[LoggerServiceInterface] = None,
                 max_workers: int = 1):
        """
        初始化监控器

        Args:
            domains: 要检查的域名列表
            provider: 证书信息提供者
            config: 通知窗口配置
            now: 当前时间戳，默认取构造时的系统时间，整个生命周期内不变
            logger_service: 日志服务
            max_workers: 并发查询数
        """
        self.domains = list(domains)
        self.config = config or MonitorConfig()
        self.now = int(time.time()) if now is None else int(now)

        self.collector = ExpirationCollector(provider, logger_service=logger_service, max_workers=max_workers)
        self.policy = NotificationPolicy(self.config)
        self.builder = MessageBuilder(self.policy)

        self._expirations: Optional[List[DomainExpiration]] = None

    def collect(self) -> List[DomainExpiration]:
        """查询所有域名的过期时间，只在第一次调用时发起查询"""
        if self._expirations is None:
            self._expirations = self.collector.collect(self.domains)
        return self._expirations

    def should_notify(self, expiration_time: Optional[int]) -> bool:
        """当前时刻是否需要通知该过期时间"""
        return self.policy.should_notify(self.now, expiration_time)

    def build_groups(self) -> Dict[str, List[DomainExpiration]]:
        """按剩余时间分组的待通知域名"""
        return self.builder.build_groups(self.collect(), self.now)

    def build_message(self) -> str:
        """生成通知文本，没有需要通知的域名时返回空字符串"""
        return self.builder.render(self.build_groups())
