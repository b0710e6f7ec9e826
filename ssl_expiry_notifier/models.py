"""
数据模型定义
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from .exceptions import ConfigurationError


@dataclass
class CertificateInfo:
    """SSL证书信息"""
    domain: str
    expiry_date: Optional[datetime]
    issuer: str = "Unknown"
    subject: str = ""
    error_message: Optional[str] = None
    
    @property
    def is_valid(self) -> bool:
        """是否成功获取到证书"""
        return self.error_message is None and self.expiry_date is not None
    
    @property
    def valid_to_time(self) -> Optional[int]:
        """证书有效期截止时间（Unix时间戳）"""
        if not self.is_valid:
            return None
        return int(self.expiry_date.timestamp())


@dataclass(frozen=True)
class DomainExpiration:
    """域名及其证书过期时间"""
    domain: str
    expiration_time: int


@dataclass(frozen=True)
class MonitorConfig:
    """通知窗口配置"""
    before_days: int = 30
    after_days: int = 7
    critical_days: Optional[int] = None
    
    def __post_init__(self):
        for name in ('before_days', 'after_days', 'critical_days'):
            value = getattr(self, name)
            if value is None and name == 'critical_days':
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} 必须是整数: {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} 不能为负数: {value}")


@dataclass
class RunResult:
    """单次运行结果统计"""
    total_domains: int
    collected_domains: int
    notified_domains: List[str]
    message: str
    notification_sent: bool
    errors: List[str] = field(default_factory=list)
    execution_time: float = 0.0
