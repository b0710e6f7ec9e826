"""
服务接口定义
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from .models import CertificateInfo, DomainExpiration


class DomainConfigManagerInterface(ABC):
    """域名配置管理器接口"""
    
    @abstractmethod
    def get_domains(self) -> List[str]:
        """获取域名列表"""
        pass
    
    @abstractmethod
    def validate_domain(self, domain: str) -> bool:
        """验证域名格式"""
        pass


class CertificateInfoProviderInterface(ABC):
    """证书信息提供者接口"""
    
    @abstractmethod
    def get_certificate_info(self, hostname: str) -> CertificateInfo:
        """获取单个主机的证书信息"""
        pass
    
    def get_expiration(self, hostname: str) -> Optional[int]:
        """获取证书过期时间戳，无法获取时返回None"""
        return self.get_certificate_info(hostname).valid_to_time


class NotificationServiceInterface(ABC):
    """通知服务接口"""
    
    @abstractmethod
    def send_notification(self, message: str, subject: Optional[str] = None) -> bool:
        """发送通知"""
        pass


class LoggerServiceInterface(ABC):
    """日志服务接口"""
    
    @abstractmethod
    def log_check_start(self, domain_count: int):
        """记录检查开始"""
        pass
    
    @abstractmethod
    def log_expiration(self, expiration: DomainExpiration):
        """记录已获取的过期时间"""
        pass
    
    @abstractmethod
    def log_exclusion(self, domain: str, reason: Optional[str]):
        """记录被排除的域名"""
        pass
    
    @abstractmethod
    def log_error(self, domain: str, error: Exception):
        """记录错误信息"""
        pass
