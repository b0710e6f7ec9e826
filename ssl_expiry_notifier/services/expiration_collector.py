"""
证书过期时间收集服务
"""
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
import logging

from ..interfaces import CertificateInfoProviderInterface, LoggerServiceInterface
from ..models import CertificateInfo, DomainExpiration


class ExpirationCollector:
    """查询所有域名的证书过期时间，按过期时间升序排列"""

    def __init__(self, provider: CertificateInfoProviderInterface,
                 logger_service: Optional[LoggerServiceInterface] = None,
                 max_workers: int = 1):
        """
        初始化收集器

        Args:
            provider: 证书信息提供者
            logger_service: 日志服务，用于记录获取结果和被排除的域名
            max_workers: 并发查询数，1表示顺序查询
        """
        self.provider = provider
        self.logger_service = logger_service
        self.max_workers = max(1, max_workers)
        self.logger = logging.getLogger(__name__)

    def collect(self, domains: List[str]) -> List[DomainExpiration]:
        """
        收集过期时间

        查询失败或没有过期时间的域名被排除，不会中断整批检查。

        Args:
            domains: 域名列表

        Returns:
            List[DomainExpiration]: 按过期时间升序排列，相同时间保持输入顺序
        """
        if self.max_workers > 1 and len(domains) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map按输入顺序返回结果，与完成顺序无关
                infos = list(executor.map(self._lookup, domains))
        else:
            infos = [self._lookup(domain) for domain in domains]

        expirations = []
        for domain, info in zip(domains, infos):
            expiration = self._to_expiration(domain, info)
            if expiration is not None:
                expirations.append(expiration)

        return sorted(expirations, key=lambda exp: exp.expiration_time)

    def _lookup(self, domain: str) -> CertificateInfo:
        try:
            return self.provider.get_certificate_info(domain)
        except Exception as e:
            if self.logger_service:
                self.logger_service.log_error(domain, e)
            return CertificateInfo(domain=domain, expiry_date=None, error_message=f"{type(e).__name__}: {str(e)}")

    def _to_expiration(self, domain: str, info: CertificateInfo) -> Optional[DomainExpiration]:
        expiration_time = info.valid_to_time

        if not expiration_time:
            if self.logger_service:
                self.logger_service.log_exclusion(domain, info.error_message)
            else:
                self.logger.warning(f"跳过域名 {domain}: {info.error_message or '没有过期时间'}")
            return None

        expiration = DomainExpiration(domain=domain, expiration_time=expiration_time)
        if self.logger_service:
            self.logger_service.log_expiration(expiration)

        return expiration
