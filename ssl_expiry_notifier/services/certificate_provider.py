"""
SSL证书信息获取服务
"""
import ssl
import socket
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from urllib.parse import urlsplit
import logging

from cryptography import x509
from cryptography.x509.oid import NameOID

from ..interfaces import CertificateInfoProviderInterface
from ..models import CertificateInfo
from .certificate_cache import CertificateCache
from .error_handler import LookupErrorHandler


def get_host_from_url(url: str) -> str:
    """
    从URL或域名中提取主机名

    Args:
        url: 例如 "https://example.com/path"、"example.com:8443" 或 "example.com"

    Returns:
        str: 小写的主机名
    """
    url = url.strip()
    # 没有协议前缀时urlsplit无法识别主机部分
    if '://' not in url:
        url = f"http://{url}"

    return urlsplit(url).hostname or ''


class SSLCertificateProvider(CertificateInfoProviderInterface):
    """通过TLS握手获取证书信息，并按主机名缓存"""

    def __init__(self, timeout: int = 30, port: int = 443,
                 cache: Optional[CertificateCache] = None,
                 error_handler: Optional[LookupErrorHandler] = None):
        """
        初始化证书信息提供者

        Args:
            timeout: 连接超时时间（秒）
            port: SSL端口，默认443
            cache: 证书缓存，为None时使用默认目录的1天缓存
            error_handler: 查询失败时的错误处理器
        """
        self.timeout = timeout
        self.port = port
        self.cache = cache if cache is not None else CertificateCache()
        self.error_handler = error_handler or LookupErrorHandler()
        self.logger = logging.getLogger(__name__)

    def get_certificate_info(self, hostname: str) -> CertificateInfo:
        """
        获取单个主机的证书信息，查询失败时返回带error_message的记录

        Args:
            hostname: 主机名或URL

        Returns:
            CertificateInfo: 证书信息
        """
        host = get_host_from_url(hostname)
        if not host:
            return CertificateInfo(domain=hostname, expiry_date=None, error_message="无法解析主机名")

        try:
            data = self.cache.get(host)
            if data is None:
                der = self._fetch_certificate(host)
                data = self._parse_certificate(der)
                self.cache.set(host, data)
            else:
                self.logger.debug(f"使用缓存的证书信息: {host}")

            return CertificateInfo(
                domain=host,
                expiry_date=datetime.fromtimestamp(data['valid_to_time_t'], tz=timezone.utc),
                issuer=data.get('issuer', 'Unknown Issuer'),
                subject=data.get('subject', '')
            )

        except (OSError, ValueError, KeyError) as e:
            error_info = self.error_handler.handle_lookup_error(host, e)

            return CertificateInfo(
                domain=host,
                expiry_date=None,
                error_message=f"{error_info['error_type']}: {error_info['error_message']}"
            )

    def _fetch_certificate(self, host: str) -> bytes:
        """
        获取对端证书（DER格式）

        不校验证书链，已过期或自签名的证书也能读取到过期时间。

        Args:
            host: 主机名

        Returns:
            bytes: DER编码的证书

        Raises:
            OSError: 连接失败
            ValueError: 服务器未返回证书
        """
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        with socket.create_connection((host, self.port), timeout=self.timeout) as sock:
            with context.wrap_socket(sock, server_hostname=host) as ssock:
                der = ssock.getpeercert(binary_form=True)

        if not der:
            raise ValueError(f"无法获取域名 {host} 的SSL证书")

        return der

    def _parse_certificate(self, der: bytes) -> Dict[str, Any]:
        """
        解析证书中需要的字段

        Args:
            der: DER编码的证书

        Returns:
            Dict[str, Any]: 可缓存的证书字段
        """
        cert = x509.load_der_x509_certificate(der)
        not_after = cert.not_valid_after_utc

        return {
            'valid_to_time_t': int(not_after.timestamp()),
            'valid_from_time_t': int(cert.not_valid_before_utc.timestamp()),
            'issuer': self._name_attribute(cert.issuer, 'Unknown Issuer'),
            'subject': self._name_attribute(cert.subject, '', (NameOID.COMMON_NAME,)),
            'serial_number': format(cert.serial_number, 'x')
        }

    @staticmethod
    def _name_attribute(name: x509.Name, default: str,
                        oids: tuple = (NameOID.ORGANIZATION_NAME, NameOID.COMMON_NAME)) -> str:
        """按oids顺序取第一个存在的属性，默认优先组织名称，其次通用名称"""
        for oid in oids:
            attributes = name.get_attributes_for_oid(oid)
            if attributes:
                return str(attributes[0].value)
        return default
