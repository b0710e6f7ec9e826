"""
证书查询错误处理服务
"""
import socket
import ssl
from typing import Any, Dict
from datetime import datetime, timezone
import logging


class LookupErrorHandler:
    """证书查询失败时的错误分类与日志"""

    # 网络层的临时故障，下次运行可能恢复
    TRANSIENT_ERRORS = (
        socket.timeout,
        socket.gaierror,
        ConnectionError,
        ssl.SSLError,
    )

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def is_transient(self, error: Exception) -> bool:
        """
        判断错误是否为临时的网络故障

        Args:
            error: 异常对象

        Returns:
            bool: 证书内容问题返回False，网络问题返回True
        """
        if isinstance(error, (ssl.CertificateError, ValueError, KeyError)):
            return False

        if isinstance(error, self.TRANSIENT_ERRORS):
            return True

        error_message = str(error).lower()
        return any(msg in error_message for msg in (
            'timed out',
            'network is unreachable',
            'no route to host',
            'temporary failure'
        ))

    def handle_lookup_error(self, domain: str, error: Exception) -> Dict[str, Any]:
        """
        处理证书查询错误

        Args:
            domain: 域名
            error: 异常对象

        Returns:
            Dict[str, Any]: 错误信息
        """
        error_info = {
            'domain': domain,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'is_transient': self.is_transient(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'suggested_action': self._get_suggested_action(error)
        }

        self.logger.warning(
            f"域名 {domain} 证书查询失败: {error_info['error_type']}: {error_info['error_message']}"
            f"（{error_info['suggested_action']}）"
        )

        return error_info

    def _get_suggested_action(self, error: Exception) -> str:
        error_message = str(error).lower()

        if isinstance(error, socket.timeout):
            return "检查网络连接，考虑增加CONNECT_TIMEOUT"
        elif isinstance(error, socket.gaierror):
            return "检查域名是否正确，DNS服务器是否可用"
        elif isinstance(error, ConnectionRefusedError):
            return "检查目标服务器是否运行，443端口是否开放"
        elif isinstance(error, ssl.SSLError):
            if 'handshake failure' in error_message:
                return "SSL握手失败，检查SSL/TLS版本兼容性"
            return "SSL连接问题，检查服务器SSL配置"
        elif isinstance(error, (ValueError, KeyError)):
            return "证书内容无法解析"
        elif 'network is unreachable' in error_message:
            return "网络不可达，检查网络连接和路由"
        else:
            return "检查网络连接和服务器状态"
