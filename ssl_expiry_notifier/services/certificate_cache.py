"""
证书信息缓存服务
"""
import os
import json
import time
import hashlib
import logging
import tempfile
from typing import Optional, Dict, Any

DEFAULT_TTL = 60 * 60 * 24


def default_cache_dir() -> str:
    """默认缓存目录：CACHE_DIR环境变量或系统临时目录"""
    return os.getenv('CACHE_DIR') or os.path.join(tempfile.gettempdir(), 'ssl_expiry_notifier_cache')


class CertificateCache:
    """以主机名哈希为键的JSON文件缓存"""

    def __init__(self, cache_dir: Optional[str] = None, ttl: int = DEFAULT_TTL):
        """
        初始化缓存

        Args:
            cache_dir: 缓存目录，为None时使用默认目录
            ttl: 缓存有效期（秒），默认1天
        """
        self.cache_dir = cache_dir or default_cache_dir()
        self.ttl = ttl
        self.logger = logging.getLogger(__name__)

    def _path_for(self, hostname: str) -> str:
        key = hashlib.md5(hostname.encode('utf-8')).hexdigest()
        return os.path.join(self.cache_dir, f"{key}.json")

    def get(self, hostname: str, now: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """
        读取缓存的证书数据

        Args:
            hostname: 主机名
            now: 当前时间戳，默认取系统时间

        Returns:
            Optional[Dict[str, Any]]: 未过期的证书数据，不存在或已过期时返回None
        """
        path = self._path_for(hostname)
        if not os.path.exists(path):
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                entry = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"读取缓存文件失败 {path}: {str(e)}")
            return None

        now = time.time() if now is None else now
        fetched_at = entry.get('fetched_at', 0)
        if now - fetched_at > self.ttl:
            self.logger.debug(f"缓存已过期: {hostname}")
            return None

        return entry.get('certificate')

    def set(self, hostname: str, certificate: Dict[str, Any], now: Optional[float] = None):
        """
        写入证书数据

        Args:
            hostname: 主机名
            certificate: 可JSON序列化的证书数据
            now: 写入时间戳，默认取系统时间
        """
        entry = {
            'hostname': hostname,
            'fetched_at': time.time() if now is None else now,
            'certificate': certificate
        }

        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(self._path_for(hostname), 'w', encoding='utf-8') as f:
                json.dump(entry, f)
        except OSError as e:
            # 缓存写入失败不影响检查结果
            self.logger.warning(f"写入缓存失败 {hostname}: {str(e)}")

    def clear(self, hostname: str):
        """删除指定主机的缓存"""
        path = self._path_for(hostname)
        if os.path.exists(path):
            os.remove(path)
