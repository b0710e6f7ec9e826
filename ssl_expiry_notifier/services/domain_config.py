"""
域名配置管理服务
"""
import os
from typing import Dict, List, Optional
import logging

from ..interfaces import DomainConfigManagerInterface
from .certificate_provider import get_host_from_url


class DomainConfigManager(DomainConfigManagerInterface):
    """域名配置管理器实现"""

    def __init__(self, env_var_name: str = "DOMAINS", environ: Optional[Dict[str, str]] = None):
        """
        初始化域名配置管理器

        Args:
            env_var_name: 环境变量名称，默认为"DOMAINS"
            environ: 环境变量字典，默认使用 os.environ
        """
        self.env_var_name = env_var_name
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger(__name__)

    def get_domains(self) -> List[str]:
        """
        从环境变量获取域名列表（逗号分隔），保持配置顺序

        Returns:
            List[str]: 域名列表
        """
        return self.parse_domains(self.environ.get(self.env_var_name) or "")

    def parse_domains(self, domains_str: str) -> List[str]:
        """
        解析逗号分隔的域名列表

        Args:
            domains_str: 逗号分隔的域名、IP地址或URL

        Returns:
            List[str]: 提取出的主机名，重复项原样保留
        """
        if not domains_str.strip():
            self.logger.warning(f"环境变量 {self.env_var_name} 为空")
            return []

        domains = []
        for raw in domains_str.split(','):
            raw = raw.strip()
            if not raw:
                continue

            domain = get_host_from_url(raw)
            if self.validate_domain(domain):
                domains.append(domain)
            else:
                self.logger.warning(f"跳过无法解析主机名的条目: {raw}")

        self.logger.info(f"成功加载 {len(domains)} 个域名")
        return domains

    def validate_domain(self, domain: str) -> bool:
        """主机名非空且不含空白即可，IP地址和单标签主机名同样有效"""
        if not domain or not isinstance(domain, str):
            return False

        return not any(char.isspace() for char in domain)
