"""
配置加载与验证服务
"""
import os
import re
from typing import Dict, List, Any, Optional
import logging

from ..exceptions import ConfigurationError
from ..models import MonitorConfig
from .certificate_cache import default_cache_dir
from .domain_config import DomainConfigManager


class ConfigValidator:
    """从环境变量加载并验证配置"""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        初始化配置验证器

        Args:
            environ: 环境变量字典，默认使用 os.environ
        """
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger(__name__)

        # 必需的环境变量
        self.required_env_vars = {
            'DOMAINS': '域名列表（逗号分隔）'
        }

        # 可选的环境变量
        self.optional_env_vars = {
            'BEFORE_DAYS': '过期前多少天开始通知',
            'AFTER_DAYS': '过期后多少天内仍然通知',
            'CRITICAL_DAYS': '过期前多少天起周末也通知',
            'SNS_TOPIC_ARN': 'SNS主题ARN',
            'CACHE_DIR': '证书缓存目录',
            'CONNECT_TIMEOUT': '连接超时时间（秒）',
            'MAX_WORKERS': '并发查询数',
            'LOG_LEVEL': '日志级别'
        }

    def _get(self, name: str) -> str:
        return (self.environ.get(name) or '').strip()

    def _parse_int(self, name: str, default: Optional[int], minimum: int = 0) -> Optional[int]:
        """
        解析整数环境变量

        Raises:
            ConfigurationError: 不是整数或小于minimum
        """
        value = self._get(name)
        if not value:
            return default

        try:
            number = int(value)
        except ValueError:
            raise ConfigurationError(f"{name} 必须是整数: {value!r}")

        if number < minimum:
            raise ConfigurationError(f"{name} 不能小于 {minimum}: {number}")

        return number

    def load_monitor_config(self) -> MonitorConfig:
        """
        加载通知窗口配置

        Returns:
            MonitorConfig: 通知窗口配置

        Raises:
            ConfigurationError: 天数无效
        """
        defaults = MonitorConfig()
        return MonitorConfig(
            before_days=self._parse_int('BEFORE_DAYS', defaults.before_days),
            after_days=self._parse_int('AFTER_DAYS', defaults.after_days),
            critical_days=self._parse_int('CRITICAL_DAYS', defaults.critical_days)
        )

    def load_runtime_settings(self) -> Dict[str, Any]:
        """
        加载运行时设置

        Returns:
            Dict[str, Any]: cache_dir、connect_timeout、max_workers、sns_topic_arn

        Raises:
            ConfigurationError: 数值无效
        """
        return {
            'cache_dir': self._get('CACHE_DIR') or default_cache_dir(),
            'connect_timeout': self._parse_int('CONNECT_TIMEOUT', 30, minimum=1),
            'max_workers': self._parse_int('MAX_WORKERS', 1, minimum=1),
            'sns_topic_arn': self._get('SNS_TOPIC_ARN') or None
        }

    def load_domains(self) -> List[str]:
        """
        加载域名列表

        Raises:
            ConfigurationError: 没有有效域名
        """
        domains = DomainConfigManager(environ=self.environ).get_domains()
        if not domains:
            raise ConfigurationError("DOMAINS 中没有有效的域名")
        return domains

    def validate_all_configurations(self) -> Dict[str, Any]:
        """
        验证所有配置

        Returns:
            Dict[str, Any]: 验证结果
        """
        result = {
            'is_valid': True,
            'errors': [],
            'warnings': []
        }

        for var_name, description in self.required_env_vars.items():
            if not self._get(var_name):
                result['errors'].append(f"缺少必需的环境变量: {var_name} ({description})")

        if not self._get('SNS_TOPIC_ARN'):
            result['warnings'].append(
                f"缺少可选的环境变量: SNS_TOPIC_ARN ({self.optional_env_vars['SNS_TOPIC_ARN']})，不会发送通知"
            )

        loaders = [self.load_monitor_config, self.load_runtime_settings]
        if self._get('DOMAINS'):
            loaders.insert(0, self.load_domains)

        for loader in loaders:
            try:
                loader()
            except ConfigurationError as e:
                result['errors'].append(str(e))

        topic_arn = self._get('SNS_TOPIC_ARN')
        if topic_arn and not re.match(r'^arn:aws:sns:[a-z0-9-]+:\d{12}:[a-zA-Z0-9_-]+$', topic_arn):
            result['warnings'].append(f"SNS主题ARN格式无效: {topic_arn}")

        try:
            config = self.load_monitor_config()
        except ConfigurationError:
            config = None
        if config and config.critical_days and config.critical_days >= config.before_days:
            result['warnings'].append(
                f"CRITICAL_DAYS ({config.critical_days}) 不小于 BEFORE_DAYS ({config.before_days})，"
                f"周末抑制不会生效"
            )

        result['is_valid'] = not result['errors']
        return result

    def get_configuration_summary(self) -> str:
        """
        获取配置摘要

        Returns:
            str: 配置摘要文本
        """
        validation_result = self.validate_all_configurations()

        lines = [
            "配置验证摘要",
            "=" * 30,
            "✅ 配置验证通过" if validation_result['is_valid'] else "❌ 配置验证失败"
        ]

        if validation_result['errors']:
            lines.append("\n错误:")
            for error in validation_result['errors']:
                lines.append(f"  • {error}")

        if validation_result['warnings']:
            lines.append("\n警告:")
            for warning in validation_result['warnings']:
                lines.append(f"  • {warning}")

        return "\n".join(lines)
