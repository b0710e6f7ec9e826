"""
配置加载与验证测试
"""
import pytest

from ssl_expiry_notifier.services.config_validator import ConfigValidator
from ssl_expiry_notifier.exceptions import ConfigurationError
from ssl_expiry_notifier.models import MonitorConfig

TOPIC_ARN = 'arn:aws:sns:us-east-1:123456789012:ssl-alerts'


class TestMonitorConfig:
    """通知窗口配置测试类"""

    def test_defaults(self):
        """测试默认值"""
        config = MonitorConfig()
        assert (config.before_days, config.after_days, config.critical_days) == (30, 7, None)

    @pytest.mark.parametrize("kwargs", [
        {'before_days': -1},
        {'after_days': -7},
        {'critical_days': -2},
        {'before_days': '30'},
        {'after_days': 1.5},
        {'critical_days': True},
    ])
    def test_invalid_values(self, kwargs):
        """测试负数或非整数被拒绝"""
        with pytest.raises(ConfigurationError):
            MonitorConfig(**kwargs)

    def test_configuration_error_is_value_error(self):
        """测试配置错误是ValueError"""
        with pytest.raises(ValueError):
            MonitorConfig(before_days=-1)


class TestConfigValidator:
    """配置验证器测试类"""

    def test_load_monitor_config_defaults(self):
        """测试未设置时使用默认值"""
        config = ConfigValidator({}).load_monitor_config()
        assert config == MonitorConfig()

    def test_load_monitor_config_from_env(self):
        """测试从环境变量读取天数"""
        config = ConfigValidator({
            'BEFORE_DAYS': '14',
            'AFTER_DAYS': '0',
            'CRITICAL_DAYS': ' 3 '
        }).load_monitor_config()

        assert config == MonitorConfig(before_days=14, after_days=0, critical_days=3)

    def test_load_monitor_config_empty_critical_days(self):
        """测试CRITICAL_DAYS为空时不启用周末抑制"""
        config = ConfigValidator({'CRITICAL_DAYS': ''}).load_monitor_config()
        assert config.critical_days is None

    @pytest.mark.parametrize("environ", [
        {'BEFORE_DAYS': '-1'},
        {'AFTER_DAYS': 'seven'},
        {'CRITICAL_DAYS': '-3'},
    ])
    def test_load_monitor_config_invalid(self, environ):
        """测试无效天数被拒绝"""
        with pytest.raises(ConfigurationError):
            ConfigValidator(environ).load_monitor_config()

    def test_load_runtime_settings(self):
        """测试运行时设置"""
        settings = ConfigValidator({
            'CACHE_DIR': '/tmp/certs',
            'CONNECT_TIMEOUT': '10',
            'MAX_WORKERS': '4',
            'SNS_TOPIC_ARN': TOPIC_ARN
        }).load_runtime_settings()

        assert settings == {
            'cache_dir': '/tmp/certs',
            'connect_timeout': 10,
            'max_workers': 4,
            'sns_topic_arn': TOPIC_ARN
        }

    def test_load_runtime_settings_defaults(self):
        """测试运行时设置默认值"""
        settings = ConfigValidator({}).load_runtime_settings()

        assert settings['connect_timeout'] == 30
        assert settings['max_workers'] == 1
        assert settings['sns_topic_arn'] is None
        assert settings['cache_dir']

    def test_load_runtime_settings_invalid(self):
        """测试并发数小于1被拒绝"""
        with pytest.raises(ConfigurationError):
            ConfigValidator({'MAX_WORKERS': '0'}).load_runtime_settings()

    def test_load_domains(self):
        """测试加载域名列表"""
        assert ConfigValidator({'DOMAINS': 'b.com,a.com'}).load_domains() == ['b.com', 'a.com']
        assert ConfigValidator({'DOMAINS': '10.0.0.5,intranet'}).load_domains() == ['10.0.0.5', 'intranet']

    def test_load_domains_missing(self):
        """测试没有有效域名"""
        with pytest.raises(ConfigurationError):
            ConfigValidator({'DOMAINS': 'not a domain'}).load_domains()

    def test_validate_all_configurations_valid(self):
        """测试有效配置"""
        result = ConfigValidator({
            'DOMAINS': 'example.com',
            'SNS_TOPIC_ARN': TOPIC_ARN,
            'CRITICAL_DAYS': '7'
        }).validate_all_configurations()

        assert result['is_valid'] is True
        assert result['errors'] == []
        assert result['warnings'] == []

    def test_validate_all_configurations_missing_domains(self):
        """测试缺少DOMAINS"""
        result = ConfigValidator({'SNS_TOPIC_ARN': TOPIC_ARN}).validate_all_configurations()

        assert result['is_valid'] is False
        assert len(result['errors']) == 1
        assert "DOMAINS" in result['errors'][0]

    def test_validate_all_configurations_warnings(self):
        """测试缺少SNS主题及critical_days不小于before_days时给出警告"""
        result = ConfigValidator({
            'DOMAINS': 'example.com',
            'BEFORE_DAYS': '10',
            'CRITICAL_DAYS': '10'
        }).validate_all_configurations()

        assert result['is_valid'] is True
        assert any("SNS_TOPIC_ARN" in w for w in result['warnings'])
        assert any("CRITICAL_DAYS" in w and "周末抑制不会生效" in w for w in result['warnings'])

    def test_validate_all_configurations_invalid_days(self):
        """测试无效天数"""
        result = ConfigValidator({
            'DOMAINS': 'example.com',
            'SNS_TOPIC_ARN': TOPIC_ARN,
            'AFTER_DAYS': '-1'
        }).validate_all_configurations()

        assert result['is_valid'] is False
        assert any("AFTER_DAYS" in e for e in result['errors'])

    def test_validate_invalid_arn(self):
        """测试SNS主题ARN格式无效"""
        result = ConfigValidator({
            'DOMAINS': 'example.com',
            'SNS_TOPIC_ARN': 'not-an-arn'
        }).validate_all_configurations()

        assert any("ARN格式无效" in w for w in result['warnings'])

    def test_get_configuration_summary(self):
        """测试配置摘要"""
        summary = ConfigValidator({}).get_configuration_summary()

        assert "❌ 配置验证失败" in summary
        assert "DOMAINS" in summary
