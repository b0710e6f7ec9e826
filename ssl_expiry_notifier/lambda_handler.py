"""
AWS Lambda函数入口点
"""
import os
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from .exceptions import ConfigurationError
from .models import RunResult
from .monitor import SslMonitor
from .services.certificate_cache import CertificateCache
from .services.certificate_provider import SSLCertificateProvider
from .services.config_validator import ConfigValidator
from .services.logger import LoggerService
from .services.sns_notification import SNSNotificationService


class SSLExpiryNotifier:
    """加载配置、运行监控并通过SNS发送通知"""

    def __init__(self, environ: Optional[Dict[str, str]] = None,
                 notification_service: Optional[SNSNotificationService] = None,
                 provider: Optional[SSLCertificateProvider] = None):
        """
        初始化通知器

        Args:
            environ: 环境变量字典，默认使用 os.environ
            notification_service: 通知服务，默认根据SNS_TOPIC_ARN创建
            provider: 证书信息提供者，默认根据CACHE_DIR和CONNECT_TIMEOUT创建

        Raises:
            ConfigurationError: 配置无效
        """
        self.logger_service = LoggerService()
        self.validator = ConfigValidator(environ)

        self.domains = self.validator.load_domains()
        self.config = self.validator.load_monitor_config()
        self.settings = self.validator.load_runtime_settings()

        self.provider = provider or SSLCertificateProvider(
            timeout=self.settings['connect_timeout'],
            cache=CertificateCache(self.settings['cache_dir'])
        )
        self.notification_service = notification_service or SNSNotificationService(
            topic_arn=self.settings['sns_topic_arn']
        )

        self._log_configuration()

    def _log_configuration(self):
        """记录系统配置信息"""
        self.logger_service.log_configuration_info({
            'domains': ', '.join(self.domains),
            'before_days': self.config.before_days,
            'after_days': self.config.after_days,
            'critical_days': self.config.critical_days,
            'sns_topic_arn': self.settings['sns_topic_arn'] or '',
            'cache_dir': self.settings['cache_dir'],
            'connect_timeout': self.settings['connect_timeout'],
            'max_workers': self.settings['max_workers'],
            'lambda_function_name': os.getenv('AWS_LAMBDA_FUNCTION_NAME', 'unknown')
        })

    def execute(self, now: Optional[int] = None) -> RunResult:
        """
        执行一次检查

        Args:
            now: 当前时间戳，默认取系统时间

        Returns:
            RunResult: 检查结果
        """
        start_time = datetime.now(timezone.utc)
        self.logger_service.reset_stats()
        self.logger_service.log_check_start(len(self.domains))

        monitor = SslMonitor(
            self.domains,
            self.provider,
            config=self.config,
            now=now,
            logger_service=self.logger_service,
            max_workers=self.settings['max_workers']
        )

        groups = monitor.build_groups()
        message = monitor.builder.render(groups)
        notified = [exp.domain for members in groups.values() for exp in members]

        self.logger_service.log_notification_decision(len(notified), len(groups))
        self.logger_service.log_check_end()

        notification_sent = False
        if message:
            notification_sent = self.notification_service.send_notification(message)
            self.logger_service.log_notification_sent("SNS", len(notified), notification_sent)

        self.logger_service.log_execution_summary()

        summary = self.logger_service.get_execution_summary()
        return RunResult(
            total_domains=len(self.domains),
            collected_domains=len(monitor.collect()),
            notified_domains=notified,
            message=message,
            notification_sent=notification_sent,
            errors=[f"{error['domain']}: {error['error_message']}" for error in summary['errors']],
            execution_time=(datetime.now(timezone.utc) - start_time).total_seconds()
        )

    def validate_system_health(self) -> dict:
        """
        验证系统健康状态

        Returns:
            dict: 系统健康状态信息
        """
        health_status = {
            'overall_healthy': True,
            'components': {},
            'issues': []
        }

        config_validation = self.validator.validate_all_configurations()
        health_status['components']['configuration'] = {
            'healthy': config_validation['is_valid'],
            'details': config_validation
        }
        if not config_validation['is_valid']:
            health_status['issues'].extend(config_validation['errors'])
            health_status['overall_healthy'] = False

        sns_config = self.notification_service.get_configuration_status()
        health_status['components']['sns_notification'] = {
            'healthy': sns_config['configuration_valid'],
            'details': sns_config
        }

        if not sns_config['configuration_valid']:
            health_status['issues'].append("SNS通知配置无效")
            health_status['overall_healthy'] = False
        elif not self.notification_service.test_connection():
            health_status['issues'].append("SNS连接测试失败")
            health_status['overall_healthy'] = False

        return health_status


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda函数入口点

    Args:
        event: EventBridge触发事件，{"health_check": true} 时只做健康检查
        context: Lambda运行时上下文

    Returns:
        dict: 执行结果
    """
    event = event or {}

    try:
        notifier = SSLExpiryNotifier()

        if event.get('health_check'):
            health = notifier.validate_system_health()
            return {
                'statusCode': 200 if health['overall_healthy'] else 503,
                'body': health
            }

        result = notifier.execute()

        return {
            'statusCode': 200,
            'body': {
                'message': 'SSL expiry notifier executed successfully',
                'summary': {
                    'total_domains': result.total_domains,
                    'collected_domains': result.collected_domains,
                    'notified_domains': len(result.notified_domains),
                    'notification_sent': result.notification_sent,
                    'execution_time_seconds': result.execution_time
                },
                'notified_domains': result.notified_domains,
                'notification': result.message,
                'errors': result.errors[:5],  # 只返回前5个错误
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
        }

    except ConfigurationError as e:
        LoggerService().logger.error(f"配置无效: {str(e)}")
        return {
            'statusCode': 400,
            'body': {
                'message': 'SSL expiry notifier configuration is invalid',
                'error': str(e),
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
        }

    except Exception as e:
        LoggerService().logger.exception(f"Lambda函数执行时发生严重错误: {str(e)}")
        return {
            'statusCode': 500,
            'body': {
                'message': 'SSL expiry notifier encountered a critical error',
                'error': str(e),
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
        }
