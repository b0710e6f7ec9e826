"""
SNS通知服务
"""
import os
import time
from typing import Optional
import logging

import boto3
from botocore.exceptions import ClientError, BotoCoreError

from ..interfaces import NotificationServiceInterface
from .message_builder import EXPIRED_LABEL

DEFAULT_SUBJECT = "SSL certificate expiration notice"
EXPIRED_SUBJECT = "SSL certificate EXPIRED"
# SNS主题最长100个字符
MAX_SUBJECT_LENGTH = 100


class SNSNotificationService(NotificationServiceInterface):
    """SNS通知服务实现"""

    def __init__(self, topic_arn: Optional[str] = None, region_name: Optional[str] = None,
                 max_retries: int = 3):
        """
        初始化SNS通知服务

        Args:
            topic_arn: SNS主题ARN，如果为None则从环境变量读取
            region_name: AWS区域名称，如果为None则从ARN或环境变量推断
            max_retries: 可重试错误的最大重试次数
        """
        self.topic_arn = topic_arn or os.getenv('SNS_TOPIC_ARN')
        self.max_retries = max_retries

        if region_name:
            self.region_name = region_name
        elif self.topic_arn and self.topic_arn.startswith('arn:aws:sns:'):
            # 从SNS ARN中提取区域
            self.region_name = self.topic_arn.split(':')[3]
        else:
            self.region_name = os.getenv('AWS_REGION', 'us-east-1')

        self.logger = logging.getLogger(__name__)

        self.sns_client = None
        try:
            self.sns_client = boto3.client('sns', region_name=self.region_name)
            self.logger.debug(f"SNS客户端初始化成功，区域: {self.region_name}")
        except BotoCoreError as e:
            self.logger.error(f"初始化SNS客户端失败: {str(e)}")

    def send_notification(self, message: str, subject: Optional[str] = None) -> bool:
        """
        发送通知

        Args:
            message: 通知文本
            subject: 邮件主题，为None时根据内容生成

        Returns:
            bool: 发送是否成功，消息为空时不发送并返回True
        """
        if not message:
            self.logger.info("没有需要通知的证书，跳过通知发送")
            return True

        if not self._validate_configuration():
            return False

        subject = subject or self.format_subject(message)
        return self._publish_with_retry(subject[:MAX_SUBJECT_LENGTH], message)

    @staticmethod
    def format_subject(message: str) -> str:
        """
        根据通知内容生成主题

        Args:
            message: 通知文本

        Returns:
            str: 含已过期分组时使用更醒目的主题
        """
        if f"{EXPIRED_LABEL}:" in message.splitlines():
            return EXPIRED_SUBJECT
        return DEFAULT_SUBJECT

    def _publish_with_retry(self, subject: str, message: str) -> bool:
        """
        带重试机制的SNS消息发布

        Args:
            subject: 消息主题
            message: 消息内容

        Returns:
            bool: 发送是否成功
        """
        for attempt in range(self.max_retries + 1):
            try:
                response = self.sns_client.publish(
                    TopicArn=self.topic_arn,
                    Subject=subject,
                    Message=message
                )

                self.logger.info(f"SNS通知发送成功，MessageId: {response.get('MessageId')}")
                return True

            except ClientError as e:
                error_code = e.response['Error']['Code']
                error_message = e.response['Error']['Message']

                if self._is_retryable_error(error_code) and attempt < self.max_retries:
                    wait_time = 2 ** attempt  # 指数退避
                    self.logger.warning(
                        f"SNS发送失败 (尝试 {attempt + 1}/{self.max_retries + 1}) - {error_code}: {error_message}，"
                        f"{wait_time}秒后重试"
                    )
                    time.sleep(wait_time)
                    continue

                self.logger.error(f"SNS发送失败 - {error_code}: {error_message}")
                return False

            except BotoCoreError as e:
                self.logger.error(f"发送SNS通知时发生错误: {str(e)}")
                return False

        return False

    def _is_retryable_error(self, error_code: str) -> bool:
        """
        判断错误是否可重试

        Args:
            error_code: AWS错误代码

        Returns:
            bool: 是否可重试
        """
        retryable_errors = {
            'Throttling',
            'ServiceUnavailable',
            'InternalError',
            'RequestTimeout'
        }
        return error_code in retryable_errors

    def _validate_configuration(self) -> bool:
        """
        验证配置是否正确

        Returns:
            bool: 配置是否有效
        """
        if not self.sns_client:
            self.logger.error("SNS客户端未初始化")
            return False

        if not self.topic_arn:
            self.logger.error("SNS主题ARN未配置")
            return False

        return True

    def test_connection(self) -> bool:
        """
        测试SNS连接

        Returns:
            bool: 连接是否成功
        """
        if not self._validate_configuration():
            return False

        try:
            self.sns_client.get_topic_attributes(TopicArn=self.topic_arn)
            self.logger.info("SNS连接测试成功")
            return True

        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            self.logger.error(f"SNS连接测试失败 - {error_code}: {error_message}")
            return False

        except BotoCoreError as e:
            self.logger.error(f"SNS连接测试时发生错误: {str(e)}")
            return False

    def get_configuration_status(self) -> dict:
        """
        获取配置状态

        Returns:
            dict: 配置状态信息
        """
        return {
            'sns_client_initialized': self.sns_client is not None,
            'topic_arn_configured': bool(self.topic_arn),
            'topic_arn': self.topic_arn,
            'region_name': self.region_name,
            'configuration_valid': self._validate_configuration()
        }
