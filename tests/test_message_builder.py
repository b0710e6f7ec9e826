"""
通知内容构建测试
"""
from datetime import datetime

from ssl_expiry_notifier.services.message_builder import MessageBuilder, EXPIRED_LABEL
from ssl_expiry_notifier.services.notification_policy import NotificationPolicy
from ssl_expiry_notifier.models import DomainExpiration, MonitorConfig

DAY = 86400


def local_ts(*args) -> int:
    """本地时区的时间戳"""
    return int(datetime(*args).timestamp())


class TestMessageBuilder:
    """通知内容构建测试类"""

    def setup_method(self):
        """测试前准备"""
        self.now = local_ts(2018, 10, 15, 12)  # 周一
        self.builder = MessageBuilder(NotificationPolicy(MonitorConfig()))

    def test_group_label(self):
        """测试分组标题"""
        assert MessageBuilder.group_label(5 * 3600) == "SSL expires in 5 hours"
        assert MessageBuilder.group_label(1) == "SSL expires in 1 second"
        assert MessageBuilder.group_label(0) == EXPIRED_LABEL
        assert MessageBuilder.group_label(-DAY) == "SSL EXPIRED"

    def test_build_groups_empty(self):
        """测试没有域名时没有分组"""
        assert self.builder.build_groups([], self.now) == {}
        assert self.builder.build_message([], self.now) == ""

    def test_build_groups_preserves_order(self):
        """测试分组按首次出现顺序排列，组内按过期时间排列"""
        expirations = [
            DomainExpiration("old.com", self.now - 2 * DAY),
            DomainExpiration("older-but-later.com", self.now - DAY),
            DomainExpiration("a.com", self.now + 3 * DAY),
            DomainExpiration("b.com", self.now + 3 * DAY + 60),
            DomainExpiration("c.com", self.now + 10 * DAY),
        ]

        groups = self.builder.build_groups(expirations, self.now)

        assert list(groups.keys()) == [
            "SSL EXPIRED",
            "SSL expires in 3 days",
            "SSL expires in 1 week"
        ]
        assert [e.domain for e in groups["SSL EXPIRED"]] == ["old.com", "older-but-later.com"]
        assert [e.domain for e in groups["SSL expires in 3 days"]] == ["a.com", "b.com"]
        assert [e.domain for e in groups["SSL expires in 1 week"]] == ["c.com"]

    def test_build_groups_skips_outside_window(self):
        """测试窗口外的域名被跳过"""
        expirations = [
            DomainExpiration("long-expired.com", self.now - 8 * DAY),
            DomainExpiration("soon.com", self.now + DAY),
            DomainExpiration("far.com", self.now + 90 * DAY),
        ]

        groups = self.builder.build_groups(expirations, self.now)

        assert list(groups.keys()) == ["SSL expires in 1 day"]
        assert [e.domain for e in groups["SSL expires in 1 day"]] == ["soon.com"]

    def test_expiring_exactly_now_is_expired(self):
        """测试剩余时间为0时归入已过期分组"""
        groups = self.builder.build_groups([DomainExpiration("now.com", self.now)], self.now)
        assert list(groups.keys()) == ["SSL EXPIRED"]

    def test_render(self):
        """测试通知文本格式"""
        expirations = [
            DomainExpiration("expired.com", local_ts(2018, 10, 12, 9)),
            DomainExpiration("a.com", local_ts(2018, 10, 15, 17)),
            DomainExpiration("b.com", local_ts(2018, 10, 15, 18)),
        ]

        message = self.builder.build_message(expirations, self.now)

        assert message == (
            "SSL EXPIRED:\n"
            "expired.com (Friday October 12, 2018)\n"
            "\n"
            "SSL expires in 5 hours:\n"
            "a.com (Monday October 15, 2018)\n"
            "\n"
            "SSL expires in 6 hours:\n"
            "b.com (Monday October 15, 2018)"
        )

    def test_render_trims_whitespace(self):
        """测试通知文本首尾没有空白"""
        message = self.builder.build_message([DomainExpiration("a.com", self.now + DAY)], self.now)
        assert message == message.strip()
        assert message.startswith("SSL expires in 1 day:\n")

    def test_build_message_is_repeatable(self):
        """测试同一时刻多次生成结果相同"""
        expirations = [DomainExpiration("a.com", self.now + 2 * DAY)]
        assert self.builder.build_message(expirations, self.now) == self.builder.build_message(expirations, self.now)
