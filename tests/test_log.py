"""日志回调测试."""

import logging
from unittest.mock import MagicMock

import pytest

from elasticroute.connection import (
    Client,
    HTTPMethod,
    RequestsTransport,
    TransportResponse,
)
from elasticroute.log import LogLevel, set_log_function


@pytest.fixture
def records():
    """挂载一个收集日志的回调，测试结束后移除."""
    collected = []
    set_log_function(lambda level, message: collected.append((level, message)))
    yield collected
    set_log_function(None)


class TestLogLevel:
    """LogLevel 转换测试."""

    @pytest.mark.parametrize(
        "levelno,expected",
        [
            (logging.CRITICAL, LogLevel.FATAL),
            (logging.ERROR, LogLevel.ERROR),
            (logging.WARNING, LogLevel.WARNING),
            (logging.INFO, LogLevel.INFO),
            (logging.DEBUG, LogLevel.DEBUG),
        ],
    )
    def test_from_logging_level(self, levelno, expected) -> None:
        assert LogLevel.from_logging_level(levelno) is expected


class TestSetLogFunction:
    """set_log_function 测试."""

    def test_messages_forwarded(self, records) -> None:
        """测试子模块的日志被转发给回调."""
        logging.getLogger("elasticroute.scroll.tool").warning("没有已初始化的 scroll")
        logging.getLogger("elasticroute.bulk.tool").info("准备索引 3 个元素")
        assert records == [
            (LogLevel.WARNING, "没有已初始化的 scroll"),
            (LogLevel.INFO, "准备索引 3 个元素"),
        ]

    def test_other_loggers_ignored(self, records) -> None:
        logging.getLogger("somewhere.else").error("无关日志")
        assert records == []

    def test_replace_callback(self, records) -> None:
        """测试再次设置时替换而不是叠加回调."""
        replaced = []
        set_log_function(lambda level, message: replaced.append(message))
        logging.getLogger("elasticroute").error("只发送一次")
        assert replaced == ["只发送一次"]
        assert records == []

    def test_remove_callback(self) -> None:
        collected = []
        set_log_function(lambda level, message: collected.append(message))
        set_log_function(None)
        logging.getLogger("elasticroute").error("已移除")
        assert collected == []
        assert not any(
            type(handler).__name__ == "CallbackHandler"
            for handler in logging.getLogger("elasticroute").handlers
        )

    def test_application_level_preserved(self) -> None:
        """测试不覆盖调用方设置的级别，移除回调后保持不变."""
        package_logger = logging.getLogger("elasticroute")
        package_logger.setLevel(logging.WARNING)
        collected = []
        try:
            set_log_function(lambda level, message: collected.append(message))
            assert package_logger.level == logging.WARNING
            package_logger.info("被过滤")
            package_logger.warning("已转发")
            set_log_function(None)
            assert package_logger.level == logging.WARNING
        finally:
            set_log_function(None)
            package_logger.setLevel(logging.NOTSET)
        assert collected == ["已转发"]

    def test_unset_level_restored_after_removal(self) -> None:
        """测试未设置级别时临时降到 DEBUG，移除后恢复."""
        package_logger = logging.getLogger("elasticroute")
        set_log_function(lambda level, message: None)
        assert package_logger.level == logging.DEBUG
        set_log_function(lambda level, message: None)
        assert package_logger.level == logging.DEBUG
        set_log_function(None)
        assert package_logger.level == logging.NOTSET

    def test_client_failover_is_logged(self, records) -> None:
        """测试节点不可用时记录警告日志."""
        transport = MagicMock(spec=RequestsTransport)
        transport.perform.side_effect = [
            TransportResponse(status_code=503, text=""),
            TransportResponse(status_code=200, text="{}"),
        ]
        client = Client(["http://a:9200", "http://b:9200"], transport=transport)
        client.perform_request(HTTPMethod.GET, "_search")

        warnings = [message for level, message in records if level is LogLevel.WARNING]
        assert len(warnings) == 1
        assert "不可用" in warnings[0]
