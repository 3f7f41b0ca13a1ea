"""日志回调模块.

所有模块都通过 logging.getLogger(__name__) 记录日志。set_log_function 在
"elasticroute" 日志记录器上挂载一个处理器，把日志转发给自定义回调函数，
适合没有配置 logging 的调用方。

使用示例:
    from elasticroute.log import LogLevel, set_log_function

    set_log_function(lambda level, msg: print(level.name, msg))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger("elasticroute")


class LogLevel(Enum):
    """日志级别枚举."""

    FATAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4

    @classmethod
    def from_logging_level(cls, levelno: int) -> LogLevel:
        """将 logging 模块的级别转换为 LogLevel."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


LogCallback = Callable[[LogLevel, str], None]


class CallbackHandler(logging.Handler):
    """把日志记录转发给回调函数的处理器."""

    def __init__(self, callback: LogCallback) -> None:
        super().__init__(logging.DEBUG)
        self.callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(LogLevel.from_logging_level(record.levelno), record.getMessage())
        except Exception:
            self.handleError(record)


_handler: CallbackHandler | None = None
_previous_level: int = logging.NOTSET


def set_log_function(callback: LogCallback | None) -> None:
    """设置日志回调函数.

    应在使用任何客户端之前、启动多线程之前调用。调用方没有为
    "elasticroute" 日志记录器设置级别时，临时降到 DEBUG 以便回调收到全部
    日志；移除回调时恢复原来的级别。

    Args:
        callback: 回调函数，参数为 (LogLevel, 消息)；None 表示移除已设置的回调
    """
    global _handler, _previous_level
    if _handler is not None:
        logger.removeHandler(_handler)
        logger.setLevel(_previous_level)
        _handler = None
    if callback is not None:
        _previous_level = logger.level
        if _previous_level == logging.NOTSET:
            logger.setLevel(logging.DEBUG)
        _handler = CallbackHandler(callback)
        logger.addHandler(_handler)
