"""集群客户端数据模型定义模块.

提供客户端相关的数据模型，包括：
- HTTPMethod: 支持的 HTTP 方法枚举
- SSLConfig: SSL/TLS 配置
- ClientConfig: 客户端配置（超时、代理、SSL、认证）
- 配置选项函数: timeout_option、connect_timeout_option、proxies_option 等
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .exceptions import ConnectionConfigError

# ssl_option 中表示“未传入，保持原值”的标记
_UNSET: Any = object()


class HTTPMethod(Enum):
    """HTTP 方法枚举."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


@dataclass
class SSLConfig:
    """SSL/TLS 配置模型.

    Attributes:
        verify_peer: 是否校验服务端证书，默认 True
        verify_host: 是否校验证书中的主机名，默认 True
        ca_info: CA 证书文件路径
        cert_file: 客户端证书文件路径
        key_file: 客户端私钥文件路径
    """

    verify_peer: bool = True
    verify_host: bool = True
    ca_info: str | None = None
    cert_file: str | None = None
    key_file: str | None = None

    def __post_init__(self) -> None:
        """校验 SSL 配置参数合法性."""
        if self.key_file and not self.cert_file:
            raise ConnectionConfigError("设置 key_file 时必须同时设置 cert_file")


@dataclass
class ClientConfig:
    """客户端配置模型.

    所有字段均可在构造后通过配置选项函数单独修改。

    Attributes:
        request_timeout: 单次请求超时时间（秒），默认 6.0
        connect_timeout: 建立连接超时时间（秒），None 表示与 request_timeout 相同
        proxies: 代理映射，如 {"http": "http://proxy:8080"}
        ssl: SSL/TLS 配置
        username: Basic Auth 用户名
        password: Basic Auth 密码

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ClientConfig(request_timeout=30, connect_timeout=1)
    """

    request_timeout: float = 6.0
    connect_timeout: float | None = None
    proxies: dict[str, str] = field(default_factory=dict)
    ssl: SSLConfig = field(default_factory=SSLConfig)
    username: str | None = None
    password: str | None = None

    def __post_init__(self) -> None:
        """校验客户端配置参数合法性."""
        self.validate()

    def validate(self) -> None:
        """校验超时参数."""
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
        if self.connect_timeout is not None and self.connect_timeout < 0:
            raise ConnectionConfigError(
                f"connect_timeout 必须 >= 0，当前值: {self.connect_timeout}"
            )


# 配置选项：按调用顺序作用于 ClientConfig，后者覆盖前者
ClientOption = Callable[[ClientConfig], None]


def timeout_option(seconds: float) -> ClientOption:
    """设置请求超时时间（秒）."""

    def apply(config: ClientConfig) -> None:
        config.request_timeout = seconds

    return apply


def connect_timeout_option(seconds: float) -> ClientOption:
    """设置建立连接超时时间（秒）."""

    def apply(config: ClientConfig) -> None:
        config.connect_timeout = seconds

    return apply


def proxies_option(proxies: dict[str, str]) -> ClientOption:
    """设置代理映射，替换已有的代理配置."""

    def apply(config: ClientConfig) -> None:
        config.proxies = dict(proxies)

    return apply


def ssl_option(
    verify_peer: bool = _UNSET,
    verify_host: bool = _UNSET,
    ca_info: str | None = _UNSET,
    cert_file: str | None = _UNSET,
    key_file: str | None = _UNSET,
) -> ClientOption:
    """设置 SSL/TLS 选项.

    只修改显式传入的字段，未传入的字段保持原值；传入 None 可以清除
    ca_info、cert_file 或 key_file。

    Examples:
        >>> option = ssl_option(verify_peer=False, ca_info="myca.pem")
        >>> clear_cert = ssl_option(cert_file=None, key_file=None)
    """
    changes = {
        name: value
        for name, value in (
            ("verify_peer", verify_peer),
            ("verify_host", verify_host),
            ("ca_info", ca_info),
            ("cert_file", cert_file),
            ("key_file", key_file),
        )
        if value is not _UNSET
    }

    def apply(config: ClientConfig) -> None:
        config.ssl = replace(config.ssl, **changes)

    return apply


def basic_auth_option(username: str, password: str) -> ClientOption:
    """设置 Basic Auth 认证信息."""

    def apply(config: ClientConfig) -> None:
        config.username = username
        config.password = password

    return apply


def apply_options(config: ClientConfig, options: Iterable[ClientOption]) -> ClientConfig:
    """按顺序将配置选项作用于配置对象，并重新校验.

    Args:
        config: 被修改的客户端配置
        options: 配置选项列表

    Returns:
        修改后的配置对象（同一实例）
    """
    for option in options:
        option(config)
    config.validate()
    return config
