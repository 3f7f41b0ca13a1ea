"""HTTP 传输层模块.

基于 requests.Session 实现单次 HTTP 请求。连接池、TLS 和代理均交给
requests 处理，本模块只负责把 ClientConfig 映射到 Session 上，并把
传输层异常统一转换为 status_code == 0 的响应。
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from .models import ClientConfig, HTTPMethod

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """一次 HTTP 请求的结果.

    Attributes:
        status_code: HTTP 状态码，0 表示无法连接节点
        headers: 响应头
        text: 响应体文本
        error: 传输层错误信息，成功时为 None
        elapsed: 请求耗时（秒）
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""
    error: str | None = None
    elapsed: float = 0.0

    @property
    def is_success(self) -> bool:
        """状态码是否属于 2xx."""
        return self.status_code // 100 == 2

    def json(self) -> Any:
        """将响应体解析为 JSON.

        Raises:
            ValueError: 响应体不是合法的 JSON
        """
        return json.loads(self.text)


class _NoHostnameCheckAdapter(HTTPAdapter):
    """校验证书但不校验主机名的 HTTPS 适配器."""

    def init_poolmanager(self, *args, **kwargs):
        kwargs["assert_hostname"] = False
        return super().init_poolmanager(*args, **kwargs)


class RequestsTransport:
    """基于 requests 的 HTTP 传输实现.

    Args:
        config: 客户端配置
        session: 可选的 requests.Session 实例，默认新建
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.session = session or requests.Session()
        # 只使用 ClientConfig 中的代理与证书设置，忽略环境变量
        self.session.trust_env = False
        self._https_adapter: HTTPAdapter | None = None
        self._timeout: float | tuple[float, float] = 6.0
        self.configure(config or ClientConfig())

    def configure(self, config: ClientConfig) -> None:
        """将客户端配置应用到 Session 上."""
        ssl = config.ssl

        self.session.proxies = dict(config.proxies)

        if not ssl.verify_peer:
            self.session.verify = False
        elif ssl.ca_info:
            self.session.verify = ssl.ca_info
        else:
            self.session.verify = True

        if ssl.cert_file and ssl.key_file:
            self.session.cert = (ssl.cert_file, ssl.key_file)
        else:
            self.session.cert = ssl.cert_file

        if self._https_adapter is not None:
            self._https_adapter.close()
        if ssl.verify_peer and not ssl.verify_host:
            self._https_adapter = _NoHostnameCheckAdapter()
        else:
            self._https_adapter = HTTPAdapter()
        self.session.mount("https://", self._https_adapter)

        if config.username is not None and config.password is not None:
            self.session.auth = (config.username, config.password)
        else:
            self.session.auth = None

        if config.connect_timeout is not None:
            self._timeout = (config.connect_timeout, config.request_timeout)
        else:
            self._timeout = config.request_timeout

    def perform(
        self,
        method: HTTPMethod,
        url: str,
        headers: dict[str, str] | None = None,
        body: str = "",
    ) -> TransportResponse:
        """执行一次 HTTP 请求.

        传输层异常（无法连接、超时、TLS 握手失败等）不会抛出，而是返回
        status_code 为 0 的响应，由调用方决定是否切换节点。

        Args:
            method: HTTP 方法
            url: 完整请求地址
            headers: 请求头
            body: 请求体

        Returns:
            请求结果
        """
        start_time = time.time()
        try:
            response = self.session.request(
                method.value,
                url,
                headers=headers or {},
                data=body.encode("utf-8") if body else None,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            return TransportResponse(
                status_code=0,
                error=str(e),
                elapsed=time.time() - start_time,
            )

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            text=response.text,
            elapsed=response.elapsed.total_seconds(),
        )

    def close(self) -> None:
        """关闭底层 Session."""
        self.session.close()
