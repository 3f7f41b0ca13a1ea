"""集群客户端工具模块.

提供 Client 类，负责在同一集群的多个等价节点上执行请求：随机选择起始节点，
节点不可达时按顺序切换到下一个节点，所有节点都失败时抛出
ConnectionExhaustedError。

使用示例:
    from elasticroute.connection import Client, timeout_option

    with Client(["http://es1:9200/", "http://es2:9200/"], timeout_option(30)) as client:
        response = client.get("users", "doc", "1")
        print(response.status_code, response.text)
"""

from __future__ import annotations

import logging

from elasticroute.core.utils import document_path, search_path

from .exceptions import ConnectionConfigError, ConnectionExhaustedError
from .models import ClientConfig, ClientOption, HTTPMethod, apply_options
from .selector import NodeSelector
from .transport import RequestsTransport, TransportResponse

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# 节点不可达（无法连接）或暂时过载（队列已满）时视为本次尝试失败
UNAVAILABLE_STATUS_CODES = (0, 503)


class Client:
    """Elasticsearch 集群客户端.

    单个实例不是线程安全的：节点下标和失败计数没有加锁保护。

    注意错误传播策略的差异：单文档操作在所有节点失败时抛出
    ConnectionExhaustedError；Bulk 将其计为整批失败；Scroll 将其转换为
    失败页（返回 None）。这是刻意保留的设计。

    Args:
        hosts: 同一集群中各节点的 URL 列表，每个 URL 以 "/" 结尾
        *options: 配置选项，按顺序作用于 config
        config: 基础配置，默认使用 ClientConfig 的默认值
        transport: HTTP 传输实现，默认根据配置创建 RequestsTransport

    Raises:
        ConnectionConfigError: hosts 为空或是单个字符串时抛出

    Examples:
        >>> client = Client(
        ...     ["http://localhost:9200/"],
        ...     timeout_option(30),
        ...     connect_timeout_option(1),
        ... )
    """

    def __init__(
        self,
        hosts: list[str],
        *options: ClientOption,
        config: ClientConfig | None = None,
        transport: RequestsTransport | None = None,
    ) -> None:
        if isinstance(hosts, str):
            raise ConnectionConfigError("hosts 必须是节点地址列表，而不是单个字符串")
        if not hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个节点地址")
        self._hosts = tuple(host if host.endswith("/") else f"{host}/" for host in hosts)
        self._config = apply_options(config or ClientConfig(), options)
        self._transport = transport or RequestsTransport(self._config)
        self._selector = NodeSelector(len(self._hosts))

    @property
    def hosts(self) -> tuple[str, ...]:
        """节点 URL 列表."""
        return self._hosts

    @property
    def config(self) -> ClientConfig:
        """当前客户端配置."""
        return self._config

    @property
    def selector(self) -> NodeSelector:
        """节点选择器."""
        return self._selector

    def set_client_option(self, option: ClientOption) -> Client:
        """在构造后修改单个配置项，并立即应用到传输层.

        支持链式调用。

        Args:
            option: 配置选项

        Returns:
            客户端实例自身
        """
        apply_options(self._config, [option])
        self._transport.configure(self._config)
        return self

    def _perform_request_on_current_host(
        self, method: HTTPMethod, url_path: str, body: str
    ) -> tuple[bool, TransportResponse]:
        """在当前节点上执行请求.

        Returns:
            元组：(节点是否可用, 响应)
        """
        url = self._hosts[self._selector.current_index] + url_path
        headers = {"Content-Type": JSON_CONTENT_TYPE} if body else {}

        logger.debug(f"调用 {method.value}: {url_path}")
        response = self._transport.perform(method, url, headers, body)

        logger.info(
            f"节点返回 {response.status_code}，耗时 {response.elapsed:.3f}s: {url}"
        )
        logger.debug(f"节点响应内容: {response.text}")
        logger.info(f"节点响应大小: {len(response.text)}")

        if response.error:
            logger.warning(f"请求错误: {response.error}")

        if response.status_code in UNAVAILABLE_STATUS_CODES:
            logger.warning(f"节点 '{url}' 不可用")
            return False, response
        return True, response

    def perform_request(
        self, method: HTTPMethod, url_path: str, body: str = ""
    ) -> TransportResponse:
        """依次在各节点上执行请求，直到某个节点响应.

        只有节点不可达（状态码 0）或过载（503）才会切换节点；其它任何状态码
        （包括 4xx/5xx）都视为节点已响应，原样返回。

        Args:
            method: HTTP 方法
            url_path: 紧跟在节点 URL 之后的路径部分
            body: 请求体

        Returns:
            节点响应

        Raises:
            ConnectionExhaustedError: 所有节点都未能响应时抛出
        """
        while True:
            ok, response = self._perform_request_on_current_host(method, url_path, body)
            if ok:
                break
            if not self._selector.advance():
                raise ConnectionExhaustedError("All hosts failed for request.")

        self._selector.on_success()
        return response

    def search(
        self, index_name: str, doc_type: str, body: str, routing: str = ""
    ) -> TransportResponse:
        """执行搜索，index_name 与 doc_type 为空时对整个集群搜索.

        Raises:
            ConnectionExhaustedError: 所有节点都未能响应时抛出
        """
        path = search_path(index_name, doc_type, routing)
        return self.perform_request(HTTPMethod.POST, path, body)

    def get(
        self, index_name: str, doc_type: str, doc_id: str, routing: str = ""
    ) -> TransportResponse:
        """获取指定 ID 的文档.

        Raises:
            InvalidArgumentError: index_name、doc_type 或 doc_id 为空时抛出
            ConnectionExhaustedError: 所有节点都未能响应时抛出
        """
        path = document_path(index_name, doc_type, doc_id, routing)
        return self.perform_request(HTTPMethod.GET, path)

    def index(
        self,
        index_name: str,
        doc_type: str,
        doc_id: str,
        body: str,
        routing: str = "",
    ) -> TransportResponse:
        """索引文档，doc_id 为空时由集群自动生成 ID.

        Raises:
            InvalidArgumentError: index_name 或 doc_type 为空时抛出
            ConnectionExhaustedError: 所有节点都未能响应时抛出
        """
        path = document_path(index_name, doc_type, doc_id, routing, id_required=False)
        return self.perform_request(HTTPMethod.POST, path, body)

    def remove(
        self, index_name: str, doc_type: str, doc_id: str, routing: str = ""
    ) -> TransportResponse:
        """删除指定 ID 的文档.

        Raises:
            InvalidArgumentError: index_name、doc_type 或 doc_id 为空时抛出
            ConnectionExhaustedError: 所有节点都未能响应时抛出
        """
        path = document_path(index_name, doc_type, doc_id, routing)
        return self.perform_request(HTTPMethod.DELETE, path)

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> Client:
        """上下文管理器入口."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，关闭底层连接."""
        self.close()

    def close(self) -> None:
        """关闭底层传输连接."""
        self._transport.close()
