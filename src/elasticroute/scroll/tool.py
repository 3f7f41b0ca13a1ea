"""Scroll 游标工具模块.

提供 Scroll 和 ScrollByScan 两个类，用于分页遍历任意大小的结果集。

状态流转:
    未初始化 --init--> 已初始化 --next--> 已开始（持有 scroll_id）
    已开始/已初始化 --clear--> 未初始化

使用示例:
    from elasticroute.scroll import Scroll

    with Scroll(client, scroll_size=500, scroll_timeout="1m") as scroll:
        scroll.init("logs", "doc", '{"query": {"match_all": {}}}')
        for page in scroll.pages():
            for hit in page.hits:
                print(hit["_id"])
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from elasticroute.connection import (
    Client,
    ClientOption,
    ConnectionExhaustedError,
    HTTPMethod,
)
from elasticroute.core.utils import fill_index_and_type

from .models import ScrollPage, ScrollParams
from .parser import parse_scroll_result

logger = logging.getLogger(__name__)


class Scroll:
    """Scroll API 游标.

    单个实例同一时刻最多持有一个服务端游标。所有失败（集群不可用、
    响应不合法、分片失败等）都以返回 None 的方式报告，不抛出异常，
    便于长时间运行的遍历循环只检查返回值。

    Args:
        client: 集群客户端，可与其它 Bulk/Scroll 实例共享
        scroll_size: 每页的文档数量，默认 100
        scroll_timeout: 服务端游标的保留时间，如 "1m"
    """

    def __init__(
        self,
        client: Client,
        scroll_size: int = 100,
        scroll_timeout: str = "1m",
    ) -> None:
        self._client = client
        self.scroll_size = scroll_size
        self.scroll_timeout = scroll_timeout
        self._params = ScrollParams()

    @classmethod
    def from_hosts(
        cls,
        hosts: list[str],
        *options: ClientOption,
        scroll_size: int = 100,
        scroll_timeout: str = "1m",
    ) -> Scroll:
        """根据节点列表创建独占客户端的 Scroll 实例.

        Examples:
            >>> scroll = Scroll.from_hosts(
            ...     ["http://localhost:9200/"], timeout_option(30), scroll_size=500
            ... )
        """
        return cls(Client(hosts, *options), scroll_size, scroll_timeout)

    @property
    def client(self) -> Client:
        """集群客户端."""
        return self._client

    @property
    def params(self) -> ScrollParams:
        """当前游标状态."""
        return self._params

    def init(self, index_name: str, doc_type: str, search_body: str) -> None:
        """初始化新的游标，不发起网络请求.

        如果已有游标，先调用 clear() 释放它。

        Args:
            index_name: 索引名称
            doc_type: 文档类型
            search_body: 查询请求体
        """
        if self._params.is_initialized or self._params.is_started:
            self.clear()
        self._params = ScrollParams(
            index_name=index_name,
            doc_type=doc_type,
            search_body=search_body,
        )

    def _create_url(self) -> str:
        path = fill_index_and_type(self._params.index_name or "", self._params.doc_type)
        return f"{path}_search?scroll={self.scroll_timeout}&size={self.scroll_size}"

    def _run(self, url_path: str, body: str) -> ScrollPage | None:
        """发送请求并解析响应，成功时更新 scroll_id."""
        try:
            response = self._client.perform_request(HTTPMethod.POST, url_path, body)
        except ConnectionExhaustedError as e:
            logger.error(f"scroll 时集群不可用: {str(e)}")
            return None

        # 集群异常时可能在 404 响应中携带可解析的结果
        if not (response.is_success or response.status_code == 404):
            return None

        page = parse_scroll_result(response.text)
        if page is not None:
            self._params.scroll_id = page.scroll_id
        return page

    def create_scroll(self) -> ScrollPage | None:
        """创建服务端游标并获取第一页.

        Returns:
            第一页结果；失败时返回 None
        """
        url_path = self._create_url()
        logger.info(f"Scroll (create) 路径: {url_path}")
        logger.info(f"Scroll (create) 请求体: {self._params.search_body}")

        page = self._run(url_path, self._params.search_body)
        if page is None:
            logger.error("创建 scroll 失败")
        return page

    def next(self) -> ScrollPage | None:
        """获取下一页结果.

        未调用 init 时直接返回 None，不发起网络请求；尚未创建游标时
        调用 create_scroll()。

        Returns:
            下一页结果；失败时返回 None
        """
        if not self._params.is_initialized:
            logger.warning("没有已初始化的 scroll（请先调用 init()）")
            return None
        if not self._params.is_started:
            return self.create_scroll()

        url_path = f"_search/scroll?scroll={self.scroll_timeout}"
        logger.info(f"Scroll (next) 路径: {url_path}")
        page = self._run(url_path, json.dumps({"scroll_id": self._params.scroll_id}))
        if page is None:
            logger.error("scroll (next) 失败")
        return page

    def pages(self) -> Iterator[ScrollPage]:
        """依次产出结果页，遇到失败页或空页时停止."""
        while True:
            page = self.next()
            if page is None or not page.hits:
                return
            yield page

    def clear(self) -> None:
        """释放服务端游标并清空本地状态.

        删除失败只记录日志，不会阻止实例被再次使用。
        """
        logger.info("Scroll (clear) 被调用")
        if not self._params.is_started:
            logger.info("没有已开始的 scroll（scroll_id 为空）")
        else:
            body = json.dumps({"scroll_id": [self._params.scroll_id]})
            try:
                response = self._client.perform_request(
                    HTTPMethod.DELETE, "_search/scroll/", body
                )
                if not response.is_success:
                    logger.warning(f"删除 scroll 失败，响应内容: {response.text}")
            except ConnectionExhaustedError as e:
                logger.error(f"清除 scroll 时集群不可用: {str(e)}")

        self._params = ScrollParams()

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> Scroll:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.clear()

    def __del__(self) -> None:
        if "_params" not in self.__dict__:
            return
        try:
            self.clear()
        except Exception as e:
            try:
                logger.error(f"Scroll 析构时发生异常: '{e}'")
            except Exception:
                pass


class ScrollByScan(Scroll):
    """基于已废弃的 scan 搜索类型的游标.

    scan 的第一次请求不返回任何文档，create_scroll() 会立即再执行一次
    next()，调用方不会看到空的第一页。scan 的页大小按分片计算，因此
    scroll_size 会除以主分片数量。

    Args:
        client: 集群客户端
        scroll_size: 每页的文档总数
        scroll_timeout: 服务端游标的保留时间
        primary_shards_count: 主分片数量，为 0 时不做除法
    """

    def __init__(
        self,
        client: Client,
        scroll_size: int = 100,
        scroll_timeout: str = "1m",
        primary_shards_count: int = 0,
    ) -> None:
        super().__init__(client, scroll_size, scroll_timeout)
        if primary_shards_count != 0:
            self.scroll_size = scroll_size // primary_shards_count

    @classmethod
    def from_hosts(
        cls,
        hosts: list[str],
        *options: ClientOption,
        scroll_size: int = 100,
        scroll_timeout: str = "1m",
        primary_shards_count: int = 0,
    ) -> ScrollByScan:
        """根据节点列表创建独占客户端的 ScrollByScan 实例."""
        return cls(
            Client(hosts, *options), scroll_size, scroll_timeout, primary_shards_count
        )

    def _create_url(self) -> str:
        return f"{super()._create_url()}&search_type=scan"

    def create_scroll(self) -> ScrollPage | None:
        url_path = self._create_url()
        logger.info(f"Scroll (create) 路径: {url_path}")
        logger.info(f"Scroll (create) 请求体: {self._params.search_body}")

        if self._run(url_path, self._params.search_body) is None:
            logger.error("创建 scroll 失败")
            return None
        # scan 的第一次请求不返回结果，再取一次
        return self.next()
