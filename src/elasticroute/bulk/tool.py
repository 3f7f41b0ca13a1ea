"""批量操作核心工具类."""

from __future__ import annotations

import json
import logging
from numbers import Number
from typing import Any

from elasticroute.connection import (
    Client,
    ClientOption,
    ConnectionExhaustedError,
    HTTPMethod,
)

from .models import BulkAction, BulkData

logger = logging.getLogger(__name__)

# 响应中可识别的操作类型键
ACTION_KEYS = tuple(action.value for action in BulkAction)


class Bulk:
    """批量操作核心工具类.

    将 BulkData 以一次 `{index}/_bulk` 请求提交，并统计失败的操作项数量。
    部分失败不是异常，而是正常的返回值。

    Args:
        client: 集群客户端，可与其它 Bulk/Scroll 实例共享

    Examples:
        >>> bulk = Bulk(client)
        >>> data = SameIndexBulkData("users")
        >>> data.index_document("doc", "1", '{"name": "Alice"}')
        >>> errors = bulk.perform(data)
    """

    def __init__(self, client: Client) -> None:
        self._client = client
        self._error_count = 0

    @classmethod
    def from_hosts(cls, hosts: list[str], *options: ClientOption) -> Bulk:
        """根据节点列表创建独占客户端的 Bulk 实例."""
        return cls(Client(hosts, *options))

    @property
    def client(self) -> Client:
        """集群客户端."""
        return self._client

    @property
    def error_count(self) -> int:
        """最近一次 perform 中失败的操作项数量."""
        return self._error_count

    def perform(self, bulk_data: BulkData) -> int:
        """提交批量数据.

        Args:
            bulk_data: 批量数据

        Returns:
            失败的操作项数量；空批次直接返回 0，不发起请求
        """
        self._error_count = 0
        if bulk_data.is_empty():
            return 0

        logger.info(f"准备索引 {len(bulk_data)} 个元素")
        self._run(bulk_data)
        return self._error_count

    def _run(self, bulk_data: BulkData) -> None:
        """发送请求体，传输失败或非 2xx 时整批计为失败."""
        size = len(bulk_data)
        try:
            response = self._client.perform_request(
                HTTPMethod.POST, f"{bulk_data.index_name}/_bulk", bulk_data.body()
            )
        except ConnectionExhaustedError as e:
            logger.error(f"索引 bulk 时集群不可用: {str(e)}")
            self._error_count += size
            return

        if not response.is_success:
            logger.error(f"索引 bulk 时节点未返回 2xx 状态码: {response.status_code}")
            self._error_count += size
            return

        self._process_result(response.text, size)

    def _process_result(self, text: str, size: int) -> None:
        """解析 bulk 响应并累加错误计数.

        期望的响应格式:
            {"took": 3, "errors": false,
             "items": [{"index": {"_id": "1", "status": 201}}]}
        """
        try:
            root = json.loads(text)
        except ValueError:
            logger.warning("无法解析 bulk 响应，整批计为失败，错误计数可能不准确")
            self._error_count += size
            return

        if not isinstance(root, dict):
            logger.warning("bulk 响应不是对象，整批计为失败，错误计数可能不准确")
            self._error_count += size
            return

        # errors 明确为 false 时无需逐项检查
        if root.get("errors") is False:
            return

        items = root.get("items")
        if not isinstance(items, list):
            logger.warning(
                "bulk 响应中缺少 items 数组，整批计为失败，错误计数可能不准确"
            )
            self._error_count += size
            return

        for item in items:
            if not self._is_item_ok(item):
                self._error_count += 1

        if len(items) < size:
            logger.info(
                f"bulk 的操作项多于收到的响应，无法判断 {size - len(items)} 个操作项是否成功"
            )

    @staticmethod
    def _is_item_ok(item: Any) -> bool:
        """判断单个操作项响应是否成功（状态码在 2xx 范围内）."""
        if not isinstance(item, dict):
            logger.warning("bulk 操作项响应必须是对象")
            return False

        action = next((key for key in ACTION_KEYS if key in item), None)
        if action is None:
            logger.warning(f"bulk 响应中存在不支持的操作类型: {list(item)}")
            return False

        result = item[action]
        if not isinstance(result, dict):
            logger.warning("bulk 响应格式不符合预期，应为对象")
            return False

        status = result.get("status")
        if status is None:
            logger.warning("bulk 操作项响应中缺少 status")
            return False
        if isinstance(status, bool) or not isinstance(status, Number):
            logger.warning(f"bulk 操作项响应的 status 不是数字: {status!r}")
            return False

        return 200 <= status <= 299
