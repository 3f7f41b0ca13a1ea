"""Scroll 数据模型定义模块."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ScrollParams:
    """当前游标的状态.

    Attributes:
        index_name: 索引名称，None 表示未调用 init
        doc_type: 文档类型
        search_body: 查询请求体
        scroll_id: 服务端游标标识，为空表示尚未创建游标
    """

    index_name: str | None = None
    doc_type: str = ""
    search_body: str = ""
    scroll_id: str = ""

    @property
    def is_initialized(self) -> bool:
        return self.index_name is not None

    @property
    def is_started(self) -> bool:
        return bool(self.scroll_id)


@dataclass
class ScrollPage:
    """一页 scroll 结果.

    Attributes:
        document: 解析后的完整响应
        scroll_id: 本页返回的游标标识
    """

    document: dict[str, Any]
    scroll_id: str

    @property
    def hits(self) -> list[dict[str, Any]]:
        """本页命中的文档列表，即 hits.hits."""
        return self.document["hits"]["hits"]

    @property
    def total(self) -> int | None:
        """命中总数，兼容 ES 7.x 和 8.x 的 total 格式."""
        total_info = self.document["hits"].get("total")
        if isinstance(total_info, dict):
            return total_info.get("value")
        return total_info

    def __len__(self) -> int:
        return len(self.hits)
