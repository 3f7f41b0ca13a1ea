"""批量操作数据模型定义模块."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvalidArgumentError
from .exceptions import BulkValidationError

logger = logging.getLogger(__name__)


class BulkAction(Enum):
    """批量操作类型枚举."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def create_control(action: BulkAction | str, doc_type: str, doc_id: str = "") -> str:
    """生成 bulk 请求中的控制行.

    Examples:
        >>> create_control("index", "type1", "1")
        '{"index": {"_type": "type1", "_id": "1"}}'
        >>> create_control(BulkAction.DELETE, "type1")
        '{"delete": {"_type": "type1"}}'

    Args:
        action: 操作类型
        doc_type: 文档类型
        doc_id: 文档ID，为空时不输出 _id（由集群生成）

    Returns:
        单行 JSON 控制头
    """
    if isinstance(action, BulkAction):
        action = action.value
    header = {"_type": doc_type}
    if doc_id:
        header["_id"] = doc_id
    return json.dumps({action: header}, ensure_ascii=False)


@dataclass
class BulkItem:
    """批量操作项数据类.

    Attributes:
        control: 控制行
        source: 文档内容，DELETE 操作为空
    """

    control: str = ""
    source: str = ""

    def render(self) -> str:
        """渲染为 `{control}\\n{source}\\n`，source 为空时只输出控制行."""
        if not self.control:
            return ""
        if not self.source:
            return f"{self.control}\n"
        return f"{self.control}\n{self.source}\n"


class BulkData(ABC):
    """批量数据集合抽象基类."""

    @property
    @abstractmethod
    def index_name(self) -> str:
        """数据所属的索引名称."""

    @abstractmethod
    def __len__(self) -> int:
        """待提交的操作项数量."""

    def is_empty(self) -> bool:
        """是否没有待提交的操作项."""
        return len(self) == 0

    @abstractmethod
    def body(self) -> str:
        """渲染整个 bulk 请求体."""


class SameIndexBulkData(BulkData):
    """同一索引的批量数据收集器.

    capacity 只是期望的批次大小，不限制继续添加；add 系列方法在达到该大小时
    返回 True，提示调用方可以提交了。

    Args:
        index_name: 所有数据写入的索引名称
        capacity: 期望的批次大小，默认 100

    Raises:
        InvalidArgumentError: index_name 为空时抛出

    Examples:
        >>> data = SameIndexBulkData("users", capacity=2)
        >>> data.index_document("doc", "1", '{"name": "Alice"}')
        False
        >>> data.create_document("doc", "2", '{"name": "Bob"}')
        True
    """

    def __init__(self, index_name: str, capacity: int = 100) -> None:
        if not index_name:
            raise InvalidArgumentError("index_name 是必需参数")
        self._index_name = index_name
        self.capacity = capacity
        self._items: list[BulkItem] = []

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def items(self) -> list[BulkItem]:
        """待提交的操作项（副本）."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(
        self,
        action: BulkAction,
        doc_type: str,
        doc_id: str,
        document: str = "",
        validate: bool = True,
    ) -> bool:
        """添加一个操作项.

        Args:
            action: 操作类型
            doc_type: 文档类型
            doc_id: 文档ID，为空时由集群生成
            document: JSON 文档，不能包含换行符；DELETE 操作为空
            validate: 是否校验文档中的换行符

        Returns:
            是否已达到期望的批次大小

        Raises:
            BulkValidationError: 文档包含换行符时抛出
        """
        if validate and "\n" in document:
            logger.error(f"文档 {doc_id} 中包含换行符")
            raise BulkValidationError("不能索引包含换行符的文档")

        self._items.append(BulkItem(create_control(action, doc_type, doc_id), document))
        return len(self._items) >= self.capacity

    def index_document(
        self, doc_type: str, doc_id: str, document: str, validate: bool = True
    ) -> bool:
        """添加 index 操作（存在则覆盖）."""
        return self.add(BulkAction.INDEX, doc_type, doc_id, document, validate)

    def create_document(
        self, doc_type: str, doc_id: str, document: str, validate: bool = True
    ) -> bool:
        """添加 create 操作（已存在时该项失败）."""
        return self.add(BulkAction.CREATE, doc_type, doc_id, document, validate)

    def update_document(
        self, doc_type: str, doc_id: str, document: str, validate: bool = True
    ) -> bool:
        """添加 update 操作，document 为完整的更新请求体，如 {"doc": {...}}."""
        return self.add(BulkAction.UPDATE, doc_type, doc_id, document, validate)

    def delete_document(self, doc_type: str, doc_id: str) -> bool:
        """添加 delete 操作，只有控制行."""
        return self.add(BulkAction.DELETE, doc_type, doc_id)

    def clear(self) -> None:
        """清空所有待提交的操作项."""
        self._items.clear()

    def body(self) -> str:
        return "".join(item.render() for item in self._items)
