"""批量操作模块.

该模块将多个文档变更合并为一次按行分隔的 `_bulk` 请求，包括：
- 批量索引、创建、更新、删除
- 文档换行符校验
- 逐项统计失败数量（部分失败是正常返回值）

示例用法:
    >>> from elasticroute.bulk import Bulk, SameIndexBulkData
    >>> bulk = Bulk(client)
    >>> data = SameIndexBulkData("users")
    >>> data.index_document("doc", "1", '{"name": "Alice"}')
    >>> print(f"失败: {bulk.perform(data)}")
"""

from .exceptions import BulkOperationError, BulkValidationError
from .models import (
    BulkAction,
    BulkData,
    BulkItem,
    SameIndexBulkData,
    create_control,
)
from .tool import Bulk

__all__ = [
    "BulkAction",
    "BulkItem",
    "BulkData",
    "SameIndexBulkData",
    "create_control",
    "Bulk",
    "BulkOperationError",
    "BulkValidationError",
]
