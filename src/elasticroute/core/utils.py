"""
elasticroute 工具函数模块

提供文档操作相关的 URL 路径拼接函数
"""

from elasticroute.exceptions import InvalidArgumentError


def fill_index_and_type(
    index_name: str,
    doc_type: str,
    index_required: bool = False,
    type_required: bool = False,
) -> str:
    """
    拼接 `{index}/{type}/` 形式的路径前缀。

    为空且非必需的部分直接省略，用于全集群搜索等场景。

    示例:
        >>> fill_index_and_type("users", "doc")
        'users/doc/'
        >>> fill_index_and_type("", "")
        ''

    Args:
        index_name: 索引名称
        doc_type: 文档类型
        index_required: 索引名称是否必需
        type_required: 文档类型是否必需

    Returns:
        路径前缀

    Raises:
        InvalidArgumentError: 必需的部分为空时抛出
    """
    path = ""
    if index_required and not index_name:
        raise InvalidArgumentError("参数 index_name 不能为空")
    if index_name:
        path += f"{index_name}/"
    if type_required and not doc_type:
        raise InvalidArgumentError("参数 doc_type 不能为空")
    if doc_type:
        path += f"{doc_type}/"
    return path


def append_routing(path: str, routing: str) -> str:
    """routing 不为空时追加 `?routing=` 查询参数."""
    if routing:
        return f"{path}?routing={routing}"
    return path


def search_path(index_name: str, doc_type: str, routing: str = "") -> str:
    """构建搜索路径: `[{index}/][{type}/]_search[?routing=R]`."""
    path = fill_index_and_type(index_name, doc_type) + "_search"
    return append_routing(path, routing)


def document_path(
    index_name: str,
    doc_type: str,
    doc_id: str,
    routing: str = "",
    id_required: bool = True,
) -> str:
    """
    构建单文档操作路径: `{index}/{type}/{id}[?routing=R]`。

    Args:
        index_name: 索引名称（必需）
        doc_type: 文档类型（必需）
        doc_id: 文档ID
        routing: 路由值
        id_required: 文档ID是否必需；为 False 且 ID 为空时由服务端生成 ID

    Raises:
        InvalidArgumentError: 必需的部分为空时抛出
    """
    path = fill_index_and_type(
        index_name, doc_type, index_required=True, type_required=True
    )
    if id_required and not doc_id:
        raise InvalidArgumentError("参数 doc_id 不能为空")
    if doc_id:
        path += doc_id
    return append_routing(path, routing)
