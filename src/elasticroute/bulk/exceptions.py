"""批量操作异常定义模块."""

from ..exceptions import ElasticRouteError, InvalidArgumentError


class BulkOperationError(ElasticRouteError):
    """批量操作基础异常类."""

    pass


class BulkValidationError(BulkOperationError, InvalidArgumentError):
    """批量操作验证异常.

    文档中包含换行符时抛出，换行符会破坏按行分隔的 bulk 请求体。
    """

    pass
