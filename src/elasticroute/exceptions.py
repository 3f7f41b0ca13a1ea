"""elasticroute 异常定义模块."""


class ElasticRouteError(Exception):
    """elasticroute 基础异常类."""

    pass


class InvalidArgumentError(ElasticRouteError, ValueError):
    """参数校验异常.

    当必需的 index/type/id 为空，或文档内容不合法时抛出。
    总是在发起任何网络请求之前同步抛出。
    """

    pass
