"""集群客户端异常定义模块."""

from ..exceptions import ElasticRouteError


class ClientError(ElasticRouteError):
    """集群客户端基础异常类.

    所有客户端相关异常的基类，继承自 ElasticRouteError。
    """

    pass


class ConnectionConfigError(ClientError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 hosts 为空、超时时间小于 0 等。
    """

    pass


class ConnectionExhaustedError(ClientError):
    """集群节点耗尽异常.

    一次逻辑请求中，所有配置的节点都不可达（无法连接或返回 503）时抛出。
    """

    pass
