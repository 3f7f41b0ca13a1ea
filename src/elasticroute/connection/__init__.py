"""集群客户端模块 - 在多个等价节点之间分发请求并处理节点故障切换.

主要组件:
    - Client: 集群客户端，提供 perform_request 与 search/get/index/remove
    - NodeSelector: 随机起始 + 顺序轮换的节点选择器
    - RequestsTransport: 基于 requests 的 HTTP 传输
    - ClientConfig / SSLConfig: 客户端配置模型
    - 配置选项函数: timeout_option、connect_timeout_option、proxies_option、
      ssl_option、basic_auth_option

使用示例:
    from elasticroute.connection import Client, ssl_option

    client = Client(["https://es1:9200/"], ssl_option(ca_info="myca.pem"))
    response = client.search("users", "doc", '{"query": {"match_all": {}}}')
"""

from .exceptions import (
    ClientError,
    ConnectionConfigError,
    ConnectionExhaustedError,
)
from .models import (
    ClientConfig,
    ClientOption,
    HTTPMethod,
    SSLConfig,
    apply_options,
    basic_auth_option,
    connect_timeout_option,
    proxies_option,
    ssl_option,
    timeout_option,
)
from .selector import NodeSelector
from .tool import Client
from .transport import RequestsTransport, TransportResponse

__all__ = [
    # 客户端
    "Client",
    "NodeSelector",
    "RequestsTransport",
    "TransportResponse",
    # 模型
    "HTTPMethod",
    "ClientConfig",
    "SSLConfig",
    "ClientOption",
    # 配置选项
    "apply_options",
    "timeout_option",
    "connect_timeout_option",
    "proxies_option",
    "ssl_option",
    "basic_auth_option",
    # 异常
    "ClientError",
    "ConnectionConfigError",
    "ConnectionExhaustedError",
]
