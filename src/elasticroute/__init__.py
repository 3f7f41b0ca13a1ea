"""elasticroute - Elasticsearch 集群 HTTP 访问层.

在同一集群的多个等价节点之间分发请求并隐藏节点故障，支持批量写入与
scroll 分页遍历。

主要功能:
    - Client: 随机选择起始节点、顺序故障切换的集群客户端
    - Bulk / SameIndexBulkData: 批量写入与部分失败统计
    - Scroll / ScrollByScan: 游标式分页遍历

使用示例:
    from elasticroute import Bulk, Client, SameIndexBulkData

    client = Client(["http://localhost:9200/"])
    data = SameIndexBulkData("users")
    data.index_document("doc", "1", '{"name": "Alice"}')
    errors = Bulk(client).perform(data)
"""

__version__ = "0.1.0"

# 导出批量操作
from elasticroute.bulk import (
    Bulk,
    BulkAction,
    BulkData,
    BulkValidationError,
    SameIndexBulkData,
    create_control,
)

# 导出客户端
from elasticroute.connection import (
    Client,
    ClientConfig,
    ConnectionConfigError,
    ConnectionExhaustedError,
    HTTPMethod,
    SSLConfig,
    basic_auth_option,
    connect_timeout_option,
    proxies_option,
    ssl_option,
    timeout_option,
)

# 导出异常
from elasticroute.exceptions import ElasticRouteError, InvalidArgumentError

# 导出日志回调
from elasticroute.log import LogLevel, set_log_function

# 导出游标
from elasticroute.scroll import Scroll, ScrollByScan, ScrollPage

__all__ = [
    # 版本
    "__version__",
    # 客户端
    "Client",
    "ClientConfig",
    "SSLConfig",
    "HTTPMethod",
    "timeout_option",
    "connect_timeout_option",
    "proxies_option",
    "ssl_option",
    "basic_auth_option",
    # 批量操作
    "Bulk",
    "BulkAction",
    "BulkData",
    "SameIndexBulkData",
    "create_control",
    # 游标
    "Scroll",
    "ScrollByScan",
    "ScrollPage",
    # 日志
    "LogLevel",
    "set_log_function",
    # 异常
    "ElasticRouteError",
    "InvalidArgumentError",
    "ConnectionConfigError",
    "ConnectionExhaustedError",
    "BulkValidationError",
]
