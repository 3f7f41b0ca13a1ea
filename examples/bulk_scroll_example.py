"""批量写入与 scroll 遍历示例.

本文件展示了如何使用 Client、Bulk 和 Scroll 访问多节点集群。
运行前请确保 localhost:9200 / localhost:9201 上有可用的节点。
"""

import json

from elasticroute import (
    Bulk,
    Client,
    ConnectionExhaustedError,
    LogLevel,
    SameIndexBulkData,
    Scroll,
    basic_auth_option,
    set_log_function,
    timeout_option,
)

# 创建共享的集群客户端，节点不可用时自动切换
client = Client(
    ["http://localhost:9200", "http://localhost:9201"],
    timeout_option(10.0),  # 请求超时10秒
    basic_auth_option("elastic", "changeme"),
)


def print_log(level: LogLevel, message: str) -> None:
    """只打印警告及以上级别的日志."""
    if level.value <= LogLevel.WARNING.value:
        print(f"[{level.name}] {message}")


# ==================== 示例1：批量写入 ====================
def example_bulk():
    """分批写入文档，达到批次大小时提交."""
    bulk = Bulk(client)
    data = SameIndexBulkData("users", capacity=2)

    documents = [
        {"id": "1", "name": "张三", "city": "北京"},
        {"id": "2", "name": "李四", "city": "上海"},
        {"id": "3", "name": "王五", "city": "广州"},
    ]
    for doc in documents:
        if data.index_document("doc", doc["id"], json.dumps(doc, ensure_ascii=False)):
            print(f"  提交批次，失败数: {bulk.perform(data)}")
            data.clear()

    # 提交剩余的数据
    data.delete_document("doc", "2")
    print(f"  提交剩余批次，失败数: {bulk.perform(data)}")


# ==================== 示例2：scroll 遍历 ====================
def example_scroll():
    """遍历索引中的全部文档."""
    body = json.dumps({"query": {"match_all": {}}})
    total = 0
    with Scroll(client, scroll_size=500, scroll_timeout="1m") as scroll:
        scroll.init("users", "doc", body)
        for page in scroll.pages():
            total += len(page)
            for hit in page.hits:
                print(f"  {hit['_id']}: {hit['_source']}")
    print(f"  共遍历 {total} 个文档")


# ==================== 示例3：单文档操作 ====================
def example_document():
    """单文档读取，集群不可用时抛出异常."""
    try:
        response = client.get("users", "doc", "1")
        print(f"  状态码: {response.status_code}")
        print(f"  内容: {response.text}")
    except ConnectionExhaustedError as e:
        print(f"  集群不可用: {e}")


def main():
    """运行所有示例."""
    set_log_function(print_log)

    print("=" * 50)
    print("elasticroute 使用示例")
    print("=" * 50)

    print("\n1. 批量写入示例")
    print("-" * 50)
    example_bulk()

    print("\n2. scroll 遍历示例")
    print("-" * 50)
    example_scroll()

    print("\n3. 单文档操作示例")
    print("-" * 50)
    example_document()

    client.close()


if __name__ == "__main__":
    main()
