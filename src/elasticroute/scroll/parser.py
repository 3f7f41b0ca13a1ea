"""
Scroll 响应解析器.

判断一次 scroll 响应是否为可用的结果页，并提取新的游标标识.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from elasticroute.scroll.models import ScrollPage

# 模块级别日志记录器
logger = logging.getLogger(__name__)


def _is_true_or_not_bool(value: Any) -> bool:
    return not isinstance(value, bool) or value


def parse_scroll_result(text: str) -> ScrollPage | None:
    """
    解析 scroll 响应.

    只有同时满足以下条件的响应才是可用的结果页:
    - 能解析为 JSON 对象
    - 没有 error 标记（或 error 为 false）
    - timed_out 不存在或为 false
    - _shards.failed 存在、为整数且为 0
    - hits.hits 为数组
    - _scroll_id 为字符串

    Args:
        text: 响应体文本

    Returns:
        结果页；不可用时返回 None
    """
    try:
        document = json.loads(text)
    except ValueError:
        logger.warning("scroll 响应不是合法的 JSON")
        return None

    if not isinstance(document, dict):
        return None

    if "error" in document and _is_true_or_not_bool(document["error"]):
        logger.warning(f"scroll 响应报告错误: {document['error']}")
        return None

    if "timed_out" in document and _is_true_or_not_bool(document["timed_out"]):
        logger.warning("scroll 请求超时")
        return None

    # 缺少分片信息同样视为失败
    shards = document.get("_shards")
    if not isinstance(shards, dict):
        return None
    failed = shards.get("failed")
    if isinstance(failed, bool) or not isinstance(failed, int):
        return None
    if failed > 0:
        logger.warning(f"scroll 响应中有 {failed} 个分片失败，结果不可信")
        return None

    hits = document.get("hits")
    if not isinstance(hits, dict) or not isinstance(hits.get("hits"), list):
        return None

    scroll_id = document.get("_scroll_id")
    if not isinstance(scroll_id, str):
        logger.warning("scroll 响应中缺少 _scroll_id")
        return None

    return ScrollPage(document=document, scroll_id=scroll_id)
