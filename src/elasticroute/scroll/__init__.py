"""Scroll 游标模块.

提供基于 Scroll API 的分页遍历功能.
"""

from elasticroute.scroll.models import ScrollPage, ScrollParams
from elasticroute.scroll.parser import parse_scroll_result
from elasticroute.scroll.tool import Scroll, ScrollByScan

__all__ = [
    "Scroll",
    "ScrollByScan",
    "ScrollPage",
    "ScrollParams",
    "parse_scroll_result",
]
