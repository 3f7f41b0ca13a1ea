"""核心模块导出."""

from elasticroute.core.utils import (
    append_routing,
    document_path,
    fill_index_and_type,
    search_path,
)

__all__ = [
    "fill_index_and_type",
    "append_routing",
    "search_path",
    "document_path",
]
