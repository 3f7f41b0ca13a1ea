"""批量操作数据模型单元测试."""

import pytest

from elasticroute.bulk import (
    BulkAction,
    BulkItem,
    BulkValidationError,
    SameIndexBulkData,
    create_control,
)
from elasticroute.exceptions import InvalidArgumentError


class TestCreateControl:
    """create_control 测试."""

    def test_with_id(self) -> None:
        """测试带 ID 的控制行."""
        assert (
            create_control("index", "type1", "1")
            == '{"index": {"_type": "type1", "_id": "1"}}'
        )

    def test_without_id(self) -> None:
        """测试不带 ID 的控制行."""
        assert create_control("index", "type1", "") == '{"index": {"_type": "type1"}}'

    def test_enum_action(self) -> None:
        """测试使用枚举作为操作类型."""
        assert (
            create_control(BulkAction.DELETE, "t", "9")
            == '{"delete": {"_type": "t", "_id": "9"}}'
        )

    def test_quotes_are_escaped(self) -> None:
        """测试 ID 中的引号被转义."""
        assert create_control("index", "t", 'a"b') == '{"index": {"_type": "t", "_id": "a\\"b"}}'

    def test_non_ascii_kept_raw(self) -> None:
        """测试非 ASCII 字符原样输出，不转义为 \\uXXXX."""
        assert (
            create_control("index", "日志", "编号1")
            == '{"index": {"_type": "日志", "_id": "编号1"}}'
        )


class TestBulkItem:
    """BulkItem 测试."""

    def test_render_with_source(self) -> None:
        """测试带文档的渲染."""
        assert BulkItem("{c}", "{d}").render() == "{c}\n{d}\n"

    def test_render_without_source(self) -> None:
        """测试只有控制行的渲染."""
        assert BulkItem("{c}").render() == "{c}\n"

    def test_render_empty_control(self) -> None:
        """测试控制行为空时不输出任何内容."""
        assert BulkItem("", "{d}").render() == ""


class TestSameIndexBulkData:
    """SameIndexBulkData 测试."""

    def test_empty_index_name_raises_error(self) -> None:
        """测试索引名称为空抛出异常."""
        with pytest.raises(InvalidArgumentError):
            SameIndexBulkData("")

    def test_body(self) -> None:
        """测试按插入顺序渲染按行分隔的请求体."""
        data = SameIndexBulkData("my_index")
        assert data.is_empty()
        data.index_document("my_type", "id1", "{data1}")
        assert not data.is_empty()
        data.create_document("my_type", "id2", "{data2}")
        assert len(data) == 2

        expected = (
            '{"index": {"_type": "my_type", "_id": "id1"}}\n'
            "{data1}\n"
            '{"create": {"_type": "my_type", "_id": "id2"}}\n'
            "{data2}\n"
        )
        assert data.body() == expected

    def test_body_round_trips_control(self) -> None:
        """测试请求体中的控制行与 create_control 的结果一致."""
        data = SameIndexBulkData("idx")
        data.update_document("t", "7", '{"doc": {"a": 1}}')
        data.delete_document("t", "8")
        assert data.body() == (
            create_control("update", "t", "7")
            + '\n{"doc": {"a": 1}}\n'
            + create_control("delete", "t", "8")
            + "\n"
        )

    def test_capacity_hint(self) -> None:
        """测试达到期望大小时返回 True，但仍可继续添加."""
        data = SameIndexBulkData("idx", capacity=2)
        assert data.index_document("t", "1", "{}") is False
        assert data.index_document("t", "2", "{}") is True
        assert data.index_document("t", "3", "{}") is True
        assert len(data) == 3

    def test_newline_rejected(self) -> None:
        """测试包含换行符的文档被拒绝."""
        data = SameIndexBulkData("idx")
        with pytest.raises(BulkValidationError):
            data.index_document("t", "1", '{"a":\n1}')
        assert data.is_empty()

    def test_newline_error_is_invalid_argument(self) -> None:
        """测试换行符异常同时是 InvalidArgumentError."""
        data = SameIndexBulkData("idx")
        with pytest.raises(InvalidArgumentError):
            data.add(BulkAction.CREATE, "t", "1", "a\nb")

    def test_validation_can_be_skipped(self) -> None:
        """测试关闭校验时允许换行符."""
        data = SameIndexBulkData("idx")
        data.index_document("t", "1", "a\nb", validate=False)
        assert len(data) == 1

    def test_clear(self) -> None:
        """测试清空."""
        data = SameIndexBulkData("idx")
        data.index_document("t", "1", "{}")
        data.clear()
        assert data.is_empty()
        assert data.body() == ""
        assert data.index_name == "idx"
