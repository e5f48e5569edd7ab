"""Tests for mcp-mem0 types: tool call decoding and MemoryRecord."""

import pytest
from pydantic import ValidationError

from mcp_mem0.types import (
    AddCall,
    DeleteCall,
    MemoryRecord,
    SearchCall,
    UpdateCall,
    decode_tool_call,
)


class TestDecodeToolCall:
    """Tests for decode_tool_call."""

    def test_decodes_each_variant(self) -> None:
        assert isinstance(decode_tool_call("memory_add", {"content": "x"}), AddCall)
        assert isinstance(decode_tool_call("memory_search", {"query": "x"}), SearchCall)
        assert isinstance(
            decode_tool_call("memory_update", {"memory_id": "m", "updates": {}}), UpdateCall
        )
        assert isinstance(decode_tool_call("memory_delete", {}), DeleteCall)

    def test_user_id_alias(self) -> None:
        call = decode_tool_call("memory_add", {"content": "x", "userId": "alice"})

        assert call.arguments.user_id == "alice"

    def test_search_defaults(self) -> None:
        args = decode_tool_call("memory_search", {"query": "x"}).arguments

        assert (args.limit, args.sort, args.filters) == (10, "relevance", None)

    def test_search_limit_is_not_bounded_here(self) -> None:
        args = decode_tool_call("memory_search", {"query": "x", "limit": 150}).arguments

        assert args.limit == 150

    def test_delete_defaults(self) -> None:
        args = decode_tool_call("memory_delete", {}).arguments

        assert args.confirm is False
        assert args.memory_id is None
        assert args.memory_ids is None

    def test_confirm_is_strict(self) -> None:
        with pytest.raises(ValidationError):
            decode_tool_call("memory_delete", {"memory_id": "m", "confirm": "true"})

    def test_metadata_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            decode_tool_call("memory_add", {"content": "x", "metadata": {"color": "red"}})

    def test_importance_bounds(self) -> None:
        with pytest.raises(ValidationError):
            decode_tool_call("memory_add", {"content": "x", "metadata": {"importance": 11}})

    def test_date_range_requires_both_bounds(self) -> None:
        with pytest.raises(ValidationError):
            decode_tool_call(
                "memory_search",
                {"query": "x", "filters": {"date_range": {"start": "2024-01-01T00:00:00Z"}}},
            )

    def test_unknown_tool_name(self) -> None:
        with pytest.raises(ValidationError):
            decode_tool_call("memory_teleport", {})


class TestMemoryRecord:
    """Tests for MemoryRecord."""

    def test_from_api_defaults(self) -> None:
        record = MemoryRecord.from_api({"memory": "x", "metadata": None})

        assert record.id is None
        assert record.score is None
        assert record.metadata == {}

    @pytest.mark.parametrize("metadata", [["importance", 9], "devops", 42])
    def test_from_api_non_dict_metadata_is_empty(self, metadata) -> None:
        record = MemoryRecord.from_api({"memory": "x", "metadata": metadata})

        assert record.metadata == {}
        assert record.importance == 0

    def test_from_api_scalar_tags_become_list(self) -> None:
        record = MemoryRecord.from_api({"memory": "x", "metadata": {"tags": "docker"}})

        assert record.metadata["tags"] == ["docker"]

    def test_from_api_does_not_mutate_response(self) -> None:
        raw_metadata = {"tags": "docker"}

        MemoryRecord.from_api({"memory": "x", "metadata": raw_metadata})

        assert raw_metadata == {"tags": "docker"}

    @pytest.mark.parametrize(
        "metadata, expected",
        [({"importance": 7}, 7), ({}, 0), ({"importance": None}, 0), ({"importance": "high"}, 0)],
    )
    def test_importance(self, metadata, expected) -> None:
        assert MemoryRecord(memory="x", metadata=metadata).importance == expected
