"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from formulaic.models import ChatMessage, CompletionData, FileInfo, ModelInfo


class TestCompletionData:
    def test_lists_kept(self):
        data = CompletionData.model_validate({"models": ["a"], "variables": [{"v": 1}]})
        assert data.to_body() == {"models": ["a"], "variables": [{"v": 1}]}

    def test_defaults_when_absent(self):
        assert CompletionData().to_body() == {"models": [], "variables": []}

    @pytest.mark.parametrize("value", [None, "gpt-4", 3, {"id": "m"}])
    def test_non_list_replaced_with_empty(self, value):
        data = CompletionData.model_validate({"models": value, "variables": value})
        assert data.models == []
        assert data.variables == []

    def test_tuple_accepted(self):
        assert CompletionData.model_validate({"models": ("a", "b")}).models == ["a", "b"]

    def test_extra_fields_pass_through(self):
        body = CompletionData.model_validate({"models": ["a"], "stream": False}).to_body()
        assert body["stream"] is False
        assert body["models"] == ["a"]


class TestChatMessage:
    def test_default_role(self):
        assert ChatMessage(content="hi").model_dump() == {"role": "user", "content": "hi"}

    def test_content_required(self):
        with pytest.raises(ValidationError):
            ChatMessage(role="user")


class TestModelInfo:
    def test_minimal(self):
        model = ModelInfo.model_validate({"id": "m1"})
        assert model.name is None

    def test_extra_fields_kept(self):
        model = ModelInfo.model_validate({"id": "m1", "context": 8192})
        assert model.model_dump()["context"] == 8192

    def test_id_required(self):
        with pytest.raises(ValidationError):
            ModelInfo.model_validate({"name": "nameless"})

    def test_numeric_id_becomes_string(self):
        assert ModelInfo.model_validate({"id": 7}).id == "7"


class TestFileInfo:
    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            FileInfo(id="f1", size=-1)

    def test_numeric_id_becomes_string(self):
        file = FileInfo.model_validate({"id": 42, "name": "a.txt", "size": 10})
        assert file.id == "42"

    def test_created_at_read_from_camel_case(self):
        file = FileInfo.model_validate({"id": "f1", "createdAt": "2024-01-01T00:00:00Z"})
        assert file.created_at == "2024-01-01T00:00:00Z"
        assert "createdAt" not in file.model_dump()

    def test_created_at_by_field_name(self):
        assert FileInfo(id="f1", created_at="2024-01-01").created_at == "2024-01-01"
