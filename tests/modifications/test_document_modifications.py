"""
Тесты таблицы модификаций: разбор строк, приведение типов,
операции над JSON-документом и над текстом.
"""

from __future__ import annotations

import pytest

from bdt.errors import ModificationError
from bdt.modifications import Modification, ModificationOp, modify_json, modify_text


def _doc():
    return {
        "name": "service",
        "tags": ["a"],
        "nested": {"items": [{"id": "x"}, {"id": "y"}]},
    }


class TestModificationRows:

    def test_row_with_default_type(self):
        mod = Modification.from_row(["key", "update", "v"])
        assert mod.operation is ModificationOp.UPDATE
        assert mod.value_type == "n/a"
        assert mod.typed_value() == "v"

    def test_cells_are_stripped(self):
        mod = Modification.from_row([" key ", " ADD ", " 1 ", " number "])
        assert mod.key == "key"
        assert mod.typed_value() == 1

    @pytest.mark.parametrize("value, value_type, expected", [
        ("1.5", "number", 1.5),
        ("TRUE", "boolean", True),
        ("anything", "null", None),
        ('{"a": [1]}', "object", {"a": [1]}),
        ("[1, 2]", "array", [1, 2]),
        ("plain", "string", "plain"),
    ])
    def test_typed_values(self, value, value_type, expected):
        assert Modification("k", ModificationOp.ADD, value, value_type).typed_value() == expected

    @pytest.mark.parametrize("row", [
        ["only-key"],
        ["k", "ADD", "v", "string", "extra"],
        ["k", "MERGE", "v"],
    ])
    def test_invalid_rows(self, row):
        with pytest.raises(ModificationError):
            Modification.from_row(row)

    @pytest.mark.parametrize("value, value_type", [
        ("abc", "number"),
        ("yes", "boolean"),
        ("{}", "array"),
        ("[]", "object"),
        ("{", "json"),
        ("x", "date"),
    ])
    def test_bad_typed_values(self, value, value_type):
        with pytest.raises(ModificationError):
            Modification("k", ModificationOp.ADD, value, value_type).typed_value()


class TestJsonModifications:

    def test_update_keeps_key_order(self):
        doc = modify_json(_doc(), [["name", "UPDATE", "api"]])
        assert list(doc) == ["name", "tags", "nested"]
        assert doc["name"] == "api"

    def test_add_new_key_goes_last(self):
        doc = modify_json(_doc(), [["version", "ADD", "2", "number"]])
        assert list(doc)[-1] == "version"
        assert doc["version"] == 2

    def test_delete(self):
        doc = modify_json(_doc(), [["tags", "DELETE"]])
        assert "tags" not in doc

    def test_append_and_prepend(self):
        doc = modify_json(_doc(), [["name", "APPEND", "-v2"], ["name", "PREPEND", "my-"]])
        assert doc["name"] == "my-service-v2"

    def test_replace_substring(self):
        doc = modify_json(_doc(), [["name", "REPLACE", "serv->dev"]])
        assert doc["name"] == "device"

    def test_add_to_array(self):
        doc = modify_json(_doc(), [["tags", "ADDTO", "b"], ["tags", "ADDTO", "[1]", "array"]])
        assert doc["tags"] == ["a", "b", [1]]

    def test_array_index_in_path(self):
        doc = modify_json(_doc(), [["$.nested.items.1.id", "UPDATE", "z"]])
        assert doc["nested"]["items"] == [{"id": "x"}, {"id": "z"}]

    def test_add_at_array_end(self):
        doc = modify_json(_doc(), [["tags.1", "ADD", "b"]])
        assert doc["tags"] == ["a", "b"]

    @pytest.mark.parametrize("row, match", [
        (["missing", "UPDATE", "v"], "not found"),
        (["nested.missing.id", "UPDATE", "v"], "not found"),
        (["tags.5", "UPDATE", "v"], "out of range"),
        (["tags.first", "UPDATE", "v"], "not an array index"),
        (["name", "ADDTO", "v"], "needs an array"),
        (["tags", "APPEND", "v"], "needs a string"),
        (["name", "REPLACE", "no-separator"], "old->new"),
        (["a..b", "ADD", "v"], "Invalid key path"),
    ])
    def test_errors(self, row, match):
        with pytest.raises(ModificationError, match=match):
            modify_json(_doc(), [row])

    def test_accepts_modification_objects(self):
        mod = Modification("name", ModificationOp.UPDATE, "x")
        assert modify_json(_doc(), [mod])["name"] == "x"


class TestTextModifications:

    def test_replace_all_occurrences(self):
        assert modify_text("foo = foo", [["foo", "REPLACE", "bar"]]) == "bar = bar"

    def test_update_is_replace(self):
        assert modify_text("foo = bar", [["foo", "UPDATE", "baz"]]) == "baz = bar"

    def test_delete(self):
        assert modify_text("a-b-c", [["-", "DELETE"]]) == "abc"

    def test_append_and_prepend(self):
        assert modify_text("body", [["", "APPEND", "!"], ["", "PREPEND", ">"]]) == ">body!"

    @pytest.mark.parametrize("op", ["ADD", "ADDTO"])
    def test_json_only_operations(self, op):
        with pytest.raises(ModificationError, match="not supported for plain text"):
            modify_text("text", [["k", op, "v"]])
