"""
Тесты функций библиотеки шагов (без запуска pytest-bdd).
"""

from __future__ import annotations

import json

import pytest

from bdt.context import ContextStore
from bdt.errors import (
    MalformedResourceError,
    ModificationError,
    ResourceNotFoundError,
    UnresolvableReferenceError,
)
from bdt.steps import read_file_to_variable, save_in_variable, sort_elements


class TestSaveAndRead:

    def test_save_in_variable(self):
        local = ContextStore().for_unit("t")
        save_in_variable(local, "answer", "42")
        assert local["answer"] == "42"

    def test_read_json_file(self, ctx_factory):
        ctx = ctx_factory()
        value = read_file_to_variable(ctx, "schemas/simple1.json", "json", "doc")

        # порядок ключей документа сохраняется
        assert value == '{"b":[1,2],"a":true}'
        assert ctx.local_vars["doc"] == value

    def test_read_string_file(self, ctx_factory):
        ctx = ctx_factory()
        read_file_to_variable(ctx, "schemas/krb5.conf", "string", "conf")
        assert ctx.local_vars["conf"].startswith("[libdefaults]")

    def test_read_missing_file(self, ctx_factory):
        ctx = ctx_factory()
        with pytest.raises(ResourceNotFoundError):
            read_file_to_variable(ctx, "schemas/none.json", "json", "doc")
        assert "doc" not in ctx.local_vars

    def test_unsupported_kind(self, ctx_factory):
        with pytest.raises(ValueError, match="Unsupported file kind"):
            read_file_to_variable(ctx_factory(), "schemas/simple1.json", "yaml", "doc")

    def test_read_malformed_json(self, ctx_factory):
        with pytest.raises(MalformedResourceError):
            read_file_to_variable(ctx_factory(), "schemas/broken.json", "json", "doc")


class TestReadWithModifications:

    def test_json_update_and_add_to_array(self, ctx_factory):
        ctx = ctx_factory()
        rows = [
            ["key1", "UPDATE", "new_value", "n/a"],
            ["key2", "ADDTO", '["new_value"]', "array"],
        ]
        value = read_file_to_variable(ctx, "schemas/testCreateFile.json", "json", "myjson", rows)

        expected = ('{"key1":"new_value","key2":[["new_value"]],'
                    '"key3":{"key3_2":"value3_2","key3_1":"value3_1"}}')
        assert value == expected
        assert ctx.local_vars["myjson"] == expected

    def test_string_replace(self, ctx_factory):
        ctx = ctx_factory()
        value = read_file_to_variable(ctx, "schemas/settings.conf", "string", "mystring",
                                      [["foo", "REPLACE", "bar", "n/a"]])
        assert value == "bar = bar"
        assert ctx.local_vars["mystring"] == "bar = bar"

    def test_nested_key_path(self, ctx_factory):
        ctx = ctx_factory()
        rows = [["$.key3.key3_1", "DELETE"], ["key3.key3_3", "ADD", "3", "number"]]
        value = read_file_to_variable(ctx, "schemas/testCreateFile.json", "json", "doc", rows)
        assert json.loads(value)["key3"] == {"key3_2": "value3_2", "key3_3": 3}

    def test_failed_modification_keeps_variable_unset(self, ctx_factory):
        ctx = ctx_factory()
        with pytest.raises(ModificationError, match="not found"):
            read_file_to_variable(ctx, "schemas/testCreateFile.json", "json", "doc",
                                  [["missing", "UPDATE", "x"]])
        assert "doc" not in ctx.local_vars


class TestSortElements:

    def setup_method(self):
        self.local = ContextStore().for_unit("sort")

    def test_ascending(self):
        self.local.set("list", json.dumps(["pear", "apple", "fig"]))
        assert sort_elements(self.local, "list") == '["apple","fig","pear"]'
        assert self.local["list"] == '["apple","fig","pear"]'

    def test_descending(self):
        self.local.set("list", '["b", "c", "a"]')
        assert sort_elements(self.local, "list", "alphabetical", "descending") == '["c","b","a"]'

    def test_objects_sorted_by_canonical_form(self):
        self.local.set("list", '[{"id": "b"}, {"id": "a"}]')
        assert sort_elements(self.local, "list") == '[{"id":"a"},{"id":"b"}]'

    def test_undefined_variable(self):
        with pytest.raises(UnresolvableReferenceError):
            sort_elements(self.local, "missing")

    def test_not_json(self):
        self.local.set("list", "a,b,c")
        with pytest.raises(MalformedResourceError):
            sort_elements(self.local, "list")

    def test_not_an_array(self):
        self.local.set("list", '{"a": 1}')
        with pytest.raises(MalformedResourceError, match="not a JSON array"):
            sort_elements(self.local, "list")

    def test_unknown_criteria(self):
        self.local.set("list", "[]")
        with pytest.raises(ValueError):
            sort_elements(self.local, "list", "numeric")
