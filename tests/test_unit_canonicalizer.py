"""
Tests for deterministic JSON output.

These tests verify:
- Key sorting for canonical output
- Array order is never changed
- Compact and indented text forms
- Documents serialize in model field order by default
"""

import json

import pytest

from spice2json.compiler.canonicalizer import (
    canonicalize_json,
    to_json_pretty,
    to_json_string,
)
from spice2json.compiler.exporter import export_schema
from spice2json.domain.document import Caveat, Definition, Document


class TestCanonicalizer:
    """Test JSON canonicalization for determinism."""

    @pytest.mark.anyio
    async def test_canonicalize_nested_dict(self):
        obj = {"z": {"inner_z": 1, "inner_a": 2}, "a": {"nested_z": 3, "nested_a": 4}}
        result = canonicalize_json(obj)

        assert list(result.keys()) == ["a", "z"]
        assert list(result["a"].keys()) == ["nested_a", "nested_z"]
        assert list(result["z"].keys()) == ["inner_a", "inner_z"]

    @pytest.mark.anyio
    async def test_canonicalize_preserves_list_order(self):
        """Rewrite operand order is significant and must survive."""
        obj = {"children": [{"relation": "c"}, {"relation": "a"}, {"relation": "b"}]}
        result = canonicalize_json(obj)

        assert [c["relation"] for c in result["children"]] == ["c", "a", "b"]


class TestToJsonString:
    @pytest.fixture
    def document(self) -> Document:
        return Document(
            definitions=(Definition(name="document", namespace="acme"),),
            caveats=(Caveat(name="c", parameters={"b": "int", "a": "string"}),),
        )

    @pytest.mark.anyio
    async def test_compact(self, document):
        assert to_json_string(document) == (
            '{"definitions":[{"name":"document","namespace":"acme"}],'
            '"caveats":[{"name":"c","parameters":{"b":"int","a":"string"}}]}'
        )

    @pytest.mark.anyio
    async def test_sort_keys(self, document):
        result = to_json_string(document, sort_keys=True)
        assert result.startswith('{"caveats":[{"name":"c","parameters":{"a":"string","b":"int"}}]')

    @pytest.mark.anyio
    async def test_pretty_uses_two_space_indent(self, document):
        result = to_json_pretty(document)

        assert result.startswith('{\n  "definitions": [\n    {\n      "name": "document"')
        assert json.loads(result) == document.to_json_dict()

    @pytest.mark.anyio
    async def test_accepts_plain_dict(self):
        assert to_json_string({"definitions": []}) == '{"definitions":[]}'

    @pytest.mark.anyio
    async def test_non_ascii_kept(self):
        document = Document(definitions=(Definition(name="user", comment="Überprüfung"),))
        assert "Überprüfung" in to_json_string(document)

    @pytest.mark.anyio
    async def test_byte_identical_across_runs(self, document_schema):
        first = to_json_pretty(export_schema(document_schema))
        second = to_json_pretty(export_schema(document_schema))

        assert first == second
