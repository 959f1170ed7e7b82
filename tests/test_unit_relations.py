"""
Tests for relation, allowed-type and permission mapping.
"""

import pytest

from spice2json.compiler.relations import map_permission, map_relation, map_relation_type
from spice2json.domain import compiled
from spice2json.domain.document import RelationType, UserSet
from spice2json.domain.enums import SetOperation
from tests.factories import allowed, computed, permission, relation, union, wildcard


class TestMapRelationType:
    @pytest.mark.anyio
    async def test_self_relation_maps_to_empty(self):
        result = map_relation_type(allowed("user", "..."))
        assert result == RelationType(type="user", relation="", caveat="")

    @pytest.mark.anyio
    async def test_named_sub_relation(self):
        result = map_relation_type(allowed("group", "member"))
        assert result.type == "group"
        assert result.relation == "member"

    @pytest.mark.anyio
    async def test_wildcard_maps_to_star(self):
        result = map_relation_type(wildcard("user"))
        assert result.relation == "*"

    @pytest.mark.anyio
    async def test_required_caveat(self):
        result = map_relation_type(allowed("user", caveat="ip_allowed"))
        assert result.caveat == "ip_allowed"

    @pytest.mark.anyio
    async def test_wildcard_with_caveat(self):
        result = map_relation_type(wildcard("user", caveat="ip_allowed"))
        assert (result.relation, result.caveat) == ("*", "ip_allowed")

    @pytest.mark.anyio
    async def test_json_omits_empty_relation_and_caveat(self):
        assert map_relation_type(allowed("user")).to_json_dict() == {"type": "user"}


class TestMapRelation:
    @pytest.mark.anyio
    async def test_types_preserve_order(self):
        result = map_relation(
            relation("viewer", allowed("user"), allowed("group", "member"), wildcard("user"))
        )

        assert result.name == "viewer"
        assert [(t.type, t.relation) for t in result.types] == [
            ("user", ""),
            ("group", "member"),
            ("user", "*"),
        ]

    @pytest.mark.anyio
    async def test_comment_attached(self):
        result = map_relation(relation("viewer", allowed("user"), comment="// readers"))
        assert result.comment == "readers"

    @pytest.mark.anyio
    async def test_missing_type_information(self):
        result = map_relation(compiled.Relation(name="orphan"))
        assert result.types == ()
        assert result.to_json_dict() == {"name": "orphan", "types": []}


class TestMapPermission:
    @pytest.mark.anyio
    async def test_rewrite_mapped(self):
        result = map_permission(permission("view", union(computed("viewer"))))

        assert result.name == "view"
        assert result.user_set == UserSet.operator(SetOperation.UNION, [UserSet.leaf("viewer")])

    @pytest.mark.anyio
    async def test_missing_rewrite_gives_null_userset(self):
        result = map_permission(permission("view", None))

        assert result.user_set is None
        assert result.to_json_dict() == {"name": "view", "userSet": None}

    @pytest.mark.anyio
    async def test_comment_attached(self):
        result = map_permission(
            permission("view", union(computed("viewer")), comment="/** Can view */")
        )
        assert result.comment == "Can view"
