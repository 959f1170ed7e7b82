"""
Exported document model.

These are the records handed to the JSON serializer. Each model knows which
of its fields are always written; every other field is omitted from the JSON
form when empty, matching the published document shape:

    {"definitions": [...], "caveats": [...]}
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from spice2json.domain.enums import SetOperation


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, tuple, dict)) and not value)


class DocumentModel(BaseModel):
    """Base for all document records: immutable, camelCase in JSON."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    # Field names (python and alias) written even when empty
    always_emit: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def omit_empty_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if k in self.always_emit or not _is_empty(v)}

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys and empty optionals omitted."""
        return self.model_dump(mode="json", by_alias=True)


class RelationType(DocumentModel):
    """One allowed subject type; relation "" is the subject itself, "*" a wildcard."""

    always_emit: ClassVar[frozenset[str]] = frozenset({"type"})

    type: str
    relation: str = ""
    caveat: str = ""


class Relation(DocumentModel):
    always_emit: ClassVar[frozenset[str]] = frozenset({"name", "types"})

    name: str
    types: tuple[RelationType, ...] = ()
    comment: str = ""


class UserSet(DocumentModel):
    """
    A node of a permission's rewrite tree.

    Operator nodes carry `operation` and ordered `children`; leaf nodes carry
    `relation` and, for an arrow (tuple-to-userset), `permission`.
    """

    operation: SetOperation | None = None
    relation: str = ""
    permission: str = ""
    children: tuple[UserSet, ...] = ()

    @model_validator(mode="after")
    def check_node_shape(self) -> UserSet:
        """An operator node cannot also be a leaf."""
        if self.operation is not None and (self.relation or self.permission):
            raise ValueError("UserSet cannot be both an operator node and a leaf")
        if self.operation is None and self.children:
            raise ValueError("UserSet leaf cannot have children")
        return self

    @classmethod
    def operator(cls, operation: SetOperation, children: list[UserSet]) -> UserSet:
        return cls(operation=operation, children=tuple(children))

    @classmethod
    def leaf(cls, relation: str, permission: str = "") -> UserSet:
        return cls(relation=relation, permission=permission)

    @property
    def is_leaf(self) -> bool:
        return self.operation is None


class Permission(DocumentModel):
    always_emit: ClassVar[frozenset[str]] = frozenset({"name", "user_set", "userSet"})

    name: str
    user_set: UserSet | None = None
    comment: str = ""


class Definition(DocumentModel):
    always_emit: ClassVar[frozenset[str]] = frozenset({"name"})

    name: str
    namespace: str = ""
    relations: tuple[Relation, ...] = ()
    permissions: tuple[Permission, ...] = ()
    comment: str = ""


class Caveat(DocumentModel):
    always_emit: ClassVar[frozenset[str]] = frozenset({"name", "parameters"})

    name: str
    parameters: dict[str, str] = {}
    comment: str = ""


class Document(DocumentModel):
    always_emit: ClassVar[frozenset[str]] = frozenset({"definitions"})

    definitions: tuple[Definition, ...] = ()
    caveats: tuple[Caveat, ...] = ()


UserSet.model_rebuild()
