"""
Read-only model of a compiled authorization schema.

Mirrors the tree the schema compiler produces: object definitions with
relations, rewrite rules and metadata attachments, plus caveat definitions.
Field names accept both snake_case and the camelCase names the compiler uses
in its JSON form, so a compiler dump can be loaded with `load_compiled_schema`.

Closed variants (allowed relation, rewrite operator, rewrite child) are
modelled as optional fields of which exactly one is populated in a
well-formed tree. Unknown fields are ignored.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from spice2json.core.errors import SchemaInputError
from spice2json.domain.enums import MetadataTypeUrl, RelationKind

# Protobuf wire tags (field 1) used by the two metadata messages we read
_DOC_COMMENT_TAG = 0x0A  # field 1, length-delimited
_RELATION_KIND_TAG = 0x08  # field 1, varint


class CompiledModel(BaseModel):
    """Base for all compiled-schema nodes: immutable, alias-tolerant."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel, extra="ignore"
    )


class MetadataMessage(CompiledModel):
    """One opaque attachment: a type URL and the serialized message bytes."""

    type_url: str
    value: bytes = b""

    @field_validator("value", mode="before")
    @classmethod
    def decode_value(cls, v: Any) -> Any:
        """Accept base64 text (JSON form) as well as raw bytes."""
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except binascii.Error as e:
                raise ValueError(f"metadata value is not valid base64: {e}") from e
        return v

    @field_serializer("value", when_used="json")
    def encode_value(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class Metadata(CompiledModel):
    metadata_message: tuple[MetadataMessage, ...] = ()


class PublicWildcard(CompiledModel):
    pass


class AllowedCaveat(CompiledModel):
    caveat_name: str


class AllowedRelation(CompiledModel):
    """
    A subject type allowed on a relation.

    Exactly one of `relation` (named sub-relation, `...` for the subject
    itself) or `public_wildcard` is set.
    """

    namespace: str
    relation: str | None = None
    public_wildcard: PublicWildcard | None = None
    required_caveat: AllowedCaveat | None = None


class TypeInformation(CompiledModel):
    allowed_direct_relations: tuple[AllowedRelation, ...] = ()


class ComputedUserset(CompiledModel):
    relation: str


class Tupleset(CompiledModel):
    relation: str


class TupleToUserset(CompiledModel):
    tupleset: Tupleset
    computed_userset: ComputedUserset


class SetOperationChild(CompiledModel):
    """One operand of a set operation; one of the three fields is set."""

    computed_userset: ComputedUserset | None = None
    tuple_to_userset: TupleToUserset | None = None
    userset_rewrite: UsersetRewrite | None = None


class SetOperation(CompiledModel):
    child: tuple[SetOperationChild, ...] = ()


class UsersetRewrite(CompiledModel):
    """A permission's rewrite rule; one of the three operators is set."""

    union: SetOperation | None = None
    intersection: SetOperation | None = None
    exclusion: SetOperation | None = None


class Relation(CompiledModel):
    name: str
    type_information: TypeInformation | None = None
    userset_rewrite: UsersetRewrite | None = None
    metadata: Metadata | None = None


class NamespaceDefinition(CompiledModel):
    """An object type; `name` may be qualified as `namespace/name`."""

    name: str
    relation: tuple[Relation, ...] = ()
    metadata: Metadata | None = None


class CaveatTypeReference(CompiledModel):
    type_name: str
    child_types: tuple[CaveatTypeReference, ...] = ()


class CaveatDefinition(CompiledModel):
    name: str
    parameter_types: dict[str, CaveatTypeReference] = {}
    metadata: Metadata | None = None


class CompiledSchema(CompiledModel):
    object_definitions: tuple[NamespaceDefinition, ...] = ()
    caveat_definitions: tuple[CaveatDefinition, ...] = ()


# Resolve the SetOperationChild -> UsersetRewrite cycle
for _model in (SetOperationChild, SetOperation, UsersetRewrite, Relation, NamespaceDefinition):
    _model.model_rebuild()
CaveatTypeReference.model_rebuild()
CompiledSchema.model_rebuild()


def load_compiled_schema(data: dict[str, Any] | str | bytes) -> CompiledSchema:
    """
    Load a compiled schema from its JSON form.

    Args:
        data: Parsed JSON object, or raw JSON text

    Returns:
        Validated CompiledSchema

    Raises:
        SchemaInputError: If the input is not valid UTF-8 JSON or does not match the tree shape
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaInputError(
                f"Invalid compiled schema: not valid UTF-8 ({e.reason} at byte {e.start})",
                details={"position": e.start},
            ) from e

    try:
        if isinstance(data, str):
            return CompiledSchema.model_validate_json(data)
        return CompiledSchema.model_validate(data)
    except ValidationError as e:
        raise SchemaInputError(
            f"Invalid compiled schema: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e


# ============================================================================
# Wire helpers for metadata attachments
# ============================================================================


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def _decode_varint(data: bytes, offset: int = 0) -> int:
    result = 0
    shift = 0
    for byte in data[offset:]:
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result
        shift += 7
    raise ValueError("truncated varint")


def doc_comment_message(text: str) -> MetadataMessage:
    """
    Build a doc comment attachment the way the compiler writes it.

    The length is a varint, so text of 128 bytes or more gets a 3+ byte
    prefix. The extractor always drops 2 bytes, and such comments come back
    with the trailing length byte in front of the text.
    """
    payload = text.encode("utf-8")
    return MetadataMessage(
        type_url=MetadataTypeUrl.DOC_COMMENT.value,
        value=bytes([_DOC_COMMENT_TAG]) + _encode_varint(len(payload)) + payload,
    )


def relation_metadata_message(kind: RelationKind | int) -> MetadataMessage:
    """Build a relation-kind attachment; kind 0 is the empty message."""
    value = b"" if kind == 0 else bytes([_RELATION_KIND_TAG]) + _encode_varint(int(kind))
    return MetadataMessage(type_url=MetadataTypeUrl.RELATION_METADATA.value, value=value)


def decode_relation_kind(value: bytes) -> int:
    """
    Read the kind field from a serialized RelationMetadata message.

    Returns 0 (UNKNOWN_KIND) for an empty or unreadable message.
    """
    if not value or value[0] != _RELATION_KIND_TAG:
        return RelationKind.UNKNOWN_KIND
    try:
        return _decode_varint(value, 1)
    except ValueError:
        return RelationKind.UNKNOWN_KIND
