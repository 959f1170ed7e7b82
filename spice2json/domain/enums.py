"""
Domain enums for the compiled schema and the exported document.

Values on the input side match the schema compiler's wire values so that
metadata attachments can be decoded without a lookup table.
"""

from enum import Enum, IntEnum


class RelationKind(IntEnum):
    """Kind recorded in a relation's metadata - matches impl.v1.RelationMetadata.RelationKind."""

    UNKNOWN_KIND = 0
    RELATION = 1
    PERMISSION = 2


class SetOperation(str, Enum):
    """
    Operators of a permission rewrite rule.
    The value is the `operation` string written to the document.
    """

    UNION = "union"
    INTERSECTION = "intersection"
    EXCLUSION = "exclusion"


class MetadataTypeUrl(str, Enum):
    """Type URLs of the metadata attachments this exporter understands."""

    DOC_COMMENT = "type.googleapis.com/impl.v1.DocComment"
    RELATION_METADATA = "type.googleapis.com/impl.v1.RelationMetadata"


# Subject relation name the compiler uses for "the object itself"
SELF_RELATION = "..."

# Relation written for a public wildcard subject (e.g. `user:*`)
WILDCARD_RELATION = "*"

# Separator between namespace and local name in a definition name
NAMESPACE_SEPARATOR = "/"
