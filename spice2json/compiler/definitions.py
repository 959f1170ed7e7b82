"""
Object definition mapping.

Splits the qualified definition name into namespace and local name,
partitions the definition's relations into storage relations and
permissions, and attaches the definition's doc comment.

This is the only mapping step that can fail: a relation whose kind is
neither RELATION nor PERMISSION raises ClassificationError.
"""

import logging
from collections.abc import Callable

from spice2json.compiler.comments import get_metadata_comments
from spice2json.compiler.relations import map_permission, map_relation
from spice2json.core.errors import ClassificationError
from spice2json.domain import compiled
from spice2json.domain.document import Definition, Permission, Relation
from spice2json.domain.enums import NAMESPACE_SEPARATOR, MetadataTypeUrl, RelationKind

logger = logging.getLogger(__name__)

RelationClassifier = Callable[[compiled.Relation], int]


def get_relation_kind(relation: compiled.Relation) -> int:
    """
    Read the kind the compiler recorded for a relation.

    Returns:
        RelationKind value; UNKNOWN_KIND if no RelationMetadata is attached
    """
    if relation.metadata is None:
        return RelationKind.UNKNOWN_KIND

    for message in relation.metadata.metadata_message:
        if message.type_url == MetadataTypeUrl.RELATION_METADATA.value:
            return compiled.decode_relation_kind(message.value)

    return RelationKind.UNKNOWN_KIND


def split_definition_name(qualified_name: str) -> tuple[str, str]:
    """
    Split a definition name on the first separator.

    Examples:
        >>> split_definition_name("acme/document")
        ('acme', 'document')
        >>> split_definition_name("document")
        ('', 'document')
        >>> split_definition_name("acme/docs/page")
        ('acme', 'docs/page')
    """
    namespace, separator, name = qualified_name.partition(NAMESPACE_SEPARATOR)
    if not separator:
        return "", qualified_name
    return namespace, name


def map_definition(
    definition: compiled.NamespaceDefinition,
    classify: RelationClassifier = get_relation_kind,
) -> Definition:
    """
    Map an object definition.

    Args:
        definition: Compiled object definition
        classify: Returns the RelationKind of a relation

    Returns:
        Definition with relations and permissions in source order

    Raises:
        ClassificationError: If any relation is neither a relation nor a permission
    """
    relations: list[Relation] = []
    permissions: list[Permission] = []

    for relation in definition.relation:
        kind = classify(relation)
        if kind == RelationKind.PERMISSION:
            permissions.append(map_permission(relation))
        elif kind == RelationKind.RELATION:
            relations.append(map_relation(relation))
        else:
            raise ClassificationError(
                f'unexpected relation "{relation.name}", neither permission nor relation',
                details={"relation": relation.name, "kind": int(kind)},
            )

    namespace, name = split_definition_name(definition.name)

    logger.debug(
        "Mapped definition %s: %d relations, %d permissions",
        definition.name,
        len(relations),
        len(permissions),
    )

    return Definition(
        name=name,
        namespace=namespace,
        relations=tuple(relations),
        permissions=tuple(permissions),
        comment=get_metadata_comments(definition.metadata),
    )
