"""
Relation, permission and allowed-type mapping.

A compiled relation is either a storage relation (`relation viewer: user`),
exported with its allowed subject types, or a permission
(`permission view = viewer`), exported with its rewrite tree.
"""

from spice2json.compiler.comments import get_metadata_comments
from spice2json.compiler.rewrites import map_userset
from spice2json.domain import compiled
from spice2json.domain.document import Permission, Relation, RelationType
from spice2json.domain.enums import SELF_RELATION, WILDCARD_RELATION


def map_relation_type(allowed: compiled.AllowedRelation) -> RelationType:
    """
    Map one allowed subject type.

    `user` -> relation "", `group#member` -> "member", `user:*` -> "*".
    A required caveat (`user with ip_allowed`) is carried by name.
    """
    if allowed.relation is None:
        relation = WILDCARD_RELATION
    elif allowed.relation == SELF_RELATION:
        relation = ""
    else:
        relation = allowed.relation

    caveat = allowed.required_caveat.caveat_name if allowed.required_caveat else ""

    return RelationType(type=allowed.namespace, relation=relation, caveat=caveat)


def map_relation(relation: compiled.Relation) -> Relation:
    type_information = relation.type_information
    allowed = type_information.allowed_direct_relations if type_information else ()
    return Relation(
        name=relation.name,
        types=tuple(map_relation_type(t) for t in allowed),
        comment=get_metadata_comments(relation.metadata),
    )


def map_permission(relation: compiled.Relation) -> Permission:
    return Permission(
        name=relation.name,
        user_set=map_userset(relation.userset_rewrite),
        comment=get_metadata_comments(relation.metadata),
    )
