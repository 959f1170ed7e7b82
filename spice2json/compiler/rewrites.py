"""
Permission rewrite-tree mapping.

A permission's rewrite rule is a set-algebra tree: union, intersection or
exclusion over operands that are either a sibling relation (`viewer`), an
arrow through another relation (`parent->view`) or a nested rule.

The exported tree mirrors the input exactly:
- Operator and branching factor are preserved at every level
- Child order is preserved (exclusion subtracts every child after the first)
- Nothing is flattened, deduplicated or simplified
"""

import logging

from spice2json.domain.compiled import SetOperationChild, UsersetRewrite
from spice2json.domain.document import UserSet
from spice2json.domain.enums import SetOperation

logger = logging.getLogger(__name__)


def map_userset(rewrite: UsersetRewrite | None) -> UserSet | None:
    """
    Map a rewrite rule to an operator node.

    Args:
        rewrite: The permission's rewrite rule

    Returns:
        Operator UserSet, or None if no operator is populated

    Example:
        `permission view = viewer + parent->view` maps to
        {"operation": "union", "children": [
            {"relation": "viewer"},
            {"relation": "parent", "permission": "view"}]}
    """
    if rewrite is None:
        return None

    if rewrite.union is not None:
        return UserSet.operator(SetOperation.UNION, map_userset_children(rewrite.union.child))

    if rewrite.intersection is not None:
        return UserSet.operator(
            SetOperation.INTERSECTION, map_userset_children(rewrite.intersection.child)
        )

    if rewrite.exclusion is not None:
        return UserSet.operator(
            SetOperation.EXCLUSION, map_userset_children(rewrite.exclusion.child)
        )

    return None


def map_userset_children(children: tuple[SetOperationChild, ...]) -> list[UserSet]:
    """
    Map the operands of a set operation, preserving order.

    Operands with no recognized shape (and nested rules with no operator)
    are dropped.
    """
    sets: list[UserSet] = []
    for index, child in enumerate(children):
        mapped = _map_child(child)
        if mapped is None:
            logger.debug("Dropping rewrite operand %d with no recognized shape", index)
            continue
        sets.append(mapped)
    return sets


def _map_child(child: SetOperationChild) -> UserSet | None:
    if child.computed_userset is not None:
        return UserSet.leaf(child.computed_userset.relation)

    if child.tuple_to_userset is not None:
        arrow = child.tuple_to_userset
        return UserSet.leaf(arrow.tupleset.relation, arrow.computed_userset.relation)

    if child.userset_rewrite is not None:
        return map_userset(child.userset_rewrite)

    return None
