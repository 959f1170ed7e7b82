"""
Deterministic JSON serialization of exported documents.

The same compiled schema always produces byte-for-byte identical output,
so exported documents can be diffed and hashed:
- Object keys follow the document model's declared field order
- Optionally, keys are sorted at every level (fully canonical form)
- Array order is never changed (rewrite operand order is significant)
"""

import json
from typing import Any

from spice2json.domain.document import DocumentModel


def canonicalize_json(obj: Any) -> dict | list | Any:
    """
    Produce a representation with dictionary keys sorted at every level.

    Example:
        >>> canonicalize_json({"z": 1, "a": {"c": 2, "b": 3}})
        {'a': {'b': 3, 'c': 2}, 'z': 1}

    Note:
        Arrays keep their input order.
    """
    if isinstance(obj, dict):
        return {k: canonicalize_json(v) for k, v in sorted(obj.items())}

    elif isinstance(obj, list):
        return [canonicalize_json(item) for item in obj]

    else:
        # Primitives (str, int, float, bool, None) pass through unchanged
        return obj


def to_json_string(
    document: DocumentModel | dict[str, Any], indent: int = 0, sort_keys: bool = False
) -> str:
    """
    Serialize a document (or its JSON dict) to text.

    Args:
        document: Document model or an already-built JSON dict
        indent: Spaces per level; 0 gives compact single-line output
        sort_keys: Sort keys at every level instead of model field order

    Returns:
        JSON text; non-ASCII characters are written as-is

    Example:
        >>> to_json_string({"definitions": [{"name": "user"}]})
        '{"definitions":[{"name":"user"}]}'
    """
    data = document.to_json_dict() if isinstance(document, DocumentModel) else document
    if sort_keys:
        data = canonicalize_json(data)

    if indent:
        return json.dumps(data, indent=indent, ensure_ascii=False)

    # separators=(',', ':') removes spaces after commas and colons
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def to_json_pretty(document: DocumentModel | dict[str, Any], sort_keys: bool = False) -> str:
    """
    Serialize a document with 2-space indentation for human review.

    Example:
        >>> print(to_json_pretty({"definitions": []}))
        {
          "definitions": []
        }
    """
    return to_json_string(document, indent=2, sort_keys=sort_keys)
