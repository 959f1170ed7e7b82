"""
Compiled schema to JSON document exporter.

This package maps a compiled authorization schema (object definitions,
relations, permissions, caveats) into the exported document model.

Key Components:
- exporter: Entry point, maps a whole schema into a Document
- definitions: Namespace splitting and relation/permission partitioning
- relations: Relations, allowed subject types and permissions
- rewrites: Recursive mapping of permission rewrite trees
- caveats: Caveat parameters
- comments: Doc comment extraction from metadata
- canonicalizer: Deterministic JSON text output

Design Principles:
- Fidelity: rewrite trees are reproduced as written, never simplified
- Determinism: same input produces byte-for-byte identical output
- All-or-nothing: a definition that cannot be classified aborts the export
"""

from spice2json.compiler.canonicalizer import canonicalize_json, to_json_pretty, to_json_string
from spice2json.compiler.exporter import export_schema

__all__ = [
    "export_schema",
    "canonicalize_json",
    "to_json_string",
    "to_json_pretty",
]
