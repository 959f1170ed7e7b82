"""
spice2json - export compiled authorization schemas as JSON documents.

Example:
    >>> from spice2json.compiler import export_schema, to_json_pretty
    >>> from spice2json.domain.compiled import load_compiled_schema
    >>> schema = load_compiled_schema(open("schema.json").read())
    >>> print(to_json_pretty(export_schema(schema)))
"""

__version__ = "0.1.0"
