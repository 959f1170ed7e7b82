"""
Exceptions for the schema exporter.

Mapping of a well-formed compiled schema is total except for relation
classification; these exceptions carry enough context for the CLI to
report which definition or input was at fault.
"""

from typing import Any


class Spice2JsonError(Exception):
    """Base exception for all exporter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ClassificationError(Spice2JsonError):
    """
    Raised when a relation is neither a storage relation nor a permission.

    Examples:
    - RelationMetadata attachment missing from the relation
    - RelationMetadata kind is UNKNOWN_KIND or an unrecognized value

    Exit code: 1
    """

    pass


class SchemaExportError(Spice2JsonError):
    """
    Raised when a definition cannot be exported.

    Wraps the underlying error (chained as __cause__) and names the
    offending definition. No partial document is produced.

    Exit code: 1
    """

    pass


class SchemaInputError(Spice2JsonError):
    """
    Raised when the compiled schema input cannot be loaded.

    Examples:
    - Input file is not valid JSON
    - Required fields missing from a definition or relation
    - Metadata value is not valid base64

    Exit code: 2
    """

    pass


# CLI exit code mapping
ERROR_EXIT_CODE_MAP = {
    ClassificationError: 1,
    SchemaExportError: 1,
    SchemaInputError: 2,
}


def get_exit_code(error: Exception) -> int:
    """
    Get the process exit code for a given exception.

    Args:
        error: The exception instance

    Returns:
        Exit code (defaults to 1 for unknown errors)
    """
    return ERROR_EXIT_CODE_MAP.get(type(error), 1)
