"""
Doc comment extraction from metadata attachments.

The compiler stores each doc comment as a DocComment message attached to the
element's metadata. The text still carries its comment syntax, which is
stripped here so the document holds plain prose.
"""

import re

from spice2json.domain.compiled import Metadata
from spice2json.domain.enums import MetadataTypeUrl

# Length-delimited wire prefix in front of the comment text
DOC_COMMENT_PREFIX_BYTES = 2

# Openers `/**`, `/*`, `//`; mid-line ` * `; closers `*/`, `**/`
COMMENT_DECORATION = re.compile(r"(/\*{1,2} ?|// ?| ?\* | ?\*{1,2}/)")


def strip_comment_decoration(text: str) -> str:
    """
    Remove comment syntax from a single comment.

    Example:
        >>> strip_comment_decoration("/** Hello\\n * World */")
        'Hello\\nWorld'
    """
    return COMMENT_DECORATION.sub("", text)


def get_metadata_comments(metadata: Metadata | None) -> str:
    """
    Collect the doc comments attached to a schema element.

    Every DocComment attachment contributes one entry, in attachment order,
    joined by newlines. Other attachments are ignored.

    Args:
        metadata: The element's metadata bag (may be None)

    Returns:
        Normalized comment text, or "" if the element has no doc comment
    """
    if metadata is None:
        return ""

    comments = [
        strip_comment_decoration(
            message.value[DOC_COMMENT_PREFIX_BYTES:].decode("utf-8", errors="replace")
        )
        for message in metadata.metadata_message
        if message.type_url == MetadataTypeUrl.DOC_COMMENT.value
    ]
    return "\n".join(comments).strip()
