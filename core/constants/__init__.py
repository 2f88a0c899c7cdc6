"""
Constants Package - Layout constants cua document dau ra.
"""

from core.constants.output_format import (
    BLOCK_DELIMITER,
    LINE_NUMBER_SEPARATOR,
    SECTION_SEPARATOR,
    TREE_BRANCH,
    TREE_INDENT,
    TREE_ROOT_MARKER,
    UNREADABLE_PLACEHOLDER,
)

__all__ = [
    "BLOCK_DELIMITER",
    "LINE_NUMBER_SEPARATOR",
    "SECTION_SEPARATOR",
    "TREE_BRANCH",
    "TREE_INDENT",
    "TREE_ROOT_MARKER",
    "UNREADABLE_PLACEHOLDER",
]
