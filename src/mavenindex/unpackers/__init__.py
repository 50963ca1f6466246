"""Documentation archive unpacking."""

from mavenindex.unpackers.html_patch import insert_head_link, patch_pages
from mavenindex.unpackers.javadoc_unpacker import (
    ExtractionTargetError,
    JavadocUnpacker,
    is_documentation_archive,
)

__all__ = [
    "ExtractionTargetError",
    "JavadocUnpacker",
    "insert_head_link",
    "is_documentation_archive",
    "patch_pages",
]
