"""Content sources — the capability the pipeline reads content through."""

from contentmap.source.base import (
    REQUIRED_OPERATIONS,
    ContentSource,
    ItemPage,
    missing_operations,
    validate_source,
)
from contentmap.source.contentful import ContentfulSource

__all__ = [
    "REQUIRED_OPERATIONS",
    "ContentSource",
    "ContentfulSource",
    "ItemPage",
    "missing_operations",
    "validate_source",
]
