"""Shared type definitions for contentmap."""

from collections.abc import Callable, Mapping
from typing import Any

# Content item fetched from the backend (mapping or attribute object)
type ContentItem = Any

# Dotted field path into a content item (e.g., "sys.updatedAt")
type FieldPath = str

# Named URL parameters extracted for one item and one template
type ParameterSet = dict[str, Any]

# Query mapping forwarded to the content source
type Query = Mapping[str, Any]

# Compiled URL builder: parameters in, URL path out
type UrlBuilder = Callable[[Mapping[str, Any]], str]
