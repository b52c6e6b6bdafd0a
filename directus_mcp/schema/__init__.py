"""Schema projection and caching.

- models: compact field variants and size limits
- fetcher: remote fetch and projection into the compact schema
- cache: lazy, coalescing single-slot cache with invalidation
"""

from .cache import SchemaCache
from .fetcher import build_schema, fallback_schema, fetch_schema, strip_none
from .models import (
    Choice,
    CollectionSchema,
    ManyToAnyField,
    PlainField,
    RelationField,
    Schema,
    SchemaField,
    SchemaLimits,
    compact_collection,
    compact_schema,
)

__all__ = [
    # Models
    "Choice",
    "CollectionSchema",
    "ManyToAnyField",
    "PlainField",
    "RelationField",
    "Schema",
    "SchemaField",
    "SchemaLimits",
    "compact_collection",
    "compact_schema",
    # Fetcher
    "build_schema",
    "fallback_schema",
    "fetch_schema",
    "strip_none",
    # Cache
    "SchemaCache",
]
