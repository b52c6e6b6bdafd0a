"""Compact schema models.

The schema handed to the agent is a short-hand projection of Directus fields
and relations. Each field is one of three variants, keyed by `relation_type`:

- PlainField: no relation
- RelationField: m2o, o2m, m2m, file, files (single related collection)
- ManyToAnyField: m2a (ordered list of allowed related collections)

Absent members are omitted from the rendered JSON to save tokens.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SingleRelationType = Literal["m2o", "o2m", "m2m", "file", "files"]


class SchemaLimits(BaseModel):
    """Size limits applied while projecting the remote schema."""

    model_config = ConfigDict(frozen=True)

    max_collections: int = Field(default=50, ge=0, description="Max distinct collections admitted")
    max_fields_per_collection: int = Field(
        default=100, ge=0, description="Max fields admitted per collection"
    )
    exclude_collections: frozenset[str] = Field(
        default_factory=frozenset, description="Collections skipped entirely"
    )


class Choice(BaseModel):
    """One entry of an interface's enumerated choice list."""

    model_config = ConfigDict(frozen=True)

    text: Any = None
    value: Any = None


class BaseSchemaField(BaseModel):
    """Attributes shared by every field variant."""

    model_config = ConfigDict(frozen=True)

    type: str
    interface: str | None = None
    # Only ever True or absent, never False
    primary_key: Literal[True] | None = None
    required: Literal[True] | None = None
    note: str | None = None
    choices: tuple[Choice, ...] | None = None

    def compact(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class PlainField(BaseSchemaField):
    """A field without relation metadata."""


class RelationField(BaseSchemaField):
    """A relational field pointing at a single collection."""

    relation_type: SingleRelationType
    relation_collection: str | None = None
    relation_meta: dict[str, Any] | None = None


class ManyToAnyField(BaseSchemaField):
    """A polymorphic (many-to-any) relational field."""

    relation_type: Literal["m2a"] = "m2a"
    relation_collection: tuple[str, ...] | None = None
    relation_meta: dict[str, Any] | None = None


SchemaField = PlainField | RelationField | ManyToAnyField

# collection -> field -> SchemaField, in first-encountered order
CollectionSchema = dict[str, SchemaField]
Schema = dict[str, CollectionSchema]


def compact_collection(fields: CollectionSchema) -> dict[str, dict[str, Any]]:
    return {name: field.compact() for name, field in fields.items()}


def compact_schema(schema: Schema) -> dict[str, dict[str, dict[str, Any]]]:
    """Render a schema as plain JSON-ready dicts with absent members omitted."""
    return {collection: compact_collection(fields) for collection, fields in schema.items()}
