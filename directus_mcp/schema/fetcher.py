"""Schema fetching and projection.

Pulls fields and relations from Directus and folds them into a compact
per-collection field map, applying the size limits from SchemaLimits.
The scan follows the order in which Directus returns the fields, so the
collection and field caps depend on that order.
"""

import logging
from typing import TYPE_CHECKING, Any

from ..system import (
    FILES_COLLECTION,
    REFERENCEABLE_SYSTEM_COLLECTIONS,
    SYSTEM_PREFIX,
    USERS_COLLECTION,
)
from .models import (
    Choice,
    ManyToAnyField,
    PlainField,
    RelationField,
    Schema,
    SchemaField,
    SchemaLimits,
)

if TYPE_CHECKING:
    from ..directus import DirectusClient

logger = logging.getLogger(__name__)

# Relation markers whose field lives on the "one" side (alias fields)
ALIAS_RELATION_MARKERS = ("o2m", "m2m", "files", "m2a")

RelationKey = tuple[str, str]


def strip_none(value: Any) -> Any:
    """Recursively drop None members from dicts and None entries from lists."""
    if isinstance(value, dict):
        return {key: strip_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [strip_none(item) for item in value if item is not None]
    return value


def fallback_schema() -> Schema:
    """Minimal schema returned when the remote schema cannot be fetched."""
    return {
        FILES_COLLECTION: {
            "id": PlainField(type="uuid", primary_key=True),
            "filename_download": PlainField(type="string"),
        },
        USERS_COLLECTION: {
            "id": PlainField(type="uuid", primary_key=True),
            "email": PlainField(type="string"),
        },
    }


def _index_relations(
    relations: list[dict[str, Any]],
) -> tuple[dict[RelationKey, dict], dict[RelationKey, dict]]:
    """Index relations by their many-side and one-side (collection, field)."""
    by_field: dict[RelationKey, dict] = {}
    by_one_field: dict[RelationKey, dict] = {}
    for relation in relations:
        by_field[(relation.get("collection"), relation.get("field"))] = relation
        one_field = (relation.get("meta") or {}).get("one_field")
        if relation.get("related_collection") and one_field:
            by_one_field[(relation["related_collection"], one_field)] = relation
    return by_field, by_one_field


def _is_admissible(
    field: dict[str, Any],
    relation: dict | None,
    admitted: dict[str, int],
    limits: SchemaLimits,
) -> bool:
    collection = field.get("collection", "")
    meta = field.get("meta") or {}

    if collection in limits.exclude_collections:
        return False

    # New collections are blocked once the cap is reached; admitted ones keep growing
    if collection not in admitted and len(admitted) >= limits.max_collections:
        return False

    if admitted.get(collection, 0) >= limits.max_fields_per_collection:
        return False

    if meta.get("system") is True:
        related = relation.get("related_collection") if relation else None
        if related not in REFERENCEABLE_SYSTEM_COLLECTIONS:
            return False

    if collection.startswith(SYSTEM_PREFIX) and collection not in REFERENCEABLE_SYSTEM_COLLECTIONS:
        return False

    # UI-only scaffolding (dividers, notices, groups)
    if field.get("type") == "alias" and "no-data" in (meta.get("special") or []):
        return False

    return True


def _choices(meta: dict[str, Any]) -> tuple[Choice, ...] | None:
    choices = (meta.get("options") or {}).get("choices")
    if not isinstance(choices, list):
        return None
    result = tuple(
        Choice(text=choice.get("text"), value=choice.get("value"))
        for choice in choices
        if isinstance(choice, dict)
    )
    return result or None


def _alias_side_relation(
    field: dict[str, Any],
    by_one_field: dict[RelationKey, dict],
) -> dict | None:
    return by_one_field.get((field.get("collection"), field.get("field")))


def _build_field(
    field: dict[str, Any],
    relation: dict | None,
    by_field: dict[RelationKey, dict],
    by_one_field: dict[RelationKey, dict],
) -> SchemaField:
    meta = field.get("meta") or {}
    column = field.get("schema") or {}
    special = meta.get("special") or []

    common: dict[str, Any] = {
        "type": field.get("type"),
        "interface": meta.get("interface"),
        "primary_key": True if column.get("is_primary_key") is True else None,
        "required": True if meta.get("required") is True else None,
        "note": meta.get("note"),
        "choices": _choices(meta),
    }

    if "m2o" in special or "file" in special:
        relation_type = "file" if "file" in special else "m2o"
    elif "o2m" in special:
        relation_type = "o2m"
    elif "m2m" in special or "files" in special:
        relation_type = "files" if "files" in special else "m2m"
    elif "m2a" in special:
        relation_type = "m2a"
    else:
        return PlainField(**common)

    related: Any = None
    relation_meta: dict | None = None

    if relation is not None:
        relation_meta = strip_none(relation.get("meta"))
        if relation_type == "m2a":
            related = strip_none((relation.get("meta") or {}).get("one_allowed_collections"))
        else:
            related = relation.get("related_collection")
    elif relation_type in ALIAS_RELATION_MARKERS:
        # Alias fields are described by the relation that names them as one_field
        alias_relation = _alias_side_relation(field, by_one_field)
        if alias_relation is not None:
            relation_meta = strip_none(alias_relation.get("meta"))
            if relation_type == "m2a":
                junction_field = (alias_relation.get("meta") or {}).get("junction_field")
                polymorphic = by_field.get((alias_relation.get("collection"), junction_field))
                if polymorphic is not None:
                    related = strip_none(
                        (polymorphic.get("meta") or {}).get("one_allowed_collections")
                    )
            else:
                related = alias_relation.get("collection")

    if relation_type == "m2a":
        return ManyToAnyField(
            **common,
            relation_collection=tuple(related) if related is not None else None,
            relation_meta=relation_meta,
        )

    return RelationField(
        **common,
        relation_type=relation_type,
        relation_collection=related,
        relation_meta=relation_meta,
    )


def build_schema(
    fields: list[dict[str, Any]],
    relations: list[dict[str, Any]],
    limits: SchemaLimits | None = None,
) -> Schema:
    """Project raw Directus field and relation records into a compact Schema.

    Args:
        fields: Records from GET /fields, in API order
        relations: Records from GET /relations
        limits: Size limits (defaults when omitted)

    Returns:
        Schema keyed by collection, then field, in first-encountered order
    """
    limits = limits or SchemaLimits()
    by_field, by_one_field = _index_relations(relations)

    schema: Schema = {}
    admitted: dict[str, int] = {}

    for field in fields:
        collection = field.get("collection", "")
        relation = by_field.get((collection, field.get("field")))

        if not _is_admissible(field, relation, admitted, limits):
            continue

        if collection not in schema:
            schema[collection] = {}
            admitted[collection] = 0
        admitted[collection] += 1

        schema[collection][field["field"]] = _build_field(field, relation, by_field, by_one_field)

    logger.info(
        f"Schema loaded: {len(schema)} collections, {sum(admitted.values())} total fields"
    )
    return schema


async def fetch_schema(client: "DirectusClient", limits: SchemaLimits | None = None) -> Schema:
    """Fetch fields and relations from Directus and build the compact schema.

    Any failure while talking to Directus yields fallback_schema() instead of
    raising, so dependent tools always have a usable schema.
    """
    try:
        fields = await client.read_fields()
        relations = await client.read_relations()
        return build_schema(fields or [], relations or [], limits)
    except Exception as e:
        logger.error(f"Error fetching schema, using fallback schema: {e}", exc_info=True)
        return fallback_schema()
