"""Collection and schema tool handlers.

Handles:
- list-collections: Collection names only (lightweight)
- read-collection-schema: Schema of a single collection
- read-collections: Full or filtered schema (large)
- create-collection: Create a collection or folder
"""

import logging
from typing import Any

from ..exceptions import ToolInputError
from ..models import CreateCollectionParams, EmptyParams, ReadCollectionSchemaParams, ReadCollectionsParams
from ..schema import compact_collection, compact_schema
from .base import ToolContext, ToolResult, format_success, to_json

logger = logging.getLogger(__name__)

# Interface used when a field is created without one
DEFAULT_INTERFACES: dict[str, str] = {
    "m2o": "select-dropdown-m2o",
    "o2m": "list-o2m",
    "m2m": "list-m2m",
    "string": "input",
    "text": "input-multiline",
    "integer": "input",
    "bigInteger": "input",
    "float": "input",
    "decimal": "input",
    "boolean": "boolean",
    "date": "datetime",
    "dateTime": "datetime",
    "time": "input",
    "timestamp": "datetime",
    "json": "input-code",
    "uuid": "input",
}

# Dashboard defaults applied under any user-provided field meta
DEFAULT_FIELD_META: dict[str, Any] = {
    "display": None,
    "display_options": None,
    "readonly": False,
    "hidden": False,
    "width": "full",
    "required": False,
}

AUTO_INCREMENT_ID_FIELD: dict[str, Any] = {
    "field": "id",
    "type": "integer",
    "schema": {
        "is_primary_key": True,
        "has_auto_increment": True,
        "is_nullable": False,
    },
    "meta": {
        "interface": "input",
        "display": None,
        "display_options": None,
        "readonly": True,
        "hidden": True,
        "width": "full",
        "required": False,
        "special": ["auto-increment"],
    },
}


def with_field_defaults(field: dict[str, Any]) -> dict[str, Any]:
    """Fill in interface and dashboard meta defaults for a field payload."""
    meta = field.get("meta") or {}
    interface = meta.get("interface") or DEFAULT_INTERFACES.get(field.get("type", ""))
    return {
        **field,
        "meta": {"interface": interface, **DEFAULT_FIELD_META, **meta},
    }


async def handle_list_collections(params: EmptyParams, ctx: ToolContext) -> ToolResult:
    schema = await ctx.schema.get_schema()
    collections = list(schema)
    return ToolResult(text=f"Available collections ({len(collections)}): {', '.join(collections)}")


async def handle_read_collection_schema(
    params: ReadCollectionSchemaParams, ctx: ToolContext
) -> ToolResult:
    fields = await ctx.schema.get_collection_schema(params.collection)
    payload = {params.collection: compact_collection(fields)}
    return ToolResult(text=f'Schema for "{params.collection}":\n{to_json(payload)}')


async def handle_read_collections(params: ReadCollectionsParams, ctx: ToolContext) -> ToolResult:
    """Return the full schema, optionally narrowed to collections or field names."""
    schema = await ctx.schema.get_schema()

    if params.collections:
        schema = {name: schema[name] for name in params.collections if name in schema}

    if params.fields_only:
        payload: dict[str, Any] = {name: list(fields) for name, fields in schema.items()}
    else:
        payload = compact_schema(schema)

    return ToolResult(text=f"Schema ({len(payload)} collections):\n{to_json(payload)}")


async def handle_create_collection(params: CreateCollectionParams, ctx: ToolContext) -> ToolResult:
    """Create a collection (with database table) or a folder (metadata only).

    Regular collections always get a primary key: an auto-increment integer
    `id` is prepended when none of the given fields is one.
    """
    if params.is_folder and params.fields:
        raise ToolInputError(
            "Cannot create fields with a folder. Folders are metadata-only and have no database table."
        )

    data: dict[str, Any] = {"collection": params.collection}
    if params.meta:
        data["meta"] = params.meta.model_dump(mode="json", exclude_none=True)

    if params.is_folder:
        data["schema"] = None
        result = await ctx.client.create_collection(data)
        ctx.schema.invalidate()
        return format_success(result, f'Folder "{params.collection}" created successfully.')

    if params.schema_:
        data["schema"] = params.schema_.model_dump(exclude_none=True)
    else:
        data["schema"] = {"name": params.collection}

    fields = [
        field.model_dump(by_alias=True, exclude_none=True) for field in params.fields or []
    ]
    has_primary_key = any(
        (field.get("schema") or {}).get("is_primary_key") or field["field"] == "id"
        for field in fields
    )
    if not has_primary_key:
        fields = [AUTO_INCREMENT_ID_FIELD, *fields]

    data["fields"] = [with_field_defaults(field) for field in fields]

    result = await ctx.client.create_collection(data)
    ctx.schema.invalidate()

    logger.info(f"Created collection {params.collection} with {len(data['fields'])} fields")
    return format_success(
        result,
        f'Collection "{params.collection}" created successfully with {len(data["fields"])} fields.',
    )
