"""Relation tool handlers.

Relation changes alter the relation metadata projected into the schema, so
create/update/delete invalidate the schema cache.
"""

from typing import Any

from ..models import (
    CreateRelationParams,
    DeleteRelationParams,
    ReadRelationParams,
    ReadRelationsParams,
    UpdateRelationParams,
)
from .base import ToolContext, ToolResult, format_success


def _involves(relation: dict[str, Any], collection: str) -> bool:
    return collection in (
        relation.get("collection"),
        relation.get("related_collection"),
        relation.get("many_collection"),
        relation.get("one_collection"),
    )


async def handle_read_relations(params: ReadRelationsParams, ctx: ToolContext) -> ToolResult:
    relations = await ctx.client.read_relations()
    if params.collection:
        relations = [rel for rel in relations if _involves(rel, params.collection)]
    return format_success(relations)


async def handle_read_relation(params: ReadRelationParams, ctx: ToolContext) -> ToolResult:
    relation = await ctx.client.read_relation(params.collection, params.field)
    return format_success(relation)


async def handle_create_relation(params: CreateRelationParams, ctx: ToolContext) -> ToolResult:
    """Create a relation; the optional one_field becomes the O2M alias on the parent."""
    data: dict[str, Any] = {
        "collection": params.many_collection,
        "field": params.many_field,
        "related_collection": params.one_collection,
    }

    meta: dict[str, Any] = {
        "one_field": params.one_field,
        "one_collection_field": params.one_collection_field,
        "one_allowed_collections": params.one_allowed_collections,
        "junction_field": params.junction_field,
        "sort_field": params.sort_field,
        "one_deselect_action": params.one_deselect_action.value,
    }
    meta = {key: value for key, value in meta.items() if value is not None}
    if params.meta:
        meta.update(params.meta.model_dump(exclude_none=True))
    if meta:
        data["meta"] = meta

    result = await ctx.client.create_relation(data)
    ctx.schema.invalidate()

    message = (
        f"Relation created: {params.many_collection}.{params.many_field} -> "
        f"{params.one_collection or 'any'}"
    )
    if params.one_field:
        message += f"\nO2M field created on parent: {params.one_collection}.{params.one_field}"
    elif params.one_collection:
        message += (
            "\nNote: No O2M field created on parent table. "
            "To add it later, update the relation with one_field parameter."
        )
    return format_success(result, message)


async def handle_update_relation(params: UpdateRelationParams, ctx: ToolContext) -> ToolResult:
    data = params.data.model_dump(mode="json", exclude_none=True)
    result = await ctx.client.update_relation(params.collection, params.field, data)
    ctx.schema.invalidate()
    return format_success(result, f"Relation updated: {params.collection}.{params.field}")


async def handle_delete_relation(params: DeleteRelationParams, ctx: ToolContext) -> ToolResult:
    await ctx.client.delete_relation(params.collection, params.field)
    ctx.schema.invalidate()
    return format_success(None, f"Relation deleted: {params.collection}.{params.field}")
