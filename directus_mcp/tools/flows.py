"""Flow tool handlers.

Manual trigger options (flow.options):
- collections: Collections that can trigger the flow
- location: "both" | "collection" | "item"
- requireSelection: Whether item selection is required (default true)
- async: Run the flow asynchronously
- requireConfirmation / confirmationDescription: Confirmation dialog
- fields: Input fields collected in the confirmation dialog
"""

from typing import Any

from ..exceptions import ToolInputError
from ..models import CreateFlowParams, IdParams, ReadFlowsParams, TriggerFlowParams, UpdateFlowParams
from .base import ToolContext, ToolResult, format_success


async def handle_read_flows(params: ReadFlowsParams, ctx: ToolContext) -> ToolResult:
    query: dict[str, Any] = {}
    if params.trigger:
        query["filter"] = {"trigger": {"_eq": params.trigger.value}}
    flows = await ctx.client.read_flows(query)
    return format_success(flows)


async def handle_read_flow(params: IdParams, ctx: ToolContext) -> ToolResult:
    flow = await ctx.client.read_flow(params.id)
    return format_success(flow)


async def handle_create_flow(params: CreateFlowParams, ctx: ToolContext) -> ToolResult:
    data = params.model_dump(mode="json", exclude_none=True)
    result = await ctx.client.create_flow(data)
    return format_success(result, f'Flow "{params.name}" created successfully.')


async def handle_update_flow(params: UpdateFlowParams, ctx: ToolContext) -> ToolResult:
    data = params.data.model_dump(mode="json", exclude_none=True)
    result = await ctx.client.update_flow(params.id, data)
    return format_success(result, f'Flow "{params.id}" updated successfully.')


async def handle_delete_flow(params: IdParams, ctx: ToolContext) -> ToolResult:
    await ctx.client.delete_flow(params.id)
    return format_success(None, f'Flow "{params.id}" deleted successfully.')


def validate_trigger(params: TriggerFlowParams) -> None:
    """Check a trigger request against the flow definition the agent read.

    Raises:
        ToolInputError: on ID mismatch, disallowed collection, missing
            selection or missing required data fields
    """
    definition = params.flow_definition
    options = definition.get("options") or {}

    if definition.get("id") != params.flow_id:
        raise ToolInputError(
            f"Flow ID mismatch: provided {params.flow_id} but definition has {definition.get('id')}"
        )

    collections = options.get("collections") or []
    if params.collection not in collections:
        raise ToolInputError(
            f'Invalid collection "{params.collection}". '
            f"This flow only supports: {', '.join(collections)}"
        )

    if options.get("requireSelection") is not False and not params.keys:
        raise ToolInputError(
            "This flow requires selecting at least one item, but no keys were provided"
        )

    required = [
        field.get("field")
        for field in options.get("fields") or []
        if (field.get("meta") or {}).get("required")
    ]
    for name in required:
        if not params.data or name not in params.data:
            raise ToolInputError(f"Missing required field: {name}")


async def handle_trigger_flow(params: TriggerFlowParams, ctx: ToolContext) -> ToolResult:
    validate_trigger(params)
    payload = {**(params.data or {}), "collection": params.collection, "keys": params.keys}
    result = await ctx.client.trigger_flow(params.flow_id, payload)
    return format_success(result)
