"""Operation tool handlers (the steps executed inside a flow)."""

from ..models import CreateOperationParams, IdParams, ReadOperationsParams, UpdateOperationParams
from .base import ToolContext, ToolResult, format_success


async def handle_read_operations(params: ReadOperationsParams, ctx: ToolContext) -> ToolResult:
    query = {"filter": {"flow": {"_eq": params.flow_id}}} if params.flow_id else {}
    operations = await ctx.client.read_operations(query)
    return format_success(operations)


async def handle_read_operation(params: IdParams, ctx: ToolContext) -> ToolResult:
    operation = await ctx.client.read_operation(params.id)
    return format_success(operation)


async def handle_create_operation(params: CreateOperationParams, ctx: ToolContext) -> ToolResult:
    data = params.model_dump(exclude_none=True)
    result = await ctx.client.create_operation(data)
    return format_success(
        result, f'Operation "{params.key}" ({params.type}) created in flow {params.flow}.'
    )


async def handle_update_operation(params: UpdateOperationParams, ctx: ToolContext) -> ToolResult:
    data = params.data.model_dump(exclude_none=True)
    result = await ctx.client.update_operation(params.id, data)
    return format_success(result, f"Operation {params.id} updated successfully.")


async def handle_delete_operation(params: IdParams, ctx: ToolContext) -> ToolResult:
    await ctx.client.delete_operation(params.id)
    return format_success(None, f"Operation {params.id} deleted successfully.")
