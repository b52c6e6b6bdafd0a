"""Current user tool handler."""

from ..models import UsersMeParams
from .base import ToolContext, ToolResult, format_success


async def handle_users_me(params: UsersMeParams, ctx: ToolContext) -> ToolResult:
    me = await ctx.client.read_me(params.fields)
    return format_success(me)
