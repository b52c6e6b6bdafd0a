"""Guidance tools: usage guide, system prompt and prompts collection."""

from typing import Any

from ..models import EmptyParams, GetPromptsParams
from .base import ToolContext, ToolResult, format_success

HELP_GUIDE = """
TOKEN-EFFICIENT DIRECTUS WORKFLOW:

1. DISCOVER (lightweight, ~50 tokens each):
   - list-collections: collection names
   - count-items: item count without fetching data

2. EXPLORE (targeted, ~200-500 tokens each):
   - get-item-summary: minimal data with essential fields only
   - read-collection-schema: schema of one collection

3. QUERY (use limits):
   - read-items: default limit is 5 items
   - pass 'fields' to return only needed columns
   - pass 'offset' to paginate

4. AVOID (token-heavy):
   - read-collections without filters
   - read-items without limit

BEST PRACTICES:
- Call list-collections first to find collection names
- Use count-items to plan pagination
- Keep limits under 10-20 items per call
"""

DEFAULT_SYSTEM_PROMPT = """
# Role
You manage a Directus CMS through MCP tools. Keep data intact and spend tokens carefully.

# Discovery
- Start with list-collections, then read-collection-schema for the collections you need.
- Use read-collections only with the 'collections' filter or fields_only=true.
- Always pass 'limit' and 'fields' to read-items.

# Safety
- Verify fields and types against the schema before creating or updating items.
- Ask for explicit confirmation before deletions, bulk updates (more than 10 items) and schema changes.
- System collections (directus_*) are read-only unless ALLOW_SYSTEM_MODIFICATIONS=true.
- If you are not sure about a field value, ask the user instead of guessing.

# Content
- Rich text must be plain semantic HTML without custom styles or classes.

# Errors
- Read the error message, use the discovery tools to find the cause, then retry with a corrected call.
- Report clearly whether an operation succeeded, partially succeeded or failed.
"""


async def handle_help(params: EmptyParams, ctx: ToolContext) -> ToolResult:
    return ToolResult(text=HELP_GUIDE.strip())


async def handle_system_prompt(params: EmptyParams, ctx: ToolContext) -> ToolResult:
    prompt = ctx.settings.mcp_system_prompt or DEFAULT_SYSTEM_PROMPT
    return ToolResult(text=prompt.strip())


async def handle_get_prompts(params: GetPromptsParams, ctx: ToolContext) -> ToolResult:
    query: dict[str, Any] = {"limit": -1}
    if params.name:
        query["filter"] = {"name": {"_eq": params.name}}
    prompts = await ctx.client.read_items(ctx.settings.directus_prompts_collection, query)
    return format_success(prompts)
