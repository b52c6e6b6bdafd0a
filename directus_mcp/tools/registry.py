"""Tool registry.

Lists every tool in the order shown to the agent: cheap discovery tools
first, large or mutating tools later.
"""

from typing import TYPE_CHECKING

from ..models import (
    CountItemsParams,
    CreateCollectionParams,
    CreateFieldParams,
    CreateFlowParams,
    CreateItemParams,
    CreateOperationParams,
    CreateRelationParams,
    DeleteItemParams,
    DeleteRelationParams,
    EmptyParams,
    GetPromptsParams,
    IdParams,
    ItemSummaryParams,
    ReadCollectionSchemaParams,
    ReadCollectionsParams,
    ReadFieldParams,
    ReadFieldsParams,
    ReadFlowsParams,
    ReadItemsParams,
    ReadOperationsParams,
    ReadRelationParams,
    ReadRelationsParams,
    ToolName,
    TriggerFlowParams,
    UpdateFieldParams,
    UpdateFlowParams,
    UpdateItemParams,
    UpdateOperationParams,
    UpdateRelationParams,
    UsersMeParams,
)
from . import collections, fields, flows, items, operations, pagination, prompts, relations, users
from .base import ToolDefinition

if TYPE_CHECKING:
    from ..config import Settings

READ_ONLY = {"readOnlyHint": True}
DESTRUCTIVE = {"destructiveHint": True}

SYSTEM_PROMPT_TOOL = ToolDefinition(
    ToolName.SYSTEM_PROMPT,
    "IMPORTANT! Call this tool first. Returns the system prompt describing how to work with this Directus instance.",
    EmptyParams,
    prompts.handle_system_prompt,
    READ_ONLY,
)

GET_PROMPTS_TOOL = ToolDefinition(
    ToolName.GET_PROMPTS,
    "Read stored prompts from the prompts collection. Optionally filter by name.",
    GetPromptsParams,
    prompts.handle_get_prompts,
    READ_ONLY,
)

TOOLS: list[ToolDefinition] = [
    # Help and guidance
    ToolDefinition(
        ToolName.HELP,
        "Get help on using tools efficiently to minimize token usage.",
        EmptyParams,
        prompts.handle_help,
        READ_ONLY,
    ),
    # Lightweight discovery
    ToolDefinition(
        ToolName.LIST_COLLECTIONS,
        "Get just the list of collection names (lightweight). Use read-collections for full schema.",
        EmptyParams,
        collections.handle_list_collections,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.COUNT_ITEMS,
        "Count items in a collection without fetching data. Use for pagination planning.",
        CountItemsParams,
        pagination.handle_count_items,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.GET_ITEM_SUMMARY,
        "Get a summary of items with minimal data. Returns only essential fields to reduce tokens.",
        ItemSummaryParams,
        pagination.handle_get_item_summary,
        READ_ONLY,
    ),
    # Targeted schema
    ToolDefinition(
        ToolName.READ_COLLECTION_SCHEMA,
        "Get detailed schema for a specific collection only.",
        ReadCollectionSchemaParams,
        collections.handle_read_collection_schema,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_COLLECTIONS,
        "WARNING: Returns full schema (very large). Use list-collections for collection names only, "
        "or read-collection-schema for specific collections.",
        ReadCollectionsParams,
        collections.handle_read_collections,
        READ_ONLY,
    ),
    # Collection management
    ToolDefinition(
        ToolName.CREATE_COLLECTION,
        "Create a new collection or folder. Set is_folder=true to create a folder (no database table), "
        "otherwise creates a regular collection with a database table.",
        CreateCollectionParams,
        collections.handle_create_collection,
    ),
    # Fields
    ToolDefinition(
        ToolName.READ_FIELDS,
        "Read field definitions, optionally for one collection. Use sparingly.",
        ReadFieldsParams,
        fields.handle_read_fields,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_FIELD,
        "Read a single field definition.",
        ReadFieldParams,
        fields.handle_read_field,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.CREATE_FIELD,
        "Create a field in a collection. A default interface is chosen from the field type.",
        CreateFieldParams,
        fields.handle_create_field,
    ),
    ToolDefinition(
        ToolName.UPDATE_FIELD,
        "Update an existing field.",
        UpdateFieldParams,
        fields.handle_update_field,
    ),
    # Relations
    ToolDefinition(
        ToolName.READ_RELATIONS,
        "Retrieve all relations or relations for a specific collection.",
        ReadRelationsParams,
        relations.handle_read_relations,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_RELATION,
        "Retrieve a specific relation by collection and field.",
        ReadRelationParams,
        relations.handle_read_relation,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.CREATE_RELATION,
        "Create a new relation between collections. Use this after creating relational fields. "
        "IMPORTANT: For M2O relations, specify one_field to create the corresponding O2M field "
        "on the parent table (recommended).",
        CreateRelationParams,
        relations.handle_create_relation,
    ),
    ToolDefinition(
        ToolName.UPDATE_RELATION,
        "Update an existing relation between collections.",
        UpdateRelationParams,
        relations.handle_update_relation,
    ),
    ToolDefinition(
        ToolName.DELETE_RELATION,
        "Delete a relation. WARNING: This is destructive and may break existing data relationships.",
        DeleteRelationParams,
        relations.handle_delete_relation,
        DESTRUCTIVE,
    ),
    # Flows
    ToolDefinition(
        ToolName.READ_FLOWS,
        "Fetch flows. By default returns all flows. Optionally filter by trigger type.",
        ReadFlowsParams,
        flows.handle_read_flows,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_FLOW,
        "Retrieve a specific flow by ID.",
        IdParams,
        flows.handle_read_flow,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.CREATE_FLOW,
        "Create a new automation flow.",
        CreateFlowParams,
        flows.handle_create_flow,
    ),
    ToolDefinition(
        ToolName.UPDATE_FLOW,
        "Update an existing flow. Use this to link the first operation to the flow after creating it.",
        UpdateFlowParams,
        flows.handle_update_flow,
    ),
    ToolDefinition(
        ToolName.DELETE_FLOW,
        "Delete a flow. WARNING: This is destructive.",
        IdParams,
        flows.handle_delete_flow,
        DESTRUCTIVE,
    ),
    ToolDefinition(
        ToolName.TRIGGER_FLOW,
        "Trigger a flow by ID. Call read-flows first and pass the FULL flow definition. "
        "Provide keys when the flow requires selection and all required data fields.",
        TriggerFlowParams,
        flows.handle_trigger_flow,
    ),
    # Operations
    ToolDefinition(
        ToolName.READ_OPERATIONS,
        "Read all operations or filter by flow ID.",
        ReadOperationsParams,
        operations.handle_read_operations,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_OPERATION,
        "Read a specific operation by ID.",
        IdParams,
        operations.handle_read_operation,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.CREATE_OPERATION,
        "Create a new operation within a flow. Operations are the steps executed in a flow.",
        CreateOperationParams,
        operations.handle_create_operation,
    ),
    ToolDefinition(
        ToolName.UPDATE_OPERATION,
        "Update an existing operation.",
        UpdateOperationParams,
        operations.handle_update_operation,
    ),
    ToolDefinition(
        ToolName.DELETE_OPERATION,
        "Delete an operation. WARNING: This is destructive.",
        IdParams,
        operations.handle_delete_operation,
        DESTRUCTIVE,
    ),
    # Users and items
    ToolDefinition(
        ToolName.USERS_ME,
        "Get the current user.",
        UsersMeParams,
        users.handle_users_me,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.READ_ITEMS,
        "Fetch items from a collection. IMPORTANT: use 'limit' (default 5) and 'fields' to keep "
        "responses small; paginate with 'offset'.",
        ReadItemsParams,
        items.handle_read_items,
        READ_ONLY,
    ),
    ToolDefinition(
        ToolName.CREATE_ITEM,
        "Create an item in a collection. Returns a link to the created item; show it to the user.",
        CreateItemParams,
        items.handle_create_item,
    ),
    ToolDefinition(
        ToolName.UPDATE_ITEM,
        "Update an existing item in a collection. Returns a link to the item; show it to the user.",
        UpdateItemParams,
        items.handle_update_item,
        DESTRUCTIVE,
    ),
    ToolDefinition(
        ToolName.DELETE_ITEM,
        "Delete a single item from a collection. Confirm with the user before deleting.",
        DeleteItemParams,
        items.handle_delete_item,
        DESTRUCTIVE,
    ),
]


def get_tools(settings: "Settings") -> list[ToolDefinition]:
    """Tools available under the given settings (optional tools added, disabled ones dropped)."""
    tool_list: list[ToolDefinition] = []
    if settings.mcp_system_prompt_enabled:
        tool_list.append(SYSTEM_PROMPT_TOOL)
    tool_list.extend(TOOLS)
    if settings.directus_prompts_collection_enabled:
        tool_list.append(GET_PROMPTS_TOOL)

    disabled = set(settings.disabled_tools_list)
    return [tool for tool in tool_list if tool.name not in disabled]
