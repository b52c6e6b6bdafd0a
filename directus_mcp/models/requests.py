"""Request models (Pydantic *Params classes) for Directus MCP tools."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import Accountability, DeselectAction, FlowStatus, FlowTrigger


class EmptyParams(BaseModel):
    """Tools that take no arguments."""


class SimpleItemQuery(BaseModel):
    """Simplified Directus query parameters."""

    fields: list[str] | None = Field(default=None, description="Fields to return")
    filter: dict[str, Any] | None = Field(default=None, description="Filter object")
    sort: list[str] | None = Field(default=None, description="Sort fields")
    limit: int | None = Field(default=None, description="Limit results")
    offset: int | None = Field(default=None, description="Offset for pagination")
    search: str | None = Field(default=None, description="Search term")


# ============ SCHEMA & COLLECTIONS ============


class ReadCollectionSchemaParams(BaseModel):
    """Parameters for read-collection-schema tool."""

    collection: str = Field(..., description="Collection name to get schema for")


class ReadCollectionsParams(BaseModel):
    """Parameters for read-collections tool."""

    collections: list[str] | None = Field(
        default=None, description="Specific collections to include (to reduce size)"
    )
    fields_only: bool = Field(
        default=False, description="Return only field names, not full schema"
    )


class CollectionMeta(BaseModel):
    """Collection metadata for create-collection."""

    model_config = ConfigDict(extra="allow")

    icon: str | None = Field(default=None, description='Icon name (e.g., "box", "folder")')
    note: str | None = Field(default=None, description="Description or note about the collection")
    hidden: bool = Field(default=False, description="Hide collection from navigation")
    singleton: bool = Field(default=False, description="Collection holds a single item")
    translations: dict[str, str] | None = Field(default=None, description="Translations for collection name")
    archive_field: str | None = Field(default=None, description='Field used for archiving (e.g., "status")')
    archive_value: str | None = Field(default=None, description='Value set when archiving (e.g., "archived")')
    unarchive_value: str | None = Field(default=None, description='Value set when unarchiving (e.g., "draft")')
    sort_field: str | None = Field(default=None, description="Field used for manual sorting")
    accountability: Accountability = Field(default=Accountability.ALL, description="Accountability level")
    color: str | None = Field(default=None, description="Color for the collection (hex code)")


class CollectionTableSchema(BaseModel):
    name: str | None = Field(default=None, description="Database table name (defaults to collection name)")


class FieldInput(BaseModel):
    """A field definition sent to Directus."""

    model_config = ConfigDict(populate_by_name=True)

    field: str = Field(..., description="Field name")
    type: str = Field(..., description="Field type (string, integer, boolean, etc.)")
    meta: dict[str, Any] | None = Field(default=None, description="Field metadata")
    schema_: dict[str, Any] | None = Field(default=None, alias="schema", description="Field schema")


class CreateCollectionParams(BaseModel):
    """Parameters for create-collection tool."""

    model_config = ConfigDict(populate_by_name=True)

    collection: str = Field(..., description="Unique name for the new collection (lowercase, no spaces)")
    is_folder: bool = Field(
        default=False,
        description="Create a folder (metadata only, no database table) instead of a regular collection",
    )
    meta: CollectionMeta | None = Field(default=None, description="Optional collection metadata")
    schema_: CollectionTableSchema | None = Field(
        default=None,
        alias="schema",
        description="Optional schema configuration. Ignored if is_folder is true.",
    )
    fields: list[FieldInput] | None = Field(
        default=None,
        description="Initial fields to create with the collection. Cannot be used with is_folder=true.",
    )


# ============ FIELDS ============


class ReadFieldsParams(BaseModel):
    """Parameters for read-fields tool."""

    collection: str | None = Field(default=None, description="Only fields of this collection")


class ReadFieldParams(BaseModel):
    """Parameters for read-field tool."""

    collection: str = Field(..., description="Collection name")
    field: str = Field(..., description="Field name")


class CreateFieldParams(FieldInput):
    """Parameters for create-field tool."""

    collection: str = Field(..., description="Collection to add the field to")


class FieldUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str | None = Field(default=None, description="Field type")
    meta: dict[str, Any] | None = Field(default=None, description="Field metadata")
    schema_: dict[str, Any] | None = Field(default=None, alias="schema", description="Field schema")


class UpdateFieldParams(BaseModel):
    """Parameters for update-field tool."""

    collection: str = Field(..., description="Collection name")
    field: str = Field(..., description="Field name")
    data: FieldUpdate = Field(..., description="Field properties to update")


# ============ RELATIONS ============


class RelationMetaInput(BaseModel):
    one_field: str | None = None
    sort_field: str | None = None
    one_deselect_action: str | None = None
    one_allowed_collections: list[str] | None = None
    junction_field: str | None = None


class ReadRelationsParams(BaseModel):
    """Parameters for read-relations tool."""

    collection: str | None = Field(default=None, description="Filter relations by collection name")


class ReadRelationParams(BaseModel):
    """Parameters for read-relation tool."""

    collection: str = Field(..., description="Collection name")
    field: str = Field(..., description="Field name")


class CreateRelationParams(BaseModel):
    """Parameters for create-relation tool."""

    many_collection: str = Field(..., description='The "many" side collection name (child table)')
    many_field: str = Field(..., description='The foreign key field in the "many" collection')
    one_collection: str | None = Field(default=None, description='The "one" side collection name')
    one_field: str | None = Field(
        default=None,
        description="RECOMMENDED: alias field to create on the parent table (O2M field)",
    )
    one_collection_field: str | None = Field(
        default=None, description="Field storing the collection name (for M2A)"
    )
    one_allowed_collections: list[str] | None = Field(
        default=None, description="Allowed collections (for M2A)"
    )
    junction_field: str | None = Field(default=None, description="Junction field (for M2M)")
    sort_field: str | None = Field(default=None, description="Sort field for ordering related items")
    one_deselect_action: DeselectAction = Field(
        default=DeselectAction.NULLIFY, description="Action when deselecting"
    )
    meta: RelationMetaInput | None = Field(default=None, description="Additional relation metadata")


class RelationUpdate(BaseModel):
    one_collection: str | None = Field(default=None, description='The "one" side collection name')
    one_field: str | None = Field(default=None, description='The field name in the "one" collection')
    one_collection_field: str | None = Field(default=None, description="Field storing the collection name (M2A)")
    one_allowed_collections: list[str] | None = Field(default=None, description="Allowed collections (M2A)")
    junction_field: str | None = Field(default=None, description="Junction field (M2M)")
    sort_field: str | None = Field(default=None, description="Sort field for ordering")
    one_deselect_action: DeselectAction | None = Field(default=None, description="Action when deselecting")
    meta: RelationMetaInput | None = Field(default=None, description="Additional metadata")


class UpdateRelationParams(BaseModel):
    """Parameters for update-relation tool."""

    collection: str = Field(..., description="Collection where the relation field exists")
    field: str = Field(..., description="Field name of the relation")
    data: RelationUpdate = Field(..., description="Relation data to update")


class DeleteRelationParams(ReadRelationParams):
    """Parameters for delete-relation tool."""


# ============ FLOWS ============


class ReadFlowsParams(BaseModel):
    """Parameters for read-flows tool."""

    trigger: FlowTrigger | None = Field(default=None, description="Filter by trigger type")


class IdParams(BaseModel):
    """Tools addressing a flow or operation by ID."""

    id: str = Field(..., description="Record ID")


class CreateFlowParams(BaseModel):
    """Parameters for create-flow tool."""

    name: str = Field(..., description="Flow name")
    icon: str | None = Field(default=None, description='Icon name (e.g., "bolt")')
    color: str | None = Field(default=None, description="Color hex code")
    description: str | None = Field(default=None, description="Flow description")
    status: FlowStatus = Field(default=FlowStatus.ACTIVE, description="Flow status")
    trigger: FlowTrigger | None = Field(default=None, description="Trigger type")
    accountability: Accountability = Field(default=Accountability.ALL, description="Accountability level")
    options: dict[str, Any] | None = Field(
        default=None,
        description="Flow options. Manual triggers: location, requireSelection, collections, "
        "async, requireConfirmation, confirmationDescription, fields",
    )
    operation: str | None = Field(default=None, description="ID of the first operation")


class FlowUpdate(BaseModel):
    name: str | None = None
    icon: str | None = None
    color: str | None = None
    description: str | None = None
    status: FlowStatus | None = None
    trigger: FlowTrigger | None = None
    accountability: Accountability | None = None
    options: dict[str, Any] | None = None
    operation: str | None = Field(default=None, description="ID of the first operation")


class UpdateFlowParams(BaseModel):
    """Parameters for update-flow tool."""

    id: str = Field(..., description="Flow ID to update")
    data: FlowUpdate = Field(..., description="Data to update")


class TriggerFlowParams(BaseModel):
    """Parameters for trigger-flow tool."""

    model_config = ConfigDict(populate_by_name=True)

    flow_definition: dict[str, Any] = Field(
        ..., alias="flowDefinition", description="The full flow definition from read-flows"
    )
    flow_id: str = Field(..., alias="flowId", description="The ID of the flow to trigger")
    collection: str = Field(..., description="Collection of the items to trigger the flow on")
    keys: list[str] = Field(
        default_factory=list,
        description="Primary keys of the items. Required when the flow requires selection.",
    )
    data: dict[str, Any] | None = Field(
        default=None, description="Data matching the flow's options.fields"
    )


# ============ OPERATIONS ============


class ReadOperationsParams(BaseModel):
    """Parameters for read-operations tool."""

    flow_id: str | None = Field(default=None, description="Filter operations by flow ID")


class CreateOperationParams(BaseModel):
    """Parameters for create-operation tool."""

    flow: str = Field(..., description="Flow ID this operation belongs to")
    name: str | None = Field(default=None, description="Operation name")
    key: str = Field(..., description="Unique key for this operation")
    type: str = Field(..., description='Operation type (e.g., "condition", "item-create", "request")')
    position_x: int = Field(default=0, description="X position in flow diagram")
    position_y: int = Field(default=0, description="Y position in flow diagram")
    options: dict[str, Any] | None = Field(default=None, description="Operation-specific options")
    resolve: str | None = Field(default=None, description="Operation ID to execute on success")
    reject: str | None = Field(default=None, description="Operation ID to execute on failure")


class OperationUpdate(BaseModel):
    name: str | None = None
    key: str | None = None
    type: str | None = None
    position_x: int | None = None
    position_y: int | None = None
    options: dict[str, Any] | None = None
    resolve: str | None = None
    reject: str | None = None


class UpdateOperationParams(BaseModel):
    """Parameters for update-operation tool."""

    id: str = Field(..., description="Operation ID to update")
    data: OperationUpdate = Field(..., description="Data to update")


# ============ ITEMS ============


class ReadItemsParams(BaseModel):
    """Parameters for read-items tool."""

    collection: str = Field(..., description="The name of the collection to read from")
    query: SimpleItemQuery = Field(
        default_factory=SimpleItemQuery,
        description="Query parameters. ALWAYS use limit (default: 5) to avoid large responses.",
    )


class CreateItemParams(BaseModel):
    """Parameters for create-item tool."""

    collection: str = Field(..., description="The name of the collection to create in")
    item: dict[str, Any] = Field(..., description="The item data to create")
    query: SimpleItemQuery | None = Field(default=None, description="Optional query (e.g., fields)")


class UpdateItemParams(BaseModel):
    """Parameters for update-item tool."""

    collection: str = Field(..., description="The name of the collection to update in")
    id: str | int = Field(..., description="The primary key of the item to update")
    data: dict[str, Any] = Field(..., description="The partial item data to update")
    query: SimpleItemQuery | None = Field(default=None, description="Optional query (e.g., fields)")


class DeleteItemParams(BaseModel):
    """Parameters for delete-item tool."""

    collection: str = Field(..., description="The name of the collection to delete from")
    id: str | int = Field(..., description="The primary key of the item to delete")


class CountItemsParams(BaseModel):
    """Parameters for count-items tool."""

    collection: str = Field(..., description="Collection to count items in")
    filter: dict[str, Any] | None = Field(default=None, description="Filter conditions for counting")


class ItemSummaryParams(BaseModel):
    """Parameters for get-item-summary tool."""

    collection: str = Field(..., description="Collection name")
    limit: int = Field(default=10, ge=1, description="Max 20 items for summary")
    offset: int | None = Field(default=None, ge=0, description="Offset for pagination")
    fields: list[str] | None = Field(default=None, description="Specific fields to include (recommended)")


class UsersMeParams(BaseModel):
    """Parameters for users-me tool."""

    fields: list[str] = Field(
        default_factory=lambda: ["id", "email", "first_name", "last_name", "role"],
        description="Fields of the current user to return",
    )


class GetPromptsParams(BaseModel):
    """Parameters for get-prompts tool."""

    name: str | None = Field(default=None, description="Return only the prompt with this name")
