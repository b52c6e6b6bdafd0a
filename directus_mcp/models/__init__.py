"""Pydantic models for tool inputs.

Import from submodules directly for cleaner imports:

    from directus_mcp.models.enums import ToolName
    from directus_mcp.models.requests import ReadItemsParams
"""

from .enums import Accountability, DeselectAction, FlowStatus, FlowTrigger, ToolName
from .requests import (
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
    FieldInput,
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
    SimpleItemQuery,
    TriggerFlowParams,
    UpdateFieldParams,
    UpdateFlowParams,
    UpdateItemParams,
    UpdateOperationParams,
    UpdateRelationParams,
    UsersMeParams,
)
from .responses import HealthResponse

__all__ = [
    # Enums
    "Accountability",
    "DeselectAction",
    "FlowStatus",
    "FlowTrigger",
    "ToolName",
    # Responses
    "HealthResponse",
    # Params
    "CountItemsParams",
    "CreateCollectionParams",
    "CreateFieldParams",
    "CreateFlowParams",
    "CreateItemParams",
    "CreateOperationParams",
    "CreateRelationParams",
    "DeleteItemParams",
    "DeleteRelationParams",
    "EmptyParams",
    "FieldInput",
    "GetPromptsParams",
    "IdParams",
    "ItemSummaryParams",
    "ReadCollectionSchemaParams",
    "ReadCollectionsParams",
    "ReadFieldParams",
    "ReadFieldsParams",
    "ReadFlowsParams",
    "ReadItemsParams",
    "ReadOperationsParams",
    "ReadRelationParams",
    "ReadRelationsParams",
    "SimpleItemQuery",
    "TriggerFlowParams",
    "UpdateFieldParams",
    "UpdateFlowParams",
    "UpdateItemParams",
    "UpdateOperationParams",
    "UpdateRelationParams",
    "UsersMeParams",
]
