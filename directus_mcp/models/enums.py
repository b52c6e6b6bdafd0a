"""Enumeration types for Directus MCP Server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available tools."""

    # Guidance
    HELP = "help-token-efficient"
    SYSTEM_PROMPT = "system-prompt"
    GET_PROMPTS = "get-prompts"
    # Discovery
    LIST_COLLECTIONS = "list-collections"
    COUNT_ITEMS = "count-items"
    GET_ITEM_SUMMARY = "get-item-summary"
    # Schema
    READ_COLLECTION_SCHEMA = "read-collection-schema"
    READ_COLLECTIONS = "read-collections"
    CREATE_COLLECTION = "create-collection"
    # Fields
    READ_FIELDS = "read-fields"
    READ_FIELD = "read-field"
    CREATE_FIELD = "create-field"
    UPDATE_FIELD = "update-field"
    # Relations
    READ_RELATIONS = "read-relations"
    READ_RELATION = "read-relation"
    CREATE_RELATION = "create-relation"
    UPDATE_RELATION = "update-relation"
    DELETE_RELATION = "delete-relation"
    # Flows
    READ_FLOWS = "read-flows"
    READ_FLOW = "read-flow"
    CREATE_FLOW = "create-flow"
    UPDATE_FLOW = "update-flow"
    DELETE_FLOW = "delete-flow"
    TRIGGER_FLOW = "trigger-flow"
    # Operations
    READ_OPERATIONS = "read-operations"
    READ_OPERATION = "read-operation"
    CREATE_OPERATION = "create-operation"
    UPDATE_OPERATION = "update-operation"
    DELETE_OPERATION = "delete-operation"
    # Users & items
    USERS_ME = "users-me"
    READ_ITEMS = "read-items"
    CREATE_ITEM = "create-item"
    UPDATE_ITEM = "update-item"
    DELETE_ITEM = "delete-item"


class FlowTrigger(StrEnum):
    """Flow trigger types."""

    MANUAL = "manual"
    WEBHOOK = "webhook"
    SCHEDULE = "schedule"
    OPERATION = "operation"
    EVENT = "event"


class FlowStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Accountability(StrEnum):
    ALL = "all"
    ACTIVITY = "activity"


class DeselectAction(StrEnum):
    NULLIFY = "nullify"
    DELETE = "delete"
