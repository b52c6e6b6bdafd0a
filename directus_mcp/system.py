"""Directus system collection helpers.

Some system collections are writable through the MCP tools (flows, operations,
fields, relations have dedicated tools). Item writes to any other `directus_*`
collection require ALLOW_SYSTEM_MODIFICATIONS=true.
"""

SYSTEM_PREFIX = "directus_"

FILES_COLLECTION = "directus_files"
USERS_COLLECTION = "directus_users"

# System collections kept in the schema because content models reference them
REFERENCEABLE_SYSTEM_COLLECTIONS = frozenset({FILES_COLLECTION, USERS_COLLECTION})


def is_system_collection(collection: str) -> bool:
    """Check if a collection is a Directus system collection."""
    return collection.startswith(SYSTEM_PREFIX)
