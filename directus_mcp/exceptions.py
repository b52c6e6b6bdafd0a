"""Exception types raised by the Directus MCP Server."""


class DirectusMCPError(Exception):
    """Base class for errors that are safe to report back to the agent."""


class ConfigurationError(DirectusMCPError):
    """Missing or invalid server configuration."""


class ClientNotInitializedError(DirectusMCPError):
    """Raised when the schema is requested before a Directus client exists."""

    def __init__(self, message: str = "Directus client not initialized"):
        super().__init__(message)


class DirectusAPIError(DirectusMCPError):
    """A Directus request failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class CollectionNotFoundError(DirectusMCPError):
    """The collection is not part of the cached schema."""

    def __init__(self, collection: str, available: list[str]):
        self.collection = collection
        self.available = available
        super().__init__(
            f'Collection "{collection}" not found in schema. '
            f"Available collections: {', '.join(available)}"
        )


class ToolInputError(DirectusMCPError):
    """Tool arguments are well-formed but semantically invalid."""


class UnknownToolError(DirectusMCPError):
    """The requested tool does not exist or is disabled."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
