"""Configuration for Directus MCP Server.

Settings are read from environment variables (and an optional .env file).
Priority: environment variables > .env file > defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema.models import SchemaLimits

# Destructive tools stay off unless DISABLE_TOOLS is overridden
DEFAULT_DISABLED_TOOLS = "delete-item,delete-relation,delete-flow,delete-operation"


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings(BaseSettings):
    """Server settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Directus connection
    directus_url: str = ""
    directus_token: str | None = None
    directus_user_email: str | None = None
    directus_user_password: str | None = None
    directus_timeout: float = 30.0

    # Schema size limits (keeps the LLM-facing schema small)
    max_schema_collections: int = 50
    max_schema_fields_per_collection: int = 100
    schema_exclude_collections: str = ""

    # Tool availability
    disable_tools: str = DEFAULT_DISABLED_TOOLS
    allow_system_modifications: bool = False

    # Prompts
    mcp_system_prompt_enabled: bool = False
    mcp_system_prompt: str | None = None
    directus_prompts_collection_enabled: bool = False
    directus_prompts_collection: str = "ai_prompts"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"
    sentry_dsn: str | None = None

    @property
    def exclude_collections_list(self) -> list[str]:
        return _split_csv(self.schema_exclude_collections)

    @property
    def disabled_tools_list(self) -> list[str]:
        return _split_csv(self.disable_tools)

    @property
    def base_url(self) -> str:
        return self.directus_url.rstrip("/")

    @property
    def schema_limits(self) -> SchemaLimits:
        """Limits applied when projecting the remote schema."""
        return SchemaLimits(
            max_collections=self.max_schema_collections,
            max_fields_per_collection=self.max_schema_fields_per_collection,
            exclude_collections=frozenset(self.exclude_collections_list),
        )


settings = Settings()
