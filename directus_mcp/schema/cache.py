"""Lazy schema cache.

Holds at most one schema per cache instance. The first reader triggers the
fetch; concurrent first readers await the same in-flight task, so only one
fetch is ever issued per Empty -> Loaded transition. Tools that change the
remote structure call invalidate() so the next read refetches.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..exceptions import ClientNotInitializedError, CollectionNotFoundError
from .fetcher import fetch_schema
from .models import CollectionSchema, Schema, SchemaLimits

if TYPE_CHECKING:
    from ..directus import DirectusClient

logger = logging.getLogger(__name__)

SchemaFetcher = Callable[["DirectusClient", SchemaLimits], Awaitable[Schema]]


class SchemaCache:
    """Single-slot, process-lifetime schema cache owned by the server context."""

    def __init__(
        self,
        client: "DirectusClient | None",
        limits: SchemaLimits | None = None,
        fetcher: SchemaFetcher = fetch_schema,
    ):
        self._client = client
        self._limits = limits or SchemaLimits()
        self._fetcher = fetcher
        self._task: asyncio.Task[Schema] | None = None

    @property
    def is_loaded(self) -> bool:
        """True once a fetch has completed successfully and not been invalidated."""
        task = self._task
        return task is not None and task.done() and not task.cancelled() and task.exception() is None

    async def _load(self) -> Schema:
        logger.info("Loading schema on-demand...")
        schema = await self._fetcher(self._client, self._limits)
        logger.info(f"Schema cached: {len(schema)} collections")
        return schema

    async def get_schema(self) -> Schema:
        """Return the cached schema, fetching it on first use."""
        if self._task is None:
            if self._client is None:
                raise ClientNotInitializedError()
            self._task = asyncio.ensure_future(self._load())

        task = self._task
        try:
            # Callers being cancelled must not cancel the shared fetch
            return await asyncio.shield(task)
        except Exception:
            # Leave the cache Empty so a later call can retry
            if self._task is task:
                self._task = None
            raise

    def invalidate(self) -> None:
        """Drop the cached schema; the next get_schema() refetches."""
        if self._task is not None:
            logger.info("Schema cache invalidated")
        self._task = None

    async def get_collection_schema(self, collection: str) -> CollectionSchema:
        """Return the fields of one collection or raise CollectionNotFoundError."""
        schema = await self.get_schema()
        if collection not in schema:
            raise CollectionNotFoundError(collection, list(schema))
        return schema[collection]

    async def collection_exists(self, collection: str) -> bool:
        """Lightweight presence check against the cached schema."""
        schema = await self.get_schema()
        return collection in schema
