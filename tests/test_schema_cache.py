import asyncio

import pytest

from directus_mcp.exceptions import ClientNotInitializedError, CollectionNotFoundError
from directus_mcp.schema import PlainField, SchemaCache
from tests.conftest import FakeDirectusClient


class CountingFetcher:
    """Returns the next schema from a list and counts calls."""

    def __init__(self, *schemas, gate: asyncio.Event | None = None):
        self.schemas = list(schemas)
        self.calls = 0
        self.gate = gate

    async def __call__(self, client, limits):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return self.schemas[min(self.calls, len(self.schemas)) - 1]


def one_collection(name):
    return {name: {"id": PlainField(type="integer", primary_key=True)}}


@pytest.mark.asyncio
async def test_first_read_fetches_then_memoizes():
    fetcher = CountingFetcher(one_collection("posts"))
    cache = SchemaCache(FakeDirectusClient(), fetcher=fetcher)

    assert not cache.is_loaded
    first = await cache.get_schema()
    second = await cache.get_schema()

    assert first is second
    assert fetcher.calls == 1
    assert cache.is_loaded


@pytest.mark.asyncio
async def test_concurrent_first_reads_share_one_fetch():
    gate = asyncio.Event()
    fetcher = CountingFetcher(one_collection("posts"), gate=gate)
    cache = SchemaCache(FakeDirectusClient(), fetcher=fetcher)

    readers = [asyncio.create_task(cache.get_schema()) for _ in range(5)]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*readers)

    assert fetcher.calls == 1
    assert all(result is results[0] for result in results)


@pytest.mark.asyncio
async def test_invalidate_forces_refetch():
    fetcher = CountingFetcher(one_collection("posts"), one_collection("pages"))
    cache = SchemaCache(FakeDirectusClient(), fetcher=fetcher)

    assert await cache.collection_exists("posts")
    cache.invalidate()
    assert not cache.is_loaded

    assert await cache.collection_exists("pages")
    assert not await cache.collection_exists("posts")
    assert fetcher.calls == 2


@pytest.mark.asyncio
async def test_invalidate_when_empty_is_noop():
    fetcher = CountingFetcher(one_collection("posts"))
    cache = SchemaCache(FakeDirectusClient(), fetcher=fetcher)
    cache.invalidate()
    await cache.get_schema()
    assert fetcher.calls == 1


@pytest.mark.asyncio
async def test_get_collection_schema():
    cache = SchemaCache(FakeDirectusClient(), fetcher=CountingFetcher(one_collection("posts")))
    fields = await cache.get_collection_schema("posts")
    assert list(fields) == ["id"]


@pytest.mark.asyncio
async def test_missing_collection_lists_available():
    schema = {**one_collection("posts"), **one_collection("pages")}
    cache = SchemaCache(FakeDirectusClient(), fetcher=CountingFetcher(schema))

    with pytest.raises(CollectionNotFoundError) as exc_info:
        await cache.get_collection_schema("missing")

    assert str(exc_info.value) == (
        'Collection "missing" not found in schema. Available collections: posts, pages'
    )


@pytest.mark.asyncio
async def test_no_client_raises():
    cache = SchemaCache(None, fetcher=CountingFetcher(one_collection("posts")))
    with pytest.raises(ClientNotInitializedError, match="Directus client not initialized"):
        await cache.get_schema()


@pytest.mark.asyncio
async def test_failed_fetch_leaves_cache_empty():
    attempts = 0

    async def flaky(client, limits):
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("boom")
        return one_collection("posts")

    cache = SchemaCache(FakeDirectusClient(), fetcher=flaky)

    with pytest.raises(RuntimeError):
        await cache.get_schema()
    assert not cache.is_loaded

    assert list(await cache.get_schema()) == ["posts"]
    assert attempts == 2


@pytest.mark.asyncio
async def test_default_fetcher_uses_client():
    client = FakeDirectusClient(
        fields=[{"collection": "posts", "field": "id", "type": "integer", "meta": {}, "schema": {}}]
    )
    cache = SchemaCache(client)

    assert await cache.collection_exists("posts")
    assert await cache.collection_exists("posts")
    assert client.count("read_fields") == 1
