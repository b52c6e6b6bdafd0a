import pytest

from directus_mcp.config import Settings
from directus_mcp.schema import PlainField, RelationField, SchemaCache
from directus_mcp.tools import ToolContext

DIRECTUS_URL = "http://directus.test"


class FakeDirectusClient:
    """Records calls and serves canned field/relation/item payloads."""

    def __init__(self, fields=None, relations=None, items=None):
        self.fields = fields or []
        self.relations = relations or []
        self.items = items or {}
        self.calls: list[tuple] = []

    async def read_fields(self, collection=None):
        self.calls.append(("read_fields", collection))
        return self.fields

    async def read_relations(self):
        self.calls.append(("read_relations",))
        return self.relations

    async def create_collection(self, data):
        self.calls.append(("create_collection", data))
        return {"collection": data["collection"]}

    async def create_field(self, collection, data):
        self.calls.append(("create_field", collection, data))
        return {"collection": collection, **data}

    async def update_field(self, collection, field, data):
        self.calls.append(("update_field", collection, field, data))
        return {"collection": collection, "field": field, **data}

    async def create_relation(self, data):
        self.calls.append(("create_relation", data))
        return data

    async def update_relation(self, collection, field, data):
        self.calls.append(("update_relation", collection, field, data))
        return {"collection": collection, "field": field, **data}

    async def delete_relation(self, collection, field):
        self.calls.append(("delete_relation", collection, field))

    async def read_items(self, collection, query=None):
        self.calls.append(("read_items", collection, query))
        return self.items.get(collection, [])

    async def count_items(self, collection, filter=None):
        self.calls.append(("count_items", collection, filter))
        return len(self.items.get(collection, []))

    async def create_item(self, collection, item, query=None):
        self.calls.append(("create_item", collection, item))
        return {"id": 42, **item}

    async def trigger_flow(self, id, data):
        self.calls.append(("trigger_flow", id, data))
        return {"ok": True}

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


def sample_schema():
    return {
        "articles": {
            "id": PlainField(type="integer", primary_key=True),
            "title": PlainField(type="string", interface="input", required=True),
            "author": RelationField(
                type="uuid", relation_type="m2o", relation_collection="directus_users"
            ),
        },
        "tags": {
            "id": PlainField(type="integer", primary_key=True),
        },
    }


@pytest.fixture
def settings():
    return Settings(_env_file=None, directus_url=DIRECTUS_URL, directus_token="test-token")


@pytest.fixture
def fake_client():
    return FakeDirectusClient(items={"articles": [{"id": 1}, {"id": 2}]})


@pytest.fixture
def schema_cache(fake_client):
    async def fetcher(client, limits):
        return sample_schema()

    return SchemaCache(fake_client, fetcher=fetcher)


@pytest.fixture
def ctx(fake_client, schema_cache, settings):
    return ToolContext(client=fake_client, schema=schema_cache, settings=settings)
