import json

import httpx
import pytest

from directus_mcp.directus import DirectusClient, items_path, serialize_query
from directus_mcp.exceptions import ConfigurationError, DirectusAPIError

URL = "http://directus.test"


def make_client(handler, **kwargs):
    kwargs.setdefault("token", "static-token")
    return DirectusClient(URL, transport=httpx.MockTransport(handler), **kwargs)


def test_serialize_query():
    params = serialize_query(
        {
            "fields": ["id", "title"],
            "sort": ["-date_created"],
            "filter": {"status": {"_eq": "published"}},
            "limit": 5,
            "offset": None,
            "export": False,
        }
    )
    assert params == {
        "fields": "id,title",
        "sort": "-date_created",
        "filter": '{"status": {"_eq": "published"}}',
        "limit": 5,
        "export": "false",
    }


def test_items_path():
    assert items_path("articles") == "/items/articles"
    assert items_path("directus_users") == "/users"
    assert items_path("directus_files") == "/files"


def test_url_is_required():
    with pytest.raises(ConfigurationError):
        DirectusClient("")


@pytest.mark.asyncio
async def test_request_unwraps_data_and_sends_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": [{"id": 1}]})

    client = make_client(handler)
    result = await client.read_items("articles", {"fields": ["id"], "limit": 1})
    await client.aclose()

    assert result == [{"id": 1}]
    assert seen["auth"] == "Bearer static-token"
    assert seen["params"] == {"fields": "id", "limit": "1"}


@pytest.mark.asyncio
async def test_error_envelope_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403,
            json={"errors": [{"message": "You don't have permission", "extensions": {"code": "FORBIDDEN"}}]},
        )

    client = make_client(handler)
    with pytest.raises(DirectusAPIError) as exc_info:
        await client.read_fields()
    await client.aclose()

    assert str(exc_info.value) == "You don't have permission"
    assert exc_info.value.status_code == 403
    assert exc_info.value.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_transport_error_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(DirectusAPIError, match="Directus request failed"):
        await client.read_relations()
    await client.aclose()


@pytest.mark.asyncio
async def test_no_content_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/items/articles/7"
        return httpx.Response(204)

    client = make_client(handler)
    assert await client.delete_item("articles", 7) is None
    await client.aclose()


@pytest.mark.asyncio
async def test_login_with_email_and_password():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/auth/login":
            assert json.loads(request.content) == {"email": "a@b.c", "password": "secret"}
            return httpx.Response(200, json={"data": {"access_token": "session-token"}})
        return httpx.Response(200, json={"data": {"id": "u1"}})

    client = DirectusClient(
        URL, email="a@b.c", password="secret", transport=httpx.MockTransport(handler)
    )
    await client.authenticate()
    await client.read_me(["id"])
    await client.aclose()

    assert requests[1].headers["authorization"] == "Bearer session-token"


@pytest.mark.asyncio
async def test_authenticate_without_credentials():
    client = DirectusClient(URL, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with pytest.raises(ConfigurationError):
        await client.authenticate()
    await client.aclose()


@pytest.mark.asyncio
async def test_count_items_reads_total_count_meta():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["meta"] == "total_count"
        assert request.url.params["limit"] == "1"
        return httpx.Response(200, json={"data": [{"id": 1}], "meta": {"total_count": 17}})

    client = make_client(handler)
    assert await client.count_items("articles") == 17
    await client.aclose()


@pytest.mark.asyncio
async def test_trigger_flow_posts_to_trigger_endpoint():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/flows/trigger/flow-1"
        return httpx.Response(200, json={"data": {"status": "ok"}})

    client = make_client(handler)
    assert await client.trigger_flow("flow-1", {"keys": ["1"]}) == {"status": "ok"}
    await client.aclose()
