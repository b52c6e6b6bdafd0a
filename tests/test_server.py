import pytest
from fastapi.testclient import TestClient

from directus_mcp.server import PROTOCOL_VERSION, ServerContext, create_app, log_level
from directus_mcp.tools import get_tools


@pytest.fixture
def server_context(settings, fake_client, schema_cache):
    return ServerContext(
        settings=settings,
        client=fake_client,
        schema=schema_cache,
        tools=get_tools(settings),
    )


@pytest.fixture
def client(server_context):
    with TestClient(create_app(context=server_context)) as test_client:
        yield test_client


def rpc(client, method, params=None, id=1):
    body = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body)


def test_health_reports_schema_state(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["schema_loaded"] is False
    assert data["tools"] > 0


def test_initialize(client):
    result = rpc(client, "initialize").json()["result"]
    assert result["protocolVersion"] == PROTOCOL_VERSION
    assert "tools" in result["capabilities"]


def test_tools_list_has_input_schemas(client, server_context):
    tools = rpc(client, "tools/list").json()["result"]["tools"]
    assert len(tools) == len(server_context.tools)

    read_items = next(t for t in tools if t["name"] == "read-items")
    assert read_items["inputSchema"]["type"] == "object"
    assert "collection" in read_items["inputSchema"]["properties"]
    assert read_items["annotations"] == {"readOnlyHint": True}


def test_tools_call_loads_schema_once(client):
    first = rpc(client, "tools/call", {"name": "list-collections", "arguments": {}}).json()
    rpc(client, "tools/call", {"name": "count-items", "arguments": {"collection": "articles"}}, id=2)

    assert first["result"]["content"] == [
        {"type": "text", "text": "Available collections (2): articles, tags"}
    ]
    assert client.get("/health").json()["schema_loaded"] is True


def test_tools_call_error_result(client):
    body = rpc(client, "tools/call", {"name": "read-items", "arguments": {"collection": "nope"}}).json()
    assert body["result"]["isError"] is True


def test_unknown_and_disabled_tools(client):
    for name in ("no-such-tool", "delete-item"):
        body = rpc(client, "tools/call", {"name": name, "arguments": {}}).json()
        assert body["error"]["code"] == -32602
        assert body["error"]["message"] == f"Unknown tool: {name}"


def test_invalid_arguments(client):
    body = rpc(client, "tools/call", {"name": "read-items", "arguments": {}}).json()
    assert body["error"]["code"] == -32602


def test_unknown_method(client):
    body = rpc(client, "resources/list").json()
    assert body["error"]["code"] == -32601


def test_notification_returns_no_content(client):
    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert response.status_code == 204


def test_batch_request(client):
    response = client.post(
        "/mcp",
        json=[
            {"jsonrpc": "2.0", "id": 1, "method": "ping"},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "id": 2, "method": "ping"},
        ],
    )
    assert [r["id"] for r in response.json()] == [1, 2]


def test_parse_error(client):
    response = client.post("/mcp", content=b"{not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


def test_array_params_rejected(client):
    body = rpc(client, "tools/call", ["list-collections"]).json()
    assert body["error"]["code"] == -32602
    assert body["error"]["message"] == "params must be an object"


def test_array_params_in_batch_do_not_break_other_requests(client):
    response = client.post(
        "/mcp",
        json=[
            {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": ["x"]},
            {"jsonrpc": "2.0", "id": 2, "method": "ping"},
        ],
    )
    assert response.status_code == 200
    first, second = response.json()
    assert first["error"]["code"] == -32602
    assert second["result"] == {}


def test_debug_overrides_log_level(settings):
    assert log_level(settings) == "INFO"
    assert log_level(settings.model_copy(update={"debug": True})) == "DEBUG"
