import pytest
from fastapi.testclient import TestClient

from simple_mcp_server import http_app

PATH = http_app.settings.MCP_HTTP_PATH


@pytest.fixture(scope="module")
def client():
    return TestClient(http_app.app)


def _auth():
    return {"Authorization": f"Bearer {http_app.settings.MCP_HTTP_BEARER_TOKEN}"}


def _rpc(client, method, params=None, id_=1):
    body = {"jsonrpc": "2.0", "id": id_, "method": method}
    if params is not None:
        body["params"] = params
    return client.post(PATH, json=body, headers=_auth()).json()


def test_requires_bearer_token(client):
    assert client.post(PATH, json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"}).status_code == 401
    bad = client.post(PATH, json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
                      headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401


def test_forbidden_origin(client):
    r = client.post(PATH, json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
                    headers={**_auth(), "Origin": "http://evil.example"})
    assert r.status_code == 403


def test_initialize_reports_capabilities(client):
    res = _rpc(client, "initialize")["result"]
    assert res["serverInfo"]["name"] == http_app.settings.SERVER_NAME
    assert set(res["capabilities"]) == {"tools", "resources", "prompts"}


def test_tools_list_and_call(client):
    tools = _rpc(client, "tools/list")["result"]["tools"]
    assert len(tools) == 9

    res = _rpc(client, "tools/call", {
        "name": "generate_server_route",
        "arguments": {"actions": ["create"], "walletPersistence": "both"},
    })["result"]
    assert res["isError"] is False
    assert "loadSavedKey()" in res["content"][0]["text"]


def test_tools_call_schema_violation_is_in_band(client):
    res = _rpc(client, "tools/call", {"name": "generate_wallet_setup",
                                      "arguments": {"target": "mobile", "framework": "nextjs"}})
    assert res["result"]["isError"] is True


def test_unknown_tool_and_method(client):
    assert _rpc(client, "tools/call", {"name": "nope", "arguments": {}})["error"]["code"] == -32601
    assert _rpc(client, "sampling/createMessage")["error"]["code"] == -32601


def test_resources(client):
    listed = _rpc(client, "resources/list")["result"]["resources"]
    assert len(listed) == 11
    contents = _rpc(client, "resources/read", {"uri": "simple://guide/gotchas"})["result"]["contents"]
    assert contents[0]["mimeType"] == "text/markdown"
    assert contents[0]["text"]

    err = _rpc(client, "resources/read", {"uri": "simple://guide/nope"})["error"]
    assert err["code"] == -32002


def test_prompts(client):
    assert len(_rpc(client, "prompts/list")["result"]["prompts"]) == 3
    res = _rpc(client, "prompts/get", {"name": "add_bsv_feature", "arguments": {"feature": "did"}})["result"]
    assert res["messages"][0]["role"] == "user"
    assert 'add the "did" feature' in res["messages"][0]["content"]["text"]

    err = _rpc(client, "prompts/get", {"name": "add_bsv_feature", "arguments": {}})["error"]
    assert err["code"] == -32602
    assert err["data"]["errors"][0]["path"] == "/feature"


def test_parse_error(client):
    r = client.post(PATH, content=b"{not json", headers={**_auth(), "Content-Type": "application/json"})
    assert r.json()["error"]["code"] == -32700


@pytest.mark.parametrize("body", [[{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}], 42, "tools/list"])
def test_non_object_body_is_invalid_request(client, body):
    r = client.post(PATH, json=body, headers=_auth())
    assert r.status_code == 200
    assert r.json()["error"]["code"] == -32600
    assert r.json()["id"] is None
