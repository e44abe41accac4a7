# simple_mcp_server/http_app.py
from __future__ import annotations

import logging
from typing import Any, Dict
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from simple_mcp.di import build_container
from simple_mcp.errors import SchemaViolation, UnknownIdentifier
from simple_mcp.logging import configure_logging

from simple_mcp_server.registry import build_tool_registry, list_tools_payload, call_tool

logger = logging.getLogger(__name__)

container = build_container()
settings = container.settings
configure_logging(settings.LOG_LEVEL)
app = FastAPI(title="simple-mcp HTTP Server", version=settings.SERVER_VERSION)
REGISTRY = build_tool_registry(container)


PROTOCOL_VERSION = "2025-03-26"  # MCP protocol revision

# ---------- Security: Origin validation & Bearer token ----------

def _origin_allowed(req: Request) -> bool:
    origin = req.headers.get("origin")
    if not origin:
        return settings.MCP_HTTP_ALLOW_NO_ORIGIN
    allowed = {o.strip().lower() for o in settings.MCP_HTTP_ALLOWED_ORIGINS.split(",") if o.strip()}
    return origin.lower() in allowed

def _require_auth(req: Request):
    auth = req.headers.get("authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")
    token = auth.split(" ", 1)[1]
    if token != settings.MCP_HTTP_BEARER_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid Bearer token")

@app.middleware("http")
async def origin_validation_mw(request: Request, call_next):
    # MCP requires Origin validation to prevent DNS rebinding
    # If provided and not allowed → 403
    if not _origin_allowed(request):
        return JSONResponse({"error": {"code": 403, "message": "Forbidden origin"}}, status_code=403)
    return await call_next(request)


def _jsonrpc_error(id_: Any, code: int, message: str, data: Any | None = None) -> JSONResponse:
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": message}}
    if data is not None:
        body["error"]["data"] = data
    return JSONResponse(body)

def _jsonrpc_result(id_: Any, result: Any) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": id_, "result": result})


def _initialize_result() -> Dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {"listChanged": False},
            "resources": {"listChanged": False},
            "prompts": {"listChanged": False},
        },
        "serverInfo": {"name": settings.SERVER_NAME, "version": settings.SERVER_VERSION},
    }


def _handle(method: str, params: Dict[str, Any]) -> Any:
    """Route one JSON-RPC method; raises KeyError/SchemaViolation for the caller to map."""
    if method == "initialize":
        return _initialize_result()

    if method == "tools/list":
        return list_tools_payload(REGISTRY)

    if method == "tools/call":
        return call_tool(REGISTRY, params.get("name"), params.get("arguments", {}))

    if method == "resources/list":
        return {"resources": container.resource_service.list()}

    if method == "resources/read":
        return {"contents": [container.resource_service.read(params.get("uri"))]}

    if method == "prompts/list":
        return {"prompts": container.prompt_service.list()}

    if method == "prompts/get":
        name = params.get("name")
        template = container.prompt_service.template(name)
        return {
            "description": template.description,
            "messages": container.prompt_service.build(name, params.get("arguments") or {}),
        }

    raise UnknownIdentifier("method", method)


# ---------- MCP JSON-RPC endpoint (Streamable HTTP) ----------

@app.post(settings.MCP_HTTP_PATH)
async def mcp_endpoint(request: Request):
    _require_auth(request)

    try:
        payload = await request.json()
    except Exception:
        return _jsonrpc_error(None, -32700, "Parse error")

    # Batches and bare scalars are not accepted
    if not isinstance(payload, dict):
        return _jsonrpc_error(None, -32600, "Invalid Request")

    id_ = payload.get("id")
    method = payload.get("method")
    params = payload.get("params") or {}

    try:
        return _jsonrpc_result(id_, _handle(method, params))
    except SchemaViolation as sv:
        return _jsonrpc_error(id_, -32602, "Invalid params", sv.to_dict())
    except UnknownIdentifier as ui:
        # Missing resources have their own MCP code; everything else is "not found"
        code = -32002 if ui.kind == "resource" else -32601
        return _jsonrpc_error(id_, code, str(ui))
    except Exception as e:
        logger.exception("request failed: %s", method)
        return _jsonrpc_error(id_, -32603, "Internal error", str(e))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "simple_mcp_server.http_app:app",
        host=settings.MCP_HTTP_HOST,
        port=settings.MCP_HTTP_PORT,
        reload=False,
    )
