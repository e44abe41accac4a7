# simple_mcp_server/main.py
import logging
import sys

from fastmcp import FastMCP
from simple_mcp.di import build_container
from simple_mcp.logging import configure_logging
from simple_mcp_server.registry import (
    build_tool_registry,
    register_into_fastmcp,
    register_prompts,
    register_resources,
)

logger = logging.getLogger(__name__)

def create_app() -> FastMCP:
    """
    Build DI container, create FastMCP host, and register tools, resources and prompts.
    Keep the server (protocol) separate from composition logic.
    """
    container = build_container()
    configure_logging(container.settings.LOG_LEVEL)

    mcp = FastMCP(container.settings.SERVER_NAME, version=container.settings.SERVER_VERSION)

    # Tools go through the registry so both transports validate the same way
    register_into_fastmcp(mcp, build_tool_registry(container))
    register_resources(mcp, container.resource_service)
    register_prompts(mcp, container.prompt_service)

    return mcp


def main() -> None:
    app = create_app()
    # stdio transport: client (agent/IDE) launches this process and speaks JSON-RPC on stdin/stdout
    try:
        app.run(transport="stdio")
    except Exception:
        logger.exception("stdio transport failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
