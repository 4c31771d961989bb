"""MCP server wiring for Redmine."""

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .. import __version__
from ..redmine import RedmineConfig, RedmineFetcher
from ..utils.logging import log_config_param
from .dispatch import ToolDispatcher
from .registry import build_registry

logger = logging.getLogger("mcp-redmine.server")

SERVER_NAME = "mcp-redmine"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server answering tools/list and tools/call.

    Args:
        dispatcher: Dispatcher that runs the tool calls

    Returns:
        The configured low-level MCP server
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [descriptor.to_tool() for descriptor in dispatcher.available_tools()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.dispatch(request.params.name, request.params.arguments)
        return types.ServerResult(result.to_call_tool_result())

    # Registered directly so the dispatcher's result, including isError,
    # reaches the client unchanged.
    server.request_handlers[types.CallToolRequest] = call_tool
    return server


def log_config(config: RedmineConfig) -> None:
    log_config_param(logger, "Redmine", "URL", config.url)
    log_config_param(logger, "Redmine", "Auth Type", config.auth_type)
    if config.auth_type == "basic":
        log_config_param(logger, "Redmine", "Username", config.username)
        log_config_param(logger, "Redmine", "Password", config.password, sensitive=True)
    else:
        log_config_param(logger, "Redmine", "API Key", config.api_key, sensitive=True)
    log_config_param(logger, "Redmine", "SSL Verify", str(config.ssl_verify))
    log_config_param(logger, "Redmine", "CA Cert", config.ca_cert)
    log_config_param(logger, "Redmine", "Timeout (ms)", str(config.request_timeout))
    log_config_param(logger, "Redmine", "Max Retries", str(config.max_retries))


async def run_server(
    config: RedmineConfig,
    read_only: bool = False,
    enabled_tools: list[str] | None = None,
) -> None:
    """Serve the Redmine tools over stdio until the client disconnects."""
    logger.info("Starting MCP Redmine server")
    log_config(config)
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    if enabled_tools:
        logger.info(f"Enabled tools: {', '.join(enabled_tools)}")

    fetcher = RedmineFetcher(config=config)
    dispatcher = ToolDispatcher(
        build_registry(), fetcher, read_only=read_only, enabled_tools=enabled_tools
    )
    server = create_server(dispatcher)

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        fetcher.close()
        logger.info("MCP Redmine server stopped")
