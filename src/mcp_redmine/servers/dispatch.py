"""Routing of tool calls to their handlers.

The dispatcher is the error boundary of the server: whatever happens while a
tool runs, the caller gets exactly one ToolResult back.
"""

import logging
from typing import Any

from mcp.types import TextContent

from ..exceptions import MCPRedmineError, ValidationError, format_error
from ..logging_config import log_operation
from ..redmine import RedmineFetcher
from ..utils.tools import should_include_tool
from ..validators import validate_arguments
from .registry import ToolDescriptor, ToolRegistry, ToolResult

logger = logging.getLogger("mcp-redmine.server")


class ToolDispatcher:
    """Resolves, validates and runs tool calls against one fetcher."""

    def __init__(
        self,
        registry: ToolRegistry,
        fetcher: RedmineFetcher,
        read_only: bool = False,
        enabled_tools: list[str] | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: The tool catalog
            fetcher: Redmine client handed to every handler
            read_only: Hide and refuse tools tagged "write"
            enabled_tools: Allow-list of tool names, None for all
        """
        self.registry = registry
        self.fetcher = fetcher
        self.read_only = read_only
        self.enabled_tools = enabled_tools

    def is_available(self, descriptor: ToolDescriptor) -> bool:
        if not should_include_tool(descriptor.name, self.enabled_tools):
            return False
        return not (self.read_only and descriptor.is_write)

    def available_tools(self) -> list[ToolDescriptor]:
        return [d for d in self.registry if self.is_available(d)]

    async def dispatch(self, name: str, arguments: Any) -> ToolResult:
        """Run one tool call.

        Args:
            name: Tool name from the request
            arguments: Raw, unvalidated arguments (may be None)

        Returns:
            The tool's result, or an error result describing what went wrong.
            Never raises for failures inside the tool.
        """
        descriptor = self.registry.get(name)
        if descriptor is None or not should_include_tool(name, self.enabled_tools):
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResult.error(f"Unknown tool: {name}")

        if self.read_only and descriptor.is_write:
            logger.warning(f"Refusing write tool '{name}' in read-only mode")
            return ToolResult.error(f"Tool '{name}' is not available in read-only mode.")

        try:
            with log_operation(logger, "call_tool", tool=name):
                params = validate_arguments(descriptor.input_model, arguments)
                result = await descriptor.handler(self.fetcher, params)
                return self._normalize(name, result)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            return ToolResult.error(format_error(e))
        except MCPRedmineError as e:
            logger.error(f"Tool {name} failed: {e}")
            return ToolResult.error(format_error(e))
        except Exception as e:
            logger.error(f"Unexpected error in tool {name}: {e}", exc_info=True)
            return ToolResult.error(format_error(e))

    def _normalize(self, name: str, result: Any) -> ToolResult:
        if isinstance(result, str):
            return ToolResult.text(result)
        if (
            isinstance(result, ToolResult)
            and result.content
            and all(isinstance(item, TextContent) for item in result.content)
        ):
            return result
        logger.error(f"Tool {name} returned a malformed result: {result!r}")
        return ToolResult.error(f"Internal error: tool '{name}' returned a malformed result")
