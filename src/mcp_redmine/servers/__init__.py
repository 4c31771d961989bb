"""MCP server components for Redmine."""

from .dispatch import ToolDispatcher
from .registry import ToolDescriptor, ToolRegistry, ToolResult, build_registry

__all__ = [
    "ToolDescriptor",
    "ToolDispatcher",
    "ToolRegistry",
    "ToolResult",
    "build_registry",
]
