"""Tool filtering helpers."""

import os


def get_enabled_tools() -> list[str] | None:
    """Read the ENABLED_TOOLS allow-list.

    Returns:
        The tool names listed in ENABLED_TOOLS, or None when every tool is enabled.
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw:
        return None
    names = [name.strip() for name in raw.split(",") if name.strip()]
    return names or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
