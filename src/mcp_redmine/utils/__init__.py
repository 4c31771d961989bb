"""
Utility functions for the MCP Redmine integration.
"""

from .env import getenv_int, is_env_extended_truthy, is_env_ssl_verify, is_env_truthy
from .io import is_read_only_mode
from .lifecycle import ensure_clean_exit, setup_signal_handlers
from .logging import log_config_param, mask_sensitive
from .tools import get_enabled_tools, should_include_tool

__all__ = [
    "ensure_clean_exit",
    "get_enabled_tools",
    "getenv_int",
    "is_env_extended_truthy",
    "is_env_ssl_verify",
    "is_env_truthy",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "setup_signal_handlers",
    "should_include_tool",
]
