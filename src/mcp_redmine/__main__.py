"""Entry point for running the MCP Redmine server with `python -m mcp_redmine`."""

from . import main

if __name__ == "__main__":
    main()
