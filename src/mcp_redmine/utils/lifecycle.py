"""Lifecycle management utilities for graceful shutdown and signal handling."""

import logging
import signal
import sys
import threading
from typing import Any

logger = logging.getLogger("mcp-redmine.utils.lifecycle")

# Set once a termination signal has been received
_shutdown_event = threading.Event()


def setup_signal_handlers() -> None:
    """Set up signal handlers for graceful shutdown.

    Registers handlers for SIGTERM, SIGINT, and SIGPIPE (Unix only). Each
    handler records the shutdown request and raises SystemExit so the stdio
    loop unwinds through the caller's cleanup path, which flushes output.

    SIGPIPE matters for the stdio transport: without a handler the process
    dies silently when the client closes its end of the pipe.
    """

    def signal_handler(signum: int, frame: Any) -> None:
        _shutdown_event.set()
        raise SystemExit(0)

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    # SIGPIPE is not available on Windows
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal_handler)
        logger.debug("SIGPIPE handler registered")
    else:
        logger.debug("SIGPIPE not available on this platform")


def shutdown_requested() -> bool:
    return _shutdown_event.is_set()


def ensure_clean_exit() -> None:
    """Ensure all output streams are flushed before exit.

    Handles cases where streams may already be closed by the parent process,
    which is the usual situation once the MCP client has disconnected.
    """
    logger.info("Server stopped, flushing output streams...")

    for name, stream in (("stdout", sys.stdout), ("stderr", sys.stderr)):
        try:
            if hasattr(stream, "closed") and not stream.closed:
                stream.flush()
        except (ValueError, OSError, AttributeError) as e:
            logger.debug(f"Could not flush {name}: {e}")

    for handler in logging.getLogger("mcp-redmine").handlers:
        try:
            handler.flush()
        except (ValueError, OSError) as e:
            logger.debug(f"Could not flush log handler {handler!r}: {e}")

    logger.debug("Output streams flushed, exiting gracefully")
