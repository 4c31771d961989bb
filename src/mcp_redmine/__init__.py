import asyncio
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.1.0"

from .logging_config import log_operation, setup_logger

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--redmine-url",
    help="Redmine URL (e.g., https://redmine.example.com)",
)
@click.option("--redmine-api-key", help="Redmine API key")
@click.option("--redmine-username", help="Redmine username (basic authentication)")
@click.option("--redmine-password", help="Redmine password (basic authentication)")
@click.option(
    "--redmine-ssl-verify/--no-redmine-ssl-verify",
    default=None,
    help="Verify SSL certificates for Redmine (default: verify)",
)
@click.option(
    "--redmine-ca-cert",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a CA bundle used to verify the Redmine certificate",
)
@click.option(
    "--read-only",
    is_flag=True,
    default=None,
    help="Only expose tools that do not modify Redmine",
)
@click.option(
    "--enabled-tools",
    help="Comma-separated list of tools to enable (default: all)",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
def main(
    verbose: int,
    env_file: str | None,
    redmine_url: str | None,
    redmine_api_key: str | None,
    redmine_username: str | None,
    redmine_password: str | None,
    redmine_ssl_verify: bool | None,
    redmine_ca_cert: str | None,
    read_only: bool | None,
    enabled_tools: str | None,
    log_to_file: bool,
    log_dir: str | None,
) -> None:
    """MCP Redmine Server - Redmine issues, projects, time tracking and wiki for MCP

    Configuration is read from the environment (and a .env file); command line
    options take precedence.
    """
    # Configure logging based on verbosity
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(
        name="mcp-redmine",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        # Load environment variables from file if specified, otherwise try default .env
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Set environment variables from command line arguments if provided
        if redmine_url:
            os.environ["REDMINE_URL"] = redmine_url
        if redmine_api_key:
            os.environ["REDMINE_API_KEY"] = redmine_api_key
        if redmine_username:
            os.environ["REDMINE_USERNAME"] = redmine_username
        if redmine_password:
            os.environ["REDMINE_PASSWORD"] = redmine_password
        if redmine_ssl_verify is not None:
            os.environ["REDMINE_SSL_VERIFY"] = str(redmine_ssl_verify).lower()
        if redmine_ca_cert:
            os.environ["REDMINE_CA_CERT"] = redmine_ca_cert
        if read_only:
            os.environ["READ_ONLY_MODE"] = "true"
        if enabled_tools:
            os.environ["ENABLED_TOOLS"] = enabled_tools

    from .exceptions import ConfigurationError
    from .redmine.config import RedmineConfig
    from .servers.main import run_server
    from .utils.io import is_read_only_mode
    from .utils.lifecycle import (
        ensure_clean_exit,
        setup_signal_handlers,
        shutdown_requested,
    )
    from .utils.tools import get_enabled_tools

    try:
        config = RedmineConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_signal_handlers()

    exit_code = 0
    try:
        asyncio.run(
            run_server(
                config,
                read_only=is_read_only_mode(),
                enabled_tools=get_enabled_tools(),
            )
        )
    except (KeyboardInterrupt, SystemExit):
        if shutdown_requested():
            logger.info("Server shutdown initiated by signal")
        else:
            logger.info("Server shutdown initiated")
    except Exception as e:
        logger.error(f"Server encountered an error: {e}", exc_info=True)
        exit_code = 1
    finally:
        ensure_clean_exit()

    sys.exit(exit_code)


__all__ = ["main", "__version__"]
