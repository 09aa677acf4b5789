"""Itamae provisioner FastMCP server.

A thin wrapper that wires the provisioner tools into an MCP server.
All business logic lives in the tools/ and services/ modules.
"""

import logging
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from itamae_provisioner.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from itamae_provisioner.services import get_settings
from itamae_provisioner.tools import provision, validate
from itamae_provisioner.utils.console import ColorfulFormatter
from itamae_provisioner.version import version_banner


def _configure_logging() -> None:
    """Configure colorful logging for the itamae_provisioner package.

    Called at module load time so that logging is configured before any
    logger is used, however the server is started. Logs go to stderr
    because stdout carries the stdio transport.
    """
    settings = get_settings()
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("itamae_provisioner")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handler if not already configured
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for noisy_logger in [
        "asyncssh",
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastmcp",
        "starlette",
        "httpx",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging (with timing).
    """
    settings = get_settings()
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(slow_threshold_ms=settings.slow_threshold_ms)
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("itamae_provisioner", instructions=version_banner())

    configure_middleware(server)

    server.tool()(validate)
    server.tool()(provision)

    # Health check endpoint for HTTP transport
    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
