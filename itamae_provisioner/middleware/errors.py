"""Error handling middleware for tool failures."""

import logging
import traceback
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from itamae_provisioner.middleware.base import ProvisionerMiddleware


class ErrorHandlingMiddleware(ProvisionerMiddleware):
    """Log failed requests and re-raise.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to include full traceback in logs.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)

        except Exception as e:
            error_type = type(e).__name__
            method = context.method

            if self.include_traceback:
                self.logger.error(
                    "Error in %s: %s: %s\n%s",
                    method,
                    error_type,
                    str(e),
                    traceback.format_exc(),
                )
            else:
                self.logger.error("Error in %s: %s: %s", method, error_type, str(e))

            raise
