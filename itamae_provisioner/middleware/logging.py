"""Logging middleware for tool calls."""

import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from itamae_provisioner.middleware.base import ProvisionerMiddleware

# Tool arguments that may carry secrets in environment variable values.
_REDACTED_ARGS = frozenset({"config"})


class LoggingMiddleware(ProvisionerMiddleware):
    """Log tool calls with arguments, outcome and duration.

    Calls slower than slow_threshold_ms are logged at WARNING. Provisioning
    runs are long, so the threshold is only a hint for validate calls.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        super().__init__(logger=logger)
        self.slow_threshold_ms = slow_threshold_ms

    def _format_args(self, args: dict[str, Any] | None) -> str:
        if not args:
            return "()"
        parts = []
        for key, value in args.items():
            if key in _REDACTED_ARGS:
                value = "<redacted>"
            elif isinstance(value, str) and len(value) > 50:
                value = value[:50] + "..."
            parts.append(f"{key}={value!r}")
        return f"({', '.join(parts)})"

    def _format_duration(self, duration_ms: float) -> str:
        if duration_ms >= self.slow_threshold_ms:
            return f"{duration_ms:.1f}ms SLOW!"
        return f"{duration_ms:.1f}ms"

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        start = time.perf_counter()
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)

        self.logger.info(">>> TOOL: %s%s", tool_name, self._format_args(args))

        try:
            result = await call_next(context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "!!! TOOL: %s -> %s: %s [%s]",
                tool_name,
                type(e).__name__,
                str(e),
                self._format_duration(duration_ms),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        log_level = (
            logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        )
        self.logger.log(
            log_level,
            "<<< TOOL: %s -> ok [%s]",
            tool_name,
            self._format_duration(duration_ms),
        )
        return result
