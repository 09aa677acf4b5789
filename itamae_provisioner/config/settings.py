"""Server settings from environment variables.

Centralized environment variable parsing and validation for the plugin
process itself. Per-run provisioner options are decoded separately by
itamae_provisioner.config.schema.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_RETRY_SLEEP = 5.0


@dataclass
class Settings:
    """Plugin process settings.

    Handles parsing, validation, and defaults for all ITAMAE_* env vars.
    """

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # SSH
    known_hosts: str | None = field(default=None)
    connect_timeout: float = field(default=30.0)

    # Install retry
    retry_sleep: float = field(default=DEFAULT_RETRY_SLEEP)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    slow_threshold_ms: float = field(default=1000.0)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            transport=cls._get_transport(),
            http_host=os.getenv("ITAMAE_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("ITAMAE_HTTP_PORT", 8000),
            known_hosts=cls._get_known_hosts(),
            connect_timeout=cls._get_float("ITAMAE_CONNECT_TIMEOUT", 30.0),
            retry_sleep=cls._get_float("ITAMAE_RETRY_SLEEP", DEFAULT_RETRY_SLEEP),
            log_level=os.getenv("ITAMAE_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("ITAMAE_LOG_COLORS", True),
            slow_threshold_ms=cls._get_float("ITAMAE_SLOW_THRESHOLD_MS", 1000.0),
            include_traceback=cls._get_bool("ITAMAE_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None:
            return default

        try:
            result = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default

        if result < 0:
            logger.warning("%s must be >= 0, got %s. Using default: %s", key, value, default)
            return default
        return result

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("stdio" or "http")
        """
        transport = os.getenv("ITAMAE_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"

    @staticmethod
    def _get_known_hosts() -> str | None:
        """Resolve the known_hosts file used to verify guest host keys.

        Environment: ITAMAE_KNOWN_HOSTS
        Default: ~/.ssh/known_hosts when it exists, otherwise verification
        is disabled (freshly built guests have no recorded key).
        Special value: "none" disables verification explicitly.

        Returns:
            Path to known_hosts file or None if verification is disabled
        """
        value = os.getenv("ITAMAE_KNOWN_HOSTS", "").strip()

        if value.lower() == "none":
            logger.warning(
                "SSH host key verification disabled (ITAMAE_KNOWN_HOSTS=none)"
            )
            return None

        if value:
            return str(Path(os.path.expanduser(value)))

        default = Path.home() / ".ssh" / "known_hosts"
        if default.exists():
            return str(default)

        logger.debug("No known_hosts file at %s, host keys will not be verified", default)
        return None
