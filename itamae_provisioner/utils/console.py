"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "itamae_provisioner.server": COLORS["bright_cyan"],
    "itamae_provisioner.services.provisioner": COLORS["bright_blue"],
    "itamae_provisioner.services.communicator": COLORS["bright_magenta"],
    "itamae_provisioner.middleware": COLORS["yellow"],
    "itamae_provisioner.config": COLORS["green"],
    "itamae_provisioner.ui": COLORS["cyan"],
    "default": COLORS["white"],
}

_PREFIX = "itamae_provisioner."


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with local timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d} {dt:%m/%d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(_PREFIX):
            name = name[len(_PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<24}", color)

    def _highlight_message(self, message: str) -> str:
        """Highlight durations, SSH endpoints and exit statuses."""
        if not self.use_colors:
            return message

        message = re.sub(
            r"(\d+\.?\d*ms)",
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}",
            message,
        )
        message = re.sub(
            r"(\w+@[\w\.\-]+:\d+)",
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}",
            message,
        )
        message = re.sub(
            r"(exit status \d+)",
            f"{COLORS['bright_cyan']}\\1{COLORS['reset']}",
            message,
        )
        return message

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
