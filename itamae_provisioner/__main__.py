"""Entry point for the Itamae provisioner plugin."""

import logging
import os
import sys

from itamae_provisioner.version import VERSION, version_banner

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: {prog} [--version] [--help] <COMMAND>\n\n"
    "Available commands are:\n"
    "    version    Print the version and exit.\n"
    "    help       Show this help screen.\n\n"
    "Without a command the plugin server is started.\n"
)


def run_server() -> None:
    """Run the plugin server with the configured transport."""
    # Imported here so that help and version never configure logging.
    from itamae_provisioner.server import mcp
    from itamae_provisioner.services import get_settings

    settings = get_settings()

    if settings.transport == "stdio":
        logger.info("Starting Itamae provisioner (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting Itamae provisioner (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        mcp.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


def main(argv: list[str] | None = None) -> int:
    """Dispatch the command line.

    Returns:
        Process exit status
    """
    argv = sys.argv if argv is None else argv
    prog = os.path.basename(argv[0]) if argv else "itamae-provisioner"

    if len(argv) <= 1:
        run_server()
        return 0

    command = argv[1]
    if command in ("-h", "-help", "--help", "help"):
        print(USAGE.format(prog=prog), end="")
    elif command == "version":
        print(f"[INFO] {version_banner()}")
    elif command in ("-v", "-version", "--version"):
        print(VERSION)
    else:
        logger.debug("Ignoring unknown command: %s", command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
