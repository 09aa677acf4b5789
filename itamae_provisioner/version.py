"""Plugin version information."""

VERSION = "0.1.0"

# Filled in by release tooling; empty for development builds.
REVISION = ""


def version_banner() -> str:
    """Return the human-readable version banner.

    Returns:
        "Provisioner Itamae v<version>" with " (<revision>)" appended
        when a revision is known.
    """
    banner = f"Provisioner Itamae v{VERSION}"
    if REVISION:
        banner += f" ({REVISION})"
    return banner
