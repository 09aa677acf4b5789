"""Configuration for the Itamae provisioner.

- Settings: plugin process settings from ITAMAE_* environment variables
- ProvisionerConfig: per-run options resolved from host configuration
- OPTIONS: the table of recognized options
"""

from itamae_provisioner.config.defaults import (
    DEFAULT_COMMAND,
    DEFAULT_EXECUTE_COMMAND,
    DEFAULT_GEMS,
    DEFAULT_INSTALL_COMMAND,
    DEFAULT_INSTALL_RETRY_TIMEOUT,
    DEFAULT_STAGING_DIR,
)
from itamae_provisioner.config.resolver import ProvisionerConfig, resolve
from itamae_provisioner.config.schema import OPTIONS, Option, OptionKind, decode
from itamae_provisioner.config.settings import Settings

__all__ = [
    "DEFAULT_COMMAND",
    "DEFAULT_EXECUTE_COMMAND",
    "DEFAULT_GEMS",
    "DEFAULT_INSTALL_COMMAND",
    "DEFAULT_INSTALL_RETRY_TIMEOUT",
    "DEFAULT_STAGING_DIR",
    "OPTIONS",
    "Option",
    "OptionKind",
    "ProvisionerConfig",
    "Settings",
    "decode",
    "resolve",
]
