"""Resolution of raw options into a validated ProvisionerConfig."""

import logging
from dataclasses import dataclass
from typing import Any

from itamae_provisioner.config.schema import apply_defaults, decode, validate
from itamae_provisioner.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionerConfig:
    """Fully defaulted, validated provisioner options for one run."""

    command: str
    gems: tuple[str, ...]
    environment_vars: tuple[str, ...]
    install_command: str
    install_retry_timeout: float
    skip_install: bool
    execute_command: str
    prevent_sudo: bool
    staging_directory: str
    clean_staging_directory: bool
    source_directory: str
    log_level: str
    shell: str
    node_json: str
    node_yaml: str
    color: bool
    config_file: str
    extra_arguments: tuple[str, ...]
    recipes: tuple[str, ...]
    ignore_exit_codes: bool
    packer_build_name: str
    packer_builder_type: str

    @property
    def sudo(self) -> bool:
        """Whether commands run through sudo -E."""
        return not self.prevent_sudo


def resolve(*raws: Any) -> ProvisionerConfig:
    """Decode, default and validate raw configuration fragments.

    Args:
        *raws: Configuration mappings, merged left to right

    Returns:
        Resolved configuration

    Raises:
        DecodeError: If a key is unknown or a value has the wrong type
        ConfigurationError: If any validation rule fails; lists every
            failing rule
    """
    values = apply_defaults(decode(*raws))

    errors = validate(values)
    if errors:
        logger.debug("Configuration rejected with %d problem(s)", len(errors))
        raise ConfigurationError(errors)

    return ProvisionerConfig(**values)
