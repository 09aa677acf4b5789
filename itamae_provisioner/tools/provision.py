"""MCP tools exposing the provisioner to the build host."""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from itamae_provisioner.errors import ConfigurationError, ConnectionError, ProvisioningError
from itamae_provisioner.models import SSHHost
from itamae_provisioner.services import Provisioner, get_settings, open_communicator
from itamae_provisioner.ui import TranscriptUi

logger = logging.getLogger(__name__)


def _fragments(config: dict[str, Any] | list[dict[str, Any]]) -> list[dict[str, Any]]:
    if isinstance(config, dict):
        return [config]
    return list(config)


def _prepare(config: dict[str, Any] | list[dict[str, Any]]) -> Provisioner:
    provisioner = Provisioner(retry_sleep=get_settings().retry_sleep)
    try:
        provisioner.prepare(*_fragments(config))
    except ConfigurationError as e:
        raise ToolError(str(e)) from e
    return provisioner


async def validate(config: dict[str, Any] | list[dict[str, Any]]) -> str:
    """Validate provisioner configuration without touching any guest.

    Args:
        config: Option mapping, or a list of mappings merged left to right
            (later fragments override earlier ones).

    Returns:
        Short summary of the resolved configuration.
    """
    resolved = _prepare(config).config
    return (
        f"Configuration is valid: {len(resolved.recipes)} recipe(s), "
        f"staging directory {resolved.staging_directory}"
    )


async def provision(
    host: str,
    config: dict[str, Any] | list[dict[str, Any]],
    user: str = "root",
    port: int = 22,
    identity_file: str | None = None,
    hostname: str | None = None,
) -> str:
    """Provision a guest over SSH with Itamae.

    Installs Itamae (unless skip_install), uploads recipes to the staging
    directory, runs itamae local and optionally removes the staging
    directory.

    Args:
        host: Name of the guest, used as hostname unless hostname is given.
        config: Option mapping, or a list of mappings merged left to right.
        user: SSH user.
        port: SSH port.
        identity_file: Private key file for authentication.
        hostname: Address to connect to, when it differs from host.

    Returns:
        Transcript of progress messages and remote output.
    """
    provisioner = _prepare(config)
    settings = get_settings()
    ssh_host = SSHHost(
        name=host,
        hostname=hostname or host,
        user=user,
        port=port,
        identity_file=identity_file,
    )
    ui = TranscriptUi()

    try:
        async with open_communicator(
            ssh_host,
            known_hosts=settings.known_hosts,
            connect_timeout=settings.connect_timeout,
        ) as comm:
            await provisioner.provision(ui, comm)
    except (ConnectionError, ProvisioningError) as e:
        logger.error("Provisioning %s failed: %s", host, e)
        raise ToolError(f"{e}\n\n{ui.transcript}") from e

    logger.info("Provisioning %s completed", host)
    return ui.transcript
