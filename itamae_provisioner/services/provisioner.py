"""Itamae provisioner: configuration and the provisioning run."""

import asyncio
import logging
import os
from typing import Any

from itamae_provisioner.config.resolver import ProvisionerConfig, resolve
from itamae_provisioner.config.settings import DEFAULT_RETRY_SLEEP
from itamae_provisioner.errors import (
    ConfigurationError,
    ProvisioningError,
    RemoteExecutionError,
)
from itamae_provisioner.models import ExecuteTemplate, InstallTemplate, RemoteCommand
from itamae_provisioner.protocols import Communicator, Ui
from itamae_provisioner.services.guest_commands import GuestCommands, guest_os_type
from itamae_provisioner.services.retry import RetryPolicy, retry_call
from itamae_provisioner.services.templates import render
from itamae_provisioner.utils.paths import remote_path
from itamae_provisioner.utils.shell import single_quote
from itamae_provisioner.version import version_banner

logger = logging.getLogger(__name__)

# Exit status of "itamae local --detailed-exitcode" when changes were applied.
EXIT_STATUS_CHANGED = 2

_NON_ZERO_EXIT = "Non-zero exit status {status}. See output above for more information."


class Provisioner:
    """Install Itamae on a guest, upload recipes and apply them.

    Call prepare() once with the raw configuration, then provision()
    against a remote-execution channel.
    """

    def __init__(self, retry_sleep: float = DEFAULT_RETRY_SLEEP) -> None:
        """Initialize provisioner.

        Args:
            retry_sleep: Seconds to sleep between install attempts
        """
        self.retry_sleep = retry_sleep
        self._config: ProvisionerConfig | None = None
        self._guest_commands: GuestCommands | None = None

    @property
    def config(self) -> ProvisionerConfig:
        """The resolved configuration.

        Raises:
            RuntimeError: If prepare() has not succeeded yet
        """
        if self._config is None:
            raise RuntimeError("Provisioner.prepare() must succeed before use")
        return self._config

    @property
    def guest_commands(self) -> GuestCommands:
        if self._guest_commands is None:
            raise RuntimeError("Provisioner.prepare() must succeed before use")
        return self._guest_commands

    def prepare(self, *raws: Any) -> ProvisionerConfig:
        """Resolve and validate configuration fragments.

        Args:
            *raws: Configuration mappings, merged left to right

        Returns:
            The resolved configuration

        Raises:
            ConfigurationError: If decoding or any validation rule fails
        """
        config = resolve(*raws)

        try:
            guest_commands = GuestCommands(guest_os_type(), config.sudo)
        except ValueError as e:
            raise ConfigurationError([str(e)]) from e

        self._config = config
        self._guest_commands = guest_commands
        logger.info(version_banner())
        return config

    async def provision(self, ui: Ui, comm: Communicator) -> None:
        """Run the provisioning steps in order.

        Steps: install (unless skipped), create staging directory, upload,
        execute, clean up (if enabled). The first failing step aborts the
        run.

        Raises:
            ProvisioningError: Wrapping the failing step's cause
        """
        config = self.config
        ui.announce("Provisioning with Itamae...")

        if not config.skip_install:
            policy = RetryPolicy(timeout=config.install_retry_timeout, sleep=self.retry_sleep)
            try:
                await retry_call(policy, lambda: self._install_itamae(ui, comm))
            except Exception as e:
                raise ProvisioningError("Error installing Itamae", e) from e

        ui.detail("Creating staging directory...")
        try:
            await self._create_dir(ui, comm, config.staging_directory)
        except Exception as e:
            raise ProvisioningError("Error creating staging directory", e) from e

        if config.source_directory:
            ui.detail("Uploading source directory to staging directory...")
            try:
                await self._upload_dir(ui, comm, config.staging_directory, config.source_directory)
            except Exception as e:
                raise ProvisioningError("Error uploading source directory", e) from e
        else:
            ui.detail("Uploading recipes...")
            for src in config.recipes:
                dst = remote_path(config.staging_directory, src)
                try:
                    await self._upload_file(ui, comm, dst, src)
                except Exception as e:
                    raise ProvisioningError("Error uploading recipe", e) from e

        try:
            await self._execute_itamae(ui, comm)
        except Exception as e:
            raise ProvisioningError("Error executing Itamae", e) from e

        if config.clean_staging_directory:
            ui.detail("Removing staging directory...")
            try:
                await self._remove_dir(ui, comm, config.staging_directory)
            except Exception as e:
                raise ProvisioningError("Error removing staging directory", e) from e

    def cancel(self) -> None:
        """Abort immediately by terminating the plugin process."""
        logger.warning("Provisioning cancelled, exiting")
        os._exit(0)

    def install_command(self) -> str:
        """Render the install command for the current configuration."""
        config = self.config
        data = InstallTemplate(gems=" ".join(config.gems), sudo=config.sudo)
        return render(config.install_command, data)

    def execute_command(self) -> str:
        """Render the execute command for the current configuration."""
        config = self.config
        env_vars = [
            f"PACKER_BUILD_NAME={single_quote(config.packer_build_name)}",
            f"PACKER_BUILDER_TYPE={single_quote(config.packer_builder_type)}",
            *config.environment_vars,
        ]
        data = ExecuteTemplate(
            command=config.command,
            vars=" ".join(env_vars),
            sudo=config.sudo,
            staging_directory=config.staging_directory,
            log_level=config.log_level,
            shell=config.shell,
            node_json=config.node_json,
            node_yaml=config.node_yaml,
            color=config.color,
            config_file=config.config_file,
            extra_arguments=" ".join(config.extra_arguments),
            recipes=" ".join(config.recipes),
        )
        return render(config.execute_command, data)

    def accepts_exit_status(self, status: int) -> bool:
        """Whether an execute exit status counts as success."""
        if self.config.ignore_exit_codes:
            return True
        return status in (0, EXIT_STATUS_CHANGED)

    async def _install_itamae(self, ui: Ui, comm: Communicator) -> None:
        ui.detail("Installing Itamae...")
        cmd = RemoteCommand(self.install_command())

        ui.detail(f"Executing: {cmd.command}")
        await cmd.start_with_ui(comm, ui)

        if cmd.exit_status != 0:
            raise RemoteExecutionError(_NON_ZERO_EXIT.format(status=cmd.exit_status))

    async def _execute_itamae(self, ui: Ui, comm: Communicator) -> None:
        ui.detail("Executing Itamae...")
        cmd = RemoteCommand(self.execute_command())

        ui.detail(f"Executing: {cmd.command}")
        await cmd.start_with_ui(comm, ui)

        if not self.accepts_exit_status(cmd.exit_status):
            raise RemoteExecutionError(_NON_ZERO_EXIT.format(status=cmd.exit_status))

    async def _create_dir(self, ui: Ui, comm: Communicator, directory: str) -> None:
        ui.detail(f"Creating directory: {directory}")
        for command in (
            self.guest_commands.create_dir(directory),
            self.guest_commands.chmod(directory, "0777"),
        ):
            cmd = RemoteCommand(command)
            await cmd.start_with_ui(comm, ui)
            if cmd.exit_status != 0:
                raise RemoteExecutionError(_NON_ZERO_EXIT.format(status=cmd.exit_status))

    async def _remove_dir(self, ui: Ui, comm: Communicator, directory: str) -> None:
        ui.detail(f"Removing directory: {directory}")
        cmd = RemoteCommand(self.guest_commands.remove_dir(directory))
        await cmd.start_with_ui(comm, ui)
        if cmd.exit_status != 0:
            raise RemoteExecutionError(_NON_ZERO_EXIT.format(status=cmd.exit_status))

    async def _upload_file(self, ui: Ui, comm: Communicator, dst: str, src: str) -> None:
        ui.detail(f"Uploading file: {src}")
        f = await asyncio.to_thread(open, src, "rb")
        try:
            await comm.upload_file(dst, f)
        finally:
            f.close()

    async def _upload_dir(self, ui: Ui, comm: Communicator, dst: str, src: str) -> None:
        ui.detail(f"Uploading directory: {src}")
        if not src.endswith("/"):
            src += "/"
        await comm.upload_dir(dst, src)
