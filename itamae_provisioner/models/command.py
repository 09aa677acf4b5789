"""Remote command data models."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itamae_provisioner.protocols import Communicator, Ui

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a remote command execution."""

    output: str
    error: str
    returncode: int


@dataclass
class RemoteCommand:
    """A command dispatched to the remote-execution channel.

    exit_status stays None until the channel reports completion.
    """

    command: str
    exit_status: int | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def exited(self) -> bool:
        return self.exit_status is not None

    async def start_with_ui(self, comm: "Communicator", ui: "Ui") -> None:
        """Run the command and forward its output to the UI line by line.

        Args:
            comm: Remote-execution channel
            ui: Progress sink receiving stdout and stderr lines

        Raises:
            RemoteExecutionError: If the channel fails to run the command
        """
        logger.debug("Starting remote command: %s", self.command)
        result = await comm.run(self.command)

        self.stdout = result.output
        self.stderr = result.error
        self.exit_status = result.returncode

        for line in self.stdout.splitlines():
            ui.detail(line)
        for line in self.stderr.splitlines():
            ui.detail(line)

        logger.debug(
            "Remote command finished with exit status %d: %s",
            self.exit_status,
            self.command,
        )
