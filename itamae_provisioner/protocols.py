"""Protocol interfaces for the provisioner's collaborators.

The execution sequencer depends only on these abstractions, so the SSH
channel and the progress sink can be swapped for fakes in tests.

Usage Example:

    from itamae_provisioner.protocols import Communicator, Ui

    async def run(comm: Communicator, ui: Ui):
        ui.announce("Doing work...")
        result = await comm.run("uname -a")

    # Any object with matching methods works
    class FakeCommunicator:
        async def run(self, command):
            return CommandResult(output="", error="", returncode=0)
        ...
"""

from typing import BinaryIO, Protocol, runtime_checkable

from itamae_provisioner.models import CommandResult


@runtime_checkable
class Communicator(Protocol):
    """Protocol for the remote-execution channel.

    Example implementation:
        class MyCommunicator:
            async def run(self, command: str) -> CommandResult:
                return CommandResult(output, error, returncode)

            async def upload_file(self, dst: str, src: BinaryIO) -> None:
                ...

            async def upload_dir(self, dst: str, src: str) -> None:
                ...
    """

    async def run(self, command: str) -> CommandResult:
        """Run a shell command on the guest and wait for completion.

        Args:
            command: Complete shell command string

        Returns:
            Captured output and exit status

        Raises:
            RemoteExecutionError: If the channel fails
        """
        ...

    async def upload_file(self, dst: str, src: BinaryIO) -> None:
        """Upload the contents of an open file to dst on the guest.

        Args:
            dst: Remote destination path
            src: Readable binary file object

        Raises:
            RemoteExecutionError: If the transfer fails
        """
        ...

    async def upload_dir(self, dst: str, src: str) -> None:
        """Upload a local directory to dst on the guest.

        Args:
            dst: Remote destination directory
            src: Local directory; a trailing slash uploads its contents
                rather than the directory itself

        Raises:
            RemoteExecutionError: If the transfer fails
        """
        ...


@runtime_checkable
class Ui(Protocol):
    """Protocol for the progress sink.

    Both methods are fire-and-forget.
    """

    def announce(self, text: str) -> None:
        """Report a top-level progress message."""
        ...

    def detail(self, text: str) -> None:
        """Report a detail line (step progress or remote output)."""
        ...


__all__ = ["Communicator", "Ui"]
