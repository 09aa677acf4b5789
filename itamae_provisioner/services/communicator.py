"""SSH remote-execution channel built on asyncssh."""

import asyncio
import logging
import posixpath
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import BinaryIO

import asyncssh

from itamae_provisioner.errors import ConnectionError, RemoteExecutionError
from itamae_provisioner.models import CommandResult, SSHHost

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


class SSHCommunicator:
    """Run commands on and upload files to one guest over SSH."""

    def __init__(self, conn: asyncssh.SSHClientConnection, host: SSHHost) -> None:
        self._conn = conn
        self.host = host

    async def run(self, command: str) -> CommandResult:
        """Run a shell command and wait for it to exit.

        Returns:
            CommandResult with stdout, stderr, and exit status. A command
            killed by a signal reports the negated signal number; a
            missing status is reported as -1.

        Raises:
            RemoteExecutionError: If the SSH channel fails.
        """
        try:
            result = await self._conn.run(command, check=False)
        except (asyncssh.Error, OSError) as e:
            raise RemoteExecutionError(
                f"Failed to run command on {self.host.name}: {e}"
            ) from e

        returncode = result.returncode
        if returncode is None:
            returncode = -1

        return CommandResult(
            output=_decode(result.stdout),
            error=_decode(result.stderr),
            returncode=returncode,
        )

    async def upload_file(self, dst: str, src: BinaryIO) -> None:
        """Stream an open local file to dst, creating parent directories.

        Raises:
            RemoteExecutionError: If the transfer fails.
        """
        try:
            async with self._conn.start_sftp_client() as sftp:
                parent = posixpath.dirname(dst)
                if parent:
                    await sftp.makedirs(parent, exist_ok=True)
                async with sftp.open(dst, "wb") as remote:
                    while chunk := await asyncio.to_thread(src.read, _CHUNK_SIZE):
                        await remote.write(chunk)
        except (asyncssh.Error, OSError) as e:
            raise RemoteExecutionError(f"Upload to {dst} failed: {e}") from e

        logger.debug("Uploaded file to %s:%s", self.host.name, dst)

    async def upload_dir(self, dst: str, src: str) -> None:
        """Recursively upload a local directory.

        With a trailing slash on src the directory's contents land directly
        in dst; without one the directory itself is placed inside dst.

        Raises:
            RemoteExecutionError: If src is not a directory or the transfer fails.
        """
        local = Path(src)
        if not local.is_dir():
            raise RemoteExecutionError(f"{src} is not a directory")

        if src.endswith("/"):
            entries = sorted(local.iterdir())
        else:
            entries = [local]

        try:
            async with self._conn.start_sftp_client() as sftp:
                await sftp.makedirs(dst, exist_ok=True)
                for entry in entries:
                    await sftp.put(
                        str(entry),
                        posixpath.join(dst, entry.name),
                        recurse=True,
                        preserve=True,
                    )
        except (asyncssh.Error, OSError) as e:
            raise RemoteExecutionError(f"Upload of {src} to {dst} failed: {e}") from e

        logger.debug("Uploaded directory %s to %s:%s", src, self.host.name, dst)

    def close(self) -> None:
        self._conn.close()


async def _connect(
    ssh_host: SSHHost,
    known_hosts: str | None,
    connect_timeout: float,
) -> asyncssh.SSHClientConnection:
    logger.info("Opening SSH connection to %s (%s)", ssh_host.name, ssh_host.endpoint)
    client_keys = [ssh_host.identity_file] if ssh_host.identity_file else None
    return await asyncssh.connect(
        ssh_host.hostname,
        port=ssh_host.port,
        username=ssh_host.user,
        known_hosts=known_hosts,
        client_keys=client_keys,
        connect_timeout=connect_timeout,
    )


async def connect_with_retry(
    ssh_host: SSHHost,
    known_hosts: str | None = None,
    connect_timeout: float = 30.0,
) -> asyncssh.SSHClientConnection:
    """Connect to the guest with one automatic retry on failure.

    Args:
        ssh_host: SSH target
        known_hosts: known_hosts path, or None to skip host key checks
        connect_timeout: Seconds to wait for each connection attempt

    Returns:
        Active SSH connection

    Raises:
        ConnectionError: If connection fails after retry
    """
    try:
        return await _connect(ssh_host, known_hosts, connect_timeout)
    except (asyncssh.Error, OSError) as first_error:
        logger.warning(
            "Connection to %s failed: %s, retrying",
            ssh_host.name,
            first_error,
        )
        try:
            conn = await _connect(ssh_host, known_hosts, connect_timeout)
            logger.info("Retry connection to %s succeeded", ssh_host.name)
            return conn
        except (asyncssh.Error, OSError) as retry_error:
            logger.error(
                "Retry connection to %s failed: %s",
                ssh_host.name,
                retry_error,
            )
            raise ConnectionError(ssh_host.name, retry_error) from retry_error


@asynccontextmanager
async def open_communicator(
    ssh_host: SSHHost,
    known_hosts: str | None = None,
    connect_timeout: float = 30.0,
) -> AsyncIterator[SSHCommunicator]:
    """Yield a communicator for ssh_host and close the connection afterwards."""
    conn = await connect_with_retry(ssh_host, known_hosts, connect_timeout)
    comm = SSHCommunicator(conn, ssh_host)
    try:
        yield comm
    finally:
        logger.info("Closing SSH connection to %s", ssh_host.name)
        comm.close()
