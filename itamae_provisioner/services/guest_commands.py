"""OS-appropriate shell snippets for staging directory management."""

import sys

UNIX_OS_TYPE = "unix"
WINDOWS_OS_TYPE = "windows"

_UNIX_PLATFORMS = ("linux", "darwin", "freebsd", "openbsd")

_COMMANDS = {
    UNIX_OS_TYPE: {
        "chmod": "chmod {mode} '{path}'",
        "mkdir": "mkdir -p '{path}'",
        "remove_dir": "rm -rf '{path}'",
    },
    WINDOWS_OS_TYPE: {
        "chmod": "echo 'skipping chmod {mode} {path}'",
        "mkdir": (
            'powershell.exe -Command "New-Item -ItemType directory -Force '
            '-ErrorAction SilentlyContinue -Path {path}"'
        ),
        "remove_dir": 'powershell.exe -Command "rm {path} -recurse -force"',
    },
}


def guest_os_type(platform: str | None = None) -> str:
    """Map a sys.platform value to a guest OS type.

    Unix-like platforms map to "unix", win32 to "windows"; anything else is
    returned unchanged and rejected by GuestCommands.
    """
    platform = platform or sys.platform
    if platform.startswith(_UNIX_PLATFORMS):
        return UNIX_OS_TYPE
    if platform.startswith("win"):
        return WINDOWS_OS_TYPE
    return platform


class GuestCommands:
    """Build directory commands for a guest OS type.

    Unix commands are prefixed with "sudo " when sudo is enabled.
    """

    def __init__(self, os_type: str, sudo: bool) -> None:
        """Initialize guest commands.

        Args:
            os_type: "unix" or "windows"
            sudo: Prefix unix commands with sudo

        Raises:
            ValueError: If os_type is not supported
        """
        if os_type not in _COMMANDS:
            raise ValueError(f'Invalid osType: "{os_type}"')
        self.os_type = os_type
        self.sudo = sudo

    def create_dir(self, path: str) -> str:
        return self._sudo(_COMMANDS[self.os_type]["mkdir"].format(path=self.escape(path)))

    def chmod(self, path: str, mode: str) -> str:
        command = _COMMANDS[self.os_type]["chmod"].format(mode=mode, path=self.escape(path))
        return self._sudo(command)

    def remove_dir(self, path: str) -> str:
        command = _COMMANDS[self.os_type]["remove_dir"].format(path=self.escape(path))
        return self._sudo(command)

    def escape(self, path: str) -> str:
        """Escape a path for embedding in this OS type's commands."""
        if self.os_type == WINDOWS_OS_TYPE:
            return path.replace(" ", "` ")
        return path.replace("'", "'\"'\"'")

    def _sudo(self, command: str) -> str:
        if self.os_type == UNIX_OS_TYPE and self.sudo:
            return f"sudo {command}"
        return command
