"""SSH-related data models."""

from dataclasses import dataclass


@dataclass
class SSHHost:
    """SSH target the provisioner connects to."""

    name: str
    hostname: str
    user: str = "root"
    port: int = 22
    identity_file: str | None = None

    @property
    def endpoint(self) -> str:
        """Return user@hostname:port for log messages."""
        return f"{self.user}@{self.hostname}:{self.port}"
