"""Data models for the Itamae provisioner."""

from itamae_provisioner.models.command import CommandResult, RemoteCommand
from itamae_provisioner.models.ssh import SSHHost
from itamae_provisioner.models.templates import ExecuteTemplate, InstallTemplate

__all__ = [
    "CommandResult",
    "ExecuteTemplate",
    "InstallTemplate",
    "RemoteCommand",
    "SSHHost",
]
