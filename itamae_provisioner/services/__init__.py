"""Services for the Itamae provisioner."""

from itamae_provisioner.services.communicator import (
    SSHCommunicator,
    connect_with_retry,
    open_communicator,
)
from itamae_provisioner.services.guest_commands import GuestCommands, guest_os_type
from itamae_provisioner.services.provisioner import Provisioner
from itamae_provisioner.services.retry import RetryPolicy, retry_call
from itamae_provisioner.services.state import get_settings, reset_state, set_settings
from itamae_provisioner.services.templates import render

__all__ = [
    "GuestCommands",
    "Provisioner",
    "RetryPolicy",
    "SSHCommunicator",
    "connect_with_retry",
    "get_settings",
    "guest_os_type",
    "open_communicator",
    "render",
    "reset_state",
    "retry_call",
    "set_settings",
]
