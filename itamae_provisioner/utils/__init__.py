"""Utility helpers for the Itamae provisioner."""

from itamae_provisioner.utils.paths import prefix_path, remote_path
from itamae_provisioner.utils.shell import requote_env_var, single_quote

__all__ = ["prefix_path", "remote_path", "requote_env_var", "single_quote"]
