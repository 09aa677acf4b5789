"""Itamae provisioner plugin for machine-image builds."""

from itamae_provisioner.version import REVISION, VERSION, version_banner

__version__ = VERSION

__all__ = ["REVISION", "VERSION", "__version__", "version_banner"]
