"""MCP tools for the Itamae provisioner."""

from itamae_provisioner.tools.provision import provision, validate

__all__ = ["provision", "validate"]
