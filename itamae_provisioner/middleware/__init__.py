"""Plugin server middleware components."""

from itamae_provisioner.middleware.base import ProvisionerMiddleware
from itamae_provisioner.middleware.errors import ErrorHandlingMiddleware
from itamae_provisioner.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
    "ProvisionerMiddleware",
]
