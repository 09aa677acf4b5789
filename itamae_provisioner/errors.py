"""Exception hierarchy for the Itamae provisioner."""

from collections.abc import Iterable


class ProvisionerError(Exception):
    """Base class for all provisioner errors."""


class ConfigurationError(ProvisionerError):
    """One or more configuration problems.

    Problems are accumulated so that a user sees all of them in one pass.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        """Initialize configuration error.

        Args:
            errors: Individual problem descriptions
        """
        self.errors: list[str] = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        count = len(self.errors)
        if count == 1:
            return f"1 error occurred:\n\n* {self.errors[0]}"
        points = "\n".join(f"* {error}" for error in self.errors)
        return f"{count} errors occurred:\n\n{points}"


class DecodeError(ConfigurationError):
    """Raw configuration could not be decoded.

    Raised for unknown keys or values that cannot be coerced to the
    declared option type. No further validation runs after this.
    """


class TemplateError(ProvisionerError):
    """A command template is malformed or references unknown data."""


class RemoteExecutionError(ProvisionerError):
    """A remote command failed or the channel itself failed."""


class ProvisioningError(ProvisionerError):
    """A provisioning step failed.

    Carries the step description and the underlying cause.
    """

    def __init__(self, step: str, cause: Exception) -> None:
        """Initialize provisioning error.

        Args:
            step: Step description, e.g. "Error installing Itamae"
            cause: Exception that aborted the step
        """
        self.step = step
        self.cause = cause
        super().__init__(f"{step}: {cause}")


class ConnectionError(ProvisionerError):
    """Failed to establish SSH connection after retry."""

    def __init__(self, host_name: str, original_error: Exception):
        """Initialize connection error.

        Args:
            host_name: Name of the SSH host
            original_error: Original exception that caused the failure
        """
        self.host_name = host_name
        self.original_error = original_error
        super().__init__(f"Cannot connect to {host_name}: {original_error}")
