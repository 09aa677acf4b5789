"""View models rendered into shell command strings.

Each instance holds exactly the values one template render needs and is
discarded after rendering.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class InstallTemplate:
    """Data available to the install_command template."""

    gems: str
    sudo: bool

    def as_context(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExecuteTemplate:
    """Data available to the execute_command template."""

    command: str
    vars: str
    sudo: bool
    staging_directory: str
    log_level: str = ""
    shell: str = ""
    node_json: str = ""
    node_yaml: str = ""
    color: bool = False
    config_file: str = ""
    extra_arguments: str = ""
    recipes: str = ""

    def as_context(self) -> dict[str, Any]:
        return asdict(self)
