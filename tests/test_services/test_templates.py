"""Tests for command template rendering."""

import pytest

from itamae_provisioner.config import DEFAULT_EXECUTE_COMMAND, DEFAULT_INSTALL_COMMAND
from itamae_provisioner.errors import TemplateError
from itamae_provisioner.models import ExecuteTemplate, InstallTemplate
from itamae_provisioner.services import render


def _execute_data(**overrides) -> ExecuteTemplate:
    fields = {
        "command": "itamae",
        "vars": "PACKER_BUILD_NAME='vb' PACKER_BUILDER_TYPE='iso'",
        "sudo": True,
        "staging_directory": "/tmp/packer-itamae",
        "recipes": "r.rb",
    }
    fields.update(overrides)
    return ExecuteTemplate(**fields)


class TestInstallTemplate:
    """Tests for the default install command."""

    def test_with_sudo(self) -> None:
        """sudo -E prefixes the gem install."""
        data = InstallTemplate(gems="itamae", sudo=True)

        assert render(DEFAULT_INSTALL_COMMAND, data) == (
            "sudo -E gem install --quiet --no-document --no-suggestions itamae"
        )

    def test_without_sudo(self) -> None:
        """No sudo prefix when sudo is disabled."""
        data = InstallTemplate(gems="itamae serverspec", sudo=False)

        assert render(DEFAULT_INSTALL_COMMAND, data) == (
            "gem install --quiet --no-document --no-suggestions itamae serverspec"
        )


class TestExecuteTemplate:
    """Tests for the default execute command."""

    def test_minimal(self) -> None:
        """Only mandatory flags appear when optional fields are empty."""
        assert render(DEFAULT_EXECUTE_COMMAND, _execute_data()) == (
            "cd /tmp/packer-itamae && PACKER_BUILD_NAME='vb' PACKER_BUILDER_TYPE='iso' "
            "sudo -E itamae local --detailed-exitcode --color='false' r.rb"
        )

    def test_all_optional_flags(self) -> None:
        """Optional fields render as quoted flags in a fixed order."""
        data = _execute_data(
            sudo=False,
            color=True,
            log_level="debug",
            shell="/bin/bash",
            node_json="node.json",
            node_yaml="node.yml",
            config_file="itamae.yml",
            extra_arguments="--dry-run --no-color",
            recipes="a.rb b.rb",
        )

        assert render(DEFAULT_EXECUTE_COMMAND, data) == (
            "cd /tmp/packer-itamae && PACKER_BUILD_NAME='vb' PACKER_BUILDER_TYPE='iso' "
            "itamae local --detailed-exitcode --color='true' --log-level='debug' "
            "--shell='/bin/bash' --node-json='node.json' --node-yaml='node.yml' "
            "--config='itamae.yml' --dry-run --no-color a.rb b.rb"
        )

    def test_render_is_deterministic(self) -> None:
        """Rendering twice yields identical output."""
        data = _execute_data(log_level="info")

        assert render(DEFAULT_EXECUTE_COMMAND, data) == render(
            DEFAULT_EXECUTE_COMMAND, data
        )


def test_render_accepts_mapping() -> None:
    """Plain mappings work as template data."""
    assert render("echo {{ name }}", {"name": "web"}) == "echo web"


def test_unknown_name_fails() -> None:
    """Referencing a name the data does not provide is an error."""
    with pytest.raises(TemplateError):
        render("{{ missing }}", InstallTemplate(gems="itamae", sudo=True))


def test_syntax_error_reports_line() -> None:
    """Malformed templates are reported with their line number."""
    with pytest.raises(TemplateError, match="line 1"):
        render("{% if sudo %}sudo", {"sudo": True})
