"""Tests for main entry point."""

from unittest.mock import MagicMock, patch

import pytest

from itamae_provisioner.__main__ import main, run_server
from itamae_provisioner.config import Settings


class TestRunServer:
    """Tests for run_server()."""

    def test_runs_with_stdio_by_default(self) -> None:
        """Server runs with STDIO transport by default."""
        mock_mcp = MagicMock()

        with patch("itamae_provisioner.server.mcp", mock_mcp), \
             patch("itamae_provisioner.services.get_settings", return_value=Settings()):
            run_server()

        mock_mcp.run.assert_called_once_with(transport="stdio")

    def test_runs_with_http_when_configured(self) -> None:
        """Server runs with HTTP transport when configured."""
        mock_mcp = MagicMock()
        settings = Settings(transport="http", http_host="0.0.0.0", http_port=9000)

        with patch("itamae_provisioner.server.mcp", mock_mcp), \
             patch("itamae_provisioner.services.get_settings", return_value=settings):
            run_server()

        mock_mcp.run.assert_called_once_with(
            transport="http",
            host="0.0.0.0",
            port=9000,
        )


class TestMain:
    """Tests for command line dispatch."""

    def test_no_arguments_serves(self) -> None:
        """Without a command the server is started."""
        with patch("itamae_provisioner.__main__.run_server") as mock_run:
            assert main(["itamae-provisioner"]) == 0

        mock_run.assert_called_once_with()

    @pytest.mark.parametrize("flag", ["help", "-h", "-help", "--help"])
    def test_help(self, flag: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Help flags print usage to stdout."""
        assert main(["itamae-provisioner", flag]) == 0

        out = capsys.readouterr().out
        assert out.startswith("Usage: itamae-provisioner")
        assert "version" in out

    def test_version_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The version command prints the banner."""
        assert main(["itamae-provisioner", "version"]) == 0

        assert capsys.readouterr().out == "[INFO] Provisioner Itamae v0.1.0\n"

    @pytest.mark.parametrize("flag", ["-v", "-version", "--version"])
    def test_version_flags(self, flag: str, capsys: pytest.CaptureFixture[str]) -> None:
        """Version flags print the bare version."""
        assert main(["itamae-provisioner", flag]) == 0

        assert capsys.readouterr().out == "0.1.0\n"

    def test_unknown_command_is_ignored(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Unknown commands exit 0 quietly without serving."""
        with patch("itamae_provisioner.__main__.run_server") as mock_run:
            assert main(["itamae-provisioner", "apply"]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
        mock_run.assert_not_called()
