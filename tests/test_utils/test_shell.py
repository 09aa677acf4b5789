"""Tests for shell quoting helpers."""

import pytest

from itamae_provisioner.utils import requote_env_var, single_quote


class TestSingleQuote:
    """Tests for single_quote()."""

    def test_wraps_plain_value(self) -> None:
        """Plain values are wrapped in single quotes."""
        assert single_quote("virtualbox") == "'virtualbox'"

    def test_escapes_embedded_quote(self) -> None:
        """Embedded single quotes close, quote and reopen."""
        assert single_quote("it's") == "'it'\"'\"'s'"

    def test_empty_value(self) -> None:
        """Empty values become an empty quoted word."""
        assert single_quote("") == "''"


class TestRequoteEnvVar:
    """Tests for requote_env_var()."""

    @pytest.mark.parametrize(
        ("entry", "expected"),
        [
            ("FOO=bar", "FOO='bar'"),
            ("FOO=", "FOO=''"),
            ("FOO=a b c", "FOO='a b c'"),
            ("FOO=x=y", "FOO='x=y'"),
            ("FOO=$HOME", "FOO='$HOME'"),
            ("FOO=line1\nline2", "FOO='line1\nline2'"),
        ],
    )
    def test_requotes_valid_entries(self, entry: str, expected: str) -> None:
        """KEY=VALUE entries are rewritten as KEY='VALUE'."""
        assert requote_env_var(entry) == expected

    @pytest.mark.parametrize("entry", ["", "FOO", "=bar"])
    def test_rejects_malformed_entries(self, entry: str) -> None:
        """Entries without a non-empty key and an equals sign are rejected."""
        assert requote_env_var(entry) is None
