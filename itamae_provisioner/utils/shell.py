"""Shell quoting helpers for command strings run on the guest."""

import re

_ENV_VAR_RE = re.compile(r"^(?P<key>[^=]+)=(?P<value>.*)$", re.DOTALL)


def escape_single_quotes(value: str) -> str:
    """Escape single quotes for use inside a single-quoted shell word.

    Each ' becomes '"'"' (close quote, quoted quote, reopen quote).
    """
    return value.replace("'", "'\"'\"'")


def single_quote(value: str) -> str:
    """Wrap value in single quotes, escaping embedded single quotes."""
    return f"'{escape_single_quotes(value)}'"


def requote_env_var(entry: str) -> str | None:
    """Rewrite a KEY=VALUE assignment as KEY='VALUE'.

    Args:
        entry: Raw environment variable assignment

    Returns:
        The shell-safe assignment, or None when entry is not KEY=VALUE
        with a non-empty KEY.

    >>> requote_env_var("FOO=bar")
    "FOO='bar'"
    >>> requote_env_var("=bar") is None
    True
    """
    match = _ENV_VAR_RE.match(entry)
    if match is None:
        return None
    return f"{match.group('key')}={single_quote(match.group('value'))}"
