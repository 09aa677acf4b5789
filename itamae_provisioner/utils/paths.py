"""Local and remote path helpers."""

import os
import posixpath


def to_slash(path: str) -> str:
    """Convert OS-specific separators to forward slashes."""
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


def prefix_path(path: str, prefix: str) -> str:
    """Join path onto prefix when a prefix is configured.

    Args:
        path: Local path as given by the user
        prefix: Source directory, or "" for none

    Returns:
        Slash-separated path, joined onto prefix if prefix is set.
    """
    if prefix:
        path = os.path.join(prefix, path)
    return to_slash(path)


def remote_path(directory: str, path: str) -> str:
    """Place a local relative or absolute path beneath a remote directory.

    Absolute local paths are nested rather than replacing the directory:
    remote_path("/tmp/stage", "/home/u/r.rb") is "/tmp/stage/home/u/r.rb".
    """
    return posixpath.normpath(f"{to_slash(directory)}/{to_slash(path)}")
