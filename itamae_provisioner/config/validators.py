"""Validation rules for decoded provisioner options.

Every validator receives the option value and the full mapping of
defaulted values, and returns a list of problems (empty when valid).
"""

import os
from collections.abc import Mapping
from typing import Any

from itamae_provisioner.utils.paths import prefix_path
from itamae_provisioner.utils.shell import requote_env_var


def check_dir(path: str, key: str) -> str | None:
    """Return a problem description unless path is an existing directory."""
    try:
        os.stat(path)
    except OSError as e:
        return f"{key}: {path} is invalid: {e}"
    if not os.path.isdir(path):
        return f"{key}: {path} must point to a directory"
    return None


def check_file(path: str, key: str) -> str | None:
    """Return a problem description unless path exists and is not a directory."""
    try:
        os.stat(path)
    except OSError as e:
        return f"{key}: {path} is invalid: {e}"
    if os.path.isdir(path):
        return f"{key}: {path} must point to a file"
    return None


def validate_environment_vars(value: Any, values: Mapping[str, Any]) -> list[str]:
    return [
        f"Environment variable not in format 'key=value': {entry}"
        for entry in value
        if requote_env_var(entry) is None
    ]


def requote_environment_vars(value: Any) -> tuple[str, ...]:
    """Rewrite every KEY=VALUE entry as KEY='VALUE' for shell interpolation."""
    return tuple(requote_env_var(entry) or entry for entry in value)


def validate_source_directory(value: Any, values: Mapping[str, Any]) -> list[str]:
    if not value:
        return []
    problem = check_dir(value, "source_directory")
    return [problem] if problem else []


def file_validator(key: str):
    """Build a validator for an optional file path option.

    The path is joined onto source_directory when one is configured.
    """

    def validate(value: Any, values: Mapping[str, Any]) -> list[str]:
        if not value:
            return []
        path = prefix_path(value, values.get("source_directory", ""))
        problem = check_file(path, key)
        return [problem] if problem else []

    return validate


def validate_recipes(value: Any, values: Mapping[str, Any]) -> list[str]:
    if value is None:
        return ["A list of recipes must be specified."]
    if len(value) == 0:
        return ["A list of recipes cannot be empty."]

    source_dir = values.get("source_directory", "")
    errors = []
    for idx, recipe in enumerate(value):
        problem = check_file(prefix_path(recipe, source_dir), f"recipes[{idx}]")
        if problem:
            errors.append(problem)
    return errors


def validate_non_negative(key: str):
    """Build a validator rejecting negative numbers."""

    def validate(value: Any, values: Mapping[str, Any]) -> list[str]:
        if value < 0:
            return [f"{key}: must not be negative, got {value}"]
        return []

    return validate
