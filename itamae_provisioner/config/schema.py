"""Option table and the generic decode, default and validate passes.

Each recognized option is one Option entry. Keys that do not appear in
OPTIONS (or as an alias of one) are rejected by construction.
"""

import logging
import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from itamae_provisioner.config import defaults
from itamae_provisioner.config.validators import (
    file_validator,
    requote_environment_vars,
    validate_environment_vars,
    validate_non_negative,
    validate_recipes,
    validate_source_directory,
)
from itamae_provisioner.errors import DecodeError

logger = logging.getLogger(__name__)

Validator = Callable[[Any, Mapping[str, Any]], list[str]]

_TRUE_STRINGS = frozenset({"1", "t", "true", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"", "0", "f", "false", "no", "n", "off"})

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_BARE_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(text: str) -> float:
    """Parse a Go-style duration string into seconds.

    Every component needs a unit; only "0" may be given bare.

    >>> parse_duration("1h30m")
    5400.0
    >>> parse_duration("250ms")
    0.25
    >>> parse_duration("0")
    0.0
    """
    text = text.strip()
    if not text:
        raise ValueError("empty duration")

    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if text == "0":
        return 0.0
    if not text:
        raise ValueError("invalid duration: missing number")
    if _BARE_NUMBER_RE.fullmatch(text):
        raise ValueError(f"missing unit in duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def _scalar_to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"expected a string, got {type(value).__name__}")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"cannot parse {value!r} as a boolean")
    raise ValueError(f"expected a boolean, got {type(value).__name__}")


def _to_string_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(_scalar_to_string(item) for item in value)
    raise ValueError(f"expected a list of strings, got {type(value).__name__}")


def _to_duration(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("expected a duration, got bool")
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        seconds = parse_duration(value)
    else:
        raise ValueError(f"expected a duration, got {type(value).__name__}")
    if not math.isfinite(seconds):
        raise ValueError(f"duration must be finite, got {value!r}")
    return seconds


class OptionKind(Enum):
    """Declared type of an option, with its coercion function."""

    STRING = "string"
    BOOL = "bool"
    STRING_LIST = "string list"
    DURATION = "duration"

    def coerce(self, value: Any) -> Any:
        """Coerce a loosely typed value to this kind.

        Raises:
            ValueError: If the value cannot be coerced
        """
        if self is OptionKind.STRING:
            return _scalar_to_string(value)
        if self is OptionKind.BOOL:
            return _to_bool(value)
        if self is OptionKind.STRING_LIST:
            return _to_string_list(value)
        return _to_duration(value)

    def empty(self, value: Any) -> bool:
        """Whether value counts as unset for defaulting."""
        if value is None:
            return True
        if self is OptionKind.STRING:
            return value == ""
        if self is OptionKind.STRING_LIST:
            return len(value) == 0
        if self is OptionKind.DURATION:
            return value == 0
        return False


@dataclass(frozen=True)
class Option:
    """One recognized configuration option.

    default is used when the decoded value is absent or empty; with
    default None an absent value stays None and the validator decides.
    transform runs after validation and only when no problems were found.
    """

    key: str
    kind: OptionKind
    default: Any = None
    aliases: tuple[str, ...] = ()
    validator: Validator | None = None
    transform: Callable[[Any], Any] | None = None


OPTIONS: tuple[Option, ...] = (
    Option("command", OptionKind.STRING, defaults.DEFAULT_COMMAND),
    Option("gems", OptionKind.STRING_LIST, defaults.DEFAULT_GEMS, aliases=("gem",)),
    Option(
        "environment_vars",
        OptionKind.STRING_LIST,
        (),
        validator=validate_environment_vars,
        transform=requote_environment_vars,
    ),
    Option("install_command", OptionKind.STRING, defaults.DEFAULT_INSTALL_COMMAND),
    Option(
        "install_retry_timeout",
        OptionKind.DURATION,
        defaults.DEFAULT_INSTALL_RETRY_TIMEOUT,
        validator=validate_non_negative("install_retry_timeout"),
    ),
    Option("skip_install", OptionKind.BOOL, False),
    Option("execute_command", OptionKind.STRING, defaults.DEFAULT_EXECUTE_COMMAND),
    Option("prevent_sudo", OptionKind.BOOL, False),
    Option("staging_directory", OptionKind.STRING, defaults.DEFAULT_STAGING_DIR),
    Option("clean_staging_directory", OptionKind.BOOL, False),
    Option(
        "source_directory",
        OptionKind.STRING,
        "",
        validator=validate_source_directory,
    ),
    Option("log_level", OptionKind.STRING, ""),
    Option("shell", OptionKind.STRING, ""),
    Option(
        "node_json",
        OptionKind.STRING,
        "",
        aliases=("json_path",),
        validator=file_validator("node_json"),
    ),
    Option(
        "node_yaml",
        OptionKind.STRING,
        "",
        aliases=("yaml_path",),
        validator=file_validator("node_yaml"),
    ),
    Option("color", OptionKind.BOOL, False),
    Option(
        "config_file",
        OptionKind.STRING,
        "",
        validator=file_validator("config_file"),
    ),
    Option("extra_arguments", OptionKind.STRING_LIST, ()),
    Option("recipes", OptionKind.STRING_LIST, None, validator=validate_recipes),
    Option("ignore_exit_codes", OptionKind.BOOL, False),
    # Build identity, injected by the host for every provisioner.
    Option("packer_build_name", OptionKind.STRING, ""),
    Option("packer_builder_type", OptionKind.STRING, ""),
)

_LOOKUP: dict[str, Option] = {
    name: option for option in OPTIONS for name in (option.key, *option.aliases)
}


def decode(*raws: Any) -> dict[str, Any]:
    """Decode and merge raw configuration fragments.

    Fragments are applied left to right; a later fragment overrides an
    earlier one. A None value in a fragment resets the option to unset.

    Args:
        *raws: Mappings of option name to loosely typed value

    Returns:
        Mapping of canonical option key to coerced value, for the keys
        that appeared in any fragment.

    Raises:
        DecodeError: If any key is unknown, any value cannot be coerced,
            or a fragment is not a mapping
    """
    merged: dict[str, Any] = {}
    errors: list[str] = []

    for index, raw in enumerate(raws):
        if raw is None:
            continue
        if not isinstance(raw, Mapping):
            errors.append(
                f"config[{index}]: expected a mapping, got {type(raw).__name__}"
            )
            continue

        seen: dict[str, str] = {}
        for name, value in raw.items():
            option = _LOOKUP.get(name)
            if option is None:
                errors.append(f"unknown configuration key: {name!r}")
                continue

            if option.key in seen:
                errors.append(
                    f"{seen[option.key]!r} and {name!r} cannot both be set"
                )
                continue
            seen[option.key] = name

            if value is None:
                merged[option.key] = None
                continue

            try:
                merged[option.key] = option.kind.coerce(value)
            except ValueError as e:
                errors.append(f"{name}: {e}")

    if errors:
        raise DecodeError(errors)

    logger.debug("Decoded %d option(s) from %d fragment(s)", len(merged), len(raws))
    return merged


def apply_defaults(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a complete option mapping with defaults filled in."""
    resolved: dict[str, Any] = {}
    for option in OPTIONS:
        value = values.get(option.key)
        if option.kind.empty(value) and option.default is not None:
            value = option.default
        resolved[option.key] = value
    return resolved


def validate(values: dict[str, Any]) -> list[str]:
    """Run every option validator and collect all problems.

    Transforms are applied in place, and only when no problem was found.

    Returns:
        Problem descriptions in option table order
    """
    errors: list[str] = []
    for option in OPTIONS:
        if option.validator is not None:
            errors.extend(option.validator(values[option.key], values))

    if errors:
        return errors

    for option in OPTIONS:
        if option.transform is not None:
            values[option.key] = option.transform(values[option.key])
    return errors
