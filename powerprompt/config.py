"""
Configuration tree and loading for powerprompt.

The tree is read-only: every array or table handed out is a copy, so reads can
be repeated and interleaved in any order during a render.
"""
import copy
import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from .constants import CONFIG_ENV_VAR, CONFIG_FILE, DEFAULT_CONFIG
from .errors import ConvertError, ErrorKind, converting


logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigTree:
    """Immutable hierarchical key-value store addressed by dotted keys.

    Values are strings, integers, floats, booleans, arrays or nested tables.
    A null value is treated the same as an absent key.

    Example:
        tree = ConfigTree({"modules": {"prompt": {"symbol": ">"}}})
        tree.get_str("modules.prompt.symbol")  # ">"
        "modules.prompt" in tree               # True
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return _MISSING if node is None else node

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._lookup(key) is not _MISSING

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigTree):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ConfigTree({self._data!r})"

    def get(self, key: str, default: Any = None) -> Any:
        """Get a copy of the value stored at a dotted key.

        Args:
            key: Dotted path such as 'modules.prompt.style'.
            default: Returned when the key is absent.

        Returns:
            A deep copy of the value, or default.
        """
        value = self._lookup(key)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def get_str(self, key: str) -> Optional[str]:
        """Get a string value, or None if absent."""
        value = self._lookup(key)
        if value is _MISSING:
            return None
        if not isinstance(value, str):
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                f"expected a string, got {type(value).__name__}",
                key=key,
            )
        return value

    def get_bool(self, key: str) -> Optional[bool]:
        """Get a boolean value, or None if absent."""
        value = self._lookup(key)
        if value is _MISSING:
            return None
        if not isinstance(value, bool):
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                f"expected a boolean, got {type(value).__name__}",
                key=key,
            )
        return value

    def get_int(self, key: str) -> Optional[int]:
        """Get an integer value, or None if absent.

        Numeric strings are accepted; a string that does not parse as an
        integer raises ConvertError(INVALID_FORM).
        """
        value = self._lookup(key)
        if value is _MISSING:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                f"expected an integer, got {type(value).__name__}",
                key=key,
            )
        if isinstance(value, int):
            return value
        with converting(key=key):
            return int(value.strip())

    def get_table(self, key: str) -> Optional[dict[str, Any]]:
        """Get a copy of a nested table, or None if absent."""
        value = self._lookup(key)
        if value is _MISSING:
            return None
        if not isinstance(value, dict):
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                f"expected a table, got {type(value).__name__}",
                key=key,
            )
        return copy.deepcopy(value)

    def merged(self, overrides: Mapping[str, Any]) -> "ConfigTree":
        """Layer overrides on top of this tree.

        Tables merge recursively; scalars and arrays from overrides replace
        the base value. Neither input is modified.

        Args:
            overrides: Mapping (or ConfigTree) with higher precedence.

        Returns:
            A new ConfigTree.
        """
        if isinstance(overrides, ConfigTree):
            overrides = overrides._data
        return ConfigTree(_deep_merge(self._data, overrides))


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def get_array(key: str, config: ConfigTree) -> Optional[list[Any]]:
    """Get an array from the config tree using a dotted key.

    Returns None if the key isn't present or its value can't be treated as
    a sequence. The tree is only read, never consumed: the returned list is
    a copy, so later reads of this or any other key still see the original
    data.

    Args:
        key: Dotted path to the array.
        config: The tree to read from.

    Returns:
        A new list with copies of the stored elements, or None.
    """
    value = config.get(key)
    if isinstance(value, (list, tuple)):
        return list(value)
    return None


def resolve_config_path(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Pick the config file location.

    Precedence: explicit path, then the POWERPROMPT_CONFIG environment
    variable, then ~/.powerprompt/config.toml.
    """
    if path is not None:
        return Path(path).expanduser()
    env = os.environ if environ is None else environ
    env_path = env.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_FILE


def _read_config_file(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return tomllib.loads(text)


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigTree:
    """Load the layered configuration.

    Built-in defaults are the bottom layer; the user's file (TOML, or JSON
    when the suffix is .json) is merged on top. A missing file is normal. An
    unreadable or malformed file is logged and the defaults are used.

    Args:
        path: Optional explicit config file path.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        The ConfigTree to render from.
    """
    defaults = ConfigTree(DEFAULT_CONFIG)
    config_path = resolve_config_path(path, environ)

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return defaults

    try:
        data = _read_config_file(config_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", config_path, e)
        return defaults

    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a table at the top level", config_path)
        return defaults

    logger.debug("Loaded config from %s", config_path)
    return defaults.merged(data)
