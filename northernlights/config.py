"""Flat key/value configuration loaded from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

ConfigValue = Union[int, float, bool, str]


class ConfigError(Exception):
    """A configuration file could not be read or parsed."""


def _format_value(value: ConfigValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigLoader:
    """Collects configuration values from JSON files under dotted keys.

    Nested objects are flattened, so ``{"risk": {"limit": 2}}`` is stored as
    ``risk.limit``. Strings, booleans, integers and floats are kept; arrays are
    ignored and nulls are reported and skipped. Later loads override earlier
    values with the same key.
    """

    def __init__(self) -> None:
        self._values: dict[str, ConfigValue] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def load(self, filepath: str | Path) -> None:
        """Read a JSON file and merge its values; raise ConfigError on failure."""
        try:
            with open(filepath, encoding="utf-8") as handle:
                parsed = json.load(handle)
        except OSError as exc:
            logger.error("Failed to open config file: %s", filepath)
            raise ConfigError(f"failed to open config file: {filepath}") from exc
        except ValueError as exc:
            logger.error("JSON parse error in %s: %s", filepath, exc)
            raise ConfigError(f"JSON parse error in {filepath}: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ConfigError(f"top level of {filepath} is not a JSON object")

        self._flatten("", parsed)
        logger.info("Loaded config from %s", filepath)

    def _flatten(self, prefix: str, node: dict[str, Any]) -> None:
        for key, value in node.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                self._flatten(full_key, value)
            elif isinstance(value, (str, bool, int, float)):
                self._values[full_key] = value
            elif value is None:
                logger.warning("Unhandled JSON type for key '%s'", full_key)

    def get(self, key: str, default: ConfigValue | None = None) -> ConfigValue | None:
        """Return the value for ``key``, or ``default`` if it is missing.

        When a default is given, a stored value of a different type is treated
        as a mismatch: a warning is logged and the default is returned.
        """
        if key not in self._values:
            return default
        value = self._values[key]
        if default is not None and type(value) is not type(default):
            logger.warning("Type mismatch for config key '%s'", key)
            return default
        return value

    def log_values(self) -> None:
        """Log every stored key and value at INFO level."""
        logger.info("Config Values:")
        for key, value in self._values.items():
            logger.info("  %s = %s", key, _format_value(value))