"""
Configuration loader for the speed reader.

Settings are stored as YAML in the per-user application directory and
loaded once at startup into an immutable Config value.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

APP_NAME = "speedreader"
CONFIG_ENV_VAR = "SPEEDREADER_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "wpm": 258,
    "wpm_step": 5,
    "max_wpm": 1000,
    "model": "deepseek/deepseek-r1:free",
    "countdown": 3,
    "chunk_size": 1,
    "keys": {
        "quit": "q",
        "pause": " ",
        "increase_wpm": "+",
        "decrease_wpm": "-",
    },
}

KEY_ACTIONS = ("quit", "pause", "increase_wpm", "decrease_wpm")


class ConfigError(Exception):
    """Raised when the settings file is unreadable or malformed."""


def get_config_path() -> Path:
    """Get the settings file path, honouring SPEEDREADER_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME)) / "config.yaml"


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _require_int(data: Dict[str, Any], key: str, minimum: int) -> None:
    value = data.get(key)
    # bool is an int subclass; "wpm: yes" is not a rate
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(f"'{key}' must be an integer >= {minimum}, got {value!r}")


def _validate(data: Dict[str, Any]) -> None:
    """Check a merged settings dict, raising ConfigError on the first problem."""
    for key in ("wpm", "wpm_step", "max_wpm", "chunk_size"):
        _require_int(data, key, 1)
    _require_int(data, "countdown", 0)

    if not isinstance(data.get("model"), str) or not data["model"].strip():
        raise ConfigError("'model' must be a non-empty string")

    keys = data.get("keys")
    if not isinstance(keys, dict):
        raise ConfigError("'keys' must be a mapping of action to key")

    for action in KEY_ACTIONS:
        key = keys.get(action)
        if not isinstance(key, str) or len(key) != 1:
            raise ConfigError(f"Key binding '{action}' must be a single character, got {key!r}")

    bound = [keys[action] for action in KEY_ACTIONS]
    if len(set(bound)) != len(bound):
        raise ConfigError(f"Key bindings must be distinct, got {bound!r}")


class Config:
    """Read-only view of the resolved speed reader settings."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, path: Optional[Path] = None) -> None:
        merged = _merge(DEFAULTS, data or {})
        _validate(merged)
        self._config = merged
        self.path = path

    @classmethod
    def load(cls, path: Optional[Path] = None, create: bool = True) -> "Config":
        """
        Load configuration from a YAML file.

        A missing file yields the defaults and, when ``create`` is set,
        is written out so the user has something to edit.

        Raises:
            ConfigError: If the file cannot be read or parsed, or holds invalid values
        """
        config_path = Path(path) if path else get_config_path()

        if not config_path.exists():
            config = cls(path=config_path)
            if create:
                config.save()
            return config

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        return cls(data, path=config_path)

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the settings to disk as YAML and return the path written."""
        config_path = Path(path or self.path or get_config_path())

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, sort_keys=False, allow_unicode=True)
        except OSError as e:
            raise ConfigError(f"Failed to write config file: {e}") from e

        return config_path

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the settings as a plain dict."""
        return copy.deepcopy(self._config)

    def with_wpm(self, wpm: int) -> "Config":
        """Return a copy with the starting rate replaced, clamped to max_wpm."""
        data = self.to_dict()
        data["wpm"] = min(max(int(wpm), 1), self.max_wpm)
        return Config(data, path=self.path)

    @property
    def wpm(self) -> int:
        """Get the starting words per minute."""
        return self._config["wpm"]

    @property
    def wpm_step(self) -> int:
        """Get the rate change applied per key press."""
        return self._config["wpm_step"]

    @property
    def max_wpm(self) -> int:
        return self._config["max_wpm"]

    @property
    def model(self) -> str:
        """Get the evaluation model identifier."""
        return self._config["model"]

    @property
    def countdown(self) -> int:
        return self._config["countdown"]

    @property
    def chunk_size(self) -> int:
        return self._config["chunk_size"]

    @property
    def keys(self) -> Dict[str, str]:
        """Get the action -> key mapping."""
        return dict(self._config["keys"])
