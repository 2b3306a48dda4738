"""
Configuration Management Module
================================

This module provides the configuration layer for the scoring engine:
    - Loads YAML configuration files with inheritance support
    - Provides attribute-style and dot-path access to values
    - Supports environment variable overrides (and a local .env file)

The feature weight table is deliberately absent from configuration; it is
fixed in code and validated at construction.

Example Usage:
    >>> from deepfake_scorer.utils.config import load_config
    >>> config = load_config("config/default.yaml")
    >>> config.latency.max_ms
    8000
    >>> config.get("analysis.max_workers", 4)
    4

Architecture:
    The Config class wraps a nested dictionary structure. Configuration
    files can extend other files using the '_extends' key.
"""

from __future__ import annotations

import os
import copy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TypeVar

import yaml
from dotenv import load_dotenv

from deepfake_scorer.utils.exceptions import ConfigurationError

T = TypeVar("T")

ENV_PREFIX = "DEEPFAKE_SCORER_"


class Config:
    """
    Configuration wrapper with attribute-style access.

    Attributes:
        _data: The underlying configuration dictionary.
        _path: The path to the configuration file (if loaded from file).

    Example:
        >>> config = Config({"latency": {"enabled": False, "max_ms": 8000}})
        >>> config.latency.max_ms
        8000
        >>> config.get("latency.scale", 1.0)
        1.0
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        object.__setattr__(self, "_data", data or {})
        object.__setattr__(self, "_path", Path(path) if path else None)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return object.__getattribute__(self, name)

        try:
            value = self._data[name]
            if isinstance(value, dict):
                return Config(value)
            return value
        except KeyError:
            raise AttributeError(
                f"Configuration has no attribute '{name}'. "
                f"Available keys: {list(self._data.keys())}"
            )

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._data[name] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __iter__(self):
        return iter(self._data)

    def __repr__(self) -> str:
        return f"Config({self._data})"

    def __len__(self) -> int:
        return len(self._data)

    @property
    def path(self) -> Optional[Path]:
        """Path of the file this configuration was loaded from."""
        return self._path

    def get(self, path: str, default: T = None) -> Union[Any, T]:
        """
        Get a configuration value using dot-notation path.

        Args:
            path: Dot-separated path to the value (e.g., "latency.max_ms").
            default: Default value if path doesn't exist.

        Returns:
            The configuration value or default.
        """
        keys = path.split(".")
        value = self._data

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """
        Set a configuration value using dot-notation path.

        Creates intermediate dictionaries if they don't exist.
        """
        keys = path.split(".")
        data = self._data

        for key in keys[:-1]:
            if key not in data or not isinstance(data[key], dict):
                data[key] = {}
            data = data[key]

        data[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the configuration dictionary."""
        return copy.deepcopy(self._data)

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def items(self):
        return self._data.items()

    def update(self, other: Union[Dict[str, Any], "Config"]) -> None:
        """
        Deep-merge values from another dict or Config into this one.
        """
        if isinstance(other, Config):
            other = other.to_dict()
        self._data = deep_merge(self._data, other)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values from 'override' take precedence. Nested dictionaries are
    recursively merged rather than replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 4}})
        {'a': 1, 'b': {'c': 4, 'd': 3}}
    """
    result = copy.deepcopy(base)

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file.

    Raises:
        ConfigurationError: If file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {path}", config_path=str(path)
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML file {path}: {e}",
            config_path=str(path),
            cause=e,
        )
    except IOError as e:
        raise ConfigurationError(
            f"Failed to read configuration file {path}: {e}",
            config_path=str(path),
            cause=e,
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping",
            config_path=str(path),
        )
    return data


def load_config(
    path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
    env_prefix: str = ENV_PREFIX,
    env_file: Optional[Union[str, Path]] = None,
) -> Config:
    """
    Load configuration from YAML file with inheritance and overrides.

    Precedence, lowest first: extended file, the file itself, environment
    variables (including those from a .env file), programmatic overrides.

    Args:
        path: Path to the configuration file.
        overrides: Dot-notation keys to override.
        env_prefix: Prefix for environment variable overrides.
        env_file: Optional .env file; the default lookup is used when omitted.

    Returns:
        Loaded and merged Config object.

    Example:
        >>> config = load_config(
        ...     "config/default.yaml",
        ...     overrides={"latency.enabled": True},
        ... )
    """
    path = Path(path)
    data = load_yaml(path)

    if "_extends" in data:
        extends_path = data.pop("_extends")
        if not Path(extends_path).is_absolute():
            extends_path = path.parent / extends_path
        base_data = load_yaml(extends_path)
        data = deep_merge(base_data, data)

    # Existing environment variables win over .env entries
    if env_file is not None:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(override=False)
    data = apply_env_overrides(data, env_prefix)

    if overrides:
        nested_overrides: Dict[str, Any] = {}
        for key, value in overrides.items():
            if "." in key:
                keys = key.split(".")
                current = nested_overrides
                for k in keys[:-1]:
                    current = current.setdefault(k, {})
                current[keys[-1]] = value
            else:
                nested_overrides[key] = value
        data = deep_merge(data, nested_overrides)

    return Config(data, path)


def apply_env_overrides(
    data: Dict[str, Any], prefix: str, path: str = ""
) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables are expected in the format {PREFIX}{PATH}
    where PATH uses underscores for nesting, e.g.
    DEEPFAKE_SCORER_LATENCY_ENABLED=true.
    """
    result = copy.deepcopy(data)

    for key, value in result.items():
        current_path = f"{path}_{key}".upper() if path else key.upper()
        env_key = f"{prefix}{current_path}"

        if isinstance(value, dict):
            result[key] = apply_env_overrides(value, prefix, current_path)
        else:
            env_value = os.environ.get(env_key)
            if env_value is not None:
                result[key] = parse_env_value(env_value, type(value), env_key)

    return result


def parse_env_value(value: str, target_type: type, key: str = "") -> Any:
    """
    Parse an environment variable string to the target type.

    Raises:
        ConfigurationError: If the value cannot be converted.
    """
    try:
        if target_type == bool:
            return value.lower() in ("true", "1", "yes", "on")
        elif target_type == int:
            return int(value)
        elif target_type == float:
            return float(value)
        elif target_type == list:
            return [v.strip() for v in value.split(",")]
        elif value.lower() in ("null", "none", ""):
            return None
        elif target_type is type(None):
            # Unset settings: numbers (timeouts) or strings (log file)
            return _number_or_string(value)
        else:
            return value
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value {value!r} for {target_type.__name__} setting",
            key=key,
            cause=e,
        )


def _number_or_string(value: str) -> Union[float, str]:
    try:
        return float(value)
    except ValueError:
        return value


def get_config_path(name: str = "default") -> Path:
    """
    Get the path to a named configuration file.

    Searches in standard locations:
        1. Current directory / config /
        2. Package checkout / config /
        3. User config directory

    Raises:
        ConfigurationError: If configuration file not found.
    """
    locations = [
        Path("config") / f"{name}.yaml",
        Path(__file__).parent.parent.parent / "config" / f"{name}.yaml",
        Path.home() / ".config" / "deepfake_scorer" / f"{name}.yaml",
    ]

    for loc in locations:
        if loc.exists():
            return loc

    raise ConfigurationError(
        f"Configuration '{name}' not found. Searched locations: "
        f"{[str(p) for p in locations]}"
    )


DEFAULT_CONFIG: Dict[str, Any] = {
    "validation": {"max_size_bytes": 100 * 1024 ** 3},
    "latency": {
        "enabled": False,
        "base_ms": 3000,
        "per_mb_ms": 100,
        "max_ms": 8000,
        "scale": 1.0,
    },
    "analysis": {"timeout_seconds": None, "max_workers": 4},
    "models": {
        "versions": [
            "FaceForensics++_v2.1",
            "DFDCNet_v1.3",
            "CelebDF_Detector_v2.0",
            "XceptionNet_DeepFake_v1.8",
            "EfficientNet_B4_Deepfake_v2.2",
            "ResNet50_Temporal_v1.5",
        ],
        "count": 3,
    },
    "registry": {"enabled": False, "auto_register_confidence": 80},
    "logging": {"level": "INFO", "json": False, "file": None},
}


def get_default_config() -> Config:
    """
    Load the default configuration.

    Falls back to the built-in defaults when no config/default.yaml can be
    found, so the engine is usable from a bare install.
    """
    try:
        path = get_config_path("default")
    except ConfigurationError:
        return Config(copy.deepcopy(DEFAULT_CONFIG))
    loaded = load_config(path)
    merged = Config(copy.deepcopy(DEFAULT_CONFIG), loaded.path)
    merged.update(loaded)
    return merged
