"""
SSGBridge Configuration - Configuration loading and validation.

This module provides the Config class for managing SSGBridge configuration
from both global (~/.ssgbridge/config.yaml) and local (.ssgbridge/config.yaml)
sources.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_BINARY_PREFIX = "SSGBRIDGE_BIN_"


class ConfigError(Exception):
    """Raised when there's a configuration error."""

    pass


class AdapterSettings(BaseModel):
    """Per-adapter settings."""

    enabled: bool = True
    # conventional command name -> executable path, e.g. {"zola": "/opt/zola/bin/zola"}
    binaries: Dict[str, str] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    """Logging configuration for the host process."""

    level: str = "WARNING"
    # rich renders time and level itself
    format: str = "%(name)s: %(message)s"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


class BridgeConfig(BaseModel):
    """Complete SSGBridge configuration schema."""

    adapters: Dict[str, AdapterSettings] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def env_var_for(program: str) -> str:
    """Environment variable overriding ``program``: ``./gradlew`` -> ``SSGBRIDGE_BIN_GRADLEW``."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", program).strip("_").upper()
    return ENV_BINARY_PREFIX + slug


class Config:
    """
    SSGBridge configuration manager.

    Handles loading, merging, and validating configuration from:
    - Global: ~/.ssgbridge/config.yaml
    - Local: .ssgbridge/config.yaml (project-specific)

    Local configuration overrides global configuration.

    Example:
        >>> config = Config.load()
        >>> config.is_enabled("zola")
        True
        >>> config.binaries_for("zola", ["zola"])
        {'zola': '/opt/zola/bin/zola'}
    """

    GLOBAL_CONFIG_DIR = Path.home() / ".ssgbridge"
    LOCAL_CONFIG_DIR = Path(".ssgbridge")

    def __init__(
        self,
        global_config: Optional[Dict[str, Any]] = None,
        local_config: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Config.

        Args:
            global_config: Global configuration dictionary.
            local_config: Local (project) configuration dictionary.
            environ: Environment used for binary overrides (defaults to os.environ).
        """
        self._global_config = global_config or {}
        self._local_config = local_config or {}
        self._environ = environ if environ is not None else os.environ
        self._merged: Optional[BridgeConfig] = None

    @classmethod
    def load(cls) -> "Config":
        """
        Load configuration from default locations.

        Returns:
            Config instance with loaded configuration.
        """
        global_config = cls._load_yaml(cls.GLOBAL_CONFIG_DIR / "config.yaml")
        local_config = cls._load_yaml(cls._find_local_config())

        return cls(global_config=global_config, local_config=local_config)

    @classmethod
    def _load_yaml(cls, path: Optional[Path]) -> Dict[str, Any]:
        """Load YAML file if it exists."""
        if path is None or not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def _find_local_config(cls) -> Optional[Path]:
        """Find the local config file by walking up the directory tree."""
        current = Path.cwd()
        while current != current.parent:
            config_path = current / ".ssgbridge" / "config.yaml"
            if config_path.exists():
                return config_path
            current = current.parent
        return None

    def get_merged_config(self) -> Dict[str, Any]:
        """Get the merged configuration as a dictionary."""
        return self._deep_merge(self._global_config.copy(), self._local_config)

    @property
    def merged(self) -> BridgeConfig:
        """Get the validated merged configuration."""
        if self._merged is None:
            try:
                self._merged = BridgeConfig(**self.get_merged_config())
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration: {e}")
        return self._merged

    # ── Adapter settings ──────────────────────────────────────────────────

    def get_adapter_settings(self, name: str) -> AdapterSettings:
        return self.merged.adapters.get(name) or AdapterSettings()

    def is_enabled(self, name: str) -> bool:
        return self.get_adapter_settings(name).enabled

    def binaries_for(self, name: str, programs: Iterable[str]) -> Dict[str, str]:
        """
        Binary overrides for one adapter.

        Environment variables (``SSGBRIDGE_BIN_<PROGRAM>``) apply to every
        adapter using that program; the adapter's own ``binaries`` entries
        take precedence over them.
        """
        overrides: Dict[str, str] = {}
        for program in programs:
            path = self._environ.get(env_var_for(program))
            if path:
                overrides[program] = path
        overrides.update(self.get_adapter_settings(name).binaries)
        return overrides

    def set_binary(self, name: str, program: str, path: str, global_: bool = False) -> None:
        """Point ``program`` at ``path`` for adapter ``name``."""
        config = self._global_config if global_ else self._local_config
        adapters = config.setdefault("adapters", {})
        adapter = adapters.setdefault(name, {})
        adapter.setdefault("binaries", {})[program] = path
        self._merged = None  # Reset cache

    def set_enabled(self, name: str, enabled: bool, global_: bool = False) -> None:
        config = self._global_config if global_ else self._local_config
        config.setdefault("adapters", {}).setdefault(name, {})["enabled"] = enabled
        self._merged = None

    @property
    def logging(self) -> LoggingConfig:
        return self.merged.logging

    # ── Persistence ───────────────────────────────────────────────────────

    def save(self, global_: bool = False) -> Path:
        """
        Write one scope back to disk.

        The local scope goes to the nearest existing project config, or to
        .ssgbridge/config.yaml in the current directory when there is none.

        Returns:
            Path of the file written.
        """
        if global_:
            path = self.GLOBAL_CONFIG_DIR / "config.yaml"
            self._save_yaml(path, self._global_config)
        else:
            path = self._find_local_config() or Path.cwd() / self.LOCAL_CONFIG_DIR / "config.yaml"
            self._save_yaml(path, self._local_config)
        return path

    def _save_yaml(self, path: Path, data: Dict[str, Any]) -> None:
        """Save data to a YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @classmethod
    def create_default_local(cls, directory: Path) -> Path:
        """Create a commented-out starter config in ``directory/.ssgbridge``."""
        config_file = directory / cls.LOCAL_CONFIG_DIR / "config.yaml"

        if config_file.exists():
            return config_file

        config_file.parent.mkdir(parents=True, exist_ok=True)

        default_config = {
            "logging": {"level": "WARNING"},
            "adapters": {
                "zola": {"enabled": True, "binaries": {}},
            },
        }

        with open(config_file, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)

        return config_file
