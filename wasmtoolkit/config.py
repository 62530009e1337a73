"""
Configuration loading for wasmtoolkit.

Settings come from ``wasmtoolkit.yaml`` in the project root (or an explicit
``--config`` path), the WASMTOOLKIT_CACHE_DIR environment variable, and CLI
flags, in increasing order of precedence.

Example ``wasmtoolkit.yaml``:

    install: normal        # normal | no-install
    cache_dir: ~/.wasmtoolkit
    wasm_opt:
      enabled: true
      args: ["-O"]
    wasm_dis:
      args: []
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from wasmtoolkit.core.directory import CACHE_DIR_ENV
from wasmtoolkit.core.exceptions import ConfigError
from wasmtoolkit.tools.wasm_opt import DEFAULT_ARGS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "wasmtoolkit.yaml"


class InstallMode(Enum):
    """Policy for downloading tools that are not installed locally."""

    NORMAL = "normal"
    NO_INSTALL = "no-install"

    @property
    def install_permitted(self) -> bool:
        return self is InstallMode.NORMAL


@dataclass
class Settings:
    """
    Effective wasmtoolkit settings.

    Attributes:
        install: Download policy
        cache_dir: Artifact cache root (None: platform default)
        wasm_opt_enabled: Whether the optimize step runs at all
        wasm_opt_args: Extra arguments for wasm-opt
        wasm_dis_args: Extra arguments for wasm-dis
    """

    install: InstallMode = InstallMode.NORMAL
    cache_dir: Optional[Path] = None
    wasm_opt_enabled: bool = True
    wasm_opt_args: list[str] = field(default_factory=lambda: list(DEFAULT_ARGS))
    wasm_dis_args: list[str] = field(default_factory=list)

    @property
    def install_permitted(self) -> bool:
        return self.install.install_permitted


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return list(value)


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {section!r}")
    return section


def settings_from_dict(config: Dict[str, Any]) -> Settings:
    """
    Build Settings from a parsed configuration mapping.

    Raises:
        ConfigError: If a value has the wrong type or is unknown
    """
    settings = Settings()

    if "install" in config:
        try:
            settings.install = InstallMode(config["install"])
        except ValueError:
            choices = ", ".join(m.value for m in InstallMode)
            raise ConfigError(
                f"Invalid install mode {config['install']!r} "
                f"(expected one of: {choices})"
            ) from None

    if config.get("cache_dir"):
        settings.cache_dir = Path(str(config["cache_dir"])).expanduser()

    wasm_opt = _section(config, "wasm_opt")
    if "enabled" in wasm_opt:
        if not isinstance(wasm_opt["enabled"], bool):
            raise ConfigError("'wasm_opt.enabled' must be true or false")
        settings.wasm_opt_enabled = wasm_opt["enabled"]
    if "args" in wasm_opt:
        settings.wasm_opt_args = _string_list(wasm_opt["args"], "wasm_opt.args")

    wasm_dis = _section(config, "wasm_dis")
    if "args" in wasm_dis:
        settings.wasm_dis_args = _string_list(wasm_dis["args"], "wasm_dis.args")

    return settings


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigError: If the file is required but missing, or isn't valid YAML
    """
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigError(f"Top level of {config_file} must be a mapping")
    return config


def load_settings(
    config_file: Optional[Path] = None, project_root: Optional[Path] = None
) -> Settings:
    """
    Load settings from a config file and the environment.

    Args:
        config_file: Explicit config path (must exist if given)
        project_root: Where to look for wasmtoolkit.yaml (default: cwd)

    Returns:
        Effective Settings

    Raises:
        ConfigError: If the configuration is invalid
    """
    if config_file is not None:
        config = load_yaml_config(Path(config_file), required=True)
    else:
        root = Path(project_root) if project_root is not None else Path.cwd()
        config = load_yaml_config(root / CONFIG_FILENAME)

    settings = settings_from_dict(config)

    env_cache_dir = os.environ.get(CACHE_DIR_ENV)
    if env_cache_dir:
        settings.cache_dir = Path(env_cache_dir).expanduser()

    return settings


__all__ = [
    "CONFIG_FILENAME",
    "InstallMode",
    "Settings",
    "settings_from_dict",
    "load_yaml_config",
    "load_settings",
]
