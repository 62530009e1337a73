"""
Shared utilities for CLI commands.

Provides settings and cache construction so every command honours the same
config file, environment and flags.
"""

import logging
import sys

from wasmtoolkit.config import InstallMode, Settings, load_settings
from wasmtoolkit.core.cache import Cache
from wasmtoolkit.tools.resolver import ToolResolver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_SKIPPED = 2


def settings_from_args(args) -> Settings:
    """
    Load settings, then apply command-line overrides.

    Args:
        args: Parsed arguments (config, project_root, cache_dir, no_install)

    Returns:
        Effective Settings

    Raises:
        ConfigError: If the configuration file is invalid
    """
    settings = load_settings(
        config_file=getattr(args, "config", None),
        project_root=getattr(args, "project_root", None),
    )

    if getattr(args, "cache_dir", None):
        settings.cache_dir = args.cache_dir
    if getattr(args, "no_install", False):
        settings.install = InstallMode.NO_INSTALL

    logger.debug(f"Effective settings: {settings}")
    return settings


def make_cache(settings: Settings) -> Cache:
    return Cache(settings.cache_dir)


def make_resolver(settings: Settings) -> ToolResolver:
    return ToolResolver(cache=make_cache(settings))


def safe_print(text: str) -> None:
    """Print text, replacing characters the console encoding can't show."""
    try:
        print(text)
    except UnicodeEncodeError:
        encoding = sys.stdout.encoding or "ascii"
        print(text.encode(encoding, errors="replace").decode(encoding))


__all__ = [
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_SKIPPED",
    "settings_from_args",
    "make_cache",
    "make_resolver",
    "safe_print",
]
