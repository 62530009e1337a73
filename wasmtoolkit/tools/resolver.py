"""
Tool resolution: find a usable executable for a Tool.

Resolution tries, in order, first success wins:

1. The executable search path (PATH). A local install is authoritative and
   is used even if its version differs from the pinned release.
2. Platform classification. Hosts without precompiled releases resolve to
   PlatformNotSupported.
3. The artifact cache, without installing.
4. If installation is not permitted: CannotInstall.
5. The artifact cache, installing. A release asset that was never
   published resolves to CannotInstall.

The three outcomes are informational and returned; every other failure
(network, extraction, missing binary in an archive) is raised. Nothing is
memoized, so each call re-searches PATH and re-queries the cache.

Usage:
    from wasmtoolkit.tools.registry import Tool
    from wasmtoolkit.tools.resolver import Found, resolve

    outcome = resolve(Tool.WASM_OPT, install_permitted=True)
    if isinstance(outcome, Found):
        print(outcome.path)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from wasmtoolkit.core.cache import Cache, Download
from wasmtoolkit.core.filesystem import find_executable
from wasmtoolkit.core.platform import (
    PlatformTarget,
    detect_host,
    get_supported_targets,
    identify_target,
)
from wasmtoolkit.tools.registry import Tool

logger = logging.getLogger(__name__)


# ============================================================================
# Resolution Outcomes
# ============================================================================


@dataclass(frozen=True)
class Found:
    """The tool is available at ``path``."""

    path: Path

    def __post_init__(self):
        if not isinstance(self.path, Path):
            raise TypeError(f"Found.path must be a Path, got {type(self.path)!r}")


@dataclass(frozen=True)
class PlatformNotSupported:
    """No precompiled release exists for the host platform."""


@dataclass(frozen=True)
class CannotInstall:
    """The tool is absent and could not be installed (policy or no asset)."""


ResolutionOutcome = Union[Found, PlatformNotSupported, CannotInstall]


def describe_outcome(tool: Tool, outcome: ResolutionOutcome) -> str:
    """Human-readable summary of an outcome, for skip notices."""
    if isinstance(outcome, Found):
        return f"{tool} found at {outcome.path}"
    if isinstance(outcome, PlatformNotSupported):
        prebuilt = ", ".join(t.value for t in get_supported_targets())
        return (
            f"{tool} is not supported on {detect_host()} "
            f"(prebuilt releases exist for: {prebuilt})"
        )
    if isinstance(outcome, CannotInstall):
        return f"{tool} is not installed and downloading was not requested"
    raise TypeError(f"Unknown resolution outcome: {outcome!r}")


# ============================================================================
# Resolution Steps
# ============================================================================


class LocalResolver:
    """Look tools up on the executable search path."""

    def __init__(self, search_paths: Optional[list[Path]] = None):
        """
        Args:
            search_paths: Directories to search (default: $PATH, read per call)
        """
        self.search_paths = search_paths

    def find(self, tool: Tool) -> Optional[Path]:
        path = find_executable(tool.executable, self.search_paths)
        if path is not None:
            logger.debug(f"Found {tool} at {path}")
        return path


class RemoteFetcher:
    """Fetch precompiled releases through the artifact cache."""

    def __init__(self, cache: Cache):
        self.cache = cache

    def url_for(self, tool: Tool, target: PlatformTarget) -> str:
        return tool.spec.download_url(target)

    def fetch(
        self, tool: Tool, target: PlatformTarget, permit_install: bool
    ) -> Optional[Download]:
        """
        Ask the cache for the tool's release archive.

        Makes exactly one cache call; with ``permit_install`` false the cache
        does not touch the network.

        Returns:
            The cache entry, or None on a miss
        """
        url = self.url_for(tool, target)
        logger.debug(f"Querying cache for {tool} (install={permit_install}): {url}")
        return self.cache.download(
            permit_install, tool.executable, [tool.executable], url
        )


class ToolResolver:
    """
    Resolve tools to executable paths.

    Attributes:
        local: Search-path lookup
        fetcher: Cache-backed release fetcher
    """

    def __init__(
        self,
        cache: Optional[Cache] = None,
        local: Optional[LocalResolver] = None,
        target_provider: Callable[[], Optional[PlatformTarget]] = identify_target,
    ):
        """
        Initialize resolver.

        Args:
            cache: Artifact cache (default: Cache() at the global location)
            local: Local resolver (default: searches $PATH)
            target_provider: Returns the host download target or None
        """
        self.local = local or LocalResolver()
        self.fetcher = RemoteFetcher(cache if cache is not None else Cache())
        self.target_provider = target_provider

    def resolve(self, tool: Tool, install_permitted: bool) -> ResolutionOutcome:
        """
        Resolve ``tool`` to an executable.

        Args:
            tool: Tool to resolve
            install_permitted: Whether a network download may be performed

        Returns:
            Found, PlatformNotSupported or CannotInstall

        Raises:
            DownloadError: If fetching a release fails
            ArchiveExtractionError: If unpacking a release fails
            BinaryNotFoundError: If a release lacks the tool's executable
        """
        path = self.local.find(tool)
        if path is not None:
            return Found(path)

        target = self.target_provider()
        if target is None:
            logger.debug(f"No precompiled {tool} for this platform")
            return PlatformNotSupported()

        download = self.fetcher.fetch(tool, target, permit_install=False)
        if download is None:
            if not install_permitted:
                return CannotInstall()

            logger.info(f"Installing {tool} {tool.version}...")
            download = self.fetcher.fetch(tool, target, permit_install=True)
            if download is None:
                return CannotInstall()

        return Found(download.binary(tool.executable))


def resolve(
    tool: Tool, install_permitted: bool, cache: Optional[Cache] = None
) -> ResolutionOutcome:
    """Resolve ``tool`` with a default ToolResolver."""
    return ToolResolver(cache=cache).resolve(tool, install_permitted)


__all__ = [
    "Found",
    "PlatformNotSupported",
    "CannotInstall",
    "ResolutionOutcome",
    "describe_outcome",
    "LocalResolver",
    "RemoteFetcher",
    "ToolResolver",
    "resolve",
]
