"""
Platform identification for wasmtoolkit.

This module maps the running (OS, architecture) pair onto the small, closed
set of targets for which upstream projects publish precompiled release
archives.

Features:
- Operating system detection (Windows, Linux, macOS)
- CPU architecture detection and normalization (x64, ARM64, x86, ARM)
- Download target classification (total: unsupported hosts yield None)

Usage:
    from wasmtoolkit.core.platform import identify_target

    target = identify_target()
    if target is None:
        print("No precompiled tools for this platform")
    else:
        print(f"Download token: {target.value}")
"""

import platform
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlatformTarget(Enum):
    """
    Supported download targets.

    The value is the default token used in release asset names.
    """

    LINUX_X86_64 = "x86_64-linux"
    MACOS_X86_64 = "x86_64-apple-darwin"
    WINDOWS_X86_64 = "x86_64-windows"

    @property
    def token(self) -> str:
        """Default release asset token for this target."""
        return self.value


@dataclass(frozen=True)
class HostInfo:
    """
    Normalized host information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', or raw name)
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm', or raw name)
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> HostInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


_SUPPORTED = {
    ("linux", "x64"): PlatformTarget.LINUX_X86_64,
    ("macos", "x64"): PlatformTarget.MACOS_X86_64,
    ("windows", "x64"): PlatformTarget.WINDOWS_X86_64,
}


def detect_host() -> HostInfo:
    """
    Read the host OS and CPU architecture from the environment.

    Never raises: unrecognized values are returned lowercased as-is so that
    classification can report them as unsupported.

    Returns:
        HostInfo for the running interpreter
    """
    return HostInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', or the raw name
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    else:
        return system or "unknown"


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm', or the raw name
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine or "unknown"


def identify_target(host: Optional[HostInfo] = None) -> Optional[PlatformTarget]:
    """
    Classify a host into a download target.

    Args:
        host: Host to classify. If None, detects the current host.

    Returns:
        The matching PlatformTarget, or None if no precompiled releases
        exist for this (OS, architecture) pair.

    Example:
        >>> identify_target(HostInfo('linux', 'x64'))
        <PlatformTarget.LINUX_X86_64: 'x86_64-linux'>
        >>> identify_target(HostInfo('linux', 'arm64')) is None
        True
    """
    if host is None:
        host = detect_host()
    return _SUPPORTED.get((host.os, host.arch))


def get_supported_targets() -> list[PlatformTarget]:
    """Get list of all supported download targets."""
    return list(PlatformTarget)


__all__ = [
    "PlatformTarget",
    "HostInfo",
    "detect_host",
    "identify_target",
    "get_supported_targets",
]
