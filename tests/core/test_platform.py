"""
Unit tests for the platform identification module.

Tests cover:
- OS and architecture normalization with mocking
- Download target classification for every supported pair
- Unsupported pairs reported as None, never raised
"""

import pytest
from unittest.mock import patch

from wasmtoolkit.core.platform import (
    HostInfo,
    PlatformTarget,
    _detect_architecture,
    _detect_os,
    detect_host,
    get_supported_targets,
    identify_target,
)


class TestHostInfo:
    """Tests for HostInfo dataclass."""

    def test_platform_string(self):
        """Test platform string generation."""
        assert HostInfo("linux", "x64").platform_string() == "linux-x64"

    def test_str(self):
        """Test string representation matches platform string."""
        assert str(HostInfo("macos", "arm64")) == "macos-arm64"


class TestDetectOS:
    """Tests for OS detection."""

    @pytest.mark.parametrize(
        "system,expected",
        [
            ("Windows", "windows"),
            ("Linux", "linux"),
            ("Darwin", "macos"),
            ("FreeBSD", "freebsd"),
        ],
    )
    def test_detect_os(self, system, expected):
        """Test OS names are normalized, unknown ones passed through."""
        with patch("platform.system", return_value=system):
            assert _detect_os() == expected

    @patch("platform.system", return_value="")
    def test_detect_empty_os(self, mock_system):
        """Test an empty system name becomes 'unknown'."""
        assert _detect_os() == "unknown"


class TestDetectArchitecture:
    """Tests for architecture detection."""

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("aarch64", "arm64"),
            ("arm64", "arm64"),
            ("i686", "x86"),
            ("armv7l", "arm"),
            ("riscv64", "riscv64"),
        ],
    )
    def test_detect_architecture(self, machine, expected):
        """Test architecture names are normalized."""
        with patch("platform.machine", return_value=machine):
            assert _detect_architecture() == expected


class TestIdentifyTarget:
    """Tests for download target classification."""

    @pytest.mark.parametrize(
        "os_name,arch,expected",
        [
            ("linux", "x64", PlatformTarget.LINUX_X86_64),
            ("macos", "x64", PlatformTarget.MACOS_X86_64),
            ("windows", "x64", PlatformTarget.WINDOWS_X86_64),
        ],
    )
    def test_supported_pairs(self, os_name, arch, expected):
        """Test each supported pair maps to exactly one target."""
        assert identify_target(HostInfo(os_name, arch)) is expected

    @pytest.mark.parametrize(
        "os_name,arch",
        [
            ("linux", "arm64"),
            ("macos", "arm64"),
            ("windows", "x86"),
            ("freebsd", "x64"),
            ("unknown", "unknown"),
        ],
    )
    def test_unsupported_pairs(self, os_name, arch):
        """Test unsupported pairs yield None instead of raising."""
        assert identify_target(HostInfo(os_name, arch)) is None

    @patch("platform.machine", return_value="x86_64")
    @patch("platform.system", return_value="Linux")
    def test_detects_current_host(self, mock_system, mock_machine):
        """Test the host is detected when none is given."""
        assert detect_host() == HostInfo("linux", "x64")
        assert identify_target() is PlatformTarget.LINUX_X86_64

    @patch("platform.machine", return_value="sparc64")
    @patch("platform.system", return_value="SunOS")
    def test_exotic_host_is_unsupported(self, mock_system, mock_machine):
        """Test an exotic host is classified as unsupported."""
        assert identify_target() is None

    def test_tokens(self):
        """Test targets carry their release asset tokens."""
        assert PlatformTarget.LINUX_X86_64.token == "x86_64-linux"
        assert PlatformTarget.MACOS_X86_64.token == "x86_64-apple-darwin"
        assert PlatformTarget.WINDOWS_X86_64.token == "x86_64-windows"

    def test_supported_targets(self):
        """Test the supported target list is the whole enumeration."""
        assert set(get_supported_targets()) == set(PlatformTarget)
