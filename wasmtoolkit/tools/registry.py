"""
Known external tools and their pinned releases.

Each Tool member maps to a ToolSpec describing where its precompiled
releases live. URLs follow the GitHub release-asset convention:

    https://<host>/<org>/<project>/releases/download/<version>/<asset>

where the default asset name is ``<project>-<version>-<token>.tar.gz``.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from wasmtoolkit.core.exceptions import UnknownToolError
from wasmtoolkit.core.platform import PlatformTarget

DEFAULT_ASSET_TEMPLATE = "{project}-{version}-{token}.tar.gz"


@dataclass(frozen=True)
class ToolSpec:
    """
    Immutable description of a downloadable tool.

    Attributes:
        name: Canonical executable name
        version: Pinned upstream release tag
        org: Release owner on the host
        project: Release project name
        host: Release host
        asset_template: Asset file name template ({project}, {version}, {token})
        tokens: Per-target tokens overriding PlatformTarget.token
    """

    name: str
    version: str
    org: str
    project: str
    host: str = "github.com"
    asset_template: str = DEFAULT_ASSET_TEMPLATE
    tokens: Mapping[PlatformTarget, str] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    def token_for(self, target: PlatformTarget) -> str:
        """Get the asset token used for ``target``."""
        return self.tokens.get(target, target.token)

    def asset_name(self, target: PlatformTarget) -> str:
        return self.asset_template.format(
            project=self.project, version=self.version, token=self.token_for(target)
        )

    def download_url(self, target: PlatformTarget) -> str:
        """
        Build the release archive URL for ``target``.

        Example:
            >>> Tool.WASM_OPT.spec.download_url(PlatformTarget.LINUX_X86_64)
            'https://github.com/WebAssembly/binaryen/releases/download/version_78/binaryen-version_78-x86_64-linux.tar.gz'
        """
        return (
            f"https://{self.host}/{self.org}/{self.project}/releases/download/"
            f"{self.version}/{self.asset_name(target)}"
        )


_BINARYEN_VERSION = "version_78"


class Tool(Enum):
    """Closed set of tools wasmtoolkit can locate and install."""

    WASM_OPT = ToolSpec(
        name="wasm-opt",
        version=_BINARYEN_VERSION,
        org="WebAssembly",
        project="binaryen",
    )
    WASM_DIS = ToolSpec(
        name="wasm-dis",
        version=_BINARYEN_VERSION,
        org="WebAssembly",
        project="binaryen",
    )
    CARGO_GENERATE = ToolSpec(
        name="cargo-generate",
        version="v0.5.0",
        org="cargo-generate",
        project="cargo-generate",
        tokens=MappingProxyType(
            {
                PlatformTarget.LINUX_X86_64: "x86_64-unknown-linux-musl",
                PlatformTarget.MACOS_X86_64: "x86_64-apple-darwin",
                PlatformTarget.WINDOWS_X86_64: "x86_64-pc-windows-msvc",
            }
        ),
    )

    @property
    def spec(self) -> ToolSpec:
        return self.value

    @property
    def executable(self) -> str:
        """Canonical executable name."""
        return self.value.name

    @property
    def version(self) -> str:
        return self.value.version

    def __str__(self) -> str:
        return self.value.name

    @classmethod
    def from_name(cls, name: str) -> "Tool":
        """
        Look up a tool by executable name.

        Raises:
            UnknownToolError: If no tool has that name
        """
        tool = _find(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool


def _find(name: str) -> Optional[Tool]:
    for tool in Tool:
        if tool.executable == name:
            return tool
    return None


def tool_names() -> list[str]:
    """Get executable names of all known tools."""
    return [tool.executable for tool in Tool]


__all__ = ["DEFAULT_ASSET_TEMPLATE", "ToolSpec", "Tool", "tool_names"]
