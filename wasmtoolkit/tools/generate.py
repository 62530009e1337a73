"""
Scaffold new projects with ``cargo-generate``.
"""

import logging
from pathlib import Path
from typing import Optional

from wasmtoolkit.core.cache import Cache
from wasmtoolkit.core.exceptions import ToolUnavailableError
from wasmtoolkit.tools.actions import ActionReport, make_resolver
from wasmtoolkit.tools.executor import run_once
from wasmtoolkit.tools.registry import Tool
from wasmtoolkit.tools.resolver import Found, ToolResolver, describe_outcome

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "https://github.com/rustwasm/wasm-pack-template"


def generate_args(template: str, name: str) -> list[str]:
    return ["generate", "--git", template, "--name", name]


def generate(
    template: str,
    name: str,
    install_permitted: bool = True,
    cwd: Optional[Path] = None,
    cache: Optional[Cache] = None,
    resolver: Optional[ToolResolver] = None,
) -> ActionReport:
    """
    Run ``cargo-generate generate`` to create project ``name`` from a template.

    Unlike optimization this step cannot be skipped, so an unavailable
    ``cargo-generate`` is an error.

    Args:
        template: Git URL of the project template
        name: Name of the project to create
        install_permitted: Whether ``cargo-generate`` may be downloaded
        cwd: Directory to create the project in (default: current directory)

    Returns:
        ActionReport whose outputs hold the new project directory

    Raises:
        ToolUnavailableError: If ``cargo-generate`` can't be found or installed
        ToolExecutionError: If ``cargo-generate`` fails
    """
    tool = Tool.CARGO_GENERATE
    outcome = make_resolver(cache, resolver).resolve(tool, install_permitted)
    if not isinstance(outcome, Found):
        raise ToolUnavailableError(tool.executable, describe_outcome(tool, outcome))

    logger.info(f"Generating a new project with name '{name}'...")
    run_once(outcome.path, generate_args(template, name), tool.executable, cwd=cwd)

    base = Path(cwd) if cwd is not None else Path.cwd()
    return ActionReport(tool=tool, outcome=outcome, outputs=[base / name])


__all__ = ["DEFAULT_TEMPLATE", "generate_args", "generate"]
