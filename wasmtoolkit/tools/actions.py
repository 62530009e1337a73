"""
Shared plumbing for tool actions (optimize, disassemble, generate).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from wasmtoolkit.core.cache import Cache
from wasmtoolkit.tools.registry import Tool
from wasmtoolkit.tools.resolver import (
    Found,
    ResolutionOutcome,
    ToolResolver,
    describe_outcome,
)

logger = logging.getLogger(__name__)


@dataclass
class ActionReport:
    """
    Result of a tool action.

    Attributes:
        tool: Tool the action needed
        outcome: How the tool was resolved
        outputs: Files written by the action
    """

    tool: Tool
    outcome: ResolutionOutcome
    outputs: list[Path] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not isinstance(self.outcome, Found)


def make_resolver(
    cache: Optional[Cache] = None, resolver: Optional[ToolResolver] = None
) -> ToolResolver:
    if resolver is not None:
        return resolver
    return ToolResolver(cache=cache)


def resolve_or_skip(
    tool: Tool, install_permitted: bool, resolver: ToolResolver
) -> ResolutionOutcome:
    """Resolve ``tool``, logging a skip notice for informational outcomes."""
    outcome = resolver.resolve(tool, install_permitted)
    if not isinstance(outcome, Found):
        logger.info(f"Skipping {tool}: {describe_outcome(tool, outcome)}")
    return outcome


__all__ = ["ActionReport", "make_resolver", "resolve_or_skip"]
