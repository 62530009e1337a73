"""
Resolve command implementation.

Prints where a tool lives, installing it first if that is permitted.
"""

import logging

from wasmtoolkit.cli.utils import (
    EXIT_OK,
    EXIT_SKIPPED,
    make_resolver,
    safe_print,
    settings_from_args,
)
from wasmtoolkit.tools.registry import Tool
from wasmtoolkit.tools.resolver import Found, describe_outcome

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if found, 2 if the tool is unavailable by policy or platform)
    """
    settings = settings_from_args(args)
    tool = Tool.from_name(args.tool)

    outcome = make_resolver(settings).resolve(tool, settings.install_permitted)

    if isinstance(outcome, Found):
        safe_print(str(outcome.path))
        return EXIT_OK

    logger.warning(describe_outcome(tool, outcome))
    return EXIT_SKIPPED
