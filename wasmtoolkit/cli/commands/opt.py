"""
Opt command implementation.

Optimizes every .wasm file in a directory with wasm-opt.
"""

import logging

from wasmtoolkit.cli.utils import (
    EXIT_OK,
    EXIT_SKIPPED,
    make_resolver,
    safe_print,
    settings_from_args,
)
from wasmtoolkit.tools.wasm_opt import optimize

logger = logging.getLogger(__name__)


def tool_args_from(args, default: list[str]) -> list[str]:
    """
    Arguments after the directory, minus a leading '--' separator.

    argparse hands everything after DIR to wasm-opt, including a trailing
    ``--no-install``. That token is taken out and sets ``args.no_install``.
    """
    extra = list(getattr(args, "tool_args", None) or [])
    if extra and extra[0] == "--":
        extra = extra[1:]
    if "--no-install" in extra:
        extra = [a for a in extra if a != "--no-install"]
        args.no_install = True
    return extra or list(default)


def run(args) -> int:
    """
    Run the opt command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 2 if optimization was skipped)
    """
    extra = tool_args_from(args, [])
    settings = settings_from_args(args)

    if not settings.wasm_opt_enabled:
        logger.info("wasm-opt is disabled in configuration, nothing to do")
        return EXIT_SKIPPED

    report = optimize(
        args.directory,
        extra or settings.wasm_opt_args,
        install_permitted=settings.install_permitted,
        resolver=make_resolver(settings),
    )
    if report.skipped:
        return EXIT_SKIPPED

    for path in report.outputs:
        safe_print(f"optimized {path}")
    return EXIT_OK
