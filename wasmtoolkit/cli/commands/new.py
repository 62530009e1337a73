"""
New command implementation.

Creates a project from a template with cargo-generate.
"""

from pathlib import Path

from wasmtoolkit.cli.utils import EXIT_OK, make_resolver, safe_print, settings_from_args
from wasmtoolkit.tools.generate import generate


def run(args) -> int:
    """
    Run the new command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)
    cwd = Path(args.project_root) if args.project_root else None

    report = generate(
        args.template,
        args.name,
        install_permitted=settings.install_permitted,
        cwd=cwd,
        resolver=make_resolver(settings),
    )

    safe_print(f"Created project {report.outputs[0]}")
    return EXIT_OK
