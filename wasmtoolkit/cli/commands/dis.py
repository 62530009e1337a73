"""
Dis command implementation.

Disassembles every .wasm file in a directory to a sibling .wat file.
"""

from wasmtoolkit.cli.utils import (
    EXIT_OK,
    EXIT_SKIPPED,
    make_resolver,
    safe_print,
    settings_from_args,
)
from wasmtoolkit.tools.wasm_dis import disassemble


def run(args) -> int:
    """
    Run the dis command.

    Returns:
        Exit code (0 for success, 2 if disassembly was skipped)
    """
    settings = settings_from_args(args)

    report = disassemble(
        args.directory,
        settings.wasm_dis_args,
        install_permitted=settings.install_permitted,
        resolver=make_resolver(settings),
    )
    if report.skipped:
        return EXIT_SKIPPED

    for path in report.outputs:
        safe_print(f"wrote {path}")
    return EXIT_OK
