"""
Cache command implementation.

Shows where downloaded tools are kept.
"""

from wasmtoolkit.cli.utils import EXIT_OK, make_cache, safe_print, settings_from_args


def run(args) -> int:
    """
    Run the cache command.

    Returns:
        Exit code (0 for success)
    """
    cache = make_cache(settings_from_args(args))
    safe_print(f"Cache directory: {cache.root}")

    if args.list:
        entries = cache.entries()
        if not entries:
            safe_print("  (empty)")
        for entry in entries:
            binaries = ", ".join(sorted(p.name for p in entry.iterdir())) or "-"
            safe_print(f"  {entry.name}: {binaries}")

    return EXIT_OK
