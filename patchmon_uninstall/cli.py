"""
PatchMon uninstall helper command line.

    patchmon-uninstall            # dry-run: report what would be removed
    patchmon-uninstall --apply    # remove it
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import ui
from .paths import KnownPaths
from .uninstaller import DEFAULT_PROG, Uninstaller
from .utils import CommandError

# Module logger
_logger = logging.getLogger(__name__)

APPLY_FLAG = "--apply"


def build_parser(prog: str = DEFAULT_PROG) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Detect and remove the PatchMon agent (dry-run unless --apply is given)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(APPLY_FLAG, action="store_true", help="Actually remove what was found (must be the first argument)")
    return parser


def main(argv: Optional[List[str]] = None, paths: Optional[KnownPaths] = None) -> int:
    """Main uninstaller entry point."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    # Only a leading, literal --apply leaves dry-run
    apply = args.apply and argv[0] == APPLY_FLAG
    if extra or args.apply != apply:
        _logger.debug(f"Ignoring arguments: {argv}")

    ui.print_header("PatchMon uninstall helper")
    ui.say(f"Mode: {'APPLY (will remove)' if apply else 'DRY-RUN (no changes)'}")
    ui.say()

    uninstaller = Uninstaller(paths=paths, apply=apply, prog=parser.prog)
    try:
        uninstaller.run()
    except CommandError as e:
        ui.print_error(str(e))
        return 1
    except OSError as e:
        ui.print_error(f"Aborting: {e}")
        return 1
    return 0


def run() -> None:
    """Console script wrapper."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        ui.print_warning("Uninstall interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    run()
