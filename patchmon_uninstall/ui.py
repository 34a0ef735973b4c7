"""
UI utilities for terminal output.

Provides colored narration lines and the dry-run action prefix. Every line
printed here is also mirrored to the logging module.
"""

import logging
from typing import Iterable, Optional

from rich.console import Console

# Module logger
_logger = logging.getLogger(__name__)

DRY_RUN_PREFIX = "[DRY-RUN]"

_console: Optional[Console] = None


# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"


def _log_line(level: str, text: str) -> None:
    _logger.debug(f"[{level}] {text}")


def get_console() -> Console:
    """Shared rich console; resolves sys.stdout at print time."""
    global _console
    if _console is None:
        _console = Console(highlight=False, soft_wrap=True)
    return _console


def colorize(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{color}{text}{Colors.RESET}"


def say(text: str = "") -> None:
    """Print a plain narration line."""
    _log_line("SAY", text)
    print(text)


def print_header(text: str) -> None:
    """Print the banner line."""
    _log_line("HEADER", text)
    print(colorize(f"== {text} ==", Colors.CYAN + Colors.BOLD))


def print_item(text: str) -> None:
    """Print a detected target."""
    _log_line("FOUND", text)
    print(f"{colorize('•', Colors.CYAN)} {text}")


def print_detail(text: str) -> None:
    """Print an indented note under a detected target."""
    _log_line("DETAIL", text)
    print(f"  - {text}")


def print_action(text: str, dry_run: bool) -> None:
    """Print a planned (dry-run) or performed action."""
    if dry_run:
        _log_line("PLAN", text)
        print(f"{colorize(DRY_RUN_PREFIX, Colors.YELLOW)} {text}")
    else:
        _log_line("DO", text)
        print(colorize(f"  → {text}", Colors.DIM))


def print_success(text: str) -> None:
    """Print success message."""
    _log_line("SUCCESS", text)
    print(colorize(f"✓ {text}", Colors.GREEN))


def print_error(text: str) -> None:
    """Print error message."""
    _log_line("ERROR", text)
    print(colorize(f"✗ {text}", Colors.RED))


def print_warning(text: str) -> None:
    """Print warning message."""
    _log_line("WARN", text)
    print(colorize(f"⚠ {text}", Colors.YELLOW))


def print_block(title: str, lines: Iterable[str]) -> None:
    """
    Print a titled rule followed by lines exactly as given.

    Used to show a crontab before and after filtering; markup and
    highlighting are disabled so entries are reproduced verbatim.
    """
    console = get_console()
    lines = list(lines)
    _log_line("BLOCK", f"{title} ({len(lines)} lines)")
    console.rule(title, align="left", style="dim")
    if not lines:
        console.print("(empty)", style="dim", markup=False)
    for line in lines:
        console.print(line, markup=False, highlight=False, emoji=False)
