"""
Per-user crontab access.

The crontab is read with ``crontab -l`` and replaced whole with
``crontab -``. Filtering is line based so unrelated entries survive
verbatim and in order.
"""

import logging
from typing import List, Sequence, Tuple

from . import utils

# Module logger
_logger = logging.getLogger(__name__)


def read_crontab() -> str:
    """
    Return the invoking user's crontab.

    No crontab, no crontab binary, or any other failure reads as empty.
    """
    code, stdout, stderr = utils.run_command(["crontab", "-l"])
    if code != 0:
        _logger.debug(f"crontab -l returned {code}: {stderr.strip()}")
        return ""
    return stdout


def references(text: str, token: str) -> bool:
    """Check if any crontab line mentions ``token``."""
    return any(token in line for line in text.splitlines())


def filter_lines(text: str, token: str) -> Tuple[List[str], List[str]]:
    """
    Split crontab text into lines to keep and lines mentioning ``token``.

    Returns:
        (kept, removed), both in their original order
    """
    kept: List[str] = []
    removed: List[str] = []
    for line in text.splitlines():
        if token in line:
            removed.append(line)
        else:
            kept.append(line)
    return kept, removed


def strip_trailing_empty(lines: Sequence[str]) -> List[str]:
    """Drop empty lines at the end; whitespace-only lines are content and stay."""
    trimmed = list(lines)
    while trimmed and trimmed[-1] == "":
        trimmed.pop()
    return trimmed


def write_crontab(lines: Sequence[str]) -> None:
    """Replace the crontab with ``lines``. Failure aborts the run."""
    content = "".join(f"{line}\n" for line in lines)
    utils.run_checked(["crontab", "-"], input_text=content)


def clear_crontab() -> bool:
    """Remove the crontab entirely (best-effort)."""
    return utils.run_best_effort(["crontab", "-r"])
