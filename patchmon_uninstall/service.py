"""
systemd and process table helpers.

Thin wrappers over systemctl, pgrep and pkill. Commands are always passed
as argument lists; nothing is evaluated through a shell.
"""

import logging

from . import utils

# Module logger
_logger = logging.getLogger(__name__)

SYSTEMCTL = "systemctl"


def systemd_available() -> bool:
    """Check if systemctl is on PATH."""
    return utils.command_exists(SYSTEMCTL)


def unit_installed(unit: str) -> bool:
    """Check if systemd knows the unit file."""
    code, stdout, _ = utils.run_command([SYSTEMCTL, "list-unit-files", "--no-legend", "--no-pager"])
    if code != 0:
        _logger.debug(f"systemctl list-unit-files failed ({code})")
        return False
    for line in stdout.splitlines():
        columns = line.split()
        if columns and columns[0] == unit:
            return True
    return False


def unit_active(unit: str) -> bool:
    code, _, _ = utils.run_command([SYSTEMCTL, "is-active", "--quiet", unit])
    return code == 0


def stop_unit(unit: str) -> None:
    """Stop the unit. Failure aborts the run."""
    utils.run_checked([SYSTEMCTL, "stop", unit])


def disable_unit(unit: str) -> bool:
    """Disable the unit, tolerating an already disabled or missing unit."""
    return utils.run_best_effort([SYSTEMCTL, "disable", unit])


def daemon_reload() -> None:
    """Reload unit files. Failure aborts the run."""
    utils.run_checked([SYSTEMCTL, "daemon-reload"])


def process_running(pattern: str) -> bool:
    """
    Check for a process whose full command line contains ``pattern``.

    A missing pgrep reads as "not running".
    """
    code, _, _ = utils.run_command(["pgrep", "-f", pattern])
    return code == 0


def kill_process(pattern: str) -> bool:
    """Terminate matching processes. Best-effort; the process may already be gone."""
    return utils.run_best_effort(["pkill", "-f", pattern])
