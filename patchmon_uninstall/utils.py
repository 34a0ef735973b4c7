"""
General utility functions.

Provides the command runner used to talk to systemctl, pgrep/pkill and crontab.
"""

import logging
import shutil
import subprocess
from typing import List, Optional, Tuple

# Module logger
_logger = logging.getLogger(__name__)

COMMAND_TIMEOUT = 30


class CommandError(RuntimeError):
    """A command whose failure must abort the run exited non-zero."""

    def __init__(self, cmd: List[str], returncode: int, stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Command failed ({returncode}): {' '.join(self.cmd)}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None


def run_command(
    cmd: List[str],
    capture: bool = True,
    timeout: int = COMMAND_TIMEOUT,
    input_text: Optional[str] = None,
) -> Tuple[int, str, str]:
    """
    Run a command and return the result.

    Args:
        cmd: Command to run as a list of strings (e.g., ["systemctl", "daemon-reload"])
        capture: Whether to capture stdout/stderr (default: True)
        timeout: Maximum time to wait in seconds
        input_text: Optional text fed to the command's stdin

    Returns:
        Tuple of (returncode, stdout, stderr):
        - returncode: Process exit code (0 = success, -1 = error)
        - stdout: Standard output as string
        - stderr: Standard error as string

    Note:
        On timeout or command not found, returns (-1, "", error_message)
    """
    _logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            input=input_text,
        )
        return result.returncode, result.stdout or "", result.stderr or ""
    except subprocess.TimeoutExpired:
        return -1, "", "Command timed out"
    except FileNotFoundError:
        return -1, "", f"Command not found: {cmd[0]}"
    except OSError as e:
        return -1, "", str(e)


def run_checked(
    cmd: List[str],
    timeout: int = COMMAND_TIMEOUT,
    input_text: Optional[str] = None,
) -> str:
    """
    Run a command that must succeed.

    Returns:
        The command's stdout

    Raises:
        CommandError: if the command exits non-zero or cannot be run
    """
    code, stdout, stderr = run_command(cmd, timeout=timeout, input_text=input_text)
    if code != 0:
        raise CommandError(cmd, code, stderr)
    return stdout


def run_best_effort(cmd: List[str], timeout: int = COMMAND_TIMEOUT) -> bool:
    """Run a command whose failure is tolerated. Returns True on success."""
    code, _, stderr = run_command(cmd, timeout=timeout)
    if code != 0:
        _logger.debug(f"Ignoring failure of {' '.join(cmd)} ({code}): {stderr.strip()}")
        return False
    return True
