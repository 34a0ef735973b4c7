"""
Reusable mock objects and helper functions for testing.

FakeHost stands in for utils.run_command and emulates the host commands the
uninstaller talks to (systemctl, pgrep/pkill, crontab) with in-memory state.
"""

import errno
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from unittest.mock import patch

from patchmon_uninstall.paths import SERVICE_NAME, KnownPaths

READ_ONLY = {
    ("systemctl", "list-unit-files"),
    ("systemctl", "is-active"),
    ("pgrep", "-f"),
    ("crontab", "-l"),
}


@dataclass
class FakeHost:
    """
    In-memory host state driven by command lists.

    Example:
        host = FakeHost(paths, unit_installed=True, unit_active=True)
        with patch("patchmon_uninstall.utils.run_command", host):
            ...
        assert host.mutating_calls == []
    """
    paths: KnownPaths
    unit_installed: bool = False
    unit_active: bool = False
    unit_enabled: bool = False
    process_running: bool = False
    crontab: Optional[str] = None
    fail: Dict[Tuple[str, ...], int] = field(default_factory=dict)
    calls: List[List[str]] = field(default_factory=list)

    def __call__(self, cmd, capture=True, timeout=30, input_text=None):
        cmd = list(cmd)
        self.calls.append(cmd)
        key = tuple(cmd[:2])
        if key in self.fail:
            return self.fail[key], "", f"{cmd[0]}: simulated failure"

        if cmd[0] == "systemctl":
            return self._systemctl(cmd[1:])
        if cmd[0] == "pgrep":
            return (0, "4242\n", "") if self.process_running else (1, "", "")
        if cmd[0] == "pkill":
            if not self.process_running:
                return 1, "", ""
            self.process_running = False
            return 0, "", ""
        if cmd[0] == "crontab":
            return self._crontab(cmd[1:], input_text)
        return -1, "", f"Command not found: {cmd[0]}"

    def _systemctl(self, args):
        verb = args[0]
        if verb == "list-unit-files":
            lines = ["ssh.service                 enabled   enabled",
                     "cron.service                enabled   enabled"]
            if self.unit_installed:
                state = "enabled" if self.unit_enabled else "disabled"
                lines.insert(1, f"{SERVICE_NAME}      {state}   enabled")
            return 0, "\n".join(lines) + "\n", ""
        if verb == "is-active":
            return (0, "", "") if self.unit_active else (3, "", "")
        if verb == "stop":
            self.unit_active = False
            return 0, "", ""
        if verb == "disable":
            if not self.unit_installed:
                return 1, "", f"Unit file {SERVICE_NAME} does not exist."
            self.unit_enabled = False
            return 0, "", ""
        if verb == "daemon-reload":
            self.unit_installed = any(Path(p).exists() for p in self.paths.unit_files)
            return 0, "", ""
        return 1, "", f"Unknown command verb {verb}."

    def _crontab(self, args, input_text):
        if args == ["-l"]:
            if self.crontab is None:
                return 1, "", "no crontab for tester"
            return 0, self.crontab, ""
        if args == ["-"]:
            self.crontab = input_text or ""
            return 0, "", ""
        if args == ["-r"]:
            if self.crontab is None:
                return 1, "", "no crontab for tester"
            self.crontab = None
            return 0, "", ""
        return 1, "", "usage: crontab"

    @property
    def mutating_calls(self) -> List[List[str]]:
        """Every recorded call that would change host state."""
        return [c for c in self.calls if tuple(c[:2]) not in READ_ONLY]


def install_agent(paths: KnownPaths, with_logs: bool = True) -> None:
    """Lay down a full agent install under a sandboxed KnownPaths."""
    paths.binary.parent.mkdir(parents=True, exist_ok=True)
    paths.binary.write_text("#!/bin/sh\nexit 0\n")
    paths.binary.chmod(0o755)

    paths.unit_etc.parent.mkdir(parents=True, exist_ok=True)
    paths.unit_etc.write_text("[Service]\nExecStart=/usr/local/bin/patchmon-agent serve\n")

    paths.conf_dir.mkdir(parents=True, exist_ok=True)
    paths.conf_yml.write_text("server: https://patchmon.example\n")
    paths.creds_yml.write_text("api_id: abc\napi_key: def\n")

    if with_logs:
        paths.agent_log.parent.mkdir(parents=True, exist_ok=True)
        paths.agent_log.write_text("started\n")
        paths.system_log.parent.mkdir(parents=True, exist_ok=True)
        paths.system_log.write_text("started\n")


def snapshot(root: Path) -> Dict[str, Optional[str]]:
    """Map every path under root to its content (None for directories)."""
    result: Dict[str, Optional[str]] = {}
    for path in sorted(root.rglob("*")):
        rel = str(path.relative_to(root))
        result[rel] = None if path.is_dir() else path.read_text()
    return result


@contextmanager
def unreadable(directory: Path, searchable: bool = False):
    """
    Make ``directory`` behave like one the current user may not read.

    Listing it always fails with EACCES. Unless ``searchable`` is set (mode
    0711), stat() of anything inside it fails too (mode 0700). Works the same
    when the tests run as root.
    """
    real_stat = os.stat
    real_iterdir = Path.iterdir
    real_scandir = os.scandir
    inside = str(directory) + os.sep

    def text(path) -> str:
        return "" if isinstance(path, int) else os.fsdecode(path)

    def denied(path):
        return PermissionError(errno.EACCES, "Permission denied", text(path))

    def fake_stat(path, *args, **kwargs):
        if not searchable and text(path).startswith(inside):
            raise denied(path)
        return real_stat(path, *args, **kwargs)

    def blocked(path) -> bool:
        return text(path) == str(directory) or text(path).startswith(inside)

    def fake_iterdir(self):
        if blocked(self):
            raise denied(self)
        return real_iterdir(self)

    def fake_scandir(path="."):
        if blocked(path):
            raise denied(path)
        return real_scandir(path)

    with patch("os.stat", fake_stat), \
         patch("os.scandir", fake_scandir), \
         patch.object(Path, "iterdir", fake_iterdir):
        yield

