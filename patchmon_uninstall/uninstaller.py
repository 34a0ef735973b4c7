"""
PatchMon Uninstall Sequencer.

Runs the fixed cleanup sequence against the known agent locations:
- systemd unit and stray agent process
- agent binary
- config/credential files (known names only)
- log files (known names only)
- crontab lines mentioning the agent
- directories left empty under the config directory

Dry-run (the default) only narrates. Apply performs each action, treating
"already gone" as success so a second run is a no-op.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Set

from . import crontab
from . import service
from . import ui
from .paths import AGENT_NAME, SERVICE_NAME, KnownPaths

# Module logger
_logger = logging.getLogger(__name__)

DEFAULT_PROG = "patchmon-uninstall"

NOTHING_FOUND = "No PatchMon files/processes/units were found. Nothing to do."
VERIFY_COMMANDS = [
    f"systemctl status {AGENT_NAME} (should be not-found/inactive)",
    f"command -v {AGENT_NAME} (should not find it)",
    f"crontab -l (should not contain {AGENT_NAME} lines)",
]


@dataclass
class UninstallResult:
    """Outcome of one sequencer run."""
    apply: bool
    found_any: bool = False
    actions: List[str] = field(default_factory=list)
    leftovers: List[str] = field(default_factory=list)


class Uninstaller:
    """
    Ordered, mode-gated removal of PatchMon artifacts.

    Example:
        result = Uninstaller(apply=False).run()
        if result.found_any:
            ...
    """

    def __init__(
        self,
        paths: Optional[KnownPaths] = None,
        apply: bool = False,
        prog: str = DEFAULT_PROG,
    ):
        self.paths = paths or KnownPaths()
        self.apply = apply
        self.prog = prog
        self.result = UninstallResult(apply=apply)
        # Paths removed (apply) or scheduled for removal (dry-run)
        self._planned: Set[Path] = set()

    @property
    def dry_run(self) -> bool:
        return not self.apply

    # ------------------------------------------------------------------
    # Narration and gated actions
    # ------------------------------------------------------------------

    def _found(self, text: str) -> None:
        self.result.found_any = True
        ui.print_item(text)

    def _act(self, description: str, action: Callable[[], object]) -> None:
        """Describe an action; perform it only in apply mode."""
        self.result.actions.append(description)
        ui.print_action(description, dry_run=self.dry_run)
        if self.apply:
            action()

    def _remove_file(self, path: Path) -> None:
        self._planned.add(path)
        self._act(f"rm -f {path}", lambda: path.unlink(missing_ok=True))

    def _remove_dir(self, path: Path) -> None:
        if self._is_empty(path):
            self._planned.add(path)
        self._act(f"rmdir {path}", lambda: _rmdir_quietly(path))

    # ------------------------------------------------------------------
    # Directory inspection (planned removals count as already gone)
    # ------------------------------------------------------------------

    def _remaining(self, directory: Path) -> Optional[List[Path]]:
        """Entries not planned for removal, or None if the directory can't be listed."""
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            _logger.debug(f"Cannot list {directory}: {e}")
            return None
        return [entry for entry in entries if entry not in self._planned]

    def _has_files(self, directory: Path) -> bool:
        """True if anything other than a real subdirectory remains at the top level."""
        remaining = self._remaining(directory)
        if remaining is None:
            return True
        return any(
            os.path.islink(entry) or not os.path.isdir(entry)
            for entry in remaining
        )

    def _is_empty(self, directory: Path) -> bool:
        remaining = self._remaining(directory)
        return remaining is not None and not remaining

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def teardown_service(self) -> None:
        """Step 1: stop, disable and remove the unit; kill a stray agent process."""
        if service.systemd_available() and service.unit_installed(SERVICE_NAME):
            self._found(f"systemd unit found: {SERVICE_NAME}")
            if service.unit_active(SERVICE_NAME):
                ui.print_detail("Service is active -> will stop")
                self._act(f"systemctl stop {SERVICE_NAME}",
                          lambda: service.stop_unit(SERVICE_NAME))
            ui.print_detail("Will disable + remove the unit if present")
            self._act(f"systemctl disable {SERVICE_NAME}",
                      lambda: service.disable_unit(SERVICE_NAME))
            for unit in self.paths.unit_files:
                if os.path.isfile(unit):
                    self._remove_file(unit)
            self._act("systemctl daemon-reload", service.daemon_reload)

        pattern = self.paths.process_pattern
        if service.process_running(pattern):
            self._found("Running agent process detected -> will kill")
            self._act(f"pkill -f '{pattern}'", lambda: service.kill_process(pattern))

    def remove_binary(self) -> None:
        """Step 2: exact binary path, only if executable."""
        binary = self.paths.binary
        if os.path.isfile(binary) and os.access(binary, os.X_OK):
            self._found(f"Agent binary found: {binary} -> will remove")
            self._remove_file(binary)

    def remove_configs(self) -> None:
        """Step 3: known config/credential files only; never the whole directory."""
        present = [path for path in self.paths.config_files if os.path.isfile(path)]
        if not present:
            return

        self._found("Config/credential files detected -> will remove known files only")
        for path in present:
            self._remove_file(path)

        conf_dir = self.paths.conf_dir
        if not os.path.isdir(conf_dir):
            return
        if self._has_files(conf_dir):
            ui.print_detail(f"'{conf_dir}' not empty -> leaving directory as-is")
        elif self._is_empty(conf_dir):
            ui.print_detail(f"'{conf_dir}' appears empty -> will remove directory")
            self._remove_dir(conf_dir)
        else:
            ui.print_detail(f"'{conf_dir}' still has subdirectories -> checked again after logs")

    def remove_logs(self) -> None:
        """Step 4: known log files, then their parent if no files remain in it."""
        for log_file in self.paths.log_files:
            if not os.path.isfile(log_file):
                continue
            self._found(f"Log file found: {log_file} -> will remove")
            self._remove_file(log_file)

            parent = log_file.parent
            if os.path.isdir(parent) and not self._has_files(parent):
                self._remove_dir(parent)

    def clean_crontab(self) -> None:
        """Step 5: drop only crontab lines that mention the agent."""
        current = crontab.read_crontab()
        if not current.strip() or not crontab.references(current, AGENT_NAME):
            return

        self._found(f"Crontab entries referencing '{AGENT_NAME}' detected -> will remove only those lines")
        kept, removed = crontab.filter_lines(current, AGENT_NAME)
        kept = crontab.strip_trailing_empty(kept)
        _logger.debug(f"Crontab: removing {len(removed)} line(s), keeping {len(kept)}")

        if self.dry_run:
            ui.print_block("current crontab", current.splitlines())
            ui.print_block("proposed crontab after removal", kept)

        if kept:
            self._act(f"crontab - (keeping {len(kept)} line(s))",
                      lambda: crontab.write_crontab(kept))
        else:
            self._act("crontab -r", crontab.clear_crontab)

    def remove_residual_dirs(self) -> None:
        """Step 6: empty subdirectories under the config dir, then the dir itself."""
        conf_dir = self.paths.conf_dir
        if not os.path.isdir(conf_dir) or conf_dir in self._planned:
            return

        for dirpath, _, _ in os.walk(conf_dir, topdown=False):
            directory = Path(dirpath)
            if directory == conf_dir or directory in self._planned:
                continue
            if self._is_empty(directory):
                self._found(f"Empty directory left behind: {directory} -> will remove")
                self._remove_dir(directory)

        if self._is_empty(conf_dir):
            self._found(f"'{conf_dir}' is empty -> will remove directory")
            self._remove_dir(conf_dir)

    # ------------------------------------------------------------------
    # Verification and summary
    # ------------------------------------------------------------------

    def verify(self) -> List[str]:
        """
        Re-inspect every known target after an apply run.

        Returns:
            Human-readable descriptions of anything still present
        """
        leftovers: List[str] = []
        if service.systemd_available() and service.unit_installed(SERVICE_NAME):
            leftovers.append(f"systemd unit still installed: {SERVICE_NAME}")
        if service.process_running(self.paths.process_pattern):
            leftovers.append("agent process still running")

        targets = [self.paths.binary, *self.paths.unit_files,
                   *self.paths.config_files, *self.paths.log_files]
        for path in targets:
            if os.path.lexists(path):
                leftovers.append(f"still present: {path}")

        if crontab.references(crontab.read_crontab(), AGENT_NAME):
            leftovers.append(f"crontab still mentions {AGENT_NAME}")
        return leftovers

    def print_summary(self) -> None:
        ui.say()
        if not self.result.found_any:
            ui.say(NOTHING_FOUND)
            return

        if self.dry_run:
            ui.say(f"DRY-RUN complete. If this looks correct, run again with:  {self.prog} --apply")
            return

        ui.say("Removal complete.")
        if self.result.leftovers:
            for leftover in self.result.leftovers:
                ui.print_warning(leftover)
        else:
            ui.print_success("All known PatchMon artifacts are gone")
        ui.say("Suggested verification:")
        for command in VERIFY_COMMANDS:
            ui.say(f"  - {command}")

    def run(self) -> UninstallResult:
        """Run every step in order and print the summary."""
        if self.apply and hasattr(os, "geteuid") and os.geteuid() != 0:
            ui.print_warning("Not running as root; removing system files may fail")

        self.teardown_service()
        self.remove_binary()
        self.remove_configs()
        self.remove_logs()
        self.clean_crontab()
        self.remove_residual_dirs()

        if self.apply and self.result.found_any:
            self.result.leftovers = self.verify()

        self.print_summary()
        return self.result


def _rmdir_quietly(path: Path) -> None:
    """rmdir that tolerates a missing or non-empty directory."""
    try:
        path.rmdir()
    except FileNotFoundError:
        _logger.debug(f"Directory already gone: {path}")
    except OSError as e:
        _logger.debug(f"Leaving directory {path}: {e}")
