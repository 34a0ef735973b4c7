"""
Known PatchMon locations.

Every path the uninstaller may touch is listed here. Nothing is ever
globbed or derived from directory contents.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Tuple, Union

AGENT_NAME = "patchmon-agent"
SERVICE_NAME = f"{AGENT_NAME}.service"

BIN_PATH = Path("/usr/local/bin/patchmon-agent")
UNIT_ETC_PATH = Path("/etc/systemd/system/patchmon-agent.service")
UNIT_LIB_PATH = Path("/lib/systemd/system/patchmon-agent.service")
CONF_DIR = Path("/etc/patchmon")
CONF_YML = CONF_DIR / "config.yml"
CREDS_YML = CONF_DIR / "credentials.yml"
LEGACY_CREDS = CONF_DIR / "credentials"
AGENT_LOG = CONF_DIR / "logs" / "patchmon-agent.log"
SYSTEM_LOG = Path("/var/log/patchmon-agent.log")

# Literal invocation used by the service unit; matched with pgrep -f
PROCESS_PATTERN = f"{BIN_PATH} serve"


@dataclass(frozen=True)
class KnownPaths:
    """The fixed set of filesystem locations owned by the agent."""
    binary: Path = BIN_PATH
    unit_etc: Path = UNIT_ETC_PATH
    unit_lib: Path = UNIT_LIB_PATH
    conf_dir: Path = CONF_DIR
    conf_yml: Path = CONF_YML
    creds_yml: Path = CREDS_YML
    legacy_creds: Path = LEGACY_CREDS
    agent_log: Path = AGENT_LOG
    system_log: Path = SYSTEM_LOG
    process_pattern: str = field(default=PROCESS_PATTERN, compare=False)

    @classmethod
    def under(cls, root: Union[str, Path]) -> "KnownPaths":
        """Rebase the default layout onto ``root`` (e.g. a test sandbox)."""
        root = Path(root)
        rebased = {}
        for f in fields(cls):
            default = f.default
            if isinstance(default, Path):
                rebased[f.name] = root / default.relative_to(default.anchor)
        # The process pattern stays literal: the binary name is what pgrep sees
        return cls(**rebased)

    @property
    def unit_files(self) -> Tuple[Path, ...]:
        return (self.unit_etc, self.unit_lib)

    @property
    def config_files(self) -> Tuple[Path, ...]:
        return (self.conf_yml, self.creds_yml, self.legacy_creds)

    @property
    def log_files(self) -> Tuple[Path, ...]:
        return (self.agent_log, self.system_log)
