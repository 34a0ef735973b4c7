"""
Pytest configuration and shared fixtures for the uninstall helper tests.

Every test that touches the filesystem runs against KnownPaths rebased into
tmp_path, and every host command goes through a FakeHost.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from patchmon_uninstall.paths import KnownPaths
from tests.mocks import FakeHost, install_agent


# =============================================================================
# Filesystem Fixtures
# =============================================================================

@pytest.fixture
def sandbox(tmp_path):
    """Root directory standing in for /."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def paths(sandbox):
    """Known agent paths rebased into the sandbox."""
    return KnownPaths.under(sandbox)


@pytest.fixture
def installed(paths):
    """A complete agent install (binary, unit file, configs, logs)."""
    install_agent(paths)
    return paths


# =============================================================================
# Host Command Fixtures
# =============================================================================

@pytest.fixture
def host(paths):
    """Fake host with nothing installed; tests adjust its state."""
    return FakeHost(paths)


@pytest.fixture
def fake_host(host):
    """Route utils.run_command through the FakeHost and report systemctl present."""
    with patch("patchmon_uninstall.utils.run_command", host), \
         patch("patchmon_uninstall.utils.command_exists", return_value=True):
        yield host


@pytest.fixture
def agent_host(installed, host):
    """Fake host state matching a running, enabled agent."""
    host.unit_installed = True
    host.unit_active = True
    host.unit_enabled = True
    host.process_running = True
    host.crontab = (
        "* * * * * /usr/local/bin/patchmon-agent serve\n"
        "0 0 * * * /usr/bin/other-tool\n"
    )
    with patch("patchmon_uninstall.utils.run_command", host), \
         patch("patchmon_uninstall.utils.command_exists", return_value=True):
        yield host
