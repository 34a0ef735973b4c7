"""
PatchMon Uninstall Helper

Detects and removes the PatchMon agent: systemd unit, binary, config and
credential files, logs, and crontab entries.

Modules:
- cli: Command line entry point
- crontab: Per-user crontab read/filter/replace
- paths: Known agent locations
- service: systemd and process table helpers
- ui: Terminal narration
- uninstaller: The ordered removal sequence
- utils: Command runner
"""

import importlib
from typing import Any

__version__ = "1.0.0"

# Submodules available for lazy loading
__all__ = [
    "cli",
    "crontab",
    "paths",
    "service",
    "ui",
    "uninstaller",
    "utils",
    # Key classes and functions
    "KnownPaths",
    "Uninstaller",
    "UninstallResult",
    "CommandError",
    "main",
]

# Cache for lazily loaded modules
_module_cache: dict = {}

# Mapping of exported names to their source modules
_EXPORTS = {
    "KnownPaths": "paths",
    "Uninstaller": "uninstaller",
    "UninstallResult": "uninstaller",
    "CommandError": "utils",
    "main": "cli",
}

# Submodule names
_SUBMODULES = {
    "cli",
    "crontab",
    "paths",
    "service",
    "ui",
    "uninstaller",
    "utils",
}


def _load_module(name: str) -> Any:
    """Lazily load and cache a submodule."""
    if name not in _module_cache:
        _module_cache[name] = importlib.import_module(f".{name}", __name__)
    return _module_cache[name]


def __getattr__(name: str) -> Any:
    """Lazy loading for submodules and exported names."""
    if name in _SUBMODULES:
        return _load_module(name)

    if name in _EXPORTS:
        module = _load_module(_EXPORTS[name])
        return getattr(module, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list:
    """Return list of available names for tab completion."""
    return list(__all__) + ["__version__"]
