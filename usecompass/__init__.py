"""Audit Rails projects for usecase delegation and usecase/rake spec coverage."""

from __future__ import annotations

from pathlib import Path

from .errors import ConfigError, ParseError, UsecompassError
from .models import CheckResults
from .orchestrator import Orchestrator, select_checks

__version__ = "0.1.0"


def check(
    root_path: str | Path = ".",
    config_path: str | Path | None = None,
    *,
    controllers_only: bool = False,
    specs_only: bool = False,
    rakes_only: bool = False,
) -> CheckResults:
    """Run the selected checks over ``root_path``; all of them by default."""
    checks = select_checks(
        controllers_only=controllers_only, specs_only=specs_only, rakes_only=rakes_only
    )
    return Orchestrator().run_check(root_path, config_path=config_path, checks=checks)


__all__ = [
    "CheckResults",
    "ConfigError",
    "ParseError",
    "UsecompassError",
    "__version__",
    "check",
]
