"""Runs the selected checks over a project and collects their violations."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .analyzers import AnalysisContext, discover_analyzers
from .analyzers.syntax import RubyParser
from .config import CONFIG_FILENAME, UsecompassConfig, load_config
from .logging import get_logger
from .models import (
    ALL_CHECKS,
    CHECK_CONTROLLERS,
    CHECK_RAKE_SPECS,
    CHECK_RAKES,
    CHECK_USECASE_SPECS,
    CheckResults,
)
from .repo_scanner import RepoScanner

_RESULT_FIELDS: Dict[str, str] = {
    CHECK_CONTROLLERS: "controller_violations",
    CHECK_USECASE_SPECS: "usecase_violations",
    CHECK_RAKES: "rake_violations",
    CHECK_RAKE_SPECS: "rake_spec_violations",
}


def select_checks(
    *, controllers_only: bool = False, specs_only: bool = False, rakes_only: bool = False
) -> List[str]:
    """Translate the ``--*-only`` switches into check names; none set means all."""
    if not (controllers_only or specs_only or rakes_only):
        return list(ALL_CHECKS)
    selected: List[str] = []
    if controllers_only:
        selected.append(CHECK_CONTROLLERS)
    if specs_only:
        selected.append(CHECK_USECASE_SPECS)
    if rakes_only:
        selected.extend((CHECK_RAKES, CHECK_RAKE_SPECS))
    return [name for name in ALL_CHECKS if name in selected]


class Orchestrator:
    """Coordinates discovery, parsing and the four checks for one project."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        parser: RubyParser | None = None,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self.parser = parser or RubyParser()
        self.logger = get_logger("orchestrator")

    def run_check(
        self,
        path: str | Path,
        *,
        config: Optional[UsecompassConfig] = None,
        config_path: str | Path | None = None,
        checks: Optional[Sequence[str]] = None,
    ) -> CheckResults:
        """Run ``checks`` (default: all) and return their results.

        Checks that were not requested stay ``None`` in the result.
        """
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")

        if config is None:
            config = load_config(Path(config_path) if config_path else root / CONFIG_FILENAME)
        if config.source is not None:
            self.logger.debug("Loaded configuration from %s", config.source)

        analyzers = discover_analyzers(checks)
        self.logger.info("Checking %s (%s)", root, ", ".join(a.check for a in analyzers))

        context = AnalysisContext(root=root, config=config, scanner=self.scanner, parser=self.parser)
        results = CheckResults()
        for analyzer in analyzers:
            violations = analyzer.analyze(context)
            self.logger.debug("%s: %d violations", analyzer.check, len(violations))
            setattr(results, _RESULT_FIELDS[analyzer.check], violations)

        results.warnings = list(context.warnings)
        self.logger.info(
            "Found %d violations (%d files skipped)",
            results.total_violations,
            len(results.warnings),
        )
        return results


__all__ = ["Orchestrator", "select_checks"]
