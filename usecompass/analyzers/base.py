"""Base classes for the usecompass checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from ..config import UsecompassConfig
from ..errors import ParseError
from ..logging import get_logger
from ..models import ParseWarning, SourceUnit
from ..repo_scanner import RepoScanner
from .syntax import Node, RubyParser


@dataclass
class AnalysisContext:
    """Everything a check needs for one run over a project."""

    root: Path
    config: UsecompassConfig
    scanner: RepoScanner = field(default_factory=RepoScanner)
    parser: RubyParser = field(default_factory=RubyParser)
    warnings: List[ParseWarning] = field(default_factory=list)

    def discover(self, role: str) -> List[SourceUnit]:
        return self.scanner.discover(self.root, role)


class Analyzer(ABC):
    """Contract for a single check producing one violation collection."""

    check: str = ""
    role: str = ""

    def __init__(self) -> None:
        self.logger = get_logger(f"analyzers.{self.check}")

    @abstractmethod
    def analyze(self, context: AnalysisContext) -> List[object]:
        """Return the violations found for this check."""

    def candidates(self, context: AnalysisContext) -> List[SourceUnit]:
        """Discovered files for ``role`` minus the path-level exclusions."""
        units = []
        for unit in context.discover(self.role):
            if context.config.exclusions.excludes_file(self.check, unit.relative_path):
                self.logger.debug("Skipping excluded file %s", unit.relative_path)
                continue
            units.append(unit)
        return units


class SyntaxAnalyzer(Analyzer):
    """Check that walks the syntax tree of every candidate file."""

    def analyze(self, context: AnalysisContext) -> List[object]:
        violations: List[object] = []
        for unit in self.candidates(context):
            try:
                tree = context.parser.parse_file(unit.absolute_path, unit.relative_path)
            except ParseError as exc:
                self.logger.warning("Could not parse %s: %s", unit.relative_path, exc.message)
                context.warnings.append(ParseWarning(file=unit.relative_path, message=str(exc)))
                continue
            violations.extend(self.scan(tree, unit, context.config))
        return violations

    @abstractmethod
    def scan(self, tree: Node, unit: SourceUnit, config: UsecompassConfig) -> Sequence[object]:
        """Return violations found in one parsed file."""


__all__ = ["AnalysisContext", "Analyzer", "SyntaxAnalyzer"]
