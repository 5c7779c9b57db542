"""Check implementations and selection utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence, Set

from ..models import ALL_CHECKS, CHECK_CONTROLLERS, CHECK_RAKE_SPECS, CHECK_RAKES, CHECK_USECASE_SPECS
from .base import AnalysisContext, Analyzer, SyntaxAnalyzer
from .controllers import ControllerAnalyzer
from .specs import RakeSpecAnalyzer, UsecaseSpecAnalyzer
from .tasks import RakeAnalyzer

_BUILTIN_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    CHECK_CONTROLLERS: ControllerAnalyzer,
    CHECK_USECASE_SPECS: UsecaseSpecAnalyzer,
    CHECK_RAKES: RakeAnalyzer,
    CHECK_RAKE_SPECS: RakeSpecAnalyzer,
}


def discover_analyzers(enabled: Sequence[str] | None = None) -> List[Analyzer]:
    """Return analyzers for the requested checks in their fixed run order."""
    if enabled is None:
        enabled_set: Set[str] = set(ALL_CHECKS)
    else:
        enabled_set = {name.lower() for name in enabled}

    unknown = enabled_set.difference(_BUILTIN_FACTORIES)
    if unknown:
        missing = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown checks requested: {missing}")

    return [_BUILTIN_FACTORIES[name]() for name in ALL_CHECKS if name in enabled_set]


__all__ = [
    "AnalysisContext",
    "Analyzer",
    "SyntaxAnalyzer",
    "discover_analyzers",
]
