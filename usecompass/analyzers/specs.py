"""Usecases and rake files must have a spec file.

The expected spec location is a pure function of the file's relative path and
role. An exact custom mapping always wins and is returned untouched; otherwise
the role's naming convention is applied.
"""

from __future__ import annotations

import posixpath
from abc import abstractmethod
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from ..config import SpecMapping
from ..models import (
    CHECK_RAKE_SPECS,
    CHECK_USECASE_SPECS,
    ROLE_TASK,
    ROLE_USECASE,
    TaskMissingSpec,
    UsecaseMissingSpec,
)
from .base import AnalysisContext, Analyzer

SPEC_DIR = "spec/"
SPEC_EXTENSION = ".rb"
USECASE_SUFFIX = "_usecase.rb"
RAKE_EXTENSION = ".rake"


def _replace_prefix(path: str, prefix: str, replacement: str) -> str:
    return replacement + path[len(prefix) :]


def _spec_filename(path: str) -> str:
    """``dir/name.ext`` -> ``dir/name_spec.rb``."""
    stem, _ = posixpath.splitext(path)
    return f"{stem}_spec{SPEC_EXTENSION}"


def usecase_spec_path(relative_path: str) -> str:
    """Convention for usecases.

    ``layered/usecase/x/y_usecase.rb`` -> ``spec/layered/usecase/x/y_usecase_spec.rb``
    ``app/usecases/x/y_usecase.rb`` -> ``spec/usecases/x/y_usecase_spec.rb``
    anything else -> ``spec/<path>`` with the same suffix rule.
    """
    if relative_path.startswith("layered/"):
        spec_path = _replace_prefix(relative_path, "layered/", "spec/layered/")
    elif relative_path.startswith("app/"):
        spec_path = _replace_prefix(relative_path, "app/", SPEC_DIR)
    else:
        spec_path = SPEC_DIR + relative_path

    if spec_path.endswith(USECASE_SUFFIX):
        return spec_path[: -len(USECASE_SUFFIX)] + "_usecase_spec" + SPEC_EXTENSION
    return _spec_filename(spec_path)


def task_spec_path(relative_path: str) -> str:
    """Convention for rake files: ``lib/tasks/x/y.rake`` -> ``spec/lib/tasks/x/y_spec.rb``."""
    if relative_path.startswith("lib/"):
        spec_path = _replace_prefix(relative_path, "lib/", "spec/lib/")
    else:
        spec_path = SPEC_DIR + relative_path
    return _spec_filename(spec_path)


_CONVENTIONS: Dict[str, Callable[[str], str]] = {
    ROLE_USECASE: usecase_spec_path,
    ROLE_TASK: task_spec_path,
}


def find_custom_mapping(relative_path: str, mappings: Sequence[SpecMapping]) -> Optional[str]:
    for mapping in mappings:
        if mapping.source_file == relative_path:
            return mapping.spec_file
    return None


def resolve_spec_path(
    relative_path: str,
    role: str,
    custom_mappings: Optional[Mapping[str, Sequence[SpecMapping]]] = None,
) -> str:
    """Return the relative path where the spec for ``relative_path`` should live."""
    convention = _CONVENTIONS.get(role)
    if convention is None:
        raise ValueError(f"No spec convention for role: {role}")
    override = find_custom_mapping(relative_path, (custom_mappings or {}).get(role, ()))
    if override is not None:
        return override
    return convention(relative_path)


class SpecAnalyzer(Analyzer):
    """Flags candidate files whose resolved spec path does not exist."""

    def analyze(self, context: AnalysisContext) -> List[object]:
        mappings = context.config.custom_mappings.by_role()
        violations: List[object] = []
        for unit in self.candidates(context):
            expected = resolve_spec_path(unit.relative_path, self.role, mappings)
            if not (context.root / expected).exists():
                violations.append(self.violation(unit.relative_path, expected))
        return violations

    @abstractmethod
    def violation(self, relative_path: str, expected_spec: str) -> object:
        """Build the violation recorded for a file whose spec is missing."""


class UsecaseSpecAnalyzer(SpecAnalyzer):
    check = CHECK_USECASE_SPECS
    role = ROLE_USECASE

    def violation(self, relative_path: str, expected_spec: str) -> object:
        return UsecaseMissingSpec(file=relative_path, expected_spec=expected_spec)


class RakeSpecAnalyzer(SpecAnalyzer):
    check = CHECK_RAKE_SPECS
    role = ROLE_TASK

    def violation(self, relative_path: str, expected_spec: str) -> object:
        return TaskMissingSpec(file=relative_path, expected_spec=expected_spec)


__all__ = [
    "RakeSpecAnalyzer",
    "UsecaseSpecAnalyzer",
    "find_custom_mapping",
    "resolve_spec_path",
    "task_spec_path",
    "usecase_spec_path",
]
