"""Core data models shared across usecompass components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

ROLE_CONTROLLER = "controller"
ROLE_USECASE = "usecase"
ROLE_TASK = "task"

CHECK_CONTROLLERS = "controllers"
CHECK_USECASE_SPECS = "usecase_specs"
CHECK_RAKES = "rakes"
CHECK_RAKE_SPECS = "rake_specs"

# Execution order of the checks.
ALL_CHECKS = (CHECK_CONTROLLERS, CHECK_USECASE_SPECS, CHECK_RAKES, CHECK_RAKE_SPECS)


@dataclass(frozen=True)
class SourceUnit:
    """A discovered Ruby file and the role it plays in the project."""

    absolute_path: Path
    relative_path: str
    role: str


@dataclass(frozen=True)
class ActionWithoutUsecase:
    """Controller action whose body never reaches a usecase."""

    file: str
    action_name: str
    line: Optional[int]


@dataclass(frozen=True)
class TaskWithoutUsecase:
    """Rake task whose block never reaches a usecase."""

    file: str
    task_name: str
    line: Optional[int]


@dataclass(frozen=True)
class UsecaseMissingSpec:
    """Usecase file with no spec at the expected location."""

    file: str
    expected_spec: str


@dataclass(frozen=True)
class TaskMissingSpec:
    """Rake file with no spec at the expected location."""

    file: str
    expected_spec: str


@dataclass(frozen=True)
class ParseWarning:
    """A file skipped because it could not be parsed."""

    file: str
    message: str


@dataclass
class CheckResults:
    """Outcome of a run; a ``None`` list means the check was not requested."""

    controller_violations: Optional[List[ActionWithoutUsecase]] = None
    usecase_violations: Optional[List[UsecaseMissingSpec]] = None
    rake_violations: Optional[List[TaskWithoutUsecase]] = None
    rake_spec_violations: Optional[List[TaskMissingSpec]] = None
    warnings: List[ParseWarning] = field(default_factory=list)

    @property
    def total_violations(self) -> int:
        return sum(
            len(items)
            for items in (
                self.controller_violations,
                self.usecase_violations,
                self.rake_violations,
                self.rake_spec_violations,
            )
            if items is not None
        )

    @property
    def has_violations(self) -> bool:
        return self.total_violations > 0
