"""Rake tasks must delegate to a usecase."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import ExclusionConfig, UsecompassConfig
from ..models import CHECK_RAKES, ROLE_TASK, SourceUnit, TaskWithoutUsecase
from .base import SyntaxAnalyzer
from .syntax import Node, NodeKind
from .usecase_calls import calls_usecase

TASK_METHOD = "task"
_NAME_LITERALS = (NodeKind.SYMBOL_LITERAL, NodeKind.STRING_LITERAL)


def task_name(call: Node) -> Optional[str]:
    """Return the literal name of a ``task :name`` declaration, if it is one.

    Declarations whose first argument is not a plain symbol or string
    (``task cleanup: :environment``, interpolated names) are not recognised.
    """
    if call.kind is not NodeKind.CALL or call.name != TASK_METHOD:
        return None
    if not call.arguments:
        return None
    first = call.arguments[0]
    if first.kind not in _NAME_LITERALS:
        return None
    return first.value


def task_block(call: Node) -> Optional[Node]:
    if call.block is not None:
        return call.block
    for child in call.children:
        if child.kind is NodeKind.BLOCK:
            return child
    return None


class TaskScanner:
    """Finds rake tasks whose blocks never reach a usecase."""

    def __init__(self, exclusions: ExclusionConfig | None = None) -> None:
        self.exclusions = exclusions or ExclusionConfig()

    def scan(self, tree: Node, relative_path: str) -> List[TaskWithoutUsecase]:
        violations: List[TaskWithoutUsecase] = []
        for node in tree.walk():
            name = task_name(node)
            if name is None:
                continue
            if self.exclusions.excludes_task(relative_path, name):
                continue
            # A task without a block has nothing that could call a usecase.
            if not calls_usecase(task_block(node)):
                violations.append(
                    TaskWithoutUsecase(file=relative_path, task_name=name, line=node.line)
                )
        return violations


class RakeAnalyzer(SyntaxAnalyzer):
    """Runs ``TaskScanner`` over lib/tasks."""

    check = CHECK_RAKES
    role = ROLE_TASK

    def scan(self, tree: Node, unit: SourceUnit, config: UsecompassConfig) -> Sequence[object]:
        return TaskScanner(config.exclusions).scan(tree, unit.relative_path)


__all__ = ["RakeAnalyzer", "TaskScanner", "task_block", "task_name"]
