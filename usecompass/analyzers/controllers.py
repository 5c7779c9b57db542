"""Controller actions must delegate to a usecase."""

from __future__ import annotations

from typing import Iterator, List, Sequence

from ..config import ExclusionConfig, UsecompassConfig
from ..models import CHECK_CONTROLLERS, ROLE_CONTROLLER, ActionWithoutUsecase, SourceUnit
from .base import SyntaxAnalyzer
from .naming import is_controller_class, is_plausible_action
from .syntax import Node, NodeKind
from .usecase_calls import calls_usecase


class ClassActionScanner:
    """Finds controller actions whose bodies never reach a usecase."""

    def __init__(self, exclusions: ExclusionConfig | None = None) -> None:
        self.exclusions = exclusions or ExclusionConfig()

    def scan(self, tree: Node, relative_path: str) -> List[ActionWithoutUsecase]:
        violations: List[ActionWithoutUsecase] = []
        for class_node in self._controller_classes(tree):
            for method in self._actions(class_node, relative_path):
                if not calls_usecase(method):
                    violations.append(
                        ActionWithoutUsecase(
                            file=relative_path,
                            action_name=method.name or "",
                            line=method.line,
                        )
                    )
        return violations

    @staticmethod
    def _controller_classes(tree: Node) -> Iterator[Node]:
        for node in tree.walk():
            if node.kind is NodeKind.CLASS_DEF and is_controller_class(node.name):
                yield node

    def _actions(self, class_node: Node, relative_path: str) -> Iterator[Node]:
        # Only methods defined directly in the class body count as actions.
        for child in class_node.children:
            if child.kind is not NodeKind.METHOD_DEF:
                continue
            if not is_plausible_action(child.name):
                continue
            if self.exclusions.excludes_action(relative_path, child.name or ""):
                continue
            yield child


class ControllerAnalyzer(SyntaxAnalyzer):
    """Runs ``ClassActionScanner`` over app/controllers."""

    check = CHECK_CONTROLLERS
    role = ROLE_CONTROLLER

    def scan(self, tree: Node, unit: SourceUnit, config: UsecompassConfig) -> Sequence[object]:
        return ClassActionScanner(config.exclusions).scan(tree, unit.relative_path)


__all__ = ["ClassActionScanner", "ControllerAnalyzer"]
