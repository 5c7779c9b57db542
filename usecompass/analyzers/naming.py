"""Naming heuristics for controllers, actions and usecases."""

from __future__ import annotations

from typing import Optional

CANONICAL_ACTIONS = frozenset({"index", "show", "new", "create", "edit", "update", "destroy"})


def is_controller_class(name: Optional[str]) -> bool:
    return name is not None and name.endswith("Controller")


def is_plausible_action(name: Optional[str]) -> bool:
    """Return True for method names treated as controller actions.

    Canonical Rails actions always count. Any other public-looking name counts
    too, unless it starts with ``_`` or is a ``?`` predicate.
    """
    if not name:
        return False
    if name in CANONICAL_ACTIONS:
        return True
    return not name.startswith("_") and not name.endswith("?")


def references_usecase(identifier: Optional[str]) -> bool:
    """Match ``build_usecase`` style calls and ``CreateOrderUsecase`` constants."""
    if not identifier:
        return False
    return identifier.endswith("usecase") or "Usecase" in identifier


__all__ = [
    "CANONICAL_ACTIONS",
    "is_controller_class",
    "is_plausible_action",
    "references_usecase",
]
