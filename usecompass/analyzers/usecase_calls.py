"""Detects whether a subtree delegates to a usecase."""

from __future__ import annotations

from typing import Optional

from .naming import references_usecase
from .syntax import Node, NodeKind


def constant_name(node: Optional[Node]) -> Optional[str]:
    """Return the fully qualified name of a constant reference (``A::B::C``)."""
    if node is None or node.kind is not NodeKind.CONSTANT_REF or not node.name:
        return None
    if node.scope is None:
        return node.name
    parent = constant_name(node.scope)
    if parent is None:
        return node.name
    return f"{parent}::{node.name}"


def calls_usecase(node: Optional[Node]) -> bool:
    """Return True when any call inside ``node`` names a usecase.

    A call matches on its method name, or on a constant receiver such as
    ``CreateOrderUsecase.new``. Assignments are searched on the value side only.
    """
    pending = [node] if node is not None else []
    while pending:
        current = pending.pop()
        if current.kind is NodeKind.CALL:
            if references_usecase(current.name):
                return True
            receiver = current.receiver
            if receiver is not None and receiver.kind is NodeKind.CONSTANT_REF:
                if references_usecase(constant_name(receiver)):
                    return True
        elif current.kind is NodeKind.ASSIGNMENT:
            if current.children:
                pending.append(current.children[-1])
            continue
        pending.extend(current.children)
    return False


__all__ = ["calls_usecase", "constant_name"]
