"""Ruby syntax trees built on tree-sitter.

The scanners never look at tree-sitter nodes directly. ``RubyParser`` converts
the concrete tree into a small closed vocabulary of ``Node`` kinds; anything
the checks do not care about becomes ``NodeKind.OTHER`` and is only ever
walked through generically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import tree_sitter_ruby
from tree_sitter import Language, Parser

from ..errors import ParseError


class NodeKind(Enum):
    CLASS_DEF = "class-def"
    METHOD_DEF = "method-def"
    CALL = "call"
    BLOCK = "block"
    ASSIGNMENT = "assignment"
    SYMBOL_LITERAL = "symbol-literal"
    STRING_LITERAL = "string-literal"
    CONSTANT_REF = "constant-reference"
    OTHER = "other"


@dataclass(frozen=True)
class Node:
    """Immutable syntax node.

    ``name`` holds the class/method/call/constant identifier and ``value`` the
    text of a symbol or string literal. Calls also expose their ``receiver``,
    positional ``arguments`` and attached ``block``; namespaced constants
    (``Outer::Inner``) expose their ``scope``. These are always repeated in
    ``children`` so a generic walk sees them.
    """

    kind: NodeKind
    children: Tuple["Node", ...] = ()
    line: Optional[int] = None
    name: Optional[str] = None
    value: Optional[str] = None
    receiver: Optional["Node"] = None
    arguments: Tuple["Node", ...] = ()
    block: Optional["Node"] = None
    scope: Optional["Node"] = None

    def walk(self) -> Iterator["Node"]:
        """Yield this node and every descendant in source order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


# Transparent wrappers whose statements are spliced into the parent.
_BODY_WRAPPERS = {"body_statement", "block_body"}
# Binding lists: names declared here are never calls.
_DROPPED = {
    "method_parameters",
    "parameters",
    "bare_parameters",
    "block_parameters",
    "lambda_parameters",
    "comment",
}
_ASSIGNABLE_TARGETS = {"identifier", "instance_variable"}

_RUBY_LANGUAGE = Language(tree_sitter_ruby.language())


class RubyParser:
    """Parses Ruby source into ``Node`` trees."""

    def __init__(self) -> None:
        self._parser = Parser(_RUBY_LANGUAGE)

    def parse_file(self, path: Path, display_path: Optional[str] = None) -> Node:
        label = display_path or str(path)
        try:
            source = path.read_bytes()
        except OSError as exc:
            raise ParseError(label, f"could not read file: {exc}") from exc
        return self.parse(source, label)

    def parse(self, source: bytes | str, path: str = "<source>") -> Node:
        if isinstance(source, str):
            source = source.encode("utf-8")
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(path, f"invalid UTF-8: {exc.reason}") from exc

        tree = self._parser.parse(source)
        root = tree.root_node
        try:
            if root.has_error:
                error = _first_error(root)
                line = error.start_point[0] + 1 if error is not None else None
                raise ParseError(path, "syntax error", line)
            return _Converter(source).convert(root)
        except RecursionError as exc:
            raise ParseError(path, "syntax tree too deep") from exc


def _first_error(node):  # type: ignore[no-untyped-def]
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class _Converter:
    def __init__(self, source: bytes) -> None:
        self._source = source

    def convert(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        handler = getattr(self, f"_convert_{ts_node.type}", None)
        if handler is not None:
            return handler(ts_node)
        return self._other(ts_node)

    def _text(self, ts_node) -> str:  # type: ignore[no-untyped-def]
        return self._source[ts_node.start_byte : ts_node.end_byte].decode("utf-8", errors="ignore")

    @staticmethod
    def _line(ts_node) -> int:  # type: ignore[no-untyped-def]
        return ts_node.start_point[0] + 1

    def _statements(self, ts_node, skip_fields: Tuple[str, ...] = ()) -> Tuple[Node, ...]:  # type: ignore[no-untyped-def]
        """Convert named children, splicing body wrappers and dropping binders."""
        converted: List[Node] = []
        for index, child in enumerate(ts_node.children):
            if not child.is_named or child.type in _DROPPED:
                continue
            if skip_fields and ts_node.field_name_for_child(index) in skip_fields:
                continue
            if child.type in _BODY_WRAPPERS:
                converted.extend(self._statements(child))
                continue
            converted.append(self.convert(child))
        return tuple(converted)

    def _other(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        return Node(NodeKind.OTHER, self._statements(ts_node), self._line(ts_node))

    def _convert_class(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        name_node = ts_node.child_by_field_name("name")
        name = None
        if name_node is not None:
            # Admin::UsersController is named by its last segment.
            name = self._text(name_node).split("::")[-1].strip()
        return Node(
            NodeKind.CLASS_DEF,
            self._statements(ts_node, skip_fields=("name",)),
            self._line(ts_node),
            name=name,
        )

    def _convert_method(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        name_node = ts_node.child_by_field_name("name")
        return Node(
            NodeKind.METHOD_DEF,
            self._statements(ts_node, skip_fields=("name", "parameters")),
            self._line(ts_node),
            name=self._text(name_node) if name_node is not None else None,
        )

    def _convert_call(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        method_node = ts_node.child_by_field_name("method")
        receiver_node = ts_node.child_by_field_name("receiver")
        arguments_node = ts_node.child_by_field_name("arguments")
        block_node = ts_node.child_by_field_name("block")

        method_name = None
        if method_node is not None and method_node.type != "argument_list":
            method_name = self._text(method_node)
        receiver = self.convert(receiver_node) if receiver_node is not None else None
        arguments = self._statements(arguments_node) if arguments_node is not None else ()
        block = self.convert(block_node) if block_node is not None else None

        children: Tuple[Node, ...] = ((receiver,) if receiver is not None else ()) + arguments
        if block is not None:
            children += (block,)
        return Node(
            NodeKind.CALL,
            children,
            self._line(ts_node),
            name=method_name,
            receiver=receiver,
            arguments=arguments,
            block=block,
        )

    def _convert_identifier(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        # Without semantic analysis a bare identifier may be a zero-argument call.
        return Node(NodeKind.CALL, (), self._line(ts_node), name=self._text(ts_node))

    def _convert_do_block(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        return Node(NodeKind.BLOCK, self._statements(ts_node), self._line(ts_node))

    _convert_block = _convert_do_block

    def _convert_assignment(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        left = ts_node.child_by_field_name("left")
        right = ts_node.child_by_field_name("right")
        if left is None or right is None or left.type not in _ASSIGNABLE_TARGETS:
            return self._other(ts_node)
        target = Node(NodeKind.OTHER, (), self._line(left), name=self._text(left))
        return Node(
            NodeKind.ASSIGNMENT,
            (target, self.convert(right)),
            self._line(ts_node),
        )

    def _convert_simple_symbol(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        return Node(
            NodeKind.SYMBOL_LITERAL,
            (),
            self._line(ts_node),
            value=self._text(ts_node).lstrip(":"),
        )

    def _convert_delimited_symbol(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        value = self._literal_text(ts_node)
        if value is None:
            return self._other(ts_node)
        return Node(NodeKind.SYMBOL_LITERAL, (), self._line(ts_node), value=value)

    def _convert_string(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        value = self._literal_text(ts_node)
        if value is None:
            return self._other(ts_node)
        return Node(NodeKind.STRING_LITERAL, (), self._line(ts_node), value=value)

    def _literal_text(self, ts_node) -> Optional[str]:  # type: ignore[no-untyped-def]
        """Return literal content, or None when the literal is interpolated."""
        parts: List[str] = []
        for child in ts_node.named_children:
            if child.type == "string_content":
                parts.append(self._text(child))
            elif child.type == "escape_sequence":
                parts.append(self._text(child))
            else:
                return None
        return "".join(parts)

    def _convert_constant(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        return Node(NodeKind.CONSTANT_REF, (), self._line(ts_node), name=self._text(ts_node))

    def _convert_scope_resolution(self, ts_node) -> Node:  # type: ignore[no-untyped-def]
        scope_node = ts_node.child_by_field_name("scope")
        name_node = ts_node.child_by_field_name("name")
        if name_node is None or name_node.type != "constant":
            return self._other(ts_node)
        scope = self.convert(scope_node) if scope_node is not None else None
        children = (scope,) if scope is not None else ()
        return Node(
            NodeKind.CONSTANT_REF,
            children,
            self._line(ts_node),
            name=self._text(name_node),
            scope=scope,
        )


__all__ = ["Node", "NodeKind", "RubyParser"]
