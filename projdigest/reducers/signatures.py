"""Tree-sitter powered reduction of C# sources to their public surface."""

from __future__ import annotations

from typing import List, Optional, Sequence

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from ..config import ScanConfiguration
from ..logging import get_logger
from .base import Reducer, collapse_whitespace, first_lines
from .signature_patterns import strip_with_patterns

logger = get_logger("reducers.signatures")

_FALLBACK_LINES = 20
_INDENT = "    "

_TYPE_DECLARATIONS = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "record_struct_declaration",
}

_BODY_MEMBERS = {
    "method_declaration",
    "constructor_declaration",
    "destructor_declaration",
    "operator_declaration",
    "conversion_operator_declaration",
}

_ACCESSOR_MEMBERS = {
    "property_declaration",
    "indexer_declaration",
    "event_declaration",
}

_FIELD_MEMBERS = {"field_declaration", "event_field_declaration"}

_SIMPLE_TYPES = {"enum_declaration", "delegate_declaration"}

# Nodes whose children are walked as if they belonged to the enclosing scope.
_TRANSPARENT = {
    "compilation_unit",
    "namespace_declaration",
    "file_scoped_namespace_declaration",
    "declaration_list",
    "preproc_if",
    "preproc_elif",
    "preproc_else",
    "ERROR",
}

_NOISE = {"attribute_list", "comment"}
_BODY_NODES = {"block", "arrow_expression_clause"}


class SignatureReducer(Reducer):
    """Keeps type and member signatures visible as public or internal.

    Bodies of methods, constructors, destructors and operators become ``;``,
    accessor bodies become bare ``get;``/``set;``/``init;`` declarations and
    expression-bodied properties become ``{ get; }``. Namespaces, using
    directives and attributes are dropped. When nothing is recognised the
    first lines of the source are returned instead.
    """

    name = "signatures"

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def reduce(self, content: str, config: ScanConfiguration) -> str:
        if config.signature_mode == "pattern":
            return strip_with_patterns(content)

        lines = self.extract(content)
        if not lines:
            logger.debug("%s recognised nothing, using raw prefix", self.name)
            return first_lines(content, _FALLBACK_LINES)
        return "\n".join(lines)

    def extract(self, content: str) -> List[str]:
        source = content.encode("utf-8")
        tree = self._get_parser().parse(source)
        emitter = _SignatureEmitter(source)
        emitter.emit_scope(tree.root_node, indent="")
        return emitter.lines

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_c_sharp.language()))
        return self._parser


class _SignatureEmitter:
    def __init__(self, source: bytes) -> None:
        self._source = source
        self.lines: List[str] = []

    # -- helpers -------------------------------------------------------------

    def _text(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8", errors="replace")

    def _node_text(self, node: Node) -> str:
        return self._text(node.start_byte, node.end_byte)

    @staticmethod
    def _signature_start(node: Node) -> int:
        for child in node.children:
            if child.type not in _NOISE:
                return child.start_byte
        return node.start_byte

    @staticmethod
    def _first_child(node: Node, types: Sequence[str]) -> Optional[Node]:
        for child in node.children:
            if child.type in types:
                return child
        return None

    def _modifiers(self, node: Node) -> List[str]:
        return [self._node_text(child) for child in node.children if child.type == "modifier"]

    def _is_visible(self, node: Node, *, nested: bool, in_interface: bool) -> bool:
        modifiers = set(self._modifiers(node))
        if "public" in modifiers or "internal" in modifiers:
            return True
        if modifiers & {"private", "protected"}:
            return False
        if in_interface:
            return True
        if node.type == "destructor_declaration":
            return True
        if node.type == "constructor_declaration" and "static" in modifiers:
            return True
        if self._first_child(node, ("explicit_interface_specifier",)) is not None:
            return True
        # Top-level types default to internal, nested types and members to private.
        return not nested and (node.type in _TYPE_DECLARATIONS or node.type in _SIMPLE_TYPES)

    def _head(self, node: Node, stop: Optional[Node]) -> str:
        end = stop.start_byte if stop is not None else node.end_byte
        head = collapse_whitespace(self._text(self._signature_start(node), end))
        return head.rstrip(";").rstrip()

    # -- scopes --------------------------------------------------------------

    def emit_scope(self, node: Node, indent: str) -> None:
        """Emit types found under a compilation unit or namespace, flattening namespaces."""
        for child in node.named_children:
            if child.type in _TYPE_DECLARATIONS:
                self._emit_type(child, indent, nested=False)
            elif child.type in _SIMPLE_TYPES:
                if self._is_visible(child, nested=False, in_interface=False):
                    self._emit_simple_type(child, indent)
            elif child.type in _TRANSPARENT:
                self.emit_scope(child, indent)

    def _emit_type(
        self, node: Node, indent: str, *, nested: bool, in_interface: bool = False
    ) -> None:
        if not self._is_visible(node, nested=nested, in_interface=in_interface):
            return
        body = self._first_child(node, ("declaration_list",))
        header = self._head(node, body)
        if body is None:
            self.lines.append(f"{indent}{header};")
            return
        self.lines.append(f"{indent}{header}")
        self.lines.append(f"{indent}{{")
        self._emit_members(body, indent + _INDENT, in_interface=node.type == "interface_declaration")
        self.lines.append(f"{indent}}}")

    def _emit_simple_type(self, node: Node, indent: str) -> None:
        if node.type == "enum_declaration":
            body = self._first_child(node, ("enum_member_declaration_list",))
            header = self._head(node, body)
            names: List[str] = []
            if body is not None:
                for member in body.named_children:
                    if member.type != "enum_member_declaration":
                        continue
                    name = self._first_child(member, ("identifier",))
                    if name is not None:
                        names.append(self._node_text(name))
            self.lines.append(f"{indent}{header} {{ {', '.join(names)} }}")
            return
        self.lines.append(f"{indent}{self._head(node, None)};")

    def _emit_members(self, node: Node, indent: str, *, in_interface: bool) -> None:
        for child in node.named_children:
            kind = child.type
            if kind in _TYPE_DECLARATIONS:
                self._emit_type(child, indent, nested=True, in_interface=in_interface)
                continue
            if kind in _SIMPLE_TYPES:
                if self._is_visible(child, nested=True, in_interface=in_interface):
                    self._emit_simple_type(child, indent)
                continue
            if kind in _TRANSPARENT:
                self._emit_members(child, indent, in_interface=in_interface)
                continue
            if kind not in _BODY_MEMBERS | _ACCESSOR_MEMBERS | _FIELD_MEMBERS:
                continue
            if not self._is_visible(child, nested=True, in_interface=in_interface):
                continue
            if kind in _BODY_MEMBERS:
                self.lines.append(f"{indent}{self._method_signature(child)}")
            elif kind in _ACCESSOR_MEMBERS:
                self.lines.append(f"{indent}{self._accessor_signature(child)}")
            else:
                self.lines.append(f"{indent}{self._field_signature(child)}")

    # -- members -------------------------------------------------------------

    def _method_signature(self, node: Node) -> str:
        body = self._first_child(node, _BODY_NODES)
        return f"{self._head(node, body)};"

    def _accessor_signature(self, node: Node) -> str:
        accessors = self._first_child(node, ("accessor_list",))
        expression = self._first_child(node, ("arrow_expression_clause",))
        stop = accessors or expression
        head = self._head(node, stop)
        if accessors is not None:
            parts = [
                self._bare_accessor(accessor)
                for accessor in accessors.named_children
                if accessor.type == "accessor_declaration"
            ]
            return f"{head} {{ {' '.join(parts)} }}"
        if expression is not None:
            return f"{head} {{ get; }}"
        return f"{head};"

    def _bare_accessor(self, node: Node) -> str:
        body = self._first_child(node, _BODY_NODES)
        return f"{self._head(node, body)};"

    def _field_signature(self, node: Node) -> str:
        declaration = self._first_child(node, ("variable_declaration",))
        if declaration is None:
            return f"{self._head(node, None)};"
        declarators = [
            child for child in declaration.named_children if child.type == "variable_declarator"
        ]
        if not declarators:
            return f"{self._head(node, None)};"
        if "const" in self._modifiers(node):
            return f"{self._head(node, None)};"
        prefix = collapse_whitespace(
            self._text(self._signature_start(node), declarators[0].start_byte)
        )
        names: List[str] = []
        for declarator in declarators:
            name = self._first_child(declarator, ("identifier",))
            names.append(self._node_text(name) if name is not None else self._node_text(declarator))
        return f"{prefix} {', '.join(names)};"


__all__ = ["SignatureReducer"]
