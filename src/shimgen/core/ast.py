import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Literal

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from shimgen.errors import SourceParseError
from shimgen.models import Attribute, PathSegment, TypeExpr

logger = logging.getLogger(__name__)

DeclarationKind = Literal["module", "struct", "enum", "function", "other"]

_ITEM_KINDS: dict[str, DeclarationKind] = {
    "mod_item": "module",
    "struct_item": "struct",
    "enum_item": "enum",
    "function_item": "function",
}

_TRIVIA = frozenset({"line_comment", "block_comment"})
_NON_TYPE_ARGUMENTS = _TRIVIA | {"lifetime", "trait_bounds"}

_TYPE_PROBE = "__ShimgenProbe"


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


@dataclass(frozen=True, eq=False)
class Declaration:
    """One top-level item of a file or of an inline module body, with the attributes preceding it."""

    kind: DeclarationKind
    name: str | None
    attributes: tuple[Attribute, ...]
    node: Node
    source: bytes
    path: PurePath

    def field(self, name: str) -> Node | None:
        return self.node.child_by_field_name(name)

    def text(self, node: Node) -> str:
        return node_text(node, self.source)

    @property
    def is_inline_module(self) -> bool:
        return self.kind == "module" and self.field("body") is not None

    def inline_declarations(self) -> list["Declaration"]:
        body = self.field("body")
        if self.kind != "module" or body is None:
            return []
        return _declarations_from(body, self.source, self.path)


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def _parse_tree(source_bytes: bytes, path: PurePath | str) -> Node:
    parser = get_parser("rust")
    tree = parser.parse(source_bytes)
    root = tree.root_node
    error = _first_error(root)
    if error is not None:
        row, column = error.start_point
        detail = f"missing `{error.type}`" if error.is_missing else "syntax error"
        raise SourceParseError(path, row + 1, column + 1, detail)
    return root


def parse_source(source_bytes: bytes, path: PurePath) -> list[Declaration]:
    """Parse a Rust source file into its ordered top-level declarations."""
    root = _parse_tree(source_bytes, path)
    declarations = _declarations_from(root, source_bytes, path)
    logger.debug("Parsed %d declarations from %s", len(declarations), path)
    return declarations


def parse_type(text: str) -> TypeExpr:
    """Parse a standalone Rust type such as ``Result<Option<i32>, String>``."""
    source_bytes = f"type {_TYPE_PROBE} = {text};".encode()
    root = _parse_tree(source_bytes, "<type>")
    items = [c for c in root.named_children if c.type not in _TRIVIA]
    if len(items) == 1 and items[0].type == "type_item":
        type_node = items[0].child_by_field_name("type")
        if type_node is not None:
            return type_from_node(type_node, source_bytes)
    raise SourceParseError("<type>", 1, 1, f"not a single type: {text!r}")


def _declarations_from(container: Node, source: bytes, path: PurePath) -> list[Declaration]:
    declarations: list[Declaration] = []
    pending: list[Attribute] = []
    for child in container.named_children:
        if child.type in _TRIVIA or child.type == "inner_attribute_item":
            continue
        if child.type == "attribute_item":
            attribute = _attribute_from(child, source)
            if attribute is not None:
                pending.append(attribute)
            continue
        name_node = child.child_by_field_name("name")
        declarations.append(
            Declaration(
                kind=_ITEM_KINDS.get(child.type, "other"),
                name=node_text(name_node, source) if name_node is not None else None,
                attributes=tuple(pending),
                node=child,
                source=source,
                path=path,
            )
        )
        pending = []
    return declarations


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


def _squash(text: str) -> str:
    return "".join(text.split())


def _split_top_level(inner: str) -> tuple[str, ...]:
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in inner:
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return tuple(p for p in (_squash(part) for part in parts) if p)


def _attribute_from(item: Node, source: bytes) -> Attribute | None:
    attr = next((c for c in item.named_children if c.type == "attribute"), None)
    if attr is None:
        return None
    arguments = attr.child_by_field_name("arguments")
    value = attr.child_by_field_name("value")
    path_node = next(
        (c for c in attr.named_children if c != arguments and c != value and c.type not in _TRIVIA),
        None,
    )
    if path_node is None:
        return None
    args = None
    if arguments is not None:
        args = _split_top_level(node_text(arguments, source)[1:-1])
    return Attribute(path=_squash(node_text(path_node, source)), args=args)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _path_names(node: Node, source: bytes) -> list[str]:
    if node.type in ("scoped_type_identifier", "scoped_identifier"):
        prefix = node.child_by_field_name("path")
        name = node.child_by_field_name("name")
        names = _path_names(prefix, source) if prefix is not None else []
        if name is not None:
            names.append(node_text(name, source))
        return names
    if node.type == "generic_type":
        base = node.child_by_field_name("type")
        return _path_names(base, source) if base is not None else []
    return [node_text(node, source)]


def _mutable(node: Node) -> bool:
    return any(c.type == "mutable_specifier" for c in node.children)


def type_from_node(node: Node, source: bytes) -> TypeExpr:
    kind = node.type
    if kind in ("primitive_type", "type_identifier", "scoped_type_identifier"):
        return TypeExpr(kind="path", segments=tuple(PathSegment(name=n) for n in _path_names(node, source)))
    if kind == "generic_type":
        names = _path_names(node, source)
        arguments = node.child_by_field_name("type_arguments")
        args: tuple[TypeExpr, ...] = ()
        if arguments is not None:
            args = tuple(
                type_from_node(c, source) for c in arguments.named_children if c.type not in _NON_TYPE_ARGUMENTS
            )
        return TypeExpr.path(*names, args=args)
    if kind in ("reference_type", "pointer_type"):
        inner = node.child_by_field_name("type")
        if inner is not None:
            return TypeExpr(
                kind="reference" if kind == "reference_type" else "pointer",
                elems=(type_from_node(inner, source),),
                mutable=_mutable(node),
            )
    if kind == "unit_type":
        return TypeExpr(kind="tuple")
    if kind == "tuple_type":
        members = tuple(type_from_node(c, source) for c in node.named_children if c.type not in _TRIVIA)
        return TypeExpr(kind="tuple", elems=members)
    if kind == "array_type":
        element = node.child_by_field_name("element")
        length = node.child_by_field_name("length")
        if element is not None:
            elems = (type_from_node(element, source),)
            if length is None:
                return TypeExpr(kind="slice", elems=elems)
            return TypeExpr(kind="array", elems=elems, length=_squash(node_text(length, source)))
    return TypeExpr(kind="other", raw=_squash(node_text(node, source)))
