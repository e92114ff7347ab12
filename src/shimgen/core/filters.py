"""Decide which declarations are exposed and turn the exposed ones into descriptors.

Structs and enums opt in with ``#[derive(FFIShim)]``; free functions with a
bare ``#[ffishim_function]`` attribute. Anything unmarked is dropped without
comment. A marked declaration that cannot be described raises
``DescriptorExtractionError`` naming the declaration and its file.
"""

import logging
from collections.abc import Sequence

from tree_sitter import Node

from shimgen.config import GeneratorConfig
from shimgen.core.ast import Declaration, type_from_node
from shimgen.errors import DescriptorExtractionError
from shimgen.models import (
    Attribute,
    FieldDescriptor,
    FunctionDescriptor,
    ItemDescriptor,
    ParamDescriptor,
    TypeExpr,
    VariantDescriptor,
)

logger = logging.getLogger(__name__)

_STRUCT_OPTIONS = frozenset({"opaque"})


def is_marked_for_binding(attributes: Sequence[Attribute], marker: str = "FFIShim") -> bool:
    """True when a ``#[derive(...)]`` list names ``marker`` as a bare identifier."""
    return any(attr.path == "derive" and attr.args is not None and marker in attr.args for attr in attributes)


def is_marked_function(attributes: Sequence[Attribute], marker: str = "ffishim_function") -> bool:
    return any(attr.path == marker for attr in attributes)


def _fail(decl: Declaration, reason: str) -> DescriptorExtractionError:
    return DescriptorExtractionError(decl.name or "<anonymous>", decl.path, reason)


def _options(decl: Declaration, attribute_name: str, allowed: frozenset[str]) -> set[str]:
    options: set[str] = set()
    for attr in decl.attributes:
        if attr.path != attribute_name:
            continue
        for option in attr.args or ():
            if option not in allowed:
                raise _fail(decl, f"unknown #[{attribute_name}] option `{option}`")
            options.add(option)
    return options


def _reject_generics(decl: Declaration) -> None:
    if decl.field("type_parameters") is not None:
        raise _fail(decl, "generic parameters are not supported")


def _member_type(decl: Declaration, node: Node | None, member: str) -> TypeExpr:
    if node is None:
        raise _fail(decl, f"`{member}` has no type")
    ty = type_from_node(node, decl.source)
    if ty.kind == "other":
        raise _fail(decl, f"`{member}` has unsupported type `{decl.text(node)}`")
    return ty


def _fields(decl: Declaration, body: Node | None) -> list[FieldDescriptor]:
    if body is None:
        return []
    fields: list[FieldDescriptor] = []
    if body.type == "field_declaration_list":
        for child in body.named_children:
            if child.type != "field_declaration":
                continue
            name_node = child.child_by_field_name("name")
            name = decl.text(name_node) if name_node is not None else str(len(fields))
            fields.append(FieldDescriptor(name=name, type=_member_type(decl, child.child_by_field_name("type"), name)))
    elif body.type == "ordered_field_declaration_list":
        for index, type_node in enumerate(body.children_by_field_name("type")):
            fields.append(FieldDescriptor(name=str(index), type=_member_type(decl, type_node, str(index))))
    return fields


def filter_struct(decl: Declaration, config: GeneratorConfig) -> ItemDescriptor | None:
    if not is_marked_for_binding(decl.attributes, config.derive_marker):
        logger.debug("Skipping unmarked struct %s", decl.name)
        return None
    _reject_generics(decl)
    options = _options(decl, config.attribute_name, _STRUCT_OPTIONS)
    opaque = "opaque" in options
    fields = [] if opaque else _fields(decl, decl.field("body"))
    return ItemDescriptor(name=str(decl.name), kind="struct", fields=fields, opaque=opaque)


def filter_enum(decl: Declaration, config: GeneratorConfig) -> ItemDescriptor | None:
    if not is_marked_for_binding(decl.attributes, config.derive_marker):
        logger.debug("Skipping unmarked enum %s", decl.name)
        return None
    _reject_generics(decl)
    _options(decl, config.attribute_name, frozenset())
    variants: list[VariantDescriptor] = []
    body = decl.field("body")
    for child in body.named_children if body is not None else []:
        if child.type != "enum_variant":
            continue
        name_node = child.child_by_field_name("name")
        value_node = child.child_by_field_name("value")
        variants.append(
            VariantDescriptor(
                name=decl.text(name_node) if name_node is not None else str(len(variants)),
                fields=_fields(decl, child.child_by_field_name("body")),
                discriminant=decl.text(value_node) if value_node is not None else None,
            )
        )
    return ItemDescriptor(name=str(decl.name), kind="enum", variants=variants)


def filter_function(decl: Declaration, config: GeneratorConfig) -> FunctionDescriptor | None:
    if not is_marked_function(decl.attributes, config.function_marker):
        logger.debug("Skipping unmarked function %s", decl.name)
        return None
    _reject_generics(decl)
    params: list[ParamDescriptor] = []
    parameters = decl.field("parameters")
    for child in parameters.named_children if parameters is not None else []:
        if child.type in ("attribute_item", "line_comment", "block_comment"):
            continue
        if child.type == "self_parameter":
            raise _fail(decl, "methods taking `self` cannot be exposed as free functions")
        if child.type != "parameter":
            raise _fail(decl, f"unsupported parameter `{decl.text(child)}`")
        pattern = child.child_by_field_name("pattern")
        if pattern is None or pattern.type != "identifier":
            text = decl.text(pattern) if pattern is not None else decl.text(child)
            raise _fail(decl, f"parameter pattern `{text}` must be a plain identifier")
        name = decl.text(pattern)
        params.append(ParamDescriptor(name=name, type=_member_type(decl, child.child_by_field_name("type"), name)))
    return_node = decl.field("return_type")
    return_type = _member_type(decl, return_node, "return value") if return_node is not None else None
    return FunctionDescriptor(name=str(decl.name), params=params, return_type=return_type)
