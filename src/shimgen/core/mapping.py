import logging
from collections.abc import Iterator, Sequence

from pydantic import BaseModel

from shimgen.models import Module, TypeExpr
from shimgen.types.base import CallSite, merge_imports
from shimgen.types.registry import Registry, registry_for_module

logger = logging.getLogger(__name__)


class TypeMapping(BaseModel):
    module_path: str
    owner: str
    member: str
    call_site: CallSite
    type: str
    behavior: str
    imports: list[str]
    shim: str
    ffi: str
    native: str


def _members(node: Module) -> Iterator[tuple[str, str, CallSite, TypeExpr]]:
    for item in node.structs:
        for field in item.fields:
            yield item.name, field.name, CallSite.FIELD, field.type
    for item in node.enums:
        for variant in item.variants:
            for field in variant.fields:
                yield item.name, f"{variant.name}.{field.name}", CallSite.FIELD, field.type
    for func in node.functions:
        for param in func.params:
            yield func.name, param.name, CallSite.ARGUMENT, param.type
        if func.return_type is not None:
            yield func.name, "return", CallSite.RETURN, func.return_type


def map_type(
    ty: TypeExpr,
    registry: Registry,
    call_site: CallSite,
    package: str,
    crate_name: str,
) -> dict[str, object]:
    behavior = registry.dispatch(ty)
    return {
        "type": str(ty),
        "behavior": behavior.label,
        "call_site": call_site,
        "imports": behavior.required_imports(ty, package, crate_name),
        "shim": behavior.shim_representation(ty),
        "ffi": behavior.ffi_representation(ty, call_site),
        "native": behavior.native_representation(ty, call_site),
    }


def map_module(module: Module, registry: Registry | None = None, package: str | None = None) -> list[TypeMapping]:
    """Dispatch every exposed field, parameter and return type in source order.

    The first type no behavior recognizes aborts the whole mapping.
    """
    registry = registry or registry_for_module(module)
    package = package or module.crate_name
    mappings: list[TypeMapping] = []
    for module_path, node in module.walk():
        for owner, member, call_site, ty in _members(node):
            mapped = map_type(ty, registry, call_site, package, module.crate_name)
            mappings.append(TypeMapping(module_path="::".join(module_path), owner=owner, member=member, **mapped))
    logger.info("Mapped %d types in crate %s", len(mappings), module.crate_name)
    return mappings


def collect_imports(mappings: Sequence[TypeMapping]) -> list[str]:
    return merge_imports(*(m.imports for m in mappings))
