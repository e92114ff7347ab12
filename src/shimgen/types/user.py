import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite

if TYPE_CHECKING:
    from shimgen.types.registry import Registry

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class UserTypeBehavior(Behavior):
    """Structs and enums exposed by the crate being scanned.

    ``locations`` maps each exposed item name to its module path below the
    crate root (empty for the root module). The wrapper class keeps the Rust
    name; its ``dart:ffi`` struct carries an ``Ffi`` suffix.
    """

    def __init__(self, registry: "Registry", locations: Mapping[str, tuple[str, ...]]) -> None:
        super().__init__(registry)
        self.locations = dict(locations)

    def recognizes(self, ty: TypeExpr) -> bool:
        return ty.is_path and not ty.generic_args and ty.name in self.locations

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        module_path = "/".join((crate_name, *self.locations[str(ty.name)]))
        return ["dart:ffi", f"package:{package}/{module_path}.dart"]

    def display_name(self, ty: TypeExpr) -> str:
        return snake_case(str(ty.name))

    def shim_representation(self, ty: TypeExpr) -> str:
        return f"Pointer<{ty.name}Ffi>"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        if call_site is CallSite.FIELD:
            return f"{ty.name}Ffi"
        return f"Pointer<{ty.name}Ffi>"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return str(ty.name)

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return f"{expr}.toFfi()"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return f"{ty.name}.fromFfi({expr})"
