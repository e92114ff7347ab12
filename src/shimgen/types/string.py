from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named


class StringBehavior(Behavior):
    """Owned ``String`` values, passed as NUL-terminated UTF-8."""

    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "String")

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        return ["dart:ffi", "package:ffi/ffi.dart"]

    def display_name(self, ty: TypeExpr) -> str:
        return "string"

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Pointer<Utf8>"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "Pointer<Utf8>"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "String"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return f"{expr}.toNativeUtf8()"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return f"{expr}.toDartString()"
