from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named


class BoolBehavior(Behavior):
    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "bool")

    def display_name(self, ty: TypeExpr) -> str:
        return "bool"

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Uint8"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "int"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "bool"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return f"({expr} ? 1 : 0)"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return f"({expr} != 0)"
