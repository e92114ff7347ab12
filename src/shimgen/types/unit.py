from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite


class UnitBehavior(Behavior):
    """The empty tuple ``()``, as found in ``Result<(), String>``."""

    def recognizes(self, ty: TypeExpr) -> bool:
        return ty.is_unit

    def display_name(self, ty: TypeExpr) -> str:
        return "unit"

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Void"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "void"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "void"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return expr

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return expr
