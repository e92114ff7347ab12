from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named


class DurationBehavior(Behavior):
    """``std::time::Duration``, carried as whole milliseconds in an ``Int64``."""

    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "Duration")

    def display_name(self, ty: TypeExpr) -> str:
        return "duration"

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Int64"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "int"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "Duration"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return f"{expr}.inMilliseconds"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return f"Duration(milliseconds: {expr})"
