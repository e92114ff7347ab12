from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named, merge_imports, subtype


class VecBehavior(Behavior):
    """``Vec<T>``, carried as a pointer to the runtime ``Vec`` struct and mapped element by element."""

    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "Vec")

    def _inner(self, ty: TypeExpr) -> tuple[TypeExpr, Behavior]:
        inner = subtype(ty)
        return inner, self.registry.dispatch(inner)

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        inner, behavior = self._inner(ty)
        return merge_imports(
            ["dart:ffi", f"package:{package}/dustr/vec.dart"],
            behavior.required_imports(inner, package, crate_name),
        )

    def display_name(self, ty: TypeExpr) -> str:
        inner, behavior = self._inner(ty)
        return f"vec_{behavior.display_name(inner)}"

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Pointer<Vec>"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "Pointer<Vec>"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        inner, behavior = self._inner(ty)
        return f"List<{behavior.native_representation(inner, CallSite.FIELD)}>"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        inner, behavior = self._inner(ty)
        return f"Vec.fromList({expr}.map((e) => {behavior.native_to_ffi(inner, 'e')}).toList())"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        inner, behavior = self._inner(ty)
        return f"{expr}.ref.toList((e) => {behavior.ffi_to_native(inner, 'e')})"
