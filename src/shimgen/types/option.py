from shimgen.errors import UnsupportedShapeError
from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named, merge_imports, subtype


class OptionBehavior(Behavior):
    """``Option<T>``: a nullable pointer.

    Inner shapes that already cross as a pointer reuse it with ``nullptr`` for
    ``None``; value shapes are boxed with ``calloc``. Conversions bind the
    incoming expression to a closure parameter so it is evaluated once.
    """

    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "Option")

    def _inner(self, ty: TypeExpr) -> tuple[TypeExpr, Behavior]:
        inner = subtype(ty)
        if inner.is_unit:
            raise UnsupportedShapeError(str(ty), "an option of `()` carries no value to box")
        return inner, self.registry.dispatch(inner)

    def _boxes(self, ty: TypeExpr) -> bool:
        inner, behavior = self._inner(ty)
        return not behavior.shim_representation(inner).startswith("Pointer<")

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        inner, behavior = self._inner(ty)
        return merge_imports(
            ["dart:ffi", "package:ffi/ffi.dart"],
            behavior.required_imports(inner, package, crate_name),
        )

    def display_name(self, ty: TypeExpr) -> str:
        inner, behavior = self._inner(ty)
        return f"option_{behavior.display_name(inner)}"

    def shim_representation(self, ty: TypeExpr) -> str:
        inner, behavior = self._inner(ty)
        shim = behavior.shim_representation(inner)
        return f"Pointer<{shim}>" if self._boxes(ty) else shim

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return self.shim_representation(ty)

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        inner, behavior = self._inner(ty)
        return f"{behavior.native_representation(inner, call_site)}?"

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        inner, behavior = self._inner(ty)
        converted = behavior.native_to_ffi(inner, "v")
        if self._boxes(ty):
            converted = f"(calloc<{behavior.shim_representation(inner)}>()..value = {converted})"
        native = self.native_representation(ty, CallSite.ARGUMENT)
        return f"(({native} v) => v == null ? nullptr : {converted})({expr})"

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        inner, behavior = self._inner(ty)
        value = "v.value" if self._boxes(ty) else "v"
        shim = self.shim_representation(ty)
        return f"(({shim} v) => v == nullptr ? null : {behavior.ffi_to_native(inner, value)})({expr})"
