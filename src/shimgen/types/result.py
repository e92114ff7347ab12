from shimgen.errors import UnsupportedShapeError
from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite, is_named, merge_imports, subtype


class ResultBehavior(Behavior):
    """``Result<T, E>``, returned across the boundary as a pointer to the runtime's ``Result`` struct.

    Results only ever flow out of Rust and have no generated identifier, so
    neither naming nor value conversion is provided.
    """

    def recognizes(self, ty: TypeExpr) -> bool:
        return is_named(ty, "Result")

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        inner = subtype(ty)
        behavior = self.registry.dispatch(inner)
        return merge_imports(
            ["dart:ffi", f"package:{package}/dustr/result.dart"],
            behavior.required_imports(inner, package, crate_name),
        )

    def display_name(self, ty: TypeExpr) -> str:
        raise UnsupportedShapeError(str(ty), "results have no canonical name; options of results are not supported")

    def shim_representation(self, ty: TypeExpr) -> str:
        return "Pointer<Result>"

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "Pointer<Result>"

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return "Result"
