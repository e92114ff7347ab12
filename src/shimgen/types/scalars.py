"""Builtin numeric scalars: ``f32``, ``u32``, ...

``usize`` and ``isize`` are deliberately absent: their width depends on the
target, so they have no fixed ``dart:ffi`` counterpart and fail dispatch.
"""

from shimgen.models import TypeExpr
from shimgen.types.base import Behavior, CallSite

SHIM_TYPES: dict[str, str] = {
    "f32": "Float",
    "f64": "Double",
    "u8": "Uint8",
    "u16": "Uint16",
    "u32": "Uint32",
    "u64": "Uint64",
    "i8": "Int8",
    "i16": "Int16",
    "i32": "Int32",
    "i64": "Int64",
}

DART_TYPES: dict[str, str] = {
    "f32": "double",
    "f64": "double",
    "u8": "int",
    "u16": "int",
    "u32": "int",
    "u64": "int",
    "i8": "int",
    "i16": "int",
    "i32": "int",
    "i64": "int",
}


class ScalarBehavior(Behavior):
    # Only the trailing segment is compared: a user type named `i32` in some
    # other module is taken for the scalar.
    def recognizes(self, ty: TypeExpr) -> bool:
        return ty.is_path and ty.name in SHIM_TYPES

    def display_name(self, ty: TypeExpr) -> str:
        return str(ty.name)

    def shim_representation(self, ty: TypeExpr) -> str:
        return SHIM_TYPES[str(ty.name)]

    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return DART_TYPES[str(ty.name)]

    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str:
        return DART_TYPES[str(ty.name)]

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        return expr

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        return expr
