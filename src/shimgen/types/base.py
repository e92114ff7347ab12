from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from shimgen.errors import UnimplementedConversionError, UnsupportedShapeError
from shimgen.models import TypeExpr

if TYPE_CHECKING:
    from shimgen.types.registry import Registry


class CallSite(Enum):
    """Where a converted value sits: some shapes are laid out differently inside a struct."""

    ARGUMENT = "argument"
    RETURN = "return"
    FIELD = "field"


class Behavior(ABC):
    """How one shape of Rust type is recognized, named and carried across the FFI boundary.

    Behaviors hold no state of their own beyond the registry they were built
    into, which composite shapes use to find the behavior of their inner type.
    Conversions default to ``UnimplementedConversionError`` so a new shape can
    be registered before every direction is written.
    """

    def __init__(self, registry: "Registry") -> None:
        self.registry = registry

    @property
    def label(self) -> str:
        return type(self).__name__

    @abstractmethod
    def recognizes(self, ty: TypeExpr) -> bool:
        """Structural test; must never raise."""

    def required_imports(self, ty: TypeExpr, package: str, crate_name: str) -> list[str]:
        return []

    @abstractmethod
    def display_name(self, ty: TypeExpr) -> str: ...

    @abstractmethod
    def shim_representation(self, ty: TypeExpr) -> str:
        """The ``dart:ffi`` native type used in C function signatures."""

    @abstractmethod
    def ffi_representation(self, ty: TypeExpr, call_site: CallSite) -> str: ...

    @abstractmethod
    def native_representation(self, ty: TypeExpr, call_site: CallSite) -> str: ...

    def native_to_ffi(self, ty: TypeExpr, expr: str) -> str:
        raise UnimplementedConversionError(self.label, "native_to_ffi", str(ty))

    def ffi_to_native(self, ty: TypeExpr, expr: str) -> str:
        raise UnimplementedConversionError(self.label, "ffi_to_native", str(ty))


def is_named(ty: TypeExpr, *names: str) -> bool:
    """Compare only the trailing path segment, so ``std::time::Duration`` matches ``Duration``."""
    return ty.is_path and ty.name in names


def subtype(ty: TypeExpr, index: int = 0) -> TypeExpr:
    args = ty.generic_args
    if len(args) <= index:
        raise UnsupportedShapeError(str(ty), f"expected at least {index + 1} generic argument(s)")
    return args[index]


def merge_imports(*groups: Iterable[str]) -> list[str]:
    merged: list[str] = []
    for group in groups:
        for uri in group:
            if uri not in merged:
                merged.append(uri)
    return merged
