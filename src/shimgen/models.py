from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict

TypeKind = Literal["path", "reference", "pointer", "tuple", "array", "slice", "other"]


class PathSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple["TypeExpr", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.args)}>"


class TypeExpr(BaseModel):
    """A parsed type reference such as ``u32``, ``Option<T>`` or ``&mut [u8]``.

    Path types keep every segment with its generic arguments. References,
    pointers, arrays and slices keep their element in ``elems[0]``; tuples
    keep all members there. Anything the parser does not model is kept as
    ``kind="other"`` with its source text in ``raw``.
    """

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    segments: tuple[PathSegment, ...] = ()
    elems: tuple["TypeExpr", ...] = ()
    mutable: bool = False
    length: str | None = None
    raw: str | None = None

    @classmethod
    def path(cls, *names: str, args: tuple["TypeExpr", ...] = ()) -> "TypeExpr":
        """Build a path type; ``args`` are attached to the last segment."""
        segments = [PathSegment(name=n) for n in names[:-1]]
        segments.append(PathSegment(name=names[-1], args=args))
        return cls(kind="path", segments=tuple(segments))

    @property
    def is_path(self) -> bool:
        return self.kind == "path" and bool(self.segments)

    @property
    def last_segment(self) -> PathSegment | None:
        return self.segments[-1] if self.is_path else None

    @property
    def name(self) -> str | None:
        segment = self.last_segment
        return segment.name if segment else None

    @property
    def generic_args(self) -> tuple["TypeExpr", ...]:
        segment = self.last_segment
        return segment.args if segment else ()

    @property
    def is_unit(self) -> bool:
        return self.kind == "tuple" and not self.elems

    def __str__(self) -> str:
        if self.kind == "path":
            return "::".join(str(s) for s in self.segments)
        if self.kind == "reference":
            return f"&{'mut ' if self.mutable else ''}{self.elems[0]}"
        if self.kind == "pointer":
            return f"*{'mut' if self.mutable else 'const'} {self.elems[0]}"
        if self.kind == "tuple":
            if len(self.elems) == 1:
                return f"({self.elems[0]},)"
            return f"({', '.join(str(e) for e in self.elems)})"
        if self.kind == "array":
            return f"[{self.elems[0]}; {self.length}]"
        if self.kind == "slice":
            return f"[{self.elems[0]}]"
        return self.raw or "?"


PathSegment.model_rebuild()  # necessary for recursive types
TypeExpr.model_rebuild()


class Attribute(BaseModel):
    """An outer ``#[...]`` attribute: its path and, for list forms, the comma-separated entries."""

    model_config = ConfigDict(frozen=True)

    path: str
    args: tuple[str, ...] | None = None


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeExpr


class VariantDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[FieldDescriptor] = []
    discriminant: str | None = None


class ItemDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["struct", "enum"]
    fields: list[FieldDescriptor] = []
    variants: list[VariantDescriptor] = []
    opaque: bool = False


class ParamDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeExpr


class FunctionDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    params: list[ParamDescriptor] = []
    return_type: TypeExpr | None = None


class Module(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    crate_name: str
    path: str
    structs: list[ItemDescriptor] = []
    enums: list[ItemDescriptor] = []
    functions: list[FunctionDescriptor] = []
    submodules: list["Module"] = []

    def is_empty(self) -> bool:
        return not (self.structs or self.enums or self.functions or self.submodules)

    def walk(self, prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], "Module"]]:
        """Yield ``(module_path, module)`` depth first, starting with this module."""
        module_path = (*prefix, self.name)
        yield module_path, self
        for sub in self.submodules:
            yield from sub.walk(module_path)


Module.model_rebuild()
