from pathlib import PurePath


class ShimgenError(Exception):
    """Base class for every failure raised while scanning a crate or mapping its types."""


class ManifestError(ShimgenError):
    def __init__(self, path: PurePath, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ManifestMissingError(ManifestError):
    def __init__(self, path: PurePath) -> None:
        super().__init__(path, "manifest not found")


class ManifestMalformedError(ManifestError):
    pass


class SourceParseError(ShimgenError):
    def __init__(self, path: PurePath | str, line: int, column: int, detail: str = "syntax error") -> None:
        super().__init__(f"{path}:{line}:{column}: {detail}")
        self.path = path
        self.line = line
        self.column = column
        self.detail = detail


class InvalidModulePathError(ShimgenError):
    def __init__(self, module: str, reason: str, candidates: tuple[PurePath, ...] = ()) -> None:
        message = f"cannot resolve module `{module}`: {reason}"
        if candidates:
            message += " (tried " + ", ".join(str(c) for c in candidates) + ")"
        super().__init__(message)
        self.module = module
        self.candidates = candidates


class UnrecognizedTypeError(ShimgenError):
    def __init__(self, type_repr: str) -> None:
        super().__init__(f"no behavior recognizes type `{type_repr}`")
        self.type_repr = type_repr


class UnsupportedShapeError(ShimgenError):
    def __init__(self, type_repr: str, reason: str) -> None:
        super().__init__(f"unsupported shape `{type_repr}`: {reason}")
        self.type_repr = type_repr
        self.reason = reason


class UnimplementedConversionError(ShimgenError):
    def __init__(self, behavior: str, operation: str, type_repr: str) -> None:
        super().__init__(f"{behavior} does not implement {operation} for `{type_repr}`")
        self.behavior = behavior
        self.operation = operation
        self.type_repr = type_repr


class DescriptorExtractionError(ShimgenError):
    def __init__(self, declaration: str, path: PurePath | str, reason: str) -> None:
        super().__init__(f"{path}: cannot extract `{declaration}`: {reason}")
        self.declaration = declaration
        self.path = path
        self.reason = reason
