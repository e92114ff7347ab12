import logging
from collections.abc import Sequence
from pathlib import PurePath

from shimgen.config import GeneratorConfig
from shimgen.core.ast import Declaration, parse_source
from shimgen.core.filters import filter_enum, filter_function, filter_struct
from shimgen.core.manifest import read_manifest
from shimgen.core.ports.files import FileProvider
from shimgen.errors import InvalidModulePathError, SourceParseError
from shimgen.fs.local import LocalFileProvider
from shimgen.models import FunctionDescriptor, ItemDescriptor, Module

logger = logging.getLogger(__name__)


def _byte_position(data: bytes, offset: int) -> tuple[int, int]:
    """1-based line and column of a byte offset."""
    line_start = data.rfind(b"\n", 0, offset) + 1
    return data.count(b"\n", 0, offset) + 1, offset - line_start + 1


class ModuleBuilder:
    """Build the ``Module`` tree of a crate by following its ``mod`` declarations.

    ``visited`` holds the files on the current recursion path so a module
    cannot load itself again. Inline modules keep the path of the file they
    are written in; file-backed modules are looked up next to that file as
    ``name.rs`` first and ``name/mod.rs`` second.
    """

    def __init__(self, files: FileProvider | None = None, config: GeneratorConfig | None = None) -> None:
        self.files: FileProvider = files or LocalFileProvider()
        self.config = config or GeneratorConfig()

    def from_crate(self, root: PurePath) -> Module:
        manifest = read_manifest(self.files, root / self.config.manifest_name)
        source = root / (manifest.lib_path or self.config.default_source)
        logger.info("Loading crate %s from %s", manifest.name, source)
        return self.from_file(manifest.name, manifest.name, source)

    def from_file(
        self,
        name: str,
        crate_name: str,
        path: PurePath,
        visited: frozenset[PurePath] = frozenset(),
    ) -> Module:
        if path in visited:
            raise InvalidModulePathError(name, "module file is already being loaded", (path,))
        try:
            text = self.files.read_text(path)
        except FileNotFoundError:
            raise InvalidModulePathError(name, "source file not found", (path,)) from None
        except UnicodeDecodeError as exc:
            line, column = _byte_position(exc.object, exc.start)
            raise SourceParseError(path, line, column, "invalid UTF-8") from exc
        declarations = parse_source(text.encode("utf-8"), path)
        return self.from_declarations(name, crate_name, path, declarations, visited | {path})

    def from_declarations(
        self,
        name: str,
        crate_name: str,
        path: PurePath,
        declarations: Sequence[Declaration],
        visited: frozenset[PurePath] = frozenset(),
    ) -> Module:
        structs: list[ItemDescriptor] = []
        enums: list[ItemDescriptor] = []
        functions: list[FunctionDescriptor] = []
        submodules: list[Module] = []

        for decl in declarations:
            if decl.kind == "module":
                module = self.from_module_declaration(crate_name, path, decl, visited)
                if module.is_empty():
                    logger.debug("Pruning empty module %s", module.name)
                else:
                    submodules.append(module)
            elif decl.kind == "struct":
                if (item := filter_struct(decl, self.config)) is not None:
                    structs.append(item)
            elif decl.kind == "enum":
                if (item := filter_enum(decl, self.config)) is not None:
                    enums.append(item)
            elif decl.kind == "function":
                if (func := filter_function(decl, self.config)) is not None:
                    functions.append(func)

        return Module(
            name=name,
            crate_name=crate_name,
            path=str(path),
            structs=structs,
            enums=enums,
            functions=functions,
            submodules=submodules,
        )

    def from_module_declaration(
        self,
        crate_name: str,
        path: PurePath,
        decl: Declaration,
        visited: frozenset[PurePath] = frozenset(),
    ) -> Module:
        name = str(decl.name).removeprefix("r#")
        if decl.is_inline_module:
            return self.from_declarations(name, crate_name, path, decl.inline_declarations(), visited)
        module_file = self.resolve_module_file(name, path)
        logger.info("Resolved module %s to %s", name, module_file)
        return self.from_file(name, crate_name, module_file, visited)

    def resolve_module_file(self, name: str, path: PurePath) -> PurePath:
        """Find the file backing ``mod name;`` declared in the file at ``path``."""
        parent = path.parent
        if not path.name or parent == path:
            raise InvalidModulePathError(name, f"cannot get parent of {path}")

        # TODO: support `name.rs` alongside a `name/` directory of submodules;
        # only `name/mod.rs` is followed for modules with their own children.
        flat = parent / f"{name}.rs"
        nested = parent / name / "mod.rs"
        for candidate in (flat, nested):
            if self.files.exists(candidate):
                return candidate
        raise InvalidModulePathError(name, "no module file found", (flat, nested))


def build_crate(root: PurePath, files: FileProvider | None = None, config: GeneratorConfig | None = None) -> Module:
    return ModuleBuilder(files, config).from_crate(root)
