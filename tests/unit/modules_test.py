"""Unit tests for crate manifests and the module tree builder, against a virtual file provider."""

from pathlib import PurePosixPath

import pytest

from shimgen.config import GeneratorConfig
from shimgen.core.manifest import read_manifest
from shimgen.core.modules import ModuleBuilder, build_crate
from shimgen.errors import (
    DescriptorExtractionError,
    InvalidModulePathError,
    ManifestMalformedError,
    ManifestMissingError,
    SourceParseError,
)
from shimgen.fs import InMemoryFileProvider
from shimgen.models import TypeExpr


class TestManifest:
    """Tests for reading ``Cargo.toml``."""

    def test_name_is_lower_cased(self, files: InMemoryFileProvider, crate_root: PurePosixPath) -> None:
        manifest = read_manifest(files, crate_root / "Cargo.toml")
        assert manifest.name == "geometry"
        assert manifest.lib_path is None

    def test_lib_path(self, crate_root: PurePosixPath) -> None:
        files = InMemoryFileProvider({"/crate/Cargo.toml": '[package]\nname = "geo"\n\n[lib]\npath = "src/geo.rs"\n'})
        assert read_manifest(files, crate_root / "Cargo.toml").lib_path == "src/geo.rs"

    def test_missing(self, crate_root: PurePosixPath) -> None:
        with pytest.raises(ManifestMissingError) as excinfo:
            read_manifest(InMemoryFileProvider(), crate_root / "Cargo.toml")
        assert excinfo.value.path == crate_root / "Cargo.toml"

    @pytest.mark.parametrize(
        "text",
        [
            "[package\nname = 1",
            '[workspace]\nmembers = ["a"]\n',
            '[package]\nversion = "0.1.0"\n',
            '[package]\nname = "geo"\n\n[lib]\npath = 3\n',
        ],
        ids=["invalid-toml", "no-package", "no-name", "lib-path-not-string"],
    )
    def test_malformed(self, crate_root: PurePosixPath, text: str) -> None:
        files = InMemoryFileProvider({"/crate/Cargo.toml": text})
        with pytest.raises(ManifestMalformedError):
            read_manifest(files, crate_root / "Cargo.toml")


class TestBuildCrate:
    """End-to-end scenarios over a single crate."""

    def test_single_marked_struct(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "#[derive(FFIShim)]\npub struct Point { x: f32, y: f32 }\n")
        module = builder.from_crate(crate_root)

        assert module.name == "geometry"
        assert module.crate_name == "geometry"
        assert module.path == str(lib_path)
        assert module.submodules == []
        (point,) = module.structs
        assert [(f.name, f.type) for f in point.fields] == [("x", TypeExpr.path("f32")), ("y", TypeExpr.path("f32"))]

    def test_inline_module_keeps_marked_function_only(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(
            lib_path,
            """
pub mod shapes {
    pub struct Hidden { x: f32 }

    #[ffishim_function]
    pub fn unit_square() -> f32 { 1.0 }
}
""",
        )
        module = builder.from_crate(crate_root)

        assert module.structs == []
        (shapes,) = module.submodules
        assert shapes.name == "shapes"
        assert shapes.path == str(lib_path)
        assert shapes.structs == []
        assert [f.name for f in shapes.functions] == ["unit_square"]

    def test_empty_modules_are_pruned(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod util;\nmod empty {}\n#[ffishim_function]\nfn ping() {}\n")
        files.add(crate_root / "src" / "util.rs", "pub fn helper() {}\nmod deeper { struct X; }\n")
        module = builder.from_crate(crate_root)

        assert module.submodules == []
        assert [f.name for f in module.functions] == ["ping"]

    def test_descriptors_keep_source_order(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(
            lib_path,
            """
#[derive(FFIShim)]
struct B;
#[derive(FFIShim)]
enum Z { One }
#[derive(FFIShim)]
struct A;
#[ffishim_function]
fn second() {}
#[ffishim_function]
fn first() {}
""",
        )
        module = builder.from_crate(crate_root)

        assert [s.name for s in module.structs] == ["B", "A"]
        assert [e.name for e in module.enums] == ["Z"]
        assert [f.name for f in module.functions] == ["second", "first"]

    def test_lib_path_overrides_default_source(self, crate_root: PurePosixPath) -> None:
        files = InMemoryFileProvider(
            {
                "/crate/Cargo.toml": '[package]\nname = "geo"\n\n[lib]\npath = "lib/geo.rs"\n',
                "/crate/lib/geo.rs": "#[ffishim_function]\nfn ping() {}\n",
            }
        )
        module = build_crate(crate_root, files=files)
        assert module.path == "/crate/lib/geo.rs"
        assert [f.name for f in module.functions] == ["ping"]

    def test_custom_markers(self, files: InMemoryFileProvider, lib_path, crate_root) -> None:
        files.add(lib_path, "#[derive(Expose)]\nstruct Point;\n#[derive(FFIShim)]\nstruct Other;\n")
        module = ModuleBuilder(files, GeneratorConfig(derive_marker="Expose")).from_crate(crate_root)
        assert [s.name for s in module.structs] == ["Point"]

    def test_missing_root_source(self, builder: ModuleBuilder, crate_root: PurePosixPath) -> None:
        with pytest.raises(InvalidModulePathError) as excinfo:
            builder.from_crate(crate_root)
        assert excinfo.value.candidates == (crate_root / "src" / "lib.rs",)

    def test_parse_error_names_the_file(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        bad = crate_root / "src" / "broken.rs"
        files.add(lib_path, "mod broken;\n")
        files.add(bad, "struct {\n")
        with pytest.raises(SourceParseError) as excinfo:
            builder.from_crate(crate_root)
        assert excinfo.value.path == bad

    def test_extraction_error_names_the_file(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "#[derive(FFIShim)]\nstruct Wrapper<T> { inner: T }\n")
        with pytest.raises(DescriptorExtractionError) as excinfo:
            builder.from_crate(crate_root)
        assert excinfo.value.path == lib_path
        assert excinfo.value.declaration == "Wrapper"


class TestModuleResolution:
    """Tests for locating the file behind ``mod name;``."""

    def test_flat_file(self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root) -> None:
        files.add(crate_root / "src" / "shapes.rs", "")
        assert builder.resolve_module_file("shapes", lib_path) == crate_root / "src" / "shapes.rs"

    def test_mod_rs(self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root) -> None:
        files.add(crate_root / "src" / "shapes" / "mod.rs", "")
        assert builder.resolve_module_file("shapes", lib_path) == crate_root / "src" / "shapes" / "mod.rs"

    def test_flat_file_wins(self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root) -> None:
        files.add(crate_root / "src" / "shapes.rs", "")
        files.add(crate_root / "src" / "shapes" / "mod.rs", "")
        assert builder.resolve_module_file("shapes", lib_path) == crate_root / "src" / "shapes.rs"

    def test_no_candidate(self, builder: ModuleBuilder, lib_path, crate_root) -> None:
        with pytest.raises(InvalidModulePathError) as excinfo:
            builder.resolve_module_file("shapes", lib_path)
        assert excinfo.value.module == "shapes"
        assert excinfo.value.candidates == (
            crate_root / "src" / "shapes.rs",
            crate_root / "src" / "shapes" / "mod.rs",
        )

    def test_path_without_parent(self, builder: ModuleBuilder) -> None:
        with pytest.raises(InvalidModulePathError):
            builder.resolve_module_file("shapes", PurePosixPath("/"))

    def test_children_of_mod_rs_resolve_beside_it(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod shapes;\n")
        files.add(crate_root / "src" / "shapes" / "mod.rs", "mod circle;\n")
        files.add(crate_root / "src" / "shapes" / "circle.rs", "#[derive(FFIShim)]\nstruct Circle { r: f64 }\n")
        module = builder.from_crate(crate_root)

        (shapes,) = module.submodules
        (circle,) = shapes.submodules
        assert circle.path == "/crate/src/shapes/circle.rs"
        assert [s.name for s in circle.structs] == ["Circle"]

    def test_external_module_inside_inline_module(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod outer {\n    mod deep;\n}\n")
        files.add(crate_root / "src" / "deep.rs", "#[ffishim_function]\nfn dive() {}\n")
        module = builder.from_crate(crate_root)

        (outer,) = module.submodules
        (deep,) = outer.submodules
        assert deep.path == "/crate/src/deep.rs"
        assert [f.name for f in deep.functions] == ["dive"]

    def test_module_cannot_load_itself(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod lib;\n")
        with pytest.raises(InvalidModulePathError) as excinfo:
            builder.from_crate(crate_root)
        assert excinfo.value.module == "lib"

    def test_each_file_is_read_once(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod a;\nmod b;\n")
        files.add(crate_root / "src" / "a.rs", "#[ffishim_function]\nfn a() {}\n")
        files.add(crate_root / "src" / "b.rs", "#[ffishim_function]\nfn b() {}\n")
        builder.from_crate(crate_root)
        assert files.reads == ["/crate/Cargo.toml", "/crate/src/lib.rs", "/crate/src/a.rs", "/crate/src/b.rs"]

    def test_raw_identifier_module(
        self, builder: ModuleBuilder, files: InMemoryFileProvider, lib_path, crate_root
    ) -> None:
        files.add(lib_path, "mod r#type;\n")
        files.add(crate_root / "src" / "type.rs", "#[ffishim_function]\nfn kind() {}\n")
        module = builder.from_crate(crate_root)

        (submodule,) = module.submodules
        assert submodule.name == "type"
        assert submodule.path == "/crate/src/type.rs"
