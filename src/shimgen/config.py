import os

from pydantic import BaseModel, ConfigDict


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    derive_marker: str = "FFIShim"
    function_marker: str = "ffishim_function"
    attribute_name: str = "ffishim"
    manifest_name: str = "Cargo.toml"
    default_source: str = "src/lib.rs"
    target_package: str | None = None

    def package_for(self, crate_name: str) -> str:
        """Dart package that generated imports point into."""
        return self.target_package or crate_name


def load_config() -> GeneratorConfig:
    """Build the configuration, letting ``SHIMGEN_*`` environment variables override defaults."""
    defaults = GeneratorConfig()
    return GeneratorConfig(
        derive_marker=os.getenv("SHIMGEN_DERIVE_MARKER", defaults.derive_marker),
        function_marker=os.getenv("SHIMGEN_FUNCTION_MARKER", defaults.function_marker),
        attribute_name=os.getenv("SHIMGEN_ATTRIBUTE_NAME", defaults.attribute_name),
        manifest_name=os.getenv("SHIMGEN_MANIFEST_NAME", defaults.manifest_name),
        default_source=os.getenv("SHIMGEN_DEFAULT_SOURCE", defaults.default_source),
        target_package=os.getenv("SHIMGEN_TARGET_PACKAGE") or None,
    )
