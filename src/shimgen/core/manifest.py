import tomllib
from dataclasses import dataclass
from pathlib import PurePath

from shimgen.core.ports.files import FileProvider
from shimgen.errors import ManifestMalformedError, ManifestMissingError


@dataclass(frozen=True)
class CrateManifest:
    name: str
    lib_path: str | None = None


def read_manifest(files: FileProvider, path: PurePath) -> CrateManifest:
    """Read the package name (lower-cased) and optional ``[lib] path`` from a ``Cargo.toml``."""
    if not files.exists(path):
        raise ManifestMissingError(path)
    try:
        data = tomllib.loads(files.read_text(path))
    except tomllib.TOMLDecodeError as exc:
        raise ManifestMalformedError(path, f"invalid TOML: {exc}") from exc

    package = data.get("package")
    if not isinstance(package, dict):
        raise ManifestMalformedError(path, "empty [package] section")
    name = package.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestMalformedError(path, "[package] has no name")

    lib = data.get("lib")
    lib_path = lib.get("path") if isinstance(lib, dict) else None
    if lib_path is not None and not isinstance(lib_path, str):
        raise ManifestMalformedError(path, "[lib] path must be a string")
    return CrateManifest(name=name.lower(), lib_path=lib_path)
