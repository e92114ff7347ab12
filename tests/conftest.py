"""Shared fixtures and helpers for tests."""

from pathlib import Path, PurePosixPath

import pytest

from shimgen.config import GeneratorConfig
from shimgen.core.modules import ModuleBuilder
from shimgen.fs import InMemoryFileProvider
from shimgen.types import Registry, default_registry

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def crate_root() -> PurePosixPath:
    """Return the root of the virtual crate."""
    return PurePosixPath("/crate")


@pytest.fixture
def lib_path(crate_root: PurePosixPath) -> PurePosixPath:
    return crate_root / "src" / "lib.rs"


@pytest.fixture
def files(crate_root: PurePosixPath) -> InMemoryFileProvider:
    """Return a virtual crate holding only a manifest for package ``Geometry``."""
    return InMemoryFileProvider({str(crate_root / "Cargo.toml"): '[package]\nname = "Geometry"\nversion = "0.1.0"\n'})


@pytest.fixture
def builder(files: InMemoryFileProvider) -> ModuleBuilder:
    return ModuleBuilder(files, GeneratorConfig())


@pytest.fixture
def registry() -> Registry:
    return default_registry()
