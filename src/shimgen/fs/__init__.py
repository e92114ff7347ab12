from shimgen.fs.local import LocalFileProvider
from shimgen.fs.memory import InMemoryFileProvider

__all__ = [
    "InMemoryFileProvider",
    "LocalFileProvider",
]
