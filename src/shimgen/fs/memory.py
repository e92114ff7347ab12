from collections.abc import Mapping
from pathlib import PurePath, PurePosixPath


def _key(path: PurePath | str) -> str:
    return PurePosixPath(path).as_posix()


class InMemoryFileProvider:
    """A virtual crate: POSIX-style paths mapped to file contents."""

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self.files: dict[str, str] = {}
        self.reads: list[str] = []
        for path, text in (files or {}).items():
            self.add(path, text)

    def add(self, path: PurePath | str, text: str) -> None:
        self.files[_key(path)] = text

    def exists(self, path: PurePath) -> bool:
        return _key(path) in self.files

    def read_text(self, path: PurePath) -> str:
        key = _key(path)
        if key not in self.files:
            raise FileNotFoundError(f"File not found: {path}")
        self.reads.append(key)
        return self.files[key]
