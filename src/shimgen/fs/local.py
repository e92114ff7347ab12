from pathlib import Path, PurePath


class LocalFileProvider:
    """Read crate sources from the real file system.

    Implements the ``FileProvider`` protocol.
    """

    def exists(self, path: PurePath) -> bool:
        return Path(path).is_file()

    def read_text(self, path: PurePath) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
