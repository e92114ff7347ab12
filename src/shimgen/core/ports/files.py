from pathlib import PurePath
from typing import Protocol


class FileProvider(Protocol):
    def exists(self, path: PurePath) -> bool: ...

    def read_text(self, path: PurePath) -> str: ...
