"""Local file reads for read probes."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileProvider(Protocol):
    def read_bytes(self, path: str) -> bytes: ...


class DefaultFileProvider:
    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()


def get_file_provider() -> FileProvider:
    return DefaultFileProvider()


__all__ = ["FileProvider", "DefaultFileProvider", "get_file_provider"]
