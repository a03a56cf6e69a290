"""Zip archive writer for the collected outputs."""

from __future__ import annotations

import logging
import os
import zipfile
from typing import BinaryIO, Iterable, List, Optional

from analyzer.core.errors import ArchiveError
from analyzer.core.models import OutputRecord

logger = logging.getLogger(__name__)


class ZipArchive:
    """
    Owns one zip file on disk from open to close.

    The file is opened write-only, created if missing and truncated if present. Entries are written
    in the order given; duplicate names are not resolved here (the probe plan rejects them). The
    first failing entry aborts the write: a half-written central directory cannot be repaired
    mid-loop, so the error goes to the caller.
    """

    def __init__(self, path: str, fileobj: BinaryIO, writer: zipfile.ZipFile) -> None:
        self.path = path
        self._file = fileobj
        self._writer: Optional[zipfile.ZipFile] = writer
        self.entries: List[str] = []

    @classmethod
    def open(cls, path: str, *, compression: int = zipfile.ZIP_DEFLATED) -> "ZipArchive":
        try:
            fileobj = os.fdopen(os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600), "wb")
        except OSError as e:
            raise ArchiveError(f"error opening {path}", operation="open") from e
        try:
            # The open() mode only applies on create; a pre-existing file keeps its old mode.
            os.fchmod(fileobj.fileno(), 0o600)
        except OSError as e:
            fileobj.close()
            raise ArchiveError(f"error opening {path}", operation="open") from e
        try:
            writer = zipfile.ZipFile(fileobj, mode="w", compression=compression)
        except (OSError, RuntimeError) as e:
            fileobj.close()
            raise ArchiveError(f"error creating zip writer for {path}", operation="open") from e
        logger.debug("opened archive %s", path)
        return cls(path, fileobj, writer)

    def __enter__(self) -> "ZipArchive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._writer is None

    def write_record(self, record: OutputRecord) -> None:
        if self._writer is None:
            raise ArchiveError(f"cannot write {record.name}: archive {self.path} is closed", operation="write")
        try:
            entry = self._writer.open(record.name, mode="w", force_zip64=True)
        except (OSError, ValueError, RuntimeError) as e:
            raise ArchiveError(f"error creating {record.name} in zip file", operation="create") from e
        try:
            with entry:
                entry.write(record.contents)
        except (OSError, ValueError, RuntimeError) as e:
            raise ArchiveError(f"error writing {record.name} to zip file", operation="write") from e
        self.entries.append(record.name)

    def write_records(self, records: Iterable[OutputRecord]) -> None:
        for record in records:
            self.write_record(record)

    def close(self) -> None:
        """Finalize the central directory, then close the file. Safe to call twice."""
        writer, self._writer = self._writer, None
        if writer is None:
            return
        try:
            writer.close()
        except (OSError, ValueError, RuntimeError) as e:
            self._file.close()
            raise ArchiveError("error closing zip file writer", operation="close") from e
        try:
            self._file.close()
        except OSError as e:
            raise ArchiveError("error closing zip file", operation="close") from e
        logger.debug("closed archive %s (%d entries)", self.path, len(self.entries))


__all__ = ["ZipArchive"]
