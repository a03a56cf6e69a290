"""Read probe: copy a local file into the bundle."""

from __future__ import annotations

import logging
from typing import Optional

from analyzer.core.errors import ProbeError, wrap_error
from analyzer.core.store import ResultStore
from analyzer.providers.file_provider import FileProvider, get_file_provider

logger = logging.getLogger(__name__)


class ReadProbe:
    def __init__(self, name: str, path: str, store: ResultStore, *, provider: Optional[FileProvider] = None) -> None:
        self.name = name
        self.path = path
        self.store = store
        self.provider = provider or get_file_provider()

    def __repr__(self) -> str:
        return f"ReadProbe(name={self.name!r}, path={self.path!r})"

    def run(self) -> None:
        try:
            contents = self.provider.read_bytes(self.path)
        except OSError as e:
            logger.warning("probe %s failed (read): %s", self.name, e)
            err = ProbeError(f"error reading {self.path}", probe=self.name, operation="read")
            self.store.append_error(wrap_error(e, err))
            return
        self.store.add_output(self.name, contents)


__all__ = ["ReadProbe"]
