"""Thread-safe result store shared by all probes of one run."""

from __future__ import annotations

import threading
from typing import List

from analyzer.core.models import OutputRecord


class ResultStore:
    """
    Append-only collections of output records and errors.

    Each sequence has its own lock so the output and error paths never contend. Appends are safe
    from any thread. Reads return snapshots and are only meaningful once every probe has finished
    (the scheduler's barrier); the store does not enforce that ordering.
    """

    def __init__(self) -> None:
        self._outputs: List[OutputRecord] = []
        self._outputs_lock = threading.Lock()
        self._errors: List[BaseException] = []
        self._errors_lock = threading.Lock()

    def append_output(self, record: OutputRecord) -> None:
        with self._outputs_lock:
            self._outputs.append(record)

    def add_output(self, name: str, contents: bytes) -> OutputRecord:
        record = OutputRecord(name=name, contents=contents)
        self.append_output(record)
        return record

    def append_error(self, err: BaseException) -> None:
        with self._errors_lock:
            self._errors.append(err)

    def outputs(self) -> List[OutputRecord]:
        with self._outputs_lock:
            return list(self._outputs)

    def errors(self) -> List[BaseException]:
        with self._errors_lock:
            return list(self._errors)


__all__ = ["ResultStore"]
