"""Probe interface shared by every collector."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from analyzer.core.store import ResultStore


@runtime_checkable
class Probe(Protocol):
    """A no-argument unit of work that reports into the result store it was built with."""

    name: str
    store: ResultStore

    def run(self) -> None: ...


__all__ = ["Probe"]
