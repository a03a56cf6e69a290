"""Error types shared across probes, the archiver and configuration.

Probe failures are values, not control flow: collectors build a `ProbeError` and hand it to the
result store instead of raising. The original exception is kept as `__cause__` so the error report
can render the whole chain (the same thing `raise ... from` would record).
"""

from __future__ import annotations

from typing import Optional


class AnalyzerError(Exception):
    """Base class for errors raised or recorded by the analyzer."""

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        cause = self.__cause__
        if cause is None:
            return self.message
        return f"{self.message}: {cause}"


class ProbeError(AnalyzerError):
    """A single probe failed. Recorded in the result store, never raised to the scheduler."""

    def __init__(self, message: str, *, probe: str, operation: Optional[str] = None) -> None:
        super().__init__(message, operation=operation)
        self.probe = probe


class ArchiveError(AnalyzerError):
    """The archive could not be opened, written or finalized."""


class ConfigError(AnalyzerError):
    """Invalid probe plan or settings."""


def wrap_error(cause: BaseException, error: AnalyzerError) -> AnalyzerError:
    """Attach `cause` to `error` and return it (the value form of `raise error from cause`)."""
    error.__cause__ = cause
    return error


__all__ = ["AnalyzerError", "ProbeError", "ArchiveError", "ConfigError", "wrap_error"]
