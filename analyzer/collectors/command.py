"""Command probe: run an external program and keep whatever it printed."""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from analyzer.core.errors import ProbeError, wrap_error
from analyzer.core.store import ResultStore
from analyzer.providers.command_provider import CommandProvider, get_command_provider

logger = logging.getLogger(__name__)


class CommandProbe:
    """
    Run `program args...` and store the combined output under `name`.

    The output is stored even when the command fails: partial output from `ping` or `mtr` is
    often the most useful part of the bundle. Failures add one `ProbeError` on top.
    """

    def __init__(
        self,
        name: str,
        program: str,
        args: Sequence[str],
        store: ResultStore,
        *,
        timeout: Optional[float] = None,
        provider: Optional[CommandProvider] = None,
    ) -> None:
        self.name = name
        self.program = program
        self.args: List[str] = list(args)
        self.store = store
        self.timeout = timeout
        self.provider = provider or get_command_provider()

    def __repr__(self) -> str:
        return f"CommandProbe(name={self.name!r}, argv={[self.program, *self.args]!r})"

    def run(self) -> None:
        output = b""
        try:
            output = self.provider.run(self.program, self.args, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            output = _as_bytes(e.output)
            self._fail(e, operation="timeout")
        except subprocess.CalledProcessError as e:
            output = _as_bytes(e.output)
            self._fail(e, operation="exit-status")
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            # Missing binary, permissions, or an argv the OS refuses (e.g. embedded NUL).
            self._fail(e, operation="start")
        self.store.add_output(self.name, output)

    def _fail(self, cause: BaseException, *, operation: str) -> None:
        logger.warning("probe %s failed (%s): %s", self.name, operation, cause)
        err = ProbeError(f"error getting data for {self.name}", probe=self.name, operation=operation)
        self.store.append_error(wrap_error(cause, err))


def _as_bytes(raw: object) -> bytes:
    if raw is None:
        return b""
    if isinstance(raw, str):
        return raw.encode("utf-8", errors="replace")
    return bytes(raw)  # type: ignore[call-overload]


__all__ = ["CommandProbe"]
