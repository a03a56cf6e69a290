"""External command runner (combined stdout+stderr capture)."""

from __future__ import annotations

import subprocess
from typing import List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class CommandProvider(Protocol):
    def run(self, program: str, args: Sequence[str], timeout: Optional[float] = None) -> bytes: ...


class DefaultCommandProvider:
    def run(self, program: str, args: Sequence[str], timeout: Optional[float] = None) -> bytes:
        return run_combined_output(program, args, timeout=timeout)


def get_command_provider() -> CommandProvider:
    """Seam for swapping the process runner (tests, remote execution)."""
    return DefaultCommandProvider()


def run_combined_output(program: str, args: Sequence[str], timeout: Optional[float] = None) -> bytes:
    """
    Run `program args...` and return stdout and stderr interleaved as one byte string.

    Raises:
        subprocess.CalledProcessError: non-zero exit; `.output` holds everything captured.
        subprocess.TimeoutExpired: the timeout elapsed; `.output` holds what was captured before the kill.
        OSError: the program could not be started (missing binary, permissions).
    """
    cmd: List[str] = [program, *args]
    proc = subprocess.run(  # nosec B603 - argv list, no shell
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        timeout=timeout,
        check=False,
    )
    if proc.returncode != 0:
        raise subprocess.CalledProcessError(proc.returncode, cmd, output=proc.stdout)
    return proc.stdout or b""


__all__ = ["CommandProvider", "DefaultCommandProvider", "get_command_provider", "run_combined_output"]
