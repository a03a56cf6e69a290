"""Fan-out/fan-in probe scheduler.

Every probe gets its own worker thread (the pool is sized to the probe list, so nothing queues) and
the call returns only after all of them have finished. There is no ordering between probes and no
fail-fast: a failing probe never cancels its siblings.

There is no batch timeout. A probe that never returns blocks `run_probes` forever; bound the
external calls with the per-probe timeout instead.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Sequence

from analyzer.collectors.base import Probe
from analyzer.core.errors import ProbeError, wrap_error

logger = logging.getLogger(__name__)


def _run_one(probe: Probe) -> None:
    started = time.monotonic()
    try:
        probe.run()
    except Exception as e:
        # Expected failures are stored by the probe itself; anything escaping is a bug in the probe.
        logger.exception("probe %s raised unexpectedly", probe.name)
        err = ProbeError(f"probe {probe.name} crashed", probe=probe.name, operation="run")
        probe.store.append_error(wrap_error(e, err))
    finally:
        logger.debug("probe %s finished in %.2fs", probe.name, time.monotonic() - started)


def run_probes(probes: Sequence[Probe]) -> None:
    """Run every probe exactly once, concurrently, and block until all have returned."""
    if not probes:
        return

    started = time.monotonic()
    logger.info("running %d probes", len(probes))
    with ThreadPoolExecutor(max_workers=len(probes), thread_name_prefix="probe") as executor:
        futures = [executor.submit(_run_one, probe) for probe in probes]
        wait(futures)
    logger.info("all %d probes finished in %.2fs", len(probes), time.monotonic() - started)


__all__ = ["run_probes"]
