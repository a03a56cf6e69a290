"""Collection pipeline: open archive → run probes → compile errors → write archive → close.

Probe failures are data (they end up in `errors.txt`). Only archive I/O failures are treated as
fatal to the run; they are logged and reported on the returned `CollectionResult`.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from analyzer.collectors import Probe, build_probes
from analyzer.core.errors import ArchiveError
from analyzer.core.models import CollectionResult, ProbePlan
from analyzer.core.store import ResultStore
from analyzer.pipeline.error_report import compile_errors
from analyzer.pipeline.scheduler import run_probes
from analyzer.providers.http_provider import DEFAULT_USER_AGENT
from analyzer.storage.zip_archive import ZipArchive

logger = logging.getLogger(__name__)


def collect(probes: Sequence[Probe], store: ResultStore, output_path: str) -> CollectionResult:
    """Run prebuilt probes (all bound to `store`) and bundle their outputs into `output_path`."""
    started = time.monotonic()
    result = CollectionResult(output_path=output_path, probe_count=len(probes))

    # Open first: without a writable archive the probes' output has nowhere to go.
    try:
        archive = ZipArchive.open(output_path)
    except ArchiveError as e:
        logger.error("%s", e)
        result.archive_error = str(e)
        return result

    run_probes(probes)

    errors = store.errors()
    result.error_count = len(errors)
    if errors:
        logger.warning("%d of %d probes reported errors (see errors.txt)", len(errors), len(probes))
    try:
        compile_errors(store)
    except Exception as e:
        # The probe outputs are still worth archiving without the report.
        logger.error("error compiling errors.txt: %s", e)
        result.report_error = str(e)

    try:
        archive.write_records(store.outputs())
    except ArchiveError as e:
        logger.error("%s", e)
        result.archive_error = str(e)

    try:
        archive.close()
    except ArchiveError as e:
        logger.error("%s", e)
        result.archive_error = result.archive_error or str(e)

    result.entries = list(archive.entries)
    result.elapsed_seconds = round(time.monotonic() - started, 3)
    if result.ok:
        logger.info("wrote %d entries to %s", len(result.entries), output_path)
    return result


def run_collection(
    plan: ProbePlan,
    output_path: str,
    *,
    timeout: Optional[float] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> CollectionResult:
    """Build probes from `plan` against a fresh store and run the whole pipeline."""
    store = ResultStore()
    probes = build_probes(plan, store, timeout=timeout, user_agent=user_agent)
    return collect(probes, store, output_path)


__all__ = ["collect", "run_collection"]
