"""
Probe adapters (best-effort, independent, read-only).

Each probe holds its own parameters plus a reference to the shared `ResultStore`, and:
- reports at most one output record and at most one error into the store
- never raises for expected failures (process exit, network, filesystem)
- does not touch any other probe's state
"""

from __future__ import annotations

from typing import List, Optional

from analyzer.collectors.base import Probe
from analyzer.collectors.command import CommandProbe
from analyzer.collectors.fetch import FetchProbe
from analyzer.collectors.read import ReadProbe
from analyzer.core.models import CommandProbeSpec, FetchProbeSpec, ProbePlan, ReadProbeSpec
from analyzer.core.store import ResultStore
from analyzer.providers.http_provider import DEFAULT_USER_AGENT, get_http_provider


def build_probes(
    plan: ProbePlan,
    store: ResultStore,
    *,
    timeout: Optional[float] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> List[Probe]:
    """Turn validated descriptors into runnable probes bound to `store`, preserving plan order."""
    http = get_http_provider(user_agent=user_agent)
    probes: List[Probe] = []
    for spec in plan.probes:
        if isinstance(spec, CommandProbeSpec):
            probes.append(CommandProbe(spec.name, spec.program, spec.args, store, timeout=timeout))
        elif isinstance(spec, FetchProbeSpec):
            probes.append(FetchProbe(spec.name, spec.url, store, timeout=timeout, provider=http))
        elif isinstance(spec, ReadProbeSpec):
            probes.append(ReadProbe(spec.name, spec.path, store))
        else:  # pragma: no cover - the discriminated union is closed
            raise TypeError(f"unsupported probe descriptor: {spec!r}")
    return probes


__all__ = ["Probe", "CommandProbe", "FetchProbe", "ReadProbe", "build_probes"]
