"""
Runtime settings and probe plans.

Env:
- ANALYZER_HOST: host the default battery targets (default: geoip.maxmind.com)
- ANALYZER_OUTPUT: archive path (default: mm-network-analysis.zip)
- ANALYZER_PROBE_TIMEOUT_SECONDS: per-probe timeout, 1-3600 (default: unset, no timeout)
- ANALYZER_CONFIG: YAML probe plan that replaces the default battery
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from analyzer.core.errors import ConfigError
from analyzer.core.models import CommandProbeSpec, FetchProbeSpec, ProbePlan, ProbeSpec, ReadProbeSpec

DEFAULT_HOST = "geoip.maxmind.com"
DEFAULT_OUTPUT = "mm-network-analysis.zip"
RESOLV_CONF = "/etc/resolv.conf"


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    output: str = DEFAULT_OUTPUT
    probe_timeout: Optional[float] = None
    config_path: Optional[str] = None


def _env_str(name: str) -> Optional[str]:
    return (os.getenv(name) or "").strip() or None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        return None
    if timeout <= 0:
        return None
    return max(1.0, min(timeout, 3600.0))


def load_settings() -> Settings:
    return Settings(
        host=_env_str("ANALYZER_HOST") or DEFAULT_HOST,
        output=_env_str("ANALYZER_OUTPUT") or DEFAULT_OUTPUT,
        probe_timeout=_parse_timeout(_env_str("ANALYZER_PROBE_TIMEOUT_SECONDS")),
        config_path=_env_str("ANALYZER_CONFIG"),
    )


def default_plan(host: str = DEFAULT_HOST, user_agent: str = "network-analyzer") -> ProbePlan:
    """
    The stock battery for diagnosing routing/DNS problems towards `host`.

    Requires curl, dig, ip, mtr, ping and tracepath on PATH; missing tools show up in errors.txt.
    """

    def cmd(name: str, program: str, *args: str) -> CommandProbeSpec:
        return CommandProbeSpec(name=name, program=program, args=list(args))

    probes: List[ProbeSpec] = [
        cmd(f"{host}-curl-ipv4.txt", "curl", "-4", "--trace-time", "--trace-ascii", "-", "--user-agent", user_agent, host),
        cmd(f"{host}-curl-ipv6.txt", "curl", "-6", "--trace-time", "--trace-ascii", "-", "--user-agent", user_agent, host),
        cmd(f"{host}-dig.txt", "dig", "-4", "+all", host, "A", host, "AAAA"),
        cmd(f"{host}-dig-google.txt", "dig", "-4", "+all", "@8.8.8.8", host, "A", host, "AAAA"),
        cmd(f"{host}-dig-google-trace.txt", "dig", "-4", "+all", "+trace", "@8.8.8.8", host, "A", host, "AAAA"),
        # Cloudflare runs a pool behind each NS name; +nsid identifies which box answered.
        cmd(f"{host}-dig-cloudflare-josh.txt", "dig", "-4", host, "@josh.ns.cloudflare.com", "+nsid"),
        cmd(f"{host}-dig-cloudflare-kim.txt", "dig", "-4", host, "@kim.ns.cloudflare.com", "+nsid"),
        # RFC 4892 id.server gives the answering server's region.
        cmd(f"{host}-dig-cloudflare-josh-rfc4892.txt", "dig", "-4", "CH", "TXT", "id.server", host, "@josh.ns.cloudflare.com", "+nsid"),
        cmd(f"{host}-dig-cloudflare-kim-rfc4892.txt", "dig", "-4", "CH", "TXT", "id.server", host, "@kim.ns.cloudflare.com", "+nsid"),
        cmd(f"{host}-dig-cloudflare.txt", "dig", "-4", "@1.1.1.1", "CH", "TXT", "hostname.cloudflare", "+short"),
        cmd("ip-addr.txt", "ip", "addr"),
        cmd("ip-route.txt", "ip", "route"),
        cmd(f"{host}-mtr-ipv4.json", "mtr", "-j", "-4", host),
        cmd(f"{host}-mtr-ipv6.json", "mtr", "-j", "-6", host),
        cmd(f"{host}-ping-ipv4.txt", "ping", "-4", "-c", "30", host),
        cmd(f"{host}-ping-ipv6.txt", "ping", "-6", "-c", "30", host),
        cmd(f"{host}-tracepath.txt", "tracepath", host),
        FetchProbeSpec(name="ip-address.txt", url=f"http://{host}/app/update_getipaddr"),
        ReadProbeSpec(name="resolv.conf", path=RESOLV_CONF),
    ]
    return ProbePlan(probes=probes)


def parse_plan(data: Any) -> ProbePlan:
    """Validate a decoded plan document (`{probes: [...]}` or a bare list of descriptors)."""
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"probes": data}
    if not isinstance(data, dict):
        raise ConfigError(f"probe plan must be a mapping or a list, got {type(data).__name__}")
    try:
        return ProbePlan.model_validate(data)
    except ValidationError as e:
        raise ConfigError("invalid probe plan") from e


def load_plan(path: str) -> ProbePlan:
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"error reading probe plan {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"error parsing probe plan {path}") from e
    return parse_plan(data)


def plan_to_yaml(plan: ProbePlan) -> str:
    payload: Dict[str, Any] = plan.model_dump(mode="json")
    return yaml.safe_dump(payload, sort_keys=False)


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_OUTPUT",
    "Settings",
    "load_settings",
    "default_plan",
    "parse_plan",
    "load_plan",
    "plan_to_yaml",
]
