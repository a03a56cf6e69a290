#!/usr/bin/env python3
"""
Network Analyzer - Diagnostic Bundle Collector
Runs a battery of network/system probes concurrently and bundles their raw output into one zip
archive (plus errors.txt for anything that failed) for offline triage.
"""

import argparse
import logging
import sys
from typing import List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)

logger = logging.getLogger("network-analyzer")

EXIT_OK = 0
EXIT_ARCHIVE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collect network diagnostics into a single zip archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default battery against geoip.maxmind.com
  python main.py

  # Target another host, bound every probe to 60s
  python main.py --host example.com --timeout 60

  # Run a custom probe plan
  python main.py --config probes.yaml --output bundle.zip

  # Print the resolved plan (edit it and pass back with --config)
  python main.py --print-config > probes.yaml
        """,
    )
    parser.add_argument("--output", "-o", help="Archive path (default: $ANALYZER_OUTPUT or mm-network-analysis.zip)")
    parser.add_argument("--config", "-c", help="YAML probe plan replacing the default battery ($ANALYZER_CONFIG)")
    parser.add_argument("--host", help="Target host for the default battery ($ANALYZER_HOST)")
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Per-probe timeout in seconds ($ANALYZER_PROBE_TIMEOUT_SECONDS; default: no timeout)",
    )
    parser.add_argument("--print-config", action="store_true", help="Print the resolved probe plan as YAML and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    from analyzer.config import default_plan, load_plan, load_settings, plan_to_yaml
    from analyzer.core.errors import ConfigError
    from analyzer.pipeline.pipeline import run_collection

    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = load_settings()
    host = args.host or settings.host
    output = args.output or settings.output
    timeout = args.timeout if args.timeout is not None else settings.probe_timeout
    if timeout is not None and timeout <= 0:
        timeout = None
    config_path = args.config or settings.config_path

    try:
        plan = load_plan(config_path) if config_path else default_plan(host)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.print_config:
        print(plan_to_yaml(plan), end="")
        return EXIT_OK

    result = run_collection(plan, output, timeout=timeout)
    if not result.ok:
        # Probe failures never change the exit status; a missing/corrupt archive does.
        logger.error("archive %s was not written cleanly: %s", output, result.archive_error)
        return EXIT_ARCHIVE_FAILED

    print(f"Wrote {output} ({len(result.entries)} entries, {result.error_count} probe errors)")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
