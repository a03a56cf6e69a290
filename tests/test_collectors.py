import subprocess
import sys
from typing import Optional, Sequence

import pytest
import requests


def test_command_probe_success_stores_output_without_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe

    CommandProbe("echo.txt", "echo", ["hello"], store).run()

    assert [(r.name, r.contents) for r in store.outputs()] == [("echo.txt", b"hello\n")]
    assert store.errors() == []


def test_command_probe_nonzero_exit_keeps_output_and_records_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe
    from analyzer.core.errors import ProbeError

    script = "import sys; print('partial'); sys.stderr.write('oops\\n'); sys.exit(3)"
    CommandProbe("fail.txt", sys.executable, ["-c", script], store).run()

    outputs = store.outputs()
    assert len(outputs) == 1
    assert outputs[0].name == "fail.txt"
    assert b"partial" in outputs[0].contents
    assert b"oops" in outputs[0].contents  # stderr is captured alongside stdout

    errors = store.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], ProbeError)
    assert errors[0].operation == "exit-status"
    assert "error getting data for fail.txt" in str(errors[0])
    assert isinstance(errors[0].__cause__, subprocess.CalledProcessError)


def test_command_probe_missing_program_stores_empty_output_and_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe

    CommandProbe("missing.txt", "definitely-not-a-real-binary-xyz", [], store).run()

    assert [(r.name, r.contents) for r in store.outputs()] == [("missing.txt", b"")]
    errors = store.errors()
    assert len(errors) == 1
    assert errors[0].operation == "start"
    assert isinstance(errors[0].__cause__, OSError)


def test_command_probe_timeout_keeps_partial_output(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe

    class _SlowProvider:
        def run(self, program: str, args: Sequence[str], timeout: Optional[float] = None) -> bytes:
            raise subprocess.TimeoutExpired([program, *args], timeout or 0, output=b"PING 1\n")

    CommandProbe("ping.txt", "ping", ["host"], store, timeout=1, provider=_SlowProvider()).run()

    assert [(r.name, r.contents) for r in store.outputs()] == [("ping.txt", b"PING 1\n")]
    errors = store.errors()
    assert len(errors) == 1
    assert errors[0].operation == "timeout"


def test_fetch_probe_invalid_url_stores_only_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import FetchProbe

    FetchProbe("ip-address.txt", "not a url", store).run()

    assert store.outputs() == []
    errors = store.errors()
    assert len(errors) == 1
    assert errors[0].operation == "get"
    assert "error getting ip-address.txt" in str(errors[0])


def test_fetch_probe_connection_error_stores_only_error(store, monkeypatch: pytest.MonkeyPatch) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import FetchProbe

    def _refuse(*_args, **_kwargs):  # type: ignore[no-untyped-def]
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr("analyzer.providers.http_provider.requests.get", _refuse)
    FetchProbe("ip-address.txt", "http://127.0.0.1:9/", store).run()

    assert store.outputs() == []
    assert len(store.errors()) == 1
    assert isinstance(store.errors()[0].__cause__, requests.exceptions.ConnectionError)


def test_fetch_probe_success_stores_body(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import FetchProbe

    class _Provider:
        def get(self, url, timeout=None):  # type: ignore[no-untyped-def]
            return object()

        def read_body(self, response) -> bytes:  # type: ignore[no-untyped-def]
            return b"203.0.113.7\n"

    FetchProbe("ip-address.txt", "http://example.invalid/ip", store, provider=_Provider()).run()

    assert [(r.name, r.contents) for r in store.outputs()] == [("ip-address.txt", b"203.0.113.7\n")]
    assert store.errors() == []


def test_fetch_probe_body_read_error_stores_only_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import FetchProbe

    class _Provider:
        def get(self, url, timeout=None):  # type: ignore[no-untyped-def]
            return object()

        def read_body(self, response) -> bytes:  # type: ignore[no-untyped-def]
            raise requests.exceptions.ChunkedEncodingError("connection reset mid-body")

    FetchProbe("ip-address.txt", "http://example.invalid/ip", store, provider=_Provider()).run()

    assert store.outputs() == []
    errors = store.errors()
    assert len(errors) == 1
    assert errors[0].operation == "read-body"
    assert "error reading ip-address.txt body" in str(errors[0])


def test_read_probe_existing_file(store, tmp_path) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import ReadProbe

    p = tmp_path / "resolv.conf"
    p.write_bytes(b"nameserver 1.1.1.1\n")
    ReadProbe("resolv.conf", str(p), store).run()

    assert [(r.name, r.contents) for r in store.outputs()] == [("resolv.conf", b"nameserver 1.1.1.1\n")]
    assert store.errors() == []


def test_read_probe_missing_file_stores_only_error(store, tmp_path) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import ReadProbe

    missing = tmp_path / "nope.conf"
    ReadProbe("nope.conf", str(missing), store).run()

    assert store.outputs() == []
    errors = store.errors()
    assert len(errors) == 1
    assert isinstance(errors[0].__cause__, FileNotFoundError)
    assert str(missing) in str(errors[0])


def test_build_probes_preserves_plan_order_and_binds_store(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe, FetchProbe, ReadProbe, build_probes
    from analyzer.core.models import ProbePlan

    plan = ProbePlan.model_validate(
        {
            "probes": [
                {"kind": "read", "name": "r", "path": "/x"},
                {"kind": "command", "name": "c", "program": "true"},
                {"kind": "fetch", "name": "f", "url": "http://x/"},
            ]
        }
    )
    probes = build_probes(plan, store, timeout=5)

    assert [type(p) for p in probes] == [ReadProbe, CommandProbe, FetchProbe]
    assert all(p.store is store for p in probes)
    assert probes[1].timeout == 5
    assert probes[2].timeout == 5


def test_command_probe_rejected_argv_stores_empty_output_and_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import CommandProbe
    from analyzer.pipeline.scheduler import run_probes

    run_probes([CommandProbe("nul.txt", "ec\x00ho", ["hi"], store)])

    assert [(r.name, r.contents) for r in store.outputs()] == [("nul.txt", b"")]
    errors = store.errors()
    assert len(errors) == 1
    assert errors[0].operation == "start"
    assert "error getting data for nul.txt" in str(errors[0])
    assert isinstance(errors[0].__cause__, ValueError)


def test_fetch_probe_refused_address_stores_only_error(store) -> None:  # type: ignore[no-untyped-def]
    from analyzer.collectors import FetchProbe
    from analyzer.core.errors import ProbeError

    # Nothing listens on port 1 locally; the connection is refused without leaving the host.
    FetchProbe("ip-address.txt", "http://127.0.0.1:1/", store, timeout=2).run()

    assert store.outputs() == []
    errors = store.errors()
    assert len(errors) == 1
    assert isinstance(errors[0], ProbeError)
    assert errors[0].operation in ("get", "timeout")
    assert isinstance(errors[0].__cause__, requests.exceptions.RequestException)
