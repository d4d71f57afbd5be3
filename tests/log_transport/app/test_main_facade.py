"""Facade function tests for main module."""
import json
import logging

from log_transport import format_record, run, transport
from log_transport.app.config import FormatterConfig, TransportConfig


def _config():
    return TransportConfig(formatter=FormatterConfig(color=False, timezone="UTC", target_padding=0))


RECORD = {"time": 1700000000000, "level": 50, "hostname": "h1", "name": "svc", "msg": "failed"}


class Upper:
    def transform(self, record):
        return record.msg.upper() + "\n"


def test_run_writes_formatted_lines(tmp_path):
    """Test that run formats every line and reports counters."""
    out = tmp_path / "out.log"
    lines = [json.dumps(RECORD).encode(), b"raw line\n", json.dumps({"msg": "partial"}).encode()]

    stats = run(lines, dest=out, config=_config())

    assert stats.formatted == 2
    assert stats.passthrough == 1
    assert stats.degraded == 1
    written = out.read_text(encoding="utf-8").splitlines()
    assert written[0].startswith("[14 Nov 2023, 22:13:20 UTC] ERROR [svc | ")
    assert written[1] == "raw line"
    assert "[root | " in written[2]


def test_run_json_mode(tmp_path):
    out = tmp_path / "out.jsonl"

    run([json.dumps(RECORD)], json=True, dest=str(out), config=_config())

    assert json.loads(out.read_text(encoding="utf-8"))["log.level"] == "error"


def test_explicit_formatter_wins_over_json(tmp_path):
    out = tmp_path / "out.log"

    run([json.dumps(RECORD)], transport=Upper(), json=True, dest=out, config=_config())

    assert out.read_text(encoding="utf-8") == "FAILED\n"


def test_transport_returns_ready_pipeline(tmp_path):
    out = tmp_path / "out.log"

    with transport(transport=Upper(), dest=out, config=_config()) as pipeline:
        pipeline.feed(json.dumps(RECORD))
        pipeline.feed({"time": 1, "level": 30, "hostname": "h", "msg": "mapped"})

    assert out.read_text(encoding="utf-8") == "FAILED\nMAPPED\n"


def test_format_record_default():
    line = format_record(RECORD, config=_config())

    assert line.startswith("[14 Nov 2023, 22:13:20 UTC] ERROR [svc | ")
    assert line.endswith("failed\n")


def test_format_record_json():
    payload = json.loads(format_record(RECORD, json=True, config=_config()))

    assert payload["message"] == "failed"
    assert payload["log.name"] == "svc"


def test_transport_close_shuts_down_resources(tmp_path):
    out = tmp_path / "out.log"
    pipeline = transport(transport=Upper(), dest=out, config=_config())
    pipeline.feed(json.dumps(RECORD))

    pipeline.close()

    assert out.read_text(encoding="utf-8") == "FAILED\n"
    assert logging.getLogger("log_transport").handlers == []
