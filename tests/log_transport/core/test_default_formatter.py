import os

import pytest

from log_transport.core.domain.levels import TimestampRenderer
from log_transport.core.formatters import DefaultFormatter


@pytest.fixture
def formatter():
    return DefaultFormatter(colors=False, username="tester", timestamps=TimestampRenderer("UTC"))


def _record(**extra):
    record = {"time": 1700000000000, "level": 30, "hostname": "h1", "pid": 42, "name": "svc"}
    record.update(extra)
    return record


def test_basic_line(formatter):
    line = formatter.transform(_record(msg="started"))

    assert line.startswith("[14 Nov 2023, 22:13:20 UTC] INFO  [svc")
    assert "| tester@h1 (42)]" in line
    assert line.rstrip(os.linesep).endswith(" started")
    assert "=" not in line
    assert line.endswith(os.linesep)
    assert not line.endswith(os.linesep * 2)
    assert line.count(os.linesep) == 1


def test_target_is_padded(formatter):
    line = formatter.transform(_record(msg="x"))

    assert "[" + "svc".ljust(30) + " | tester@h1" in line


def test_target_padding_is_configurable():
    formatter = DefaultFormatter(colors=False, username="u", timestamps=TimestampRenderer("UTC"), target_padding=0)

    assert "[svc | u@h1 (42)]" in formatter.transform(_record())


def test_missing_name_renders_root(formatter):
    record = _record()
    del record["name"]

    assert "[root" in formatter.transform(record)


def test_attributes_render_in_insertion_order(formatter):
    line = formatter.transform(_record(userId=7, path="/a b", tags=["x", 1], msg="done"))

    assert "userId=7 path=/a b tags=[\"x\",1] done" in line


def test_no_escape_codes_without_colors(formatter):
    line = formatter.transform(_record(msg="x", err={"name": "E", "message": "m"}))

    assert "\x1b" not in line


def test_escape_codes_with_colors():
    formatter = DefaultFormatter(colors=True, username="tester", timestamps=TimestampRenderer("UTC"))

    assert "\x1b[" in formatter.transform(_record(msg="x"))


def test_error_without_stack_adds_one_line(formatter):
    output = formatter.transform(_record(level=50, msg="failed", err={"name": "TypeError", "message": "boom"}))
    lines = output.split(os.linesep)

    assert lines[-1] == ""
    assert len(lines) == 3
    assert lines[0].endswith("failed")
    assert "ERROR" in lines[0]
    assert lines[1] == "TypeError: boom"


def test_error_frames_collapse_repeated_files(formatter):
    frames = [
        {"file": "/app/a.js", "line": 1, "col": 2},
        {"file": "/app/b.js", "line": 3, "col": 4},
        {"file": "/app/a.js", "line": 5, "col": 6},
        {"file": "/app/c.js", "line": 7, "col": 8, "native": True},
        {"file": "/app/a.js", "line": 9, "col": 10},
    ]
    output = formatter.transform(_record(level=50, err={"name": "E", "message": "m", "stack": frames}))
    lines = output.rstrip(os.linesep).split(os.linesep)

    assert lines[2:] == [
        "   • in a.js:1:2",
        "   • in b.js:3:4",
        "       ~ /app/a.js:5:6",
        "   • in c.js:7:8 (native method)",
        "       ~ /app/a.js:9:10",
    ]
    assert output.count("in a.js") == 1


def test_request_and_response_summary(formatter):
    line = formatter.transform(_record(
        msg="request completed",
        res={
            "status": 200,
            "status_message": "OK",
            "request": {"method": "get", "url": "/users", "id": "r-1"},
        },
        responseTime=12.345,
    ))

    assert line.rstrip(os.linesep).endswith("request completed GET /users [r-1] -> 200 OK (12.35ms)")


def test_request_only(formatter):
    line = formatter.transform(_record(req={"method": "post", "url": "/items", "id": 9}))

    assert line.rstrip(os.linesep).endswith("POST /items [9]")
    assert "->" not in line


def test_explicit_req_id_wins(formatter):
    line = formatter.transform(_record(reqId="outer", req={"method": "get", "url": "/", "id": "inner"}))

    assert "[outer]" in line
    assert "inner" not in line
    assert "reqId=" not in line


def test_response_time_rounds_half_up(formatter):
    line = formatter.transform(_record(res={"status": 204, "status_message": "No Content"}, responseTime=0.005))

    assert line.rstrip(os.linesep).endswith("-> 204 No Content (0.01ms)")


def test_unknown_level_shows_number(formatter):
    line = formatter.transform(_record(level=35, msg="odd"))

    assert "] 35    [svc" in line


def test_missing_level_shows_placeholder(formatter):
    record = _record(msg="odd")
    del record["level"]

    assert "] ?     [svc" in formatter.transform(record)


def test_custom_level_palette():
    formatter = DefaultFormatter(
        colors=False,
        username="u",
        timestamps=TimestampRenderer("UTC"),
        levels={30: "info!"},
    )

    assert "] info! [" in formatter.transform(_record())


def test_missing_pid_is_omitted(formatter):
    record = _record()
    del record["pid"]

    assert "| tester@h1]" in formatter.transform(record)


def test_output_is_deterministic(formatter):
    record = _record(msg="same", extra={"a": 1})

    assert formatter.transform(record) == formatter.transform(record)


def test_response_without_request_uses_record_request(formatter):
    line = formatter.transform(_record(
        req={"method": "delete", "url": "/x"},
        res={"status": 500, "status_message": "Internal Server Error"},
    ))

    assert line.rstrip(os.linesep).endswith("DELETE /x -> 500 Internal Server Error")
