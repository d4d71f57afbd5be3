import pytest

from log_transport.core.domain.exceptions import InvalidRecordError
from log_transport.core.domain.models import (
    LogRecord,
    SerializedError,
    SerializedRequest,
    SerializedResponse,
    StackFrame,
    as_record,
)


def test_from_mapping_well_formed():
    record = LogRecord.from_mapping({
        "time": 1700000000000,
        "level": 30,
        "hostname": "h1",
        "pid": 42,
        "name": "svc",
        "msg": "started",
        "extra": True,
    })

    assert record.time == 1700000000000
    assert record.level == 30
    assert record.hostname == "h1"
    assert record.pid == 42
    assert record.target == "svc"
    assert record.msg == "started"
    assert record.issues == ()
    assert not record.degraded
    assert list(record.fields) == ["time", "level", "hostname", "pid", "name", "msg", "extra"]


def test_from_mapping_defaults_name_to_root():
    record = LogRecord.from_mapping({"time": 1, "level": 30, "hostname": "h"})

    assert record.name is None
    assert record.target == "root"


def test_from_mapping_missing_required_fields_degrade():
    record = LogRecord.from_mapping({"msg": "hello"})

    assert set(record.issues) == {"time", "level", "hostname"}
    assert record.degraded
    assert record.hostname == ""
    assert record.level is None
    assert record.time > 0


def test_from_mapping_unknown_level_is_kept():
    record = LogRecord.from_mapping({"time": 1, "level": 35, "hostname": "h"})

    assert record.level == 35
    assert record.issues == ("level",)


def test_from_mapping_accepts_level_labels():
    record = LogRecord.from_mapping({"time": 1, "level": "WARN", "hostname": "h"})

    assert record.level == 40
    assert record.issues == ()


def test_from_mapping_rejects_non_objects():
    with pytest.raises(InvalidRecordError):
        LogRecord.from_mapping([1, 2, 3])


def test_fields_are_read_only():
    record = LogRecord.from_mapping({"time": 1, "level": 30, "hostname": "h"})

    with pytest.raises(TypeError):
        record.fields["x"] = 1  # type: ignore[index]


def test_err_takes_precedence_over_error():
    record = LogRecord.from_mapping({
        "time": 1,
        "level": 50,
        "hostname": "h",
        "error": {"name": "ValueError", "message": "second"},
        "err": {"name": "TypeError", "message": "first"},
    })

    assert record.error == SerializedError(name="TypeError", message="first")


def test_request_and_response_aliases():
    record = LogRecord.from_mapping({
        "time": 1,
        "level": 30,
        "hostname": "h",
        "request": {"method": "get", "url": "/a", "id": 7},
        "response": {"status": 404, "status_message": "Not Found", "request": {"method": "post", "url": "/b"}},
    })

    assert record.request == SerializedRequest(method="get", url="/a", id="7")
    assert record.response is not None
    assert record.response.status == 404
    assert record.response.request == SerializedRequest(method="post", url="/b")


def test_serialized_error_from_dict_is_tolerant():
    error = SerializedError.from_dict({"stack": [{"file": "a.py"}, "junk"]})

    assert error.name == "Error"
    assert error.message == ""
    assert error.stack == (StackFrame(file="a.py"),)


def test_stack_frame_defaults():
    frame = StackFrame.from_dict({})

    assert frame.function == "<anonymous>"
    assert frame.method == "<unknown>"
    assert frame.this_context == "Object"
    assert frame.line == -1
    assert frame.col == -1
    assert not frame.native


def test_serialized_error_to_dict_omits_missing_stack():
    assert "stack" not in SerializedError(name="E", message="m").to_dict()
    assert SerializedError(name="E", message="m", stack=()).to_dict()["stack"] == []


def test_serialized_error_original_is_hidden():
    boom = RuntimeError("boom")
    error = SerializedError(name="RuntimeError", message="boom", original=boom)

    assert error.original is boom
    assert "original" not in error.to_dict()
    assert "original" not in repr(error)
    assert error == SerializedError(name="RuntimeError", message="boom")


def test_serialized_response_to_dict_nests_request():
    response = SerializedResponse(
        status=200,
        status_message="OK",
        headers={"content-type": "text/plain"},
        request=SerializedRequest(method="GET", url="/"),
    )

    assert response.to_dict() == {
        "status": 200,
        "status_message": "OK",
        "headers": {"content-type": "text/plain"},
        "request": {"method": "GET", "url": "/", "headers": {}},
    }


def test_as_record_passes_records_through():
    record = LogRecord.from_mapping({"time": 1, "level": 30, "hostname": "h"})

    assert as_record(record) is record
    assert as_record({"time": 1, "level": 30, "hostname": "h"}).hostname == "h"


def test_from_mapping_out_of_range_time_degrades():
    for raw in (1e300, float("nan"), float("inf"), 10**400):
        record = LogRecord.from_mapping({"time": raw, "level": 30, "hostname": "h"})

        assert record.issues == ("time",)
        assert record.time > 0
