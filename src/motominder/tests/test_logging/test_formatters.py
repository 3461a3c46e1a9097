import json
import sys
import logging

from motominder.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO):
    return logging.LogRecord("motominder.repositories", level, __file__, 10, "repo.insert.%s", ("success",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.request_id = "req-1"
    rec.model = "Motorcycle"
    rec.duration_ms = 3
    fmt = JsonFormatter(env="testing", service="svc")

    data = json.loads(fmt.format(rec))

    assert data["message"] == "repo.insert.success"
    assert data["level"] == "INFO"
    assert data["logger"] == "motominder.repositories"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert "timestamp" in data
    assert "version" in data
    # extras passed by the call site
    assert data["model"] == "Motorcycle"
    assert data["duration_ms"] == 3


def test_json_formatter_leaves_out_record_internals():
    data = json.loads(JsonFormatter().format(make_record()))

    assert data["request_id"] == "-"
    for internal in ("args", "msg", "levelno", "thread", "processName"):
        assert internal not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __str__(self):
            return "<X>"

    rec.obj = X()

    data = json.loads(JsonFormatter(env="dev").format(rec))

    assert data["obj"] == "<X>"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad vin")
    except ValueError:
        rec = logging.LogRecord("motominder", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))

    assert "ValueError: bad vin" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record(logging.WARNING)
    rec.request_id = "req-9"

    line = ColorFormatter().format(rec)

    parts = [p.strip() for p in line.split(" | ")]
    assert ColorFormatter.COLOR_CODES["WARNING"] in line
    assert parts[2] == "motominder.repositories"
    assert parts[3] == "req-9"
    assert parts[4] == "repo.insert.success"
