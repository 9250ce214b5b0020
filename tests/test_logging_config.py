import io
import json

import structlog

from logging_config import configure_logging


def _emit(event, **kw):
    structlog.get_logger("cc_standup.test").warning(event, **kw)


def test_auto_format_is_json_when_not_a_terminal():
    stream = io.StringIO()
    configure_logging("INFO", log_format="auto", stream=stream)

    _emit("report.built", projects=2)

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["event"] == "report.built"
    assert record["projects"] == 2
    assert record["level"] == "warning"


def test_console_format_is_not_json():
    stream = io.StringIO()
    configure_logging("INFO", log_format="console", stream=stream)

    _emit("report.unreadable_log", reason="Is a directory")

    line = stream.getvalue().splitlines()[-1]
    assert not line.startswith("{")
    assert "report.unreadable_log" in line
    assert "reason" in line


def test_log_file_is_always_json(tmp_path):
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "cc_standup.log"
    configure_logging("INFO", log_file=str(log_file), log_format="console", stream=stream)

    _emit("proof_log.missing", path="/tmp/x.md")

    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert record["event"] == "proof_log.missing"
    assert "proof_log.missing" in stream.getvalue()


def test_level_filters_stream():
    stream = io.StringIO()
    configure_logging("ERROR", log_format="json", stream=stream)

    _emit("query.unknown_format")

    assert stream.getvalue() == ""
