import io
import json

from patients_service.logger import new_logger


def test_local_logs_debug_as_text():
    out = io.StringIO()
    log = new_logger("local", out)
    log.debug("hello")
    line = out.getvalue().strip()
    assert "level=DEBUG" in line
    assert "msg=hello" in line


def test_prod_logs_json_and_skips_debug():
    out = io.StringIO()
    log = new_logger("prod", out)
    log.debug("hidden")
    log.info("shown")
    lines = out.getvalue().strip().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["msg"] == "shown"
    assert record["level"] == "INFO"


def test_unknown_env_gives_none():
    assert new_logger("staging", io.StringIO()) is None


def test_repeated_creation_does_not_duplicate():
    first = io.StringIO()
    new_logger("local", first)
    second = io.StringIO()
    new_logger("local", second).info("once")
    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1