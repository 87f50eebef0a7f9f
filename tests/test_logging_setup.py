from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from zplgen.services.log_service import log_audit, log_error
from zplgen.services.logging_setup import LOGGER_NAMES, JsonFormatter, setup_logging


def _flush(name: str) -> None:
    for h in logging.getLogger(name).handlers:
        h.flush()


class TestSetupLogging:
    def test_creates_files_per_logger(self, tmp_path: Path) -> None:
        loggers = setup_logging(tmp_path, console=False)
        assert set(loggers) == {"service", "audit", "error"}
        for name in ("service", "audit", "error"):
            assert (tmp_path / f"{name}.log").exists()

    def test_idempotent(self, tmp_path: Path) -> None:
        setup_logging(tmp_path, console=False)
        setup_logging(tmp_path, console=False)
        for name in LOGGER_NAMES:
            assert len(logging.getLogger(name).handlers) == 1

    def test_console_mirror(self, tmp_path: Path) -> None:
        setup_logging(tmp_path, console=True)
        for name in LOGGER_NAMES:
            assert len(logging.getLogger(name).handlers) == 2
        setup_logging(tmp_path, console=False)

    def test_error_logger_level(self, tmp_path: Path) -> None:
        loggers = setup_logging(tmp_path, console=False)
        assert loggers["error"].level == logging.WARNING
        assert not loggers["error"].propagate

    def test_audit_line_is_json_with_extras(self, tmp_path: Path) -> None:
        setup_logging(tmp_path, console=False)
        log_audit("render", operations=3, length=42)
        _flush("zplgen.audit")
        line = (tmp_path / "audit.log").read_text(encoding="utf-8").strip().splitlines()[-1]
        data = json.loads(line)
        assert data["message"] == "render"
        assert data["operations"] == 3
        assert data["length"] == 42
        assert data["app"] == "ZplGenerator"

    def test_error_helper(self, tmp_path: Path) -> None:
        setup_logging(tmp_path, console=False)
        log_error("Script inválido", erro="x")
        _flush("zplgen.error")
        data = json.loads((tmp_path / "error.log").read_text(encoding="utf-8").splitlines()[-1])
        assert data["level"] == "ERROR"
        assert data["message"] == "Script inválido"
        assert data["erro"] == "x"


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.getLogger("t").makeRecord(
            "t", logging.ERROR, __file__, 1, "falhou", None, sys.exc_info(),
        )
    data = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in data["exception"]
    assert data["message"] == "falhou"


class TestJsonFormatterFields:
    def _record(self, **kwargs) -> logging.LogRecord:
        return logging.getLogger("t").makeRecord(
            "t", logging.INFO, __file__, 42, "olá %s", ("mundo",), None, func="render", **kwargs,
        )

    def test_location_and_process_context(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))
        assert data["message"] == "olá mundo"
        assert data["where"].endswith(":render:42")
        assert data["pid"] > 0
        assert "args" not in data and "msg" not in data

    def test_extras_do_not_override_core_fields(self) -> None:
        data = json.loads(JsonFormatter().format(self._record(extra={"level": "x", "template": "a"})))
        assert data["level"] == "INFO"
        assert data["template"] == "a"

    def test_stack_info(self) -> None:
        data = json.loads(JsonFormatter().format(self._record(sinfo="Stack (most recent call last):\n  x")))
        assert data["stack"].startswith("Stack")


def test_backup_days_configurable(tmp_path: Path) -> None:
    loggers = setup_logging(tmp_path, console=False, backup_days=3)
    handler = loggers["service"].handlers[0]
    assert handler.backupCount == 3
