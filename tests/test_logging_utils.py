"""Tests for logging utilities."""

import json
import logging
from pathlib import Path

from vaultterm.collaborators import run_now
from vaultterm.interpreter import Interpreter
from vaultterm.logging_utils import (
    REDACTED,
    StructuredTextFormatter,
    build_run_log_path,
    log_event,
    redact_flags,
    setup_logging,
)


def _record(msg, name="vaultterm"):
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def _events(caplog):
    return [json.loads(record.getMessage()) for record in caplog.records if record.name == "vaultterm"]


def test_redact_flags_masks_password_only():
    flags = {"name": "Gmail", "password": "hunter2"}

    assert redact_flags(flags) == {"name": "Gmail", "password": REDACTED}
    assert flags["password"] == "hunter2"


def test_structured_formatter_orders_known_event_keys():
    formatter = StructuredTextFormatter()
    message = json.dumps(
        {"ts": "t", "event": "command_exec", "verb": "vault", "elapsed_ms": 1.5, "sub_verb": "list"}
    )

    lines = formatter.format(_record(message)).splitlines()

    assert lines[0] == "=== command_exec ==="
    assert lines[1:4] == ["ts: t", "level: INFO", "verb: vault"]
    assert lines.index("sub_verb: list") < lines.index("elapsed_ms: 1.5")


def test_structured_formatter_uses_logger_name_for_plain_messages():
    formatter = StructuredTextFormatter()

    result = formatter.format(_record("Something happened", name="vaultterm.repl"))

    assert "=== vaultterm.repl ===" in result
    assert "message: Something happened" in result


def test_structured_formatter_separates_entries():
    formatter = StructuredTextFormatter()

    first = formatter.format(_record("one"))
    second = formatter.format(_record("two"))

    assert not first.startswith("\n")
    assert second.startswith("\n")


def test_structured_formatter_escapes_newlines():
    formatter = StructuredTextFormatter()
    message = json.dumps({"event": "command_error", "error": "line1\nline2"})

    assert "error: line1\\nline2" in formatter.format(_record(message))


def test_log_event_emits_json(caplog):
    caplog.set_level(logging.INFO, logger="vaultterm")

    log_event("app_start", variant="full", data_file=Path("/tmp/vault.json"))

    (event,) = _events(caplog)
    assert event["event"] == "app_start"
    assert event["variant"] == "full"
    assert event["data_file"] == "/tmp/vault.json"
    assert "ts" in event


def test_interpreter_logs_commands_without_secrets(caplog, store):
    caplog.set_level(logging.INFO, logger="vaultterm")
    interpreter = Interpreter(store, clipboard=lambda text: None, scheduler=run_now)

    interpreter.submit('account update --name "Gmail" --password "topsecret"')
    interpreter.submit("account explode")

    events = _events(caplog)
    assert [event["event"] for event in events] == ["command_exec", "command_error"]
    assert events[0]["flags"] == {"name": "Gmail", "password": REDACTED}
    assert events[1]["error_type"] == "UnknownCommandError"
    assert "topsecret" not in caplog.text


def test_interpreter_logs_confirmation(caplog, store):
    caplog.set_level(logging.INFO, logger="vaultterm")
    interpreter = Interpreter(store, scheduler=run_now)

    interpreter.submit('vault delete --name "Work"')
    interpreter.submit("cancel")

    confirmation = [event for event in _events(caplog) if event["event"] == "confirmation"]
    assert confirmation == [
        {
            "ts": confirmation[0]["ts"],
            "event": "confirmation",
            "decision": "cancel",
            "operation": "delete_vault",
            "target_id": "v-work",
        }
    ]


def test_build_run_log_path_is_unique(temp_dir):
    first = build_run_log_path(str(temp_dir / "logs"))
    Path(first).touch()
    second = build_run_log_path(str(temp_dir / "logs"))

    assert first != second
    assert Path(first).name.startswith("vaultterm_")
    assert second.endswith(".log")


def test_setup_logging_writes_structured_file(temp_dir):
    log_file = temp_dir / "run.log"
    setup_logging(str(log_file))
    try:
        log_event("app_stop", reason="exit", uptime_ms=12)
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "=== app_stop ===" in content
        assert "reason: exit" in content
    finally:
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()


def test_setup_logging_without_file_disables_logging(caplog):
    caplog.set_level(logging.INFO, logger="vaultterm")
    setup_logging(None)

    log_event("app_start")

    assert _events(caplog) == []
