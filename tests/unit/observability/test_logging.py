"""
appcontext - unit tests for observability logging

File: tests/unit/observability/test_logging.py
Last updated: 2026-10-17

Purpose
- Validate structured JSON-lines logging and the routing of library events.

What this test file should cover
- JSON line validity and stable field layout.
- structlog events from library modules landing in the log file with their context.
- Default log directory under the application's XDG state location.
- Queue drain/shutdown behavior and input validation.

Functional requirements
- Offline operation.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
import structlog

from appcontext.jsonstore import JsonStore
from appcontext.observability import (
    LoggingConfig,
    get_active_logging_handle,
    setup_logging,
    setup_structured_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _logger_name() -> str:
    return f"appcontext.tests.logging.{uuid4().hex}"


def _read_json_lines(path: Path) -> list[dict[str, object]]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_json_lines_carry_standard_fields_and_extras(tmp_path: Path) -> None:
    logger_name = _logger_name()
    handle = setup_structured_logging(
        LoggingConfig(
            app_name="demo",
            log_dir=tmp_path,
            logger_name=logger_name,
            route_structlog=False,
        )
    )
    logger = logging.getLogger(logger_name)

    logger.info("store opened", extra={"path": tmp_path / "s.json", "records": 3})
    shutdown_logging(handle)

    events = _read_json_lines(handle.log_path)
    assert len(events) == 1
    event = events[0]
    assert event["message"] == "store opened"
    assert event["level"] == "INFO"
    assert event["logger"] == logger_name
    assert event["app"] == "demo"
    assert str(event["timestamp"]).endswith("Z")
    assert event["fields"] == {"path": str(tmp_path / "s.json"), "records": 3}


def test_repeated_setup_appends_to_the_same_log_file(tmp_path: Path) -> None:
    logger_name = _logger_name()
    config = LoggingConfig(
        app_name="demo",
        log_dir=tmp_path,
        logger_name=logger_name,
        log_filename="demo.jsonl",
        route_structlog=False,
    )

    for message in ("first run", "second run"):
        handle = setup_structured_logging(config)
        logging.getLogger(logger_name).warning(message)
        shutdown_logging(handle)

    assert handle.log_path == tmp_path / "demo.jsonl"
    assert [event["message"] for event in _read_json_lines(handle.log_path)] == [
        "first run",
        "second run",
    ]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["demo.jsonl"]


def test_exceptions_are_rendered(tmp_path: Path) -> None:
    logger_name = _logger_name()
    handle = setup_structured_logging(
        LoggingConfig(app_name="demo", log_dir=tmp_path, logger_name=logger_name)
    )
    logger = logging.getLogger(logger_name)

    try:
        raise RuntimeError("exploded")
    except RuntimeError:
        logger.exception("operation failed")
    shutdown_logging(handle)

    (event,) = _read_json_lines(handle.log_path)
    assert "RuntimeError: exploded" in str(event["exception"])


def test_structlog_events_from_library_modules_are_captured(tmp_path: Path) -> None:
    handle = setup_logging("demo", log_dir=tmp_path / "logs", level="DEBUG")
    store = JsonStore(tmp_path / "records.json", dict[str, int])
    store.insert("a", {"n": 1})
    store.save()
    shutdown_logging(handle)

    events = _read_json_lines(handle.log_path)
    saved = [event for event in events if event["message"] == "jsonstore_saved"]
    assert len(saved) == 1
    assert saved[0]["logger"] == "appcontext.jsonstore.store"
    assert saved[0]["level"] == "DEBUG"
    assert saved[0]["fields"] == {"path": str(tmp_path / "records.json"), "records": 1}


def test_level_filters_library_debug_events(tmp_path: Path) -> None:
    handle = setup_logging("demo", log_dir=tmp_path / "logs", level="INFO")
    store = JsonStore(tmp_path / "records.json", dict[str, int])
    store.save()
    structlog.get_logger("appcontext.tests").info("visible_event", answer=42)
    shutdown_logging(handle)

    events = _read_json_lines(handle.log_path)
    assert [event["message"] for event in events] == ["visible_event"]
    assert events[0]["fields"] == {"answer": 42}


def test_default_log_dir_is_under_state_home(tmp_path: Path) -> None:
    environ = {"HOME": str(tmp_path / "home"), "XDG_STATE_HOME": str(tmp_path / "state")}

    handle = setup_logging("demo", environ=environ)

    assert handle.log_path == tmp_path / "state" / "demo" / "logs" / "appcontext.jsonl"
    assert handle.log_path.parent.is_dir()


def test_multithreaded_logging_produces_one_valid_line_per_record(tmp_path: Path) -> None:
    logger_name = _logger_name()
    handle = setup_structured_logging(
        LoggingConfig(app_name="demo", log_dir=tmp_path, logger_name=logger_name)
    )
    logger = logging.getLogger(logger_name)

    def worker(index: int) -> None:
        for offset in range(25):
            logger.info("tick", extra={"worker": index, "offset": offset})

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)
    shutdown_logging(handle)

    events = _read_json_lines(handle.log_path)
    assert len(events) == 100 - handle.dropped_records
    assert handle.dropped_records == 0


def test_new_setup_replaces_active_handle(tmp_path: Path) -> None:
    first = setup_logging("demo", log_dir=tmp_path / "one")
    second = setup_logging("demo", log_dir=tmp_path / "two")

    assert first.is_shutdown
    assert get_active_logging_handle() is second


def test_shutdown_is_idempotent(tmp_path: Path) -> None:
    handle = setup_logging("demo", log_dir=tmp_path)

    shutdown_logging(handle)
    shutdown_logging(handle)

    assert handle.is_shutdown
    assert get_active_logging_handle() is None


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"app_name": "  "}, "app_name must not be empty"),
        ({"queue_size": 0}, "queue_size must be > 0"),
        ({"log_filename": os.path.join("nested", "x.jsonl")}, "path separators"),
        ({"level": "LOUD"}, "unsupported logging level"),
    ],
)
def test_invalid_config_is_rejected(
    tmp_path: Path, overrides: dict[str, object], message: str
) -> None:
    settings: dict[str, object] = {"app_name": "demo", "log_dir": tmp_path}
    settings.update(overrides)

    with pytest.raises(ValueError, match=message):
        setup_structured_logging(LoggingConfig(**settings))  # type: ignore[arg-type]
