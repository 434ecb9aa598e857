"""
Host logging pipeline: level parsing, hook dispatch, output redirection and
stdlib interception.
"""

from __future__ import annotations

import json
import logging

import pytest

from gkelog.logging import core
from gkelog.logging import (
    ALL_LEVELS,
    DiscardSink,
    Entry,
    Hook,
    Level,
    PanicError,
    StdioSink,
    add_hook,
    configure_logging,
    get_logger,
    get_output,
    is_configured,
    set_output,
)


@pytest.fixture
def debug_logging() -> None:
    configure_logging(level="DEBUG", capture_stdlib=False)


class TestLevel:
    @pytest.mark.parametrize(
        ("name", "level"),
        [
            ("panic", Level.PANIC),
            ("fatal", Level.FATAL),
            ("critical", Level.FATAL),
            ("CRITICAL", Level.FATAL),
            ("error", Level.ERROR),
            ("exception", Level.ERROR),
            ("warning", Level.WARN),
            ("warn", Level.WARN),
            ("info", Level.INFO),
            ("debug", Level.DEBUG),
        ],
    )
    def test_from_name(self, name: str, level: Level) -> None:
        assert Level.from_name(name) is level

    @pytest.mark.parametrize("name", [None, "", "trace", "notset"])
    def test_unknown_names(self, name) -> None:
        assert Level.from_name(name) is None

    def test_ordered_most_severe_first(self) -> None:
        assert Level.PANIC < Level.FATAL < Level.ERROR < Level.WARN < Level.INFO < Level.DEBUG


class TestEntry:
    def test_from_event_dict(self) -> None:
        entry = Entry.from_event_dict(
            {"level": "warning", "message": "slow", "logger": "db", "timestamp": "t", "ms": 12}
        )
        assert entry == Entry(level=Level.WARN, message="slow", logger="db", timestamp="t", fields={"ms": 12})

    def test_unknown_level_kept_raw(self) -> None:
        entry = Entry.from_event_dict({"level": "trace", "event": 42})
        assert entry.level == "trace"
        assert entry.message == "42"


class TestHookDispatch:
    def test_entry_carries_level_message_and_fields(self, debug_logging, recording_hook) -> None:
        add_hook(recording_hook)

        get_logger("checkout").info("order placed", order_id="o-1")

        [entry] = recording_hook.entries
        assert entry.level is Level.INFO
        assert entry.message == "order placed"
        assert entry.logger == "checkout"
        assert entry.fields == {"order_id": "o-1"}
        assert entry.timestamp

    def test_every_method_maps_to_a_level(self, debug_logging, recording_hook) -> None:
        add_hook(recording_hook)
        logger = get_logger()

        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")
        logger.critical("c")
        logger.fatal("f")

        assert recording_hook.levels_seen() == [
            Level.DEBUG,
            Level.INFO,
            Level.WARN,
            Level.ERROR,
            Level.FATAL,
            Level.FATAL,
        ]

    def test_panic_logs_then_raises(self, debug_logging, recording_hook) -> None:
        add_hook(recording_hook)

        with pytest.raises(PanicError, match="cannot continue: 3"):
            get_logger().panic("cannot continue: %d", 3)

        assert recording_hook.levels_seen() == [Level.PANIC]
        assert recording_hook.entries[0].message == "cannot continue: 3"

    def test_hook_only_fired_for_its_levels(self, debug_logging, make_hook) -> None:
        errors_only = make_hook(levels=(Level.ERROR, Level.FATAL))
        add_hook(errors_only)
        logger = get_logger()

        logger.info("fine")
        logger.error("broken")

        assert [e.message for e in errors_only.entries] == ["broken"]

    def test_level_filter_applies_before_hooks(self, recording_hook) -> None:
        configure_logging(level="WARNING", capture_stdlib=False)
        add_hook(recording_hook)
        logger = get_logger()

        logger.debug("noise")
        logger.info("noise")
        logger.warning("kept")

        assert [e.message for e in recording_hook.entries] == ["kept"]

    def test_failing_hook_does_not_stop_others(self, debug_logging, make_hook, capsys) -> None:
        class Exploding(Hook):
            def levels(self):
                return ALL_LEVELS

            def fire(self, entry):
                raise ValueError("boom")

        survivor = make_hook()
        add_hook(Exploding())
        add_hook(survivor)

        get_logger().error("still logged")

        assert [e.message for e in survivor.entries] == ["still logged"]
        assert "Failed to fire hook: boom" in capsys.readouterr().err


class TestOutput:
    def test_default_output_writes_console_lines_to_stderr(self, debug_logging, capsys) -> None:
        get_logger("api").info("started", port=8080)

        err = capsys.readouterr().err
        assert "INFO" in err
        assert "api" in err
        assert "started port=8080" in err

    def test_json_output(self, capsys) -> None:
        configure_logging(level="INFO", fmt="json", capture_stdlib=False)

        get_logger("api").info("started", port=8080)

        record = json.loads(capsys.readouterr().err.strip())
        assert record["message"] == "started"
        assert record["level"] == "info"
        assert record["logger"] == "api"
        assert record["port"] == 8080

    def test_discard_output_keeps_hooks(self, debug_logging, recording_hook, capsys) -> None:
        add_hook(recording_hook)
        set_output(DiscardSink())

        get_logger().warning("only via hook")

        assert capsys.readouterr().err == ""
        assert [e.message for e in recording_hook.entries] == ["only via hook"]

    def test_reconfigure_keeps_redirected_output(self) -> None:
        discard = DiscardSink()
        set_output(discard)

        configure_logging(level="INFO", fmt="json", capture_stdlib=False)

        assert get_output() is discard

    def test_reconfigure_replaces_stdio_format(self) -> None:
        configure_logging(level="INFO", fmt="json", capture_stdlib=False)

        output = get_output()
        assert isinstance(output, StdioSink)
        assert output.fmt == "json"


class TestStdlibInterception:
    def test_stdlib_records_reach_hooks(self, recording_hook) -> None:
        configure_logging(level="DEBUG", capture_stdlib=True)
        add_hook(recording_hook)

        logging.getLogger("thirdparty.client").warning("retrying %s", "upload")

        [entry] = recording_hook.entries
        assert entry.level is Level.WARN
        assert entry.message == "retrying upload"
        assert entry.logger == "thirdparty.client"

    def test_transport_loggers_are_not_redirected(self, recording_hook) -> None:
        configure_logging(level="DEBUG", capture_stdlib=True)
        add_hook(recording_hook)

        logging.getLogger("google.cloud.logging_v2.handlers").error("transport hiccup")
        logging.getLogger("urllib3.connectionpool").warning("retry")

        assert recording_hook.entries == []


class TestExplicitConfiguration:
    def test_get_logger_does_not_configure(self, monkeypatch) -> None:
        monkeypatch.setattr(core, "_configured", False)
        root_logger = logging.getLogger()
        handlers = list(root_logger.handlers)

        get_logger("early")

        assert is_configured() is False
        assert root_logger.handlers == handlers
