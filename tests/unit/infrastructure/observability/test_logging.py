"""Tests for structured logging."""

import json
import logging
import sys

import pytest

from orbitcms.infrastructure.observability.logger_template import log_operation
from orbitcms.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    def test_set_and_get_correlation_id(self) -> None:
        assert set_correlation_id("test-123-abc") == "test-123-abc"
        assert get_correlation_id() == "test-123-abc"

    @pytest.mark.parametrize("value", [None, ""])
    def test_generates_uuid_when_missing(self, value: str | None) -> None:
        result = set_correlation_id(value)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_attaches_id_to_record(self) -> None:
        set_correlation_id("cid-1")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "cid-1"


class TestFormatters:
    def test_json_formatter_emits_fields(self) -> None:
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = logging.LogRecord("orbitcms.test", logging.WARNING, __file__, 7, "hello", None, None)
        record.correlation_id = "cid-2"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "hello"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "orbitcms.test"
        assert payload["correlation_id"] == "cid-2"

    def test_compact_formatter_shows_chain_root_first(self) -> None:
        try:
            try:
                raise KeyError("inner")
            except KeyError as inner:
                raise RuntimeError("outer") from inner
        except RuntimeError:
            text = CompactExceptionFormatter().formatException(sys.exc_info())

        lines = [line for line in text.splitlines() if line.startswith("╰─►")]
        assert lines == ["╰─► KeyError: 'inner'", "╰─► RuntimeError: outer"]


class TestConfigureLogging:
    def test_sets_level(self) -> None:
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_replaces_handlers_instead_of_stacking(self) -> None:
        configure_logging(log_level="INFO", json_format=True)
        configure_logging(log_level="INFO", json_format=True)
        stream_handlers = [
            h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert isinstance(stream_handlers[0].formatter, CustomJsonFormatter)


class TestLogOperation:
    async def test_logs_completion_with_duration(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("orbitcms.test.op")
        with caplog.at_level(logging.INFO, logger="orbitcms.test.op"):
            async with log_operation(logger, "thing.do", thing_id="t1"):
                pass

        record = next(r for r in caplog.records if r.getMessage() == "thing.do.completed")
        assert record.thing_id == "t1"
        assert record.duration_ms >= 0

    async def test_logs_failure_and_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("orbitcms.test.op")
        with caplog.at_level(logging.INFO, logger="orbitcms.test.op"):
            with pytest.raises(ValueError):
                async with log_operation(logger, "thing.do"):
                    raise ValueError("boom")

        record = next(r for r in caplog.records if r.getMessage() == "thing.do.failed")
        assert record.error_type == "ValueError"
        assert record.exc_info is not None
