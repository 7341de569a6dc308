"""
Logging Tests
-------------
call_id propagation and structured file output.
"""

import json
import logging

import pytest

from infra import logging as pages_logging
from infra.logging import (
    CallContext,
    CallIdFilter,
    JSONFormatter,
    configure_logging,
    generate_call_id,
    get_call_id,
    get_logger,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(pages_logging.ROOT_LOGGER)
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    pages_logging._logging_initialized = False


class TestCallContext:

    def test_generated_ids_are_unique(self):
        assert generate_call_id() != generate_call_id()
        assert generate_call_id().startswith("call_")

    def test_sets_and_resets(self):
        assert get_call_id() is None
        with CallContext("call_abc") as call_id:
            assert call_id == "call_abc"
            assert get_call_id() == "call_abc"
        assert get_call_id() is None

    def test_nested(self):
        with CallContext("outer"):
            with CallContext("inner"):
                assert get_call_id() == "inner"
            assert get_call_id() == "outer"


class TestFormatting:

    def _record(self, **extra):
        record = logging.LogRecord("pages.test", logging.INFO, __file__, 1, "hello", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_filter_injects_call_id(self):
        record = self._record()
        with CallContext("call_xyz"):
            CallIdFilter().filter(record)
        assert record.call_id == "call_xyz"

    def test_filter_default(self):
        record = self._record()
        CallIdFilter().filter(record)
        assert record.call_id == "-"

    def test_json_formatter(self):
        record = self._record(call_id="call_1", tool_name="insert_text", success=True)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello"
        assert entry["call_id"] == "call_1"
        assert entry["tool_name"] == "insert_text"
        assert entry["success"] is True


class TestConfigureLogging:

    def test_get_logger_prefix(self):
        assert get_logger("tools").name == "pages.tools"
        assert get_logger("pages.infra").name == "pages.infra"

    def test_file_output(self, tmp_path, restore_root_logger):
        configure_logging(level=logging.INFO, log_dir=str(tmp_path), console=False, file=True, force=True)

        with CallContext("call_file"):
            get_logger("test").info("written to file")

        for handler in restore_root_logger.handlers:
            handler.flush()

        lines = (tmp_path / "pages.log").read_text().splitlines()
        entry = json.loads(lines[-1])
        assert entry["message"] == "written to file"
        assert entry["call_id"] == "call_file"

    def test_idempotent_without_force(self, tmp_path, restore_root_logger):
        configure_logging(console=True, file=False, force=True)
        count = len(restore_root_logger.handlers)
        configure_logging(console=True, file=True, log_dir=str(tmp_path))
        assert len(restore_root_logger.handlers) == count
