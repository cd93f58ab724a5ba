"""
Tests for logging setup and formatters.
"""
import json
import logging
import os
import tempfile

from subjective.logging_config import HumanFormatter, JSONFormatter, configure_logging


def make_record(msg="filter.update_a:[]", **extra):
    record = logging.LogRecord("subjective.updates", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Test human and JSON formatting."""

    def test_json_formatter_fields(self):
        record = make_record(subsystem="update", update_name="filter.update_a")
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "subjective.updates"
        assert data["message"] == "filter.update_a:[]"
        assert data["subsystem"] == "update"
        assert data["update_name"] == "filter.update_a"

    def test_json_formatter_without_extras(self):
        data = json.loads(JSONFormatter().format(make_record()))
        assert "update_name" not in data
        assert "subsystem" not in data

    def test_human_formatter_prefix(self):
        line = HumanFormatter(use_colors=False).format(make_record(subsystem="update"))
        assert "INFO [update]: filter.update_a:[]" in line

    def test_human_formatter_general_subsystem(self):
        line = HumanFormatter(use_colors=False).format(make_record())
        assert "INFO: filter.update_a:[]" in line


class TestConfigureLogging:
    """Test handler setup."""

    def test_writes_human_and_json_files(self):
        with tempfile.TemporaryDirectory() as d:
            target = configure_logging(level="DEBUG", log_dir=d, logger_name="subjective.test")
            try:
                target.info("hello", extra={"update_name": "set_a"})
                for handler in target.handlers:
                    handler.flush()

                with open(os.path.join(d, "subjective.json.log")) as f:
                    data = json.loads(f.readline())
                with open(os.path.join(d, "subjective.log")) as f:
                    human = f.read()
            finally:
                for handler in list(target.handlers):
                    target.removeHandler(handler)
                    handler.close()

            assert data["message"] == "hello"
            assert data["update_name"] == "set_a"
            assert "hello" in human

    def test_reconfigure_replaces_handlers(self):
        target = configure_logging(logger_name="subjective.test2")
        configure_logging(logger_name="subjective.test2")
        try:
            assert len(target.handlers) == 1
            assert target.level == logging.INFO
        finally:
            for handler in list(target.handlers):
                target.removeHandler(handler)
