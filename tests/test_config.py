# tests/test_config.py

import json
import logging

import pytest

from core.app_logging import JSONFormatter, configure_logging
from core.config import Config
from core.exceptions import ConstraintViolationError


def test_defaults():
    config = Config.from_env({}, load_env_file=False)

    assert config.log_level == "INFO"
    assert config.log_format == "text"
    assert config.history_limit is None


def test_from_env_values():
    config = Config.from_env(
        {
            "CLASSBOOK_LOG_LEVEL": "debug",
            "CLASSBOOK_LOG_FORMAT": " JSON ",
            "CLASSBOOK_HISTORY_LIMIT": "25",
        },
        load_env_file=False,
    )

    assert config.log_level == "DEBUG"
    assert config.log_format == "json"
    assert config.history_limit == 25


def test_zero_history_limit_means_unbounded():
    config = Config.from_env({"CLASSBOOK_HISTORY_LIMIT": "0"}, load_env_file=False)

    assert config.history_limit is None


@pytest.mark.parametrize(
    "environ",
    [
        {"CLASSBOOK_HISTORY_LIMIT": "many"},
        {"CLASSBOOK_HISTORY_LIMIT": "-3"},
        {"CLASSBOOK_LOG_FORMAT": "xml"},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(ConstraintViolationError):
        Config.from_env(environ, load_env_file=False)


def test_configure_logging_json():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        configure_logging(Config(log_level="warning", log_format="json"), force=True)

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "core.version_history", logging.INFO, __file__, 1, "Committed: %s", ("add",), None
    )
    record.snapshot = 3

    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "core.version_history"
    assert payload["msg"] == "Committed: add"
    assert payload["snapshot"] == 3
