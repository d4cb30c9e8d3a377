import json
import logging

from core.config.schemas.observability import LoggingConfig
from core.logging_setup import LOG_PREFIX, JsonFormatter, configure_logging


def _marked(name):
    return [
        h for h in logging.getLogger(name).handlers if getattr(h, "_mon_handler", False)
    ]


def test_configure_is_idempotent_and_sets_level():
    configure_logging(LoggingConfig(level="debug"))
    configure_logging(LoggingConfig(level="warn"))
    for name in ("core", "outdated_notifier"):
        assert len(_marked(name)) == 1
        assert logging.getLogger(name).level == logging.WARNING
    configure_logging()


def test_text_format_has_prefix():
    configure_logging(LoggingConfig(format="text"))
    (handler,) = _marked("core")
    record = logging.LogRecord(
        "core.updates.checker", logging.INFO, __file__, 1, "hello %s", ("x",), None
    )
    assert handler.format(record).startswith(f"{LOG_PREFIX} | INFO")


def test_json_formatter_payload():
    record = logging.LogRecord(
        "core.registry.client", logging.ERROR, __file__, 1, "boom %d", (3,), None
    )
    data = json.loads(JsonFormatter().format(record))
    assert data["level"] == "error"
    assert data["logger"] == "core.registry.client"
    assert data["msg"] == "boom 3"
