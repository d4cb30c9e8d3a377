"""Logging bootstrap driven by `logging` config section.

Installs a single stream handler on the project loggers (`core`,
`outdated_notifier`). Calling it again replaces the handler, so tests and the
API factory may invoke it repeatedly.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable

from core.config.schemas.observability import LoggingConfig

LOG_PREFIX = "Module Outdated Notifier"
PROJECT_LOGGERS = ("core", "outdated_notifier")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_HANDLER_MARK = "_mon_handler"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "ts": record.created,
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    cfg: LoggingConfig | None = None,
    loggers: Iterable[str] = PROJECT_LOGGERS,
) -> None:
    cfg = cfg or LoggingConfig()
    if cfg.format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            f"{LOG_PREFIX} | %(levelname)s %(name)s: %(message)s"
        )
    for name in loggers:
        lg = logging.getLogger(name)
        for h in list(lg.handlers):
            if getattr(h, _HANDLER_MARK, False):
                lg.removeHandler(h)
        handler = logging.StreamHandler()
        setattr(handler, _HANDLER_MARK, True)
        handler.setFormatter(formatter)
        lg.addHandler(handler)
        lg.setLevel(_LEVELS[cfg.level])


__all__ = ["configure_logging", "JsonFormatter", "LOG_PREFIX"]
