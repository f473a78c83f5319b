"""Unified logging setup for the exporter."""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import IO

from ..config.env_adapter import get_bool

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
JSON_LOGS_ENV = 'ES_EXPORTER_JSON_LOGS'


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'ts': record.created,
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    level: str = 'INFO',
    log_file: str | None = None,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure root logging.

    Console output goes to ``stream`` (stderr by default, stdout carries the
    exposition payload). ``ES_EXPORTER_JSON_LOGS=1`` switches the console to
    JSON lines. The optional file handler always uses ``DEFAULT_FORMAT``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Remove existing handlers to avoid duplication on re-init
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(log_level)
    if get_bool(JSON_LOGS_ENV, False):
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(fmt))
    root.addHandler(console)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding='utf-8')
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(fh)
    return root


__all__ = ["DEFAULT_FORMAT", "JSON_LOGS_ENV", "JsonFormatter", "setup_logging"]
