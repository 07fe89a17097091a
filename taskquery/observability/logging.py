# taskquery/observability/logging.py
from __future__ import annotations
import logging
import json
import time
import os
from typing import Optional, Dict, Any, Union

# extras the parser and adapter attach through `logger.x(..., extra={...})`
_EXTRA_FIELDS = ("locale", "query_id", "candidates")


class JsonFormatter(logging.Formatter):
    """
    JSON-lines log formatter.
    Every record carries timestamp/level/logger/message plus any known extras.
    """

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "timestamp": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in _EXTRA_FIELDS:
            if hasattr(record, attr):
                base[attr] = getattr(record, attr)

        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_to_file: Optional[str] = None,
    extra_modules: Optional[Dict[str, int]] = None,
):
    """
    Installs JSON logging on the root logger.
    - console handler always
    - optional file handler
    - per-module level overrides
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = JsonFormatter()

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if log_to_file:
        os.makedirs(os.path.dirname(log_to_file) or ".", exist_ok=True)
        fh = logging.FileHandler(log_to_file, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    if extra_modules:
        for mod, lvl in extra_modules.items():
            logging.getLogger(mod).setLevel(lvl)

    logging.getLogger(__name__).info("Structured logging configured.")
