"""Logging setup: readable lines in development, JSON in production."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        for key in ("track_id", "segment_id", "time"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        return json.dumps(data, ensure_ascii=False)


def configure_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    ``VELOCUE_ENV`` in (production, prod, staging) switches to JSON output;
    ``VELOCUE_LOG_LEVEL`` sets the level (default INFO).
    """
    env = os.getenv("VELOCUE_ENV", "development").lower()
    level_name = (level or os.getenv("VELOCUE_LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if env in ("production", "prod", "staging"):
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
