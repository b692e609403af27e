"""
Logging configuration for the traversal visualizer.

Modules log through `logging.getLogger(__name__)`.  This module only decides
where records go and what they look like: plain text for local use, or one
JSON object per line when structured output is switched on.
"""

import json
import logging
import sys
from datetime import datetime, timezone


class JsonFormatter(logging.Formatter):
    """
    Schema:
    {
        "timestamp": "ISO8601",
        "logger": "engine.stepper",
        "level": "INFO",
        "message": "...",
        "metadata": {}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger":    record.name,
            "level":     record.levelname,
            "message":   record.getMessage(),
            "metadata":  getattr(record, "metadata", {}),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(log_level: str = "INFO", structured: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines instead of human-readable text
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    # werkzeug logs every poll of /api/state at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
