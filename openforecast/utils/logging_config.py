"""Logging configuration for training and forecasting runs."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JSONFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "lineNo": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Structured extras passed as extra={"props": {...}}; never
        # override the standard fields
        props = getattr(record, "props", None)
        if isinstance(props, dict):
            for key, value in props.items():
                log_obj.setdefault(key, value)

        return json.dumps(log_obj, default=str)


def _json_file_handler(path: Path, level: Union[int, str]) -> logging.Handler:
    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_level: Union[int, str] = "INFO",
    log_dir: Optional[str] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure console and optional JSON-lines file logging.

    Existing handlers on the configured logger are replaced.

    Args:
        log_level: Logging level (INFO, DEBUG, etc.)
        log_dir: Directory receiving app.jsonl (all records) and
            errors.jsonl (ERROR and above); console only when None
        logger_name: Logger to configure; the root logger when None

    Returns:
        The configured logger
    """
    target = logging.getLogger(logger_name)
    target.setLevel(log_level)
    target.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    target.addHandler(console_handler)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        target.addHandler(_json_file_handler(directory / "app.jsonl", log_level))
        target.addHandler(_json_file_handler(directory / "errors.jsonl", logging.ERROR))

    target.info(f"Logging configured with level {log_level}")
    return target
