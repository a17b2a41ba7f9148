import atexit
import json
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Dict

_listeners: Dict[str, QueueListener] = {}


class JsonFormatter(logging.Formatter):
    """Logging formatter that outputs JSON-formatted records.

    The formatter serializes key information from LogRecord into a compact
    JSON string. It includes level, message, logger name and a timestamp. If
    exception information is present it is included under the `exception`
    key, and a `context` mapping passed through `extra` is copied verbatim
    (used for provider status/body diagnostics that never reach clients).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            log_record["context"] = context
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False, default=str)


def get_logger(name: str = "weather_lookup") -> logging.Logger:
    """Create a process-local logger which serializes records to JSON
    and uses a queue listener.

    This helper sets up a background QueueListener and a QueueHandler so that
    log emission is non-blocking and the final serialization to JSON happens
    in a single consumer thread. Calling it again for the same name returns
    the already configured logger.

    Args:
        name (str): Logger name (defaults to "weather_lookup").

    Returns:
        logging.Logger: Configured logger instance with JSON formatting.
    """
    logger = logging.getLogger(name)
    if name in _listeners:
        return logger

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(JsonFormatter())

    queue_handler = QueueHandler(log_queue)
    listener = QueueListener(log_queue, stream_handler)
    listener.start()
    if not _listeners:
        atexit.register(shutdown_logging)
    _listeners[name] = listener

    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    logger.addHandler(queue_handler)
    logger.propagate = False

    return logger


def shutdown_logging() -> None:
    """Flush and stop every queue listener started by `get_logger`."""
    for listener in _listeners.values():
        listener.stop()
    _listeners.clear()
