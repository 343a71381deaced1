import logging
import sys

from pythonjsonlogger import jsonlogger

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
_DEFAULT_LEVEL = "INFO"

_handler: logging.Handler | None = None


def _json_handler() -> logging.Handler:
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(jsonlogger.JsonFormatter(_LOG_FORMAT))
    return _handler


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Routes application and uvicorn logs through one JSON stdout handler.

    Records carry timestamp, level, logger name, message and, when ddtrace
    log injection is active, trace_id and span_id. Safe to call from every
    module: the handler is created once and reused, and a call without a
    level keeps whatever level was configured before (INFO on first use).
    The application factory passes the configured level.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    handler = _json_handler()

    root_logger = logging.getLogger()
    if handler not in root_logger.handlers:
        root_logger.handlers = [handler]
        level = level or _DEFAULT_LEVEL

    for logger_name in _UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.handlers = [handler]
        u_logger.propagate = False

    if level is not None:
        for logger in (root_logger, *map(logging.getLogger, _UVICORN_LOGGERS)):
            logger.setLevel(level.upper())

    return root_logger
