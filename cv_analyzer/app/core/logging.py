# cv_analyzer/app/core/logging.py
import logging
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler

from . import config

# set by the HTTP middleware, read by every log record
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")

class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

def log_file_path():
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return config.DATA_DIR / config.LOG_FILE

def _handlers():
    # webhook replies can be large; keep app.log bounded
    yield logging.StreamHandler()
    yield RotatingFileHandler(
        log_file_path(),
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )

def get_logger(name: str = "cv_analyzer"):
    """Logger tagged with the current request id; console + rotating app.log."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.LOG_FORMAT)
    req_filter = RequestIdFilter()
    for handler in _handlers():
        handler.setFormatter(formatter)
        handler.addFilter(req_filter)
        logger.addHandler(handler)

    logger.setLevel(config.LOG_LEVEL)
    logger.propagate = False
    return logger
