import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
import sys

from .config import Settings, get_settings

LOGGER_NAME = "lifemate"

LINE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(process)d | %(message)s"
# errors also carry the call site
ERROR_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(process)d | "
    "%(pathname)s:%(lineno)d | %(funcName)s | %(message)s"
)
DATEFMT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("uvicorn", "gunicorn", "asyncio", "sqlalchemy.engine")


def _rotating(path: Path, level: int, fmt: str, keep_days: int) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        filename=str(path), when="midnight", backupCount=keep_days, encoding="utf8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATEFMT))
    return handler


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach console + daily rotating file handlers to the application logger.

    ``app.log`` gets INFO and above (two weeks kept), ``error.log`` gets
    ERROR and above (a month kept). Safe to call more than once.
    """
    app_logger = logging.getLogger(LOGGER_NAME)
    if app_logger.handlers:
        return app_logger

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(stream=sys.stdout)
    console.setLevel(settings.LOG_LEVEL.upper())
    console.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=DATEFMT))

    app_logger.addHandler(console)
    app_logger.addHandler(_rotating(log_dir / "app.log", logging.INFO, LINE_FORMAT, 14))
    app_logger.addHandler(
        _rotating(log_dir / "error.log", logging.ERROR, ERROR_FORMAT, 30)
    )
    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return app_logger


logger = configure_logging(get_settings())
