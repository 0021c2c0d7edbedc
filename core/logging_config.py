import logging
from datetime import datetime, timezone

LOG_FORMAT = "[%(levelname)s] %(asctime)s | %(name)s | %(message)s"

# Libraries whose INFO output drowns out the service's own messages
QUIET_LOGGERS = ("aiohttp.access", "aiohttp.client", "uvicorn.access")

class UTCFormatter(logging.Formatter):
    """Timestamps in UTC and logger names shortened to the module."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime(datefmt or "%Y-%m-%d %H:%M:%S UTC")

    def format(self, record: logging.LogRecord) -> str:
        short = logging.makeLogRecord(record.__dict__)
        short.name = record.name.rsplit('.', 1)[-1]
        return super().format(short)

def setup_logging(level: str = "INFO") -> None:
    """Send all logging to the console at ``level`` (a name such as "DEBUG")."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = logging.StreamHandler()
    handler.setFormatter(UTCFormatter(fmt=LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
