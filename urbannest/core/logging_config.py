import logging
from datetime import datetime, timezone

from urbannest.core.config import settings


class UTCFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        record_time = datetime.fromtimestamp(record.created, timezone.utc)
        return record_time.strftime(datefmt) if datefmt else record_time.isoformat()


def setup_logging() -> logging.Logger:
    logger = logging.getLogger("urbannest")
    if not logger.handlers:
        formatter = UTCFormatter(
            fmt='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        logger.setLevel(settings.LOG_LEVEL.upper())
        logger.addHandler(handler)

    return logger
