"""Root logging setup: readable lines in development, JSON lines in production."""
import json
import logging
import logging.config
from datetime import datetime, timezone

from opportunity_radar.config import Settings


class JsonFormatter(logging.Formatter):
    """Format a record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger."""
    use_json = settings.is_production if settings.log_json is None else settings.log_json
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if use_json else "plain",
                },
            },
            "root": {"handlers": ["default"], "level": settings.log_level.upper()},
        }
    )
