"""Configuring the logging objects"""

import json
import logging
import logging.config
import os
from pathlib import Path


class JsonFormatter(logging.Formatter):
    """Formats each record as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "logger": record.name,
            "level": record.levelname,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging():
    """Setup application logging"""

    # Create logs directory
    log_dir = Path(os.getenv("LOG_DIR", "monitoring/logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Log configuration
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s - %(message)s"},
            "json": {
                "()": JsonFormatter,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": os.getenv("LOG_LEVEL", "INFO"),
                "formatter": "detailed",
                "stream": "ext://sys.stdout",
            },
            "file_info": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "detailed",
                "filename": log_dir / "app.log",
                "maxBytes": int(os.getenv("LOG_MAX_SIZE", "10485760")),
                "backupCount": int(os.getenv("LOG_BACKUP_COUNT", "5")),
            },
            "file_error": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": log_dir / "error.log",
                "maxBytes": int(os.getenv("LOG_MAX_SIZE", "10485760")),
                "backupCount": int(os.getenv("LOG_BACKUP_COUNT", "5")),
            },
            "plugins": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": log_dir / "plugins.log",
                "maxBytes": int(os.getenv("LOG_MAX_SIZE", "10485760")),
                "backupCount": int(os.getenv("LOG_BACKUP_COUNT", "5")),
            },
            "dead_letter": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "json",
                "filename": log_dir / "dead_letter.log",
                "maxBytes": int(os.getenv("LOG_MAX_SIZE", "10485760")),
                "backupCount": int(os.getenv("LOG_BACKUP_COUNT", "5")),
            },
        },
        "loggers": {
            "": {  # Root logger
                "handlers": ["console", "file_info", "file_error"],
                "level": "DEBUG",
            },
            # Propagate to root so console output stays in one place
            "plugins": {
                "handlers": ["plugins"],
                "level": "DEBUG",
                "propagate": True,
            },
            "dead_letter": {
                "handlers": ["dead_letter"],
                "level": "DEBUG",
                "propagate": True,
            },
            "test": {
                "handlers": ["console"],
                "level": "DEBUG",
                "propagate": True,
            },
        },
    }

    # Setting the logging configuration as per the above dictionary
    logging.config.dictConfig(log_config)

    # Log startup info
    logger = get_logger(__name__)
    logger.info("Logging configured. Log directory: %s", log_dir.absolute())
    logger.info("Environment: %s", os.getenv("ENVIRONMENT", "development"))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name"""
    return logging.getLogger(name)
