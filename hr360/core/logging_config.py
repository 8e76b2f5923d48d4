"""
Logging setup.

setup_base_logging() configures the root logger once at startup.
get_logger(name) returns a logger that also writes to logs/<name>.log.
"""
import logging
import logging.config
import logging.handlers
import sys
from pathlib import Path

from hr360.core.config import get_settings


def setup_base_logging():
    """
    Configures the root logger and console handler.
    Call this only ONCE at the start of the application.
    """
    settings = get_settings()
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(levelname)s - %(name)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": "simple",
                "stream": sys.stdout,
            },
        },
        "root": {
            "level": "DEBUG",
            "handlers": ["console"],
        },
    }
    logging.config.dictConfig(logging_config)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Gets a logger and adds a rotating file handler to it
    (e.g. 'hr360.flows' -> logs/hr360.flows.log).
    Falls back to console-only when the log directory is not writable.
    """
    logger = logging.getLogger(name)

    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    log_dir = Path(get_settings().log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f"{name}.log",
            maxBytes=1024 * 1024 * 15,  # 15 MB
            backupCount=5,
            encoding="utf8",
        )
    except OSError as e:
        logger.warning(f"Could not create log file in {log_dir}: {e}. Using console only.")
        return logger

    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "%Y-%m-%d %H:%M:%S",
    ))
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)
    logger.propagate = True

    return logger
