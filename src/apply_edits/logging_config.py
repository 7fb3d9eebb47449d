import logging.config
import os
import sys

from dotenv import load_dotenv
from rich.console import Console


def setup_logging(level_override: str = None):
    """
    Configures logging for apply-edits.

    Reads configuration from environment variables:
    - LOG_LEVEL: Logging level (default: "INFO")
      Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive)
    - LOG_DIR: Optional directory for a rotating log file. When unset,
      nothing is written to disk.

    Console output always goes to stderr so stdout stays reserved for JSON.
    """
    load_dotenv()

    log_level_str = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    log_level = log_level_map.get(log_level_str, logging.INFO)

    if log_level_str not in log_level_map:
        print(
            f"Warning: Invalid LOG_LEVEL '{log_level_str}'. "
            f"Valid values: {', '.join(log_level_map.keys())}. Using INFO.",
            file=sys.stderr,
        )

    handlers = {
        "rich": {
            "class": "rich.logging.RichHandler",
            "rich_tracebacks": True,
            "formatter": "default",
            "console": Console(stderr=True),
            "level": log_level,
        },
    }

    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(log_dir, "apply-edits.log"),
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
            "formatter": "detailed",
            "level": log_level,
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(message)s",
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level,
            "handlers": list(handlers.keys()),
        },
    }

    logging.config.dictConfig(logging_config)
    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured. Level: {log_level_str}")
