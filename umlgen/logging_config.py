"""
Logging configuration for umlgen.
"""
import logging.config


def setup_logging(level: str = "WARNING", log_file: str | None = None):
    """Configure logging for umlgen.

    Records go to stderr, so command output on stdout stays parseable.

    Args:
        level: Level of the ``umlgen`` logger.
        log_file: Optional file receiving the same records.
    """
    handlers = ["console"]
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "detailed" if level == "DEBUG" else "default",
                "level": "DEBUG",
            },
        },
        "loggers": {
            "umlgen": {
                "level": level,
            },
        },
        "root": {
            "handlers": handlers,
            "level": "WARNING",
        },
    }
    if log_file:
        logging_config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "formatter": "detailed",
            "level": "DEBUG",
        }
        handlers.append("file")
    logging.config.dictConfig(logging_config)
