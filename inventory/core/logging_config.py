import logging
import logging.config
import os

def setup_logging(log_level=None):
    """
    Configures logging for the application.

    LOG_LEVEL, LOG_DIR and LOG_FORMAT ("text" or "json") are read from the environment.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    # Create logs directory if it doesn't exist
    log_dir = os.getenv("LOG_DIR", "logs")
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    formatter = "json" if os.getenv("LOG_FORMAT", "text").lower() == "json" else "default"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": log_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": formatter,
                "level": log_level,
                "filename": os.path.join(log_dir, "inventory.log"),
                "maxBytes": 10 * 1024 * 1024, # 10MB
                "backupCount": 5,
                "encoding": "utf8"
            },
        },
        "loggers": {
            "root": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": True
            },
            "uvicorn": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.error": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console", "file"],
                "propagate": False
            },
            "inventory": {  # Application specific logger
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
    logging.getLogger(__name__).info("Logging configured successfully.")
