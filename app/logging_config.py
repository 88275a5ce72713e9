import copy
import logging.config

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "": {
            "handlers": ["stdout"],
            "level": "INFO",
        },
        "uvicorn": {
            "handlers": ["stdout"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.error": {
            "handlers": ["stdout"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.access": {
            "handlers": ["stdout"],
            "level": "INFO",
            "propagate": False,
        },
    },
}


def build_logging_config(level: str = "INFO") -> dict:
    """LOGGING_CONFIG with the root logger set to `level` (uvicorn loggers stay at INFO)."""
    config = copy.deepcopy(LOGGING_CONFIG)
    config["loggers"][""]["level"] = level.upper().strip() or "INFO"
    return config


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(build_logging_config(level))
