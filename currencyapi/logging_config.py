import logging.config
import os
import sys
from typing import Optional


def setup_logging(
    log_level: str = "INFO", log_dir: Optional[str] = None, retention_days: int = 7
):
    log_level = log_level.upper()

    handlers = {
        "console": {
            "formatter": "simple",
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
        },
        "error_console": {
            "formatter": "detailed",
            "class": "logging.StreamHandler",
            "stream": sys.stderr,
            "level": "WARNING",
        },
    }
    app_handlers = ["console", "error_console"]

    # 파일 로그: 자정마다 회전, retention_days 만큼 보관
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["server_file"] = {
            "formatter": "simple",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(log_dir, "server.log"),
            "when": "midnight",
            "backupCount": retention_days,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "formatter": "detailed",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(log_dir, "errors.log"),
            "when": "midnight",
            "backupCount": retention_days,
            "encoding": "utf-8",
            "level": "ERROR",
        }
        app_handlers = app_handlers + ["server_file", "error_file"]

    LOGGING_CONFIG = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s\n%(pathname)s:%(lineno)d\n%(message)s",
            },
            "simple": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {  # root logger
                "handlers": app_handlers,
                "level": log_level,
                "propagate": True,
            },
            "uvicorn.error": {
                "handlers": ["console", "error_console"],
                "level": log_level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "currencyapi": {  # 핸들러는 root 에서 처리
                "level": log_level,
                "propagate": True,
            },
        },
    }
    logging.config.dictConfig(LOGGING_CONFIG)
