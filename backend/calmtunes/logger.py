import os
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

ROOT_LOGGER = "calmtunes"

_FORMATTER = logging.Formatter(
    "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    "%Y-%m-%d %H:%M:%S"
)


def get_logger(name: str = "app") -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)

    # Console handler goes on the package root once; children propagate to it
    if not root.handlers:
        console = logging.StreamHandler()
        console.setFormatter(_FORMATTER)
        root.addHandler(console)
        root.setLevel(logging.INFO)

    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    get_logger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if log_dir and not any(isinstance(h, TimedRotatingFileHandler) for h in root.handlers):
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, f"{ROOT_LOGGER}.log"),
            when="midnight",
            interval=1,
            backupCount=7,      # keep the last 7 daily files
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setFormatter(_FORMATTER)
        root.addHandler(file_handler)

    return root
