"""Logging setup for the installer service.

All component loggers live under "locinstaller" (locinstaller.worker,
locinstaller.session, ...) and propagate to the handlers installed here.
Records carry the thread name so worker output can be told apart from the
event loop.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from locinstaller.config import InstallerSettings

ROOT_LOGGER = "locinstaller"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def setup_logger(
    name: str = ROOT_LOGGER,
    log_file: Union[str, Path] = "./logs/locinstaller.log",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 3,
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach a rotating file handler and a console handler to a logger.

    Calling it again for a configured logger only updates the level.

    Args:
        name: Logger name
        log_file: Path to log file (parent directories are created)
        max_bytes: Max size before rotation
        backup_count: Number of rotated files to keep
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        ),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(settings: "InstallerSettings") -> logging.Logger:
    """Configure the service logger from InstallerSettings.

    Returns:
        The "locinstaller" logger
    """
    logger = setup_logger(
        ROOT_LOGGER,
        settings.log_file,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        level=settings.logging_level,
    )
    logger.debug(f"Logging to {settings.log_file} at {settings.log_level}")
    return logger
