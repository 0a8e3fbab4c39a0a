"""
Logging setup for the oculomotor package

Module loggers (``oculomotor.session.tracking_session`` etc.) propagate to
the package logger, so configuring ``oculomotor`` once covers all of them.
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Any, Mapping, Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


def setup_logger(
    name: str = "oculomotor",
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Attach console and/or file handlers to a logger

    Handlers from an earlier call are closed and replaced. A file handler
    is added when ``log_dir`` or ``log_file`` is given; the file name
    defaults to ``oculomotor_YYYYMMDD.log`` inside ``log_dir`` (or ``logs``).
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if log_dir or log_file:
        log_directory = Path(log_dir) if log_dir else Path("logs")
        log_directory.mkdir(parents=True, exist_ok=True)
        log_path = log_directory / (
            log_file or f"oculomotor_{datetime.now().strftime('%Y%m%d')}.log"
        )

        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        )
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    return logger


def setup_logger_from_config(
    logging_config: Optional[Mapping[str, Any]] = None,
    name: str = "oculomotor",
    console_output: bool = True
) -> logging.Logger:
    """
    Configure logging from the ``logging`` section of config.yaml

    Reads ``level``, ``log_directory`` and ``log_file``.
    """
    logging_config = logging_config or {}
    return setup_logger(
        name=name,
        log_level=logging_config.get('level', 'INFO'),
        log_dir=logging_config.get('log_directory'),
        log_file=logging_config.get('log_file'),
        console_output=console_output
    )


def get_logger(name: str = "oculomotor") -> logging.Logger:
    return logging.getLogger(name)
