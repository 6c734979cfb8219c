"""Centralized logging utilities for the rwmcmc package."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional


class RWMLogger:
    """Factory class for configured rwmcmc loggers."""

    _formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    @classmethod
    def get_logger(
        cls,
        name: str = "rwmcmc",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        propagate: bool = False,
    ) -> logging.Logger:
        """Return a logger with consistent rwmcmc formatting/handlers.

        Repeated calls with the same name reuse the existing stream handler,
        and a file handler is only attached once per path.
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = propagate

        if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
            stream_handler = logging.StreamHandler()
            stream_handler.setFormatter(cls._formatter)
            logger.addHandler(stream_handler)

        if log_file is not None:
            log_path = Path(os.path.abspath(log_file))
            has_file_handler = any(
                isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path
                for handler in logger.handlers
            )
            if not has_file_handler:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path)
                file_handler.setFormatter(cls._formatter)
                logger.addHandler(file_handler)

        return logger

    @classmethod
    def set_level(cls, level: int, name: str = "rwmcmc") -> None:
        """Change the level of the package logger and every rwmcmc.* child already created."""
        for logger_name in list(logging.root.manager.loggerDict):
            if logger_name == name or logger_name.startswith(f"{name}."):
                logging.getLogger(logger_name).setLevel(level)
