#!/usr/bin/env python3
"""
Append-only error log for a single run

Every warning and error raised while scanning ends up in the log file with a
timestamp (and a traceback when an exception is attached). The log is owned
by the driver: opened when the run starts, closed when it ends.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class RunLog:
    """File-backed log attached to the prompt_sorter logger tree for one run"""

    def __init__(self, path: Path, logger_name: str = 'prompt_sorter'):
        self.path = path
        self.logger = logging.getLogger(logger_name)
        self._handler: Optional[logging.FileHandler] = None

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def open(self) -> 'RunLog':
        if self._handler is not None:
            return self
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(self.path, mode='a', encoding='utf-8', delay=True)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        self.logger.addHandler(handler)
        self._handler = handler
        return self

    def close(self):
        if self._handler is None:
            return
        self.logger.removeHandler(self._handler)
        self._handler.flush()
        self._handler.close()
        self._handler = None

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str, exc: Optional[BaseException] = None):
        """Record an error; the traceback is written when exc is given"""
        if exc is not None:
            self.logger.error(message, exc_info=(type(exc), exc, exc.__traceback__))
        else:
            self.logger.error(message)

    def __enter__(self) -> 'RunLog':
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
