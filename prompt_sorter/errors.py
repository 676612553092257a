#!/usr/bin/env python3
"""Exception types for the prompt sorter."""

from pathlib import Path


class PromptSorterError(Exception):
    """Base class for all prompt sorter errors"""


class FatalConfigError(PromptSorterError):
    """Invalid configuration detected before any file is touched"""


class ExtractionError(PromptSorterError):
    """exiftool failed or returned unusable output"""


class MoveError(PromptSorterError):
    """A matching file could not be relocated"""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Error moving file '{path}': {cause}")
