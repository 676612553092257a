#!/usr/bin/env python3
"""
Prompt extraction from image metadata via exiftool

Image generators store their parameters as a JSON blob in a Generation_data
tag. exiftool prints the blob, we parse it and pull out the prompt field.
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from prompt_sorter.constants import (
    DEFAULT_EXIFTOOL, DEFAULT_EXIFTOOL_ARGS, DEFAULT_PROMPT_FIELD, DEFAULT_TIMEOUT,
)
from prompt_sorter.errors import ExtractionError

logger = logging.getLogger(__name__)


class MetadataExtractor(ABC):
    """
    Contract for reading the prompt text of one file.
    Implementations never raise: any failure means "no metadata".
    """

    @abstractmethod
    def fetch(self, path: Path) -> Optional[str]:
        """Return the prompt stored in the file, or None"""


class ExifToolExtractor(MetadataExtractor):
    """MetadataExtractor backed by the exiftool executable"""

    def __init__(
        self,
        exiftool_path: str = DEFAULT_EXIFTOOL,
        args: Sequence[str] = DEFAULT_EXIFTOOL_ARGS,
        prompt_field: str = DEFAULT_PROMPT_FIELD,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.exiftool_path = exiftool_path
        self.args = list(args)
        self.prompt_field = prompt_field
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> 'ExifToolExtractor':
        return cls(
            exiftool_path=settings.exiftool_path,
            args=settings.exiftool_args,
            prompt_field=settings.prompt_field,
            timeout=settings.timeout,
        )

    def fetch(self, path: Path) -> Optional[str]:
        # File may have vanished between enumeration and processing
        if not path.is_file():
            logger.warning(f"File disappeared before extraction: {path}")
            return None

        try:
            output = self._run_exiftool(path)
            return self._parse(output)
        except ExtractionError as e:
            logger.warning(f"No metadata for '{path}': {e}")
            return None

    def _run_exiftool(self, path: Path) -> str:
        """Run exiftool on one file and return its stdout"""
        # Argument list, no shell: paths with spaces or quotes need no escaping
        cmd = [self.exiftool_path, *self.args, str(path)]
        logger.debug(f"Executing exiftool: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ExtractionError(f"exiftool timed out after {self.timeout}s") from e
        except OSError as e:
            raise ExtractionError(f"could not run '{self.exiftool_path}': {e}") from e

        if result.returncode != 0:
            error_message = (result.stderr or '').strip() or f"exit status {result.returncode}"
            raise ExtractionError(f"exiftool failed: {error_message}")

        return result.stdout

    def _parse(self, output: str) -> Optional[str]:
        """Pull the prompt field out of the Generation_data JSON"""
        output = (output or '').strip()
        if not output:
            # File simply has no Generation_data tag
            return None

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"malformed Generation_data JSON: {e.msg}") from e

        if not isinstance(data, dict):
            raise ExtractionError("Generation_data is not a JSON object")

        prompt = data.get(self.prompt_field)
        if not isinstance(prompt, str) or not prompt.strip():
            return None
        return prompt
