#!/usr/bin/env python3
"""
Run orchestration

    VALIDATING → PREPARING → SCANNING → FINALIZING → DONE
         └──────────┴──→ FAILED   (missing root, destination not creatable)

Nothing on disk is touched before VALIDATING passes. Neither a per-file problem
nor a failing dashboard stops the scan.
"""

import logging
from typing import List, Optional

from prompt_sorter.classifier import FileClassifier
from prompt_sorter.config import RunOptions, Settings
from prompt_sorter.errors import FatalConfigError
from prompt_sorter.extractor import MetadataExtractor
from prompt_sorter.frequency import WordFrequencyTracker
from prompt_sorter.models import CandidateFile, RunState, RunSummary
from prompt_sorter.reporter import FallbackReporter, StatusReporter
from prompt_sorter.run_log import RunLog
from prompt_sorter.walker import enumerate_files

logger = logging.getLogger(__name__)


class PromptSorter:
    """Drives one sorting run from validation to the final summary"""

    def __init__(
        self,
        options: RunOptions,
        settings: Settings,
        extractor: MetadataExtractor,
        reporter: StatusReporter,
        run_log: RunLog,
    ):
        self.options = options
        self.settings = settings
        self.extractor = extractor
        self.reporter = FallbackReporter(reporter, warn=run_log.warning)
        self.run_log = run_log
        self.tracker = WordFrequencyTracker()
        self.summary = RunSummary()
        self.state = RunState.VALIDATING
        self.classifier: Optional[FileClassifier] = None

    def run(self) -> int:
        """Execute the run; returns the process exit status"""
        try:
            self._validate()
            self._prepare()
            files = self._enumerate()
        except FatalConfigError as e:
            self.state = RunState.FAILED
            self.run_log.error(str(e))
            self.reporter.on_error(str(e))
            return 1

        self.reporter.start(self.options)
        try:
            self._scan(files)
        finally:
            self._finalize()

        self.state = RunState.DONE
        return 0

    def _validate(self):
        self.state = RunState.VALIDATING
        root = self.options.root
        if not root.exists():
            raise FatalConfigError(f"Invalid directory: '{root}' does not exist.")
        if not root.is_dir():
            raise FatalConfigError(f"Invalid directory: '{root}' is not a directory.")

    def _prepare(self):
        self.state = RunState.PREPARING
        destination = self.options.destination
        if destination is None:
            return
        try:
            destination.mkdir(exist_ok=True)
        except OSError as e:
            raise FatalConfigError(f"Error creating directory '{destination}': {e}") from e
        logger.debug(f"Destination folder ready: {destination}")

    def _enumerate(self) -> List[CandidateFile]:
        self.state = RunState.SCANNING
        try:
            return enumerate_files(self.options.root, self.options.target.recursive)
        except OSError as e:
            raise FatalConfigError(f"Could not list '{self.options.root}': {e}") from e

    def _scan(self, files: List[CandidateFile]):
        self.classifier = FileClassifier(
            extractor=self.extractor,
            tracker=self.tracker,
            reporter=self.reporter,
            search=self.options.search,
            destination=self.options.destination,
            minimum=self.options.minimum,
            stop_words=self.settings.stop_words,
            live_top_words=self.settings.live_top_words,
            run_log=self.run_log,
        )

        total = len(files)
        logger.debug(f"Scanning {total} files in {self.options.root}")
        for index, file in enumerate(files, start=1):
            self.reporter.on_progress(index, total, file)
            result = self.classifier.process(file)
            self.summary.record(result)
            self.reporter.on_file_outcome(result)

    def _finalize(self):
        self.state = RunState.FINALIZING
        self.summary.final_top_words = self.tracker.top_k(self.settings.summary_top_words)
        try:
            self.reporter.on_summary(self.summary)
        finally:
            self.reporter.stop()
