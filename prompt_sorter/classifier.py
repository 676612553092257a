#!/usr/bin/env python3
"""
Per-file classification: extract prompt → count words → match → move

Never raises for a single bad file. Extraction problems become SKIPPED,
move problems become MOVE_FAILED, and the scan carries on.
"""

import logging
from pathlib import Path
from typing import AbstractSet, Optional

from prompt_sorter.constants import LIVE_TOP_WORDS, STOP_WORDS
from prompt_sorter.errors import MoveError
from prompt_sorter.extractor import MetadataExtractor
from prompt_sorter.frequency import WordFrequencyTracker, tokenize
from prompt_sorter.models import CandidateFile, FileOutcome, Outcome, TopWords
from prompt_sorter.mover import move_file
from prompt_sorter.reporter import StatusReporter
from prompt_sorter.run_log import RunLog

logger = logging.getLogger(__name__)


class FileClassifier:
    """Decide what happens to each candidate file"""

    def __init__(
        self,
        extractor: MetadataExtractor,
        tracker: WordFrequencyTracker,
        reporter: StatusReporter,
        run_log: RunLog,
        search: Optional[str] = None,
        destination: Optional[Path] = None,
        minimum: int = 0,
        stop_words: AbstractSet[str] = STOP_WORDS,
        live_top_words: int = LIVE_TOP_WORDS,
    ):
        self.extractor = extractor
        self.tracker = tracker
        self.reporter = reporter
        self.search = search
        # No destination means list-only: matches are reported, never moved
        self.destination = destination
        self.minimum = minimum
        self.stop_words = stop_words
        self.live_top_words = live_top_words
        self.run_log = run_log
        self._previous_top_words: TopWords = []

    @property
    def list_only(self) -> bool:
        return self.destination is None

    def is_match(self, text: str) -> bool:
        return self.search is None or self.search in text

    def process(self, file: CandidateFile) -> FileOutcome:
        text = self.extractor.fetch(file.path)
        if text is None:
            return FileOutcome(file, Outcome.SKIPPED, message="no metadata")

        self._count_words(text)

        if not self.is_match(text):
            return FileOutcome(file, Outcome.UNMATCHED, text=text)
        if self.list_only:
            return FileOutcome(file, Outcome.MATCHED, text=text)
        return self._move(file, text)

    def _count_words(self, text: str):
        self.tracker.record_all(tokenize(text, self.minimum, self.stop_words))

        # Only redraw when the ranking actually changed
        top_words = self.tracker.top_k(self.live_top_words)
        if top_words != self._previous_top_words:
            self.reporter.on_top_words_changed(top_words)
        self._previous_top_words = top_words

    def _move(self, file: CandidateFile, text: str) -> FileOutcome:
        try:
            result = move_file(file.path, self.destination)
        except MoveError as e:
            message = f"Error moving file '{file.path}' to '{self.destination}': {e.cause}"
            self.run_log.error(message, e.cause)
            return FileOutcome(file, Outcome.MOVE_FAILED, text=text, message=message)

        if not result.moved:
            self.run_log.warning(result.message)
            return FileOutcome(file, Outcome.MOVE_SKIPPED, text=text, message=result.message)

        return FileOutcome(file, Outcome.MOVED, text=text, message=result.message)
