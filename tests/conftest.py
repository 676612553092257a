"""
Shared test doubles: a canned-text extractor and a reporter that records calls
"""

import sys
from pathlib import Path
from typing import Dict, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from prompt_sorter.extractor import MetadataExtractor
from prompt_sorter.reporter import StatusReporter


class FakeExtractor(MetadataExtractor):
    """Returns prompts by basename; unknown files have no metadata"""

    def __init__(self, prompts: Dict[str, Optional[str]]):
        self.prompts = prompts
        self.calls = []

    def fetch(self, path: Path) -> Optional[str]:
        self.calls.append(path)
        return self.prompts.get(path.name)


class RecordingReporter(StatusReporter):
    """Keeps every call so tests can assert on the update contract"""

    def __init__(self):
        self.started = None
        self.stopped = False
        self.progress = []
        self.top_words = []
        self.outcomes = []
        self.summaries = []
        self.errors = []

    def start(self, options):
        self.started = options

    def stop(self):
        self.stopped = True

    def on_progress(self, index, total, file):
        self.progress.append((index, total, file))

    def on_top_words_changed(self, top_words):
        self.top_words.append(list(top_words))

    def on_file_outcome(self, result):
        self.outcomes.append(result)

    def on_summary(self, summary):
        self.summaries.append(summary)

    def on_error(self, message):
        self.errors.append(message)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def make_extractor():
    return FakeExtractor
