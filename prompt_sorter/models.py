#!/usr/bin/env python3
"""
Data containers passed between the scanner stages
"""

from dataclasses import dataclass, field
from enum import Enum, unique
from pathlib import Path
from typing import List, Optional, Tuple

TopWords = List[Tuple[str, int]]


@dataclass(frozen=True)
class ScanTarget:
    """Directory to scan and the label of the folder matches are moved into"""
    root_path: Path
    recursive: bool = False
    destination_label: Optional[str] = None

    @property
    def destination(self) -> Optional[Path]:
        if not self.destination_label:
            return None
        return self.root_path / self.destination_label


@dataclass(frozen=True)
class CandidateFile:
    """A regular, non-hidden file found during enumeration"""
    path: Path

    @property
    def basename(self) -> str:
        return self.path.name


@unique
class Outcome(str, Enum):
    SKIPPED = "skipped"            # no usable metadata
    UNMATCHED = "unmatched"
    MATCHED = "matched"            # list-only mode, nothing moved
    MOVED = "moved"
    MOVE_SKIPPED = "move_skipped"  # same path, or destination occupied
    MOVE_FAILED = "move_failed"


@dataclass
class FileOutcome:
    """Result of processing one candidate file"""
    file: CandidateFile
    outcome: Outcome
    text: Optional[str] = None
    message: str = ""


@dataclass
class RunSummary:
    """Totals reported once the scan completes"""
    files_processed: int = 0
    final_top_words: TopWords = field(default_factory=list)
    matched: int = 0
    moved: int = 0
    skipped: int = 0
    move_skipped: int = 0
    move_errors: int = 0

    def record(self, result: FileOutcome):
        """Fold one file's outcome into the running totals"""
        self.files_processed += 1
        if result.outcome == Outcome.SKIPPED:
            self.skipped += 1
            return
        if result.outcome == Outcome.UNMATCHED:
            return

        self.matched += 1
        if result.outcome == Outcome.MOVED:
            self.moved += 1
        elif result.outcome == Outcome.MOVE_SKIPPED:
            self.move_skipped += 1
        elif result.outcome == Outcome.MOVE_FAILED:
            self.move_errors += 1


@unique
class RunState(str, Enum):
    VALIDATING = "validating"
    PREPARING = "preparing"
    SCANNING = "scanning"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"
