#!/usr/bin/env python3
"""
Status output for a sorting run

The driver talks to a StatusReporter only through its methods; what gets
drawn is up to the implementation:
- DashboardReporter: live terminal panel (rich) with progress, top words and
  the most recent file outcomes
- LogReporter: plain log lines, used with --plain, when stdout is not a
  terminal, or when the dashboard cannot start
- FallbackReporter: wraps either one and swaps in a LogReporter if the
  dashboard raises mid-run
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, List, Optional

from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from prompt_sorter.constants import RECENT_OUTCOME_LINES
from prompt_sorter.models import FileOutcome, Outcome, RunSummary, TopWords, CandidateFile

logger = logging.getLogger(__name__)

OUTCOME_STYLES = {
    Outcome.MOVED: "green",
    Outcome.MATCHED: "cyan",
    Outcome.MOVE_SKIPPED: "yellow",
    Outcome.MOVE_FAILED: "bold red",
}


def describe_run(options) -> str:
    """One-line header: '<search> => <label> <root> recursive'"""
    search = options.search if options.search is not None else '*'
    label = options.target.destination_label or '(list only)'
    header = f"{search} => {label} {options.root}"
    if options.target.recursive:
        header += " recursive"
    return header


def percentage(index: int, total: int) -> float:
    if total <= 0:
        return 100.0
    return round(index / total * 100, 2)


def outcome_line(result: FileOutcome) -> Optional[str]:
    """Text shown for a file outcome, None for outcomes not worth showing"""
    if result.outcome == Outcome.MATCHED:
        return f"File: {result.file.path} -> {result.text!r}"
    if result.outcome in (Outcome.MOVED, Outcome.MOVE_SKIPPED, Outcome.MOVE_FAILED):
        return result.message
    return None


def build_summary_table(summary: RunSummary) -> Table:
    table = Table(title="Summary", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Word")
    table.add_column("Count", justify="right")
    for index, (word, count) in enumerate(summary.final_top_words, start=1):
        table.add_row(str(index), f"'{word}'", str(count))
    return table


def print_summary(console: Console, summary: RunSummary):
    """Final report: totals followed by the numbered top words"""
    console.print()
    console.print(f"Total files processed: {summary.files_processed}")
    console.print(
        f"Matched: {summary.matched}  Moved: {summary.moved}  "
        f"Move skipped: {summary.move_skipped}  Move errors: {summary.move_errors}  "
        f"No metadata: {summary.skipped}"
    )
    if summary.final_top_words:
        console.print(f"Top {len(summary.final_top_words)} most frequently occurring words:")
        console.print(build_summary_table(summary))
    else:
        console.print("No words recorded.")


class StatusReporter(ABC):
    """Receives progress, top-word changes and per-file outcomes from the driver"""

    def start(self, options):
        """Called once before scanning"""

    def stop(self):
        """Called once after scanning, even if it failed"""

    @abstractmethod
    def on_progress(self, index: int, total: int, file: CandidateFile):
        pass

    @abstractmethod
    def on_top_words_changed(self, top_words: TopWords):
        pass

    @abstractmethod
    def on_file_outcome(self, result: FileOutcome):
        pass

    @abstractmethod
    def on_summary(self, summary: RunSummary):
        pass

    def on_error(self, message: str):
        """Errors are already in the log; reporters may also display them"""


class LogReporter(StatusReporter):
    """Plain-text reporter built on logging plus a console for list output"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def start(self, options):
        logger.info(f"Processing files: {describe_run(options)}")

    def on_progress(self, index: int, total: int, file: CandidateFile):
        logger.debug(f"[{index}/{total}] {percentage(index, total)}% {file.path}")

    def on_top_words_changed(self, top_words: TopWords):
        words = ', '.join(f"'{word}' ({count})" for word, count in top_words)
        logger.info(f"Top words: {words}")

    def on_file_outcome(self, result: FileOutcome):
        line = outcome_line(result)
        if line is None:
            return
        # Skips and failures were already logged where they happened
        if result.outcome == Outcome.MATCHED:
            self.console.print(line, markup=False)
        elif result.outcome == Outcome.MOVED:
            logger.info(line)

    def on_summary(self, summary: RunSummary):
        print_summary(self.console, summary)


class DashboardReporter(StatusReporter):
    """
    Live terminal dashboard.

    Top panel: run header, current top words and progress.
    Below: the last few file outcomes, newest at the bottom.
    """

    def __init__(self, console: Optional[Console] = None,
                 recent_lines: int = RECENT_OUTCOME_LINES):
        self.console = console or Console()
        self.header = ""
        self.top_words: TopWords = []
        self.index = 0
        self.total = 0
        self.current = ""
        self.recent = deque(maxlen=recent_lines)
        self._live: Optional[Live] = None
        self._log_handler: Optional[RichHandler] = None
        self._detached: List[logging.Handler] = []

    def start(self, options):
        self.header = describe_run(options)
        self._live = Live(
            self._render(),
            console=self.console,
            refresh_per_second=8,
            transient=False,
        )
        self._live.start()
        self._capture_logging()

    def stop(self):
        self._release_logging()
        if self._live is not None:
            self._live.stop()
            self._live = None

    def _capture_logging(self):
        """
        Route console logging through the dashboard's console.

        Plain StreamHandlers keep the stderr they were created with, so
        their lines would be drawn over the live panel. They are detached
        until stop() and a RichHandler prints above the panel instead.
        """
        root = logging.getLogger()
        self._detached = [h for h in root.handlers if type(h) is logging.StreamHandler]
        for handler in self._detached:
            root.removeHandler(handler)
        self._log_handler = RichHandler(console=self.console, show_path=False, markup=False)
        root.addHandler(self._log_handler)

    def _release_logging(self):
        root = logging.getLogger()
        if self._log_handler is not None:
            root.removeHandler(self._log_handler)
            self._log_handler = None
        for handler in self._detached:
            root.addHandler(handler)
        self._detached = []

    def _render(self) -> Group:
        words = Table.grid(padding=(0, 1))
        words.add_column()
        for word, count in self.top_words:
            words.add_row(f"'{word}' with count: {count}")

        progress = Table.grid(padding=(0, 1))
        progress.add_column(ratio=1)
        progress.add_column(justify="right")
        progress.add_row(
            ProgressBar(total=max(self.total, 1), completed=self.index),
            f"{percentage(self.index, self.total)}%",
        )

        top = Panel(
            Group(words, progress, Text(self.current, overflow="ellipsis", no_wrap=True)),
            title=Text(self.header, overflow="ellipsis"),
            title_align="left",
        )

        log = Text()
        for line, style in self.recent:
            log.append(line + "\n", style=style)
        return Group(top, log)

    def _refresh(self):
        if self._live is not None:
            self._live.update(self._render())

    def on_progress(self, index: int, total: int, file: CandidateFile):
        self.index = index
        self.total = total
        self.current = str(file.path)
        self._refresh()

    def on_top_words_changed(self, top_words: TopWords):
        self.top_words = list(top_words)
        self._refresh()

    def on_file_outcome(self, result: FileOutcome):
        line = outcome_line(result)
        if line is None:
            return
        self.recent.append((line, OUTCOME_STYLES.get(result.outcome, "")))
        self._refresh()

    def on_error(self, message: str):
        self.recent.append((message, "bold red"))
        self._refresh()

    def on_summary(self, summary: RunSummary):
        self.stop()
        print_summary(self.console, summary)


class FallbackReporter(StatusReporter):
    """
    Forwards every call to the active reporter. The first time it raises,
    a LogReporter takes over and the call is repeated there, so a broken
    terminal never ends the run.
    """

    def __init__(self, primary: StatusReporter, warn: Callable[[str], None] = logger.warning):
        self.active = primary
        self.warn = warn
        self.fell_back = False
        self._options = None

    def _call(self, name: str, *args):
        try:
            getattr(self.active, name)(*args)
        except Exception as e:
            if self.fell_back:
                raise
            self._fall_back(name, e)
            getattr(self.active, name)(*args)

    def _fall_back(self, name: str, error: Exception):
        self.warn(f"Dashboard failed ({error}), falling back to log output")
        broken, self.active = self.active, LogReporter()
        self.fell_back = True
        try:
            broken.stop()
        except Exception as e:
            logger.warning(f"Could not stop the failed dashboard: {e}")
        if name != 'start' and self._options is not None:
            self.active.start(self._options)

    def start(self, options):
        self._options = options
        self._call('start', options)

    def stop(self):
        self._call('stop')

    def on_progress(self, index: int, total: int, file: CandidateFile):
        self._call('on_progress', index, total, file)

    def on_top_words_changed(self, top_words: TopWords):
        self._call('on_top_words_changed', top_words)

    def on_file_outcome(self, result: FileOutcome):
        self._call('on_file_outcome', result)

    def on_summary(self, summary: RunSummary):
        self._call('on_summary', summary)

    def on_error(self, message: str):
        self._call('on_error', message)


def make_reporter(plain: bool = False, console: Optional[Console] = None) -> StatusReporter:
    """Dashboard on a real terminal, plain logging everywhere else"""
    console = console or Console()
    if plain or not console.is_terminal:
        return LogReporter(console)
    return DashboardReporter(console)
