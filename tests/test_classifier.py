#!/usr/bin/env python3
"""
Test suite for prompt_sorter/classifier.py — match, count and move per file

Uses a fake extractor with canned prompts instead of exiftool.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from prompt_sorter.classifier import FileClassifier
from prompt_sorter.frequency import WordFrequencyTracker
from prompt_sorter.models import CandidateFile, Outcome
from prompt_sorter.run_log import RunLog


@pytest.fixture
def renders(tmp_path):
    root = tmp_path / "renders"
    root.mkdir()
    for name in ("castle.png", "forest.png", "blank.png"):
        (root / name).write_bytes(b"png")
    (root / "castles").mkdir()
    return root


@pytest.fixture
def prompts():
    return {
        "castle.png": "a castle on a hill",
        "forest.png": "a dark forest",
    }


@pytest.fixture
def build(renders, prompts, make_extractor, reporter, tmp_path):
    def _build(**kwargs):
        kwargs.setdefault("search", "castle")
        kwargs.setdefault("destination", renders / "castles")
        kwargs.setdefault("run_log", RunLog(tmp_path / "error.log"))
        return FileClassifier(
            extractor=make_extractor(prompts),
            tracker=WordFrequencyTracker(),
            reporter=reporter,
            **kwargs,
        )
    return _build


class TestOutcomes:

    def test_match_is_moved(self, build, renders):
        result = build().process(CandidateFile(renders / "castle.png"))

        assert result.outcome == Outcome.MOVED
        assert result.text == "a castle on a hill"
        assert not (renders / "castle.png").exists()
        assert (renders / "castles" / "castle.png").exists()

    def test_non_match_stays(self, build, renders):
        result = build().process(CandidateFile(renders / "forest.png"))

        assert result.outcome == Outcome.UNMATCHED
        assert (renders / "forest.png").exists()

    def test_no_metadata_is_skipped(self, build, renders):
        classifier = build()
        result = classifier.process(CandidateFile(renders / "blank.png"))

        assert result.outcome == Outcome.SKIPPED
        assert len(classifier.tracker) == 0

    def test_match_is_case_sensitive_substring(self, build, renders):
        result = build(search="Castle").process(CandidateFile(renders / "castle.png"))
        assert result.outcome == Outcome.UNMATCHED

    def test_partial_word_matches(self, build, renders):
        result = build(search="cast").process(CandidateFile(renders / "castle.png"))
        assert result.outcome == Outcome.MOVED

    def test_empty_search_matches_every_prompt(self, build, renders):
        result = build(search="").process(CandidateFile(renders / "forest.png"))
        assert result.outcome == Outcome.MOVED

    def test_list_only_never_moves(self, build, renders):
        classifier = build(search=None, destination=None)
        result = classifier.process(CandidateFile(renders / "castle.png"))

        assert result.outcome == Outcome.MATCHED
        assert (renders / "castle.png").exists()

    def test_list_only_matches_everything_with_text(self, build, renders):
        classifier = build(search=None, destination=None)
        result = classifier.process(CandidateFile(renders / "forest.png"))
        assert result.outcome == Outcome.MATCHED

    def test_already_in_destination_is_move_skipped(self, build, renders, prompts):
        sorted_file = renders / "castles" / "sorted.png"
        sorted_file.write_bytes(b"png")
        prompts["sorted.png"] = "castle again"

        result = build().process(CandidateFile(sorted_file))

        assert result.outcome == Outcome.MOVE_SKIPPED
        assert sorted_file.exists()

    def test_move_failure_is_reported_not_raised(self, build, renders, tmp_path):
        classifier = build()
        with patch("prompt_sorter.mover.os.rename", side_effect=PermissionError("denied")):
            result = classifier.process(CandidateFile(renders / "castle.png"))

        assert result.outcome == Outcome.MOVE_FAILED
        assert "denied" in result.message
        assert (renders / "castle.png").exists()
        # Words were still counted: extraction succeeded before the move
        assert classifier.tracker.counts()["castle"] == 1

    def test_move_failure_written_to_run_log(self, build, renders, tmp_path):
        run_log = RunLog(tmp_path / "moves.log").open()
        try:
            classifier = build(run_log=run_log)
            with patch("prompt_sorter.mover.os.rename", side_effect=PermissionError("denied")):
                classifier.process(CandidateFile(renders / "castle.png"))
        finally:
            run_log.close()

        assert "Error moving file" in (tmp_path / "moves.log").read_text()

    def test_run_log_is_required(self, make_extractor, reporter):
        with pytest.raises(TypeError):
            FileClassifier(extractor=make_extractor({}), tracker=WordFrequencyTracker(), reporter=reporter)


class TestWordCounting:

    def test_words_counted_for_unmatched_files(self, build, renders):
        classifier = build()
        classifier.process(CandidateFile(renders / "forest.png"))
        assert classifier.tracker.counts() == {"dark": 1, "forest": 1}

    def test_minimum_applies(self, build, renders):
        classifier = build(minimum=5)
        classifier.process(CandidateFile(renders / "forest.png"))
        assert classifier.tracker.counts() == {"forest": 1}

    def test_top_words_reported_only_on_change(self, build, renders, prompts, reporter):
        prompts["castle.png"] = "tower"
        prompts["forest.png"] = "tower"
        classifier = build(search="nothing", live_top_words=1)

        classifier.process(CandidateFile(renders / "castle.png"))
        classifier.process(CandidateFile(renders / "forest.png"))

        assert reporter.top_words == [[("tower", 1)], [("tower", 2)]]

    def test_unchanged_ranking_not_reported(self, build, renders, prompts, reporter):
        prompts["castle.png"] = "tower"
        prompts["forest.png"] = "the and of"
        classifier = build(search="nothing")

        classifier.process(CandidateFile(renders / "castle.png"))
        classifier.process(CandidateFile(renders / "forest.png"))

        assert reporter.top_words == [[("tower", 1)]]
