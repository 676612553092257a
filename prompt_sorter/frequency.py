#!/usr/bin/env python3
"""Word frequency tracking across the prompts seen during a run."""

from collections import Counter
from typing import AbstractSet, Dict, List, Optional

from prompt_sorter.constants import STOP_WORDS
from prompt_sorter.models import TopWords


def tokenize(text: Optional[str], minimum: int = 0,
             stop_words: AbstractSet[str] = STOP_WORDS) -> List[str]:
    """
    Split a prompt on whitespace into countable words.

    Words are lower-cased. Stop-words and words shorter than `minimum`
    are dropped.
    """
    words = []
    for token in (text or '').split():
        word = token.lower()
        if word in stop_words:
            continue
        if minimum and len(word) < minimum:
            continue
        words.append(word)
    return words


class WordFrequencyTracker:
    """Running word counts for one run; counts only ever go up"""

    def __init__(self):
        # Counter keeps first-seen order, which makes ties in top_k stable
        self._counts: Counter = Counter()

    def record(self, word: str):
        self._counts[word] += 1

    def record_all(self, words: List[str]):
        for word in words:
            self.record(word)

    def top_k(self, k: int) -> TopWords:
        """Most frequent words, count descending, ties in first-seen order"""
        if k <= 0:
            return []
        ranked = sorted(self._counts.items(), key=lambda item: -item[1])
        return ranked[:k]

    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)
