#!/usr/bin/env python3
"""
Shared constants for prompt sorting

Single source of truth for stop-words, exiftool defaults and display sizes.
"""

# Common English words excluded from word-frequency tracking.
# Compared against lower-cased tokens.
STOP_WORDS = frozenset([
    'the', 'be', 'to', 'of', 'and', 'a', 'in', 'that', 'have', 'i',
    'it', 'for', 'not', 'on', 'with', 'he', 'as', 'you', 'do', 'at',
    'this', 'but', 'his', 'by', 'from', 'they', 'we', 'say', 'her', 'she',
    'or', 'an', 'will', 'my', 'one', 'all', 'would', 'there', 'their', 'what',
    'so', 'up', 'out', 'if', 'about', 'who', 'get', 'which', 'go', 'me',
    'when', 'make', 'can', 'like', 'time', 'no', 'just', 'him', 'know', 'take',
    'person', 'into', 'year', 'your', 'good', 'some', 'could', 'them', 'see', 'other',
    'than', 'then', 'now', 'look', 'only', 'come', 'its', 'over', 'think', 'also',
    'back', 'after', 'use', 'two', 'how', 'our', 'work', 'first', 'well', 'way',
    'even', 'new', 'want', 'because', 'any', 'these', 'give', 'day', 'most', 'us',
    'is', 'are', 'was', 'were',
])

# exiftool invocation: -s3 prints bare values, -u extracts unknown tags,
# Generation_data is the JSON blob written by image generators
DEFAULT_EXIFTOOL = 'exiftool'
EXIFTOOL_ENV_VAR = 'PROMPT_SORTER_EXIFTOOL'
DEFAULT_EXIFTOOL_ARGS = ('-s3', '-u', '-Generation_data')
DEFAULT_PROMPT_FIELD = 'prompt'
DEFAULT_TIMEOUT = 5.0

# Dashboard shows fewer words than the final summary
LIVE_TOP_WORDS = 8
SUMMARY_TOP_WORDS = 10
RECENT_OUTCOME_LINES = 12

DEFAULT_CONFIG_PATH = 'sorter_config.yaml'
DEFAULT_ERROR_LOG = 'error.log'
