#!/usr/bin/env python3
"""
Configuration for a sorting run

Two sources:
- sorter_config.yaml: tool settings (exiftool location, timeout, display sizes)
- command line: what to scan, what to search for, where matches go

Both are turned into immutable records once, at startup.
"""

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Tuple

import yaml

from prompt_sorter.constants import (
    DEFAULT_CONFIG_PATH, DEFAULT_ERROR_LOG, DEFAULT_EXIFTOOL,
    DEFAULT_EXIFTOOL_ARGS, DEFAULT_PROMPT_FIELD, DEFAULT_TIMEOUT,
    EXIFTOOL_ENV_VAR, LIVE_TOP_WORDS, STOP_WORDS, SUMMARY_TOP_WORDS,
)
from prompt_sorter.errors import FatalConfigError
from prompt_sorter.models import ScanTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Tool settings loaded from the YAML settings file"""
    exiftool_path: str = DEFAULT_EXIFTOOL
    exiftool_args: Tuple[str, ...] = DEFAULT_EXIFTOOL_ARGS
    prompt_field: str = DEFAULT_PROMPT_FIELD
    timeout: float = DEFAULT_TIMEOUT
    live_top_words: int = LIVE_TOP_WORDS
    summary_top_words: int = SUMMARY_TOP_WORDS
    error_log: Path = Path(DEFAULT_ERROR_LOG)
    extra_stop_words: Tuple[str, ...] = ()

    @property
    def stop_words(self) -> FrozenSet[str]:
        return STOP_WORDS | {w.lower() for w in self.extra_stop_words}


def _expect(key: str, value, kinds, description: str):
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise FatalConfigError(f"Setting '{key}' must be {description}, got {value!r}")
    return value


def _string_list(key: str, value) -> Tuple[str, ...]:
    _expect(key, value, list, "a list of strings")
    for item in value:
        _expect(key, item, str, "a list of strings")
    return tuple(value)


def load_settings(config_path: Optional[Path]) -> Settings:
    """
    Load settings from YAML, falling back to defaults for anything missing.

    A missing file is not an error: the tool runs on built-in defaults.
    Malformed YAML or wrongly typed values raise FatalConfigError.
    """
    data = {}
    if config_path is not None and config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise FatalConfigError(f"Could not read settings file '{config_path}': {e}") from e
        if not isinstance(data, dict):
            raise FatalConfigError(f"Settings file '{config_path}' must contain a mapping")
        logger.debug(f"Loaded settings from {config_path}")
    elif config_path is not None:
        logger.debug(f"No settings file at {config_path}, using defaults")

    known = set(Settings.__dataclass_fields__)
    for key in sorted(set(data) - known):
        logger.warning(f"Ignoring unknown setting '{key}' in {config_path}")

    kwargs = {}
    if 'exiftool_path' in data:
        kwargs['exiftool_path'] = _expect('exiftool_path', data['exiftool_path'], str, "a string")
    if 'exiftool_args' in data:
        kwargs['exiftool_args'] = _string_list('exiftool_args', data['exiftool_args'])
    if 'prompt_field' in data:
        kwargs['prompt_field'] = _expect('prompt_field', data['prompt_field'], str, "a string")
    if 'timeout' in data:
        timeout = _expect('timeout', data['timeout'], (int, float), "a number")
        if timeout <= 0:
            raise FatalConfigError(f"Setting 'timeout' must be positive, got {timeout}")
        kwargs['timeout'] = float(timeout)
    for key in ('live_top_words', 'summary_top_words'):
        if key in data:
            count = _expect(key, data[key], int, "an integer")
            if count < 0:
                raise FatalConfigError(f"Setting '{key}' must not be negative, got {count}")
            kwargs[key] = count
    if 'error_log' in data:
        kwargs['error_log'] = Path(_expect('error_log', data['error_log'], str, "a string"))
    if 'extra_stop_words' in data:
        kwargs['extra_stop_words'] = _string_list('extra_stop_words', data['extra_stop_words'])

    # Environment wins over the file, same as any other tool path override
    env_exiftool = os.getenv(EXIFTOOL_ENV_VAR)
    if env_exiftool:
        kwargs['exiftool_path'] = env_exiftool

    return Settings(**kwargs)


@dataclass(frozen=True)
class RunOptions:
    """Everything the command line decided for one run"""
    target: ScanTarget
    search: Optional[str] = None
    minimum: int = 0
    list_only: bool = False
    plain: bool = False
    config_path: Path = Path(DEFAULT_CONFIG_PATH)
    error_log: Optional[Path] = None

    @property
    def root(self) -> Path:
        return self.target.root_path

    @property
    def destination(self) -> Optional[Path]:
        if self.list_only:
            return None
        return self.target.destination


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sort-prompts',
        description='Move images whose embedded prompt contains a search string into a labeled folder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sort-prompts ~/renders --search castle --label castles
  sort-prompts ~/renders --search "red dragon" --label dragons --recursive
  sort-prompts ~/renders --list --minimum 4
        """
    )
    parser.add_argument('directory', nargs='*',
                        help='Directory to scan (exactly one)')
    parser.add_argument('--search', metavar='STRING',
                        help='Substring to look for in the prompt (required unless --list)')
    parser.add_argument('--label', metavar='STRING',
                        help='Folder created under the directory for matches (required unless --list)')
    parser.add_argument('--minimum', metavar='N', type=int, default=0,
                        help='Minimum word length counted in word frequencies (default: 0)')
    parser.add_argument('--list', action='store_true', dest='list_only',
                        help='List prompts without moving files')
    parser.add_argument('--recursive', action='store_true',
                        help='Descend into subdirectories')
    parser.add_argument('--config', type=Path, default=Path(DEFAULT_CONFIG_PATH),
                        help=f'Settings file (default: {DEFAULT_CONFIG_PATH})')
    parser.add_argument('--plain', action='store_true',
                        help='Plain log output instead of the live dashboard')
    parser.add_argument('--error-log', type=Path, default=None,
                        help='Error log path (default: from settings)')
    return parser


def _validate_label(parser: argparse.ArgumentParser, label: str):
    if label in ('', '.', '..') or os.sep in label or (os.altsep and os.altsep in label):
        parser.error(f"'--label' must be a plain folder name, got {label!r}")


def parse_args(argv: Optional[Sequence[str]] = None) -> RunOptions:
    """
    Parse and validate the command line.

    Usage errors go through argparse (usage on stderr, exit status 2) and
    happen before the directory is looked at.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    directories: List[str] = args.directory
    if len(directories) != 1:
        parser.error("Specify exactly one directory.")

    if args.list_only and args.search is not None:
        parser.error("'--search' is incompatible with '--list'.")
    if not args.list_only and (args.search is None or args.label is None):
        parser.error("'--label' and '--search' arguments are required unless '--list' is specified with a directory.")
    if args.minimum < 0:
        parser.error("'--minimum' must not be negative.")
    if args.label is not None:
        _validate_label(parser, args.label)

    root = Path(os.path.abspath(os.path.expanduser(directories[0])))
    target = ScanTarget(
        root_path=root,
        recursive=args.recursive,
        destination_label=None if args.list_only else args.label,
    )
    return RunOptions(
        target=target,
        search=args.search,
        minimum=args.minimum,
        list_only=args.list_only,
        plain=args.plain,
        config_path=args.config,
        error_log=args.error_log,
    )
