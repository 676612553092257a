#!/usr/bin/env python3
"""
sort_prompts.py - Sort AI-generated images by the prompt in their metadata

Reads each image's Generation_data with exiftool and moves every image whose
prompt contains the search string into <directory>/<label>/. While it runs,
a live dashboard shows the most common words across all prompts seen.

Safety:
- Options are validated before the directory is touched
- Files are moved with os.rename() (or copy + verify + delete across devices)
- A file already in place, or a name already taken, is skipped, never overwritten
- Errors are appended to the error log with a timestamp
"""

import logging
import sys
from typing import Optional, Sequence

from prompt_sorter.config import load_settings, parse_args
from prompt_sorter.driver import PromptSorter
from prompt_sorter.errors import FatalConfigError
from prompt_sorter.extractor import ExifToolExtractor
from prompt_sorter.reporter import make_reporter
from prompt_sorter.run_log import RunLog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    options = parse_args(argv)

    try:
        settings = load_settings(options.config_path)
    except FatalConfigError as e:
        logger.error(str(e))
        return 1

    error_log = options.error_log or settings.error_log
    with RunLog(error_log) as run_log:
        sorter = PromptSorter(
            options=options,
            settings=settings,
            extractor=ExifToolExtractor.from_settings(settings),
            reporter=make_reporter(plain=options.plain),
            run_log=run_log,
        )
        return sorter.run()


if __name__ == '__main__':
    sys.exit(main())
