#!/usr/bin/env python3
"""Candidate file enumeration for a scan root."""

import os
from pathlib import Path
from typing import List

from prompt_sorter.models import CandidateFile


def is_hidden(name: str) -> bool:
    return name.startswith('.')


def enumerate_files(root: Path, recursive: bool = False) -> List[CandidateFile]:
    """
    List the regular, non-hidden files under root.

    The whole listing is taken up front and sorted, so moving files while
    processing it cannot change what gets visited.
    """
    found = []
    if recursive:
        for dirpath, dirnames, filenames in os.walk(root):
            # Prune hidden directories in place so os.walk skips them
            dirnames[:] = [d for d in dirnames if not is_hidden(d)]
            for filename in filenames:
                path = Path(dirpath) / filename
                if not is_hidden(filename) and path.is_file():
                    found.append(path)
    else:
        for item in root.iterdir():
            if not is_hidden(item.name) and item.is_file():
                found.append(item)

    return [CandidateFile(path) for path in sorted(found)]
