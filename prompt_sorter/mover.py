#!/usr/bin/env python3
"""
Relocate matching files into the destination folder

Safety:
- Same resolved source and destination: skipped (file already sorted)
- Destination already taken by another file: skipped, never overwritten
- Same-filesystem: os.rename() (atomic)
- Cross-filesystem: shutil.copy2() to a temp name + verify + os.replace() + delete source
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from prompt_sorter.errors import MoveError

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """What happened to one file"""
    moved: bool
    destination: Path
    message: str


def same_filesystem(path_a: Path, path_b: Path) -> bool:
    """Check if two paths are on the same filesystem"""
    try:
        return os.stat(path_a).st_dev == os.stat(path_b).st_dev
    except OSError:
        return False


def copy_verify_delete(source: Path, dest: Path):
    """
    Cross-filesystem move: the source is only deleted after a verified copy.

    The copy lands under a hidden temporary name next to dest and is renamed
    into place once its size matches, so dest never holds a partial file.
    """
    partial = dest.with_name(f".{dest.name}.partial")
    try:
        shutil.copy2(str(source), str(partial))

        # Verify: copy exists and size matches
        if not partial.exists() or partial.stat().st_size != source.stat().st_size:
            raise OSError(f"verification failed for copy at {dest} (size mismatch or missing)")

        os.replace(partial, dest)
    except OSError:
        if partial.exists():
            partial.unlink()  # Clean up failed copy
        raise

    source.unlink()


def move_file(source: Path, destination_folder: Path) -> MoveResult:
    """
    Move source into destination_folder, keeping its basename.

    Raises:
        MoveError: the filesystem refused the move; source is left in place
    """
    dest = destination_folder / source.name

    if source.resolve() == dest.resolve():
        return MoveResult(False, dest, f"Move skipped: source and destination are the same for '{source}'.")

    if dest.exists():
        return MoveResult(False, dest, f"Move skipped: '{dest}' already exists.")

    try:
        if same_filesystem(source, destination_folder):
            os.rename(source, dest)
        else:
            logger.debug(f"Cross-filesystem move for {source}, copying")
            copy_verify_delete(source, dest)
    except OSError as e:
        raise MoveError(source, e) from e

    return MoveResult(True, dest, f"Moved '{source}' to '{destination_folder}'.")
