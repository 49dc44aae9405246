# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Filters applied to staged diff text before it is tokenized.

All of them work on whole file blocks (a "diff --git " line up to the next one) and
leave the text of every kept block untouched.
"""

import re
from collections.abc import Iterable

from aicommit.core.diff.tokenizer import FILE_BOUNDARY_PREFIX, parse_file_path


def _lines_with_ends(text: str) -> list[str]:
    lines = [line + "\n" for line in text.split("\n")]
    # the last piece has no newline of its own
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def split_file_blocks(diff_text: str) -> list[str]:
    """Split diff text into file blocks. Text before the first header is its own block."""
    blocks: list[str] = []
    current: list[str] = []

    for line in _lines_with_ends(diff_text):
        if line.startswith(FILE_BOUNDARY_PREFIX) and current:
            blocks.append("".join(current))
            current = []
        current.append(line)

    if current:
        blocks.append("".join(current))
    return blocks


def is_binary_block(block: str) -> bool:
    for line in block.split("\n"):
        if line.startswith("@@ "):
            # hunks only appear for text changes
            return False
        if line.startswith("Binary files ") or line == "GIT binary patch":
            return True
    return False


def filter_binary_files(diff_text: str) -> str:
    return "".join(b for b in split_file_blocks(diff_text) if not is_binary_block(b))


def lock_file_pattern(lock_files: Iterable[str]) -> re.Pattern | None:
    names = [re.escape(name) for name in lock_files if name]
    if not names:
        return None
    return re.compile(rf"^diff --git a/(.*/)?({'|'.join(names)})( |$)")


def filter_lock_files(diff_text: str, lock_files: Iterable[str]) -> str:
    """Drop the blocks of files whose name is one of lock_files, in any directory."""
    pattern = lock_file_pattern(lock_files)
    if pattern is None:
        return diff_text
    return "".join(
        b for b in split_file_blocks(diff_text) if not pattern.match(b)
    )


FILE_LEVEL_MARKERS = ("new file mode ", "deleted file mode ", "rename from ", "copy from ")


def has_file_level_change(block: str) -> bool:
    """True for blocks that add, delete, rename or copy a file."""
    for line in block.split("\n"):
        if line.startswith("@@ "):
            return False
        if line.startswith(FILE_LEVEL_MARKERS):
            return True
    return False


def split_file_level_changes(diff_text: str) -> tuple[str, list[str]]:
    """
    Separate the blocks of added, deleted, renamed or copied files.

    Returns the remaining diff text and the separated blocks, in order.
    """
    kept: list[str] = []
    separated: list[str] = []
    for block in split_file_blocks(diff_text):
        if has_file_level_change(block):
            separated.append(block)
        else:
            kept.append(block)
    return "".join(kept), separated


def block_path(block: str) -> str:
    return parse_file_path(block.split("\n", 1)[0])
