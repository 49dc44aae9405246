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
Classify the lines of a unified diff.

This is a single linear pass with no backtracking. It never fails: lines it
does not recognise are returned as content and it is up to the assembler to
attach or drop them.
"""

import re
from dataclasses import dataclass
from enum import Enum

FILE_BOUNDARY_PREFIX = "diff --git "
HUNK_BOUNDARY_PREFIX = "@@ "

_GIT_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")


class LineKind(Enum):
    FILE_BOUNDARY = "file"
    HUNK_BOUNDARY = "hunk"
    CONTENT = "content"


@dataclass(frozen=True)
class DiffLine:
    kind: LineKind
    raw: str
    # only set for FILE_BOUNDARY lines; "" means the path could not be resolved
    path: str = ""


def parse_file_path(diff_line: str) -> str:
    """
    Extract the file path from a "diff --git a/<old> b/<new>" line.

    When the pre-image and post-image paths are equal that path is returned,
    otherwise the post-image path wins. Returns "" when the line does not carry
    enough fields to resolve a path.
    """
    match = _GIT_HEADER_RE.match(diff_line)
    if match:
        a_path, b_path = match.group(1), match.group(2)
    else:
        parts = diff_line.split(" ")
        if len(parts) < 4:
            return ""
        a_path = parts[2].removeprefix("a/")
        b_path = parts[3].removeprefix("b/")

    if a_path == b_path:
        return a_path
    return b_path


def classify(line: str) -> DiffLine:
    if line.startswith(FILE_BOUNDARY_PREFIX):
        return DiffLine(LineKind.FILE_BOUNDARY, line, parse_file_path(line))
    if line.startswith(HUNK_BOUNDARY_PREFIX):
        return DiffLine(LineKind.HUNK_BOUNDARY, line)
    return DiffLine(LineKind.CONTENT, line)


def tokenize(diff_text: str) -> list[DiffLine]:
    """
    Turn diff text into an ordered list of typed lines.

    Only "\\n" separates lines, so carriage returns and trailing whitespace stay
    part of the line. The empty piece left behind by a terminating newline is
    not a line of the diff and is dropped.
    """
    if not diff_text:
        return []

    raw_lines = diff_text.split("\n")
    if diff_text.endswith("\n"):
        raw_lines.pop()

    return [classify(line) for line in raw_lines]
