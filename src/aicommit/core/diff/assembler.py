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

from collections.abc import Iterable
from enum import Enum

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.diff.tokenizer import DiffLine, LineKind, tokenize


class AssemblerState(Enum):
    IDLE = "idle"  # no file seen yet
    IN_FILE = "in_file"  # file boundary seen, no hunk open
    IN_HUNK = "in_hunk"  # hunk open, collecting content lines


class ChunkAssembler:
    """
    Group a stream of classified diff lines into one DiffChunk per hunk.

    Content lines are attached to the most recently opened hunk. Content seen
    while no hunk is open (index, ---, +++, mode lines) is file metadata and is
    dropped. A file block without any hunk therefore yields no chunk at all.
    Output order is source order, which makes chunk indices stable.
    """

    def __init__(self):
        self.state = AssemblerState.IDLE
        self.current_path = ""
        self._header: str | None = None
        self._lines: list[str] = []
        self._chunks: list[DiffChunk] = []

    def feed(self, line: DiffLine) -> None:
        if line.kind is LineKind.FILE_BOUNDARY:
            self._finalize()
            if line.path:
                self.current_path = line.path
            self.state = AssemblerState.IN_FILE
        elif line.kind is LineKind.HUNK_BOUNDARY:
            self._finalize()
            self._header = line.raw
            self._lines = []
            self.state = AssemblerState.IN_HUNK
        elif self.state is AssemblerState.IN_HUNK:
            self._lines.append(line.raw)

    def finish(self) -> list[DiffChunk]:
        self._finalize()
        chunks = self._chunks
        self._chunks = []
        return chunks

    def _finalize(self) -> None:
        if self._header is None:
            return
        self._chunks.append(
            DiffChunk(
                file_path=self.current_path,
                hunk_header=self._header,
                lines=tuple(self._lines),
            )
        )
        self._header = None
        self._lines = []


def assemble(lines: Iterable[DiffLine]) -> list[DiffChunk]:
    assembler = ChunkAssembler()
    for line in lines:
        assembler.feed(line)
    return assembler.finish()


def parse_diff_to_chunks(diff_text: str) -> list[DiffChunk]:
    """Tokenize and assemble a unified diff into its hunks."""
    return assemble(tokenize(diff_text))
