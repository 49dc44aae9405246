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

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DiffChunk:
    """
    One hunk of a unified diff, belonging to one file.

    The hunk header and the body lines are kept exactly as they appeared in the
    source diff (prefix characters, trailing whitespace and empty lines
    included) so that a patch rebuilt from chunks stays byte faithful.
    `lines` never contains a "diff --git " or "@@ " line.
    """

    file_path: str
    hunk_header: str
    lines: tuple[str, ...] = field(default_factory=tuple)

    @property
    def added_count(self) -> int:
        return sum(1 for line in self.lines if line.startswith("+"))

    @property
    def removed_count(self) -> int:
        return sum(1 for line in self.lines if line.startswith("-"))

    def describe(self) -> str:
        return f"{self.file_path} {self.hunk_header} (+{self.added_count}/-{self.removed_count})"
