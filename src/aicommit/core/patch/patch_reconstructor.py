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

from collections.abc import Sequence

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.selection.selection_set import SelectionSet


def file_header(path: str) -> str:
    """
    Header block emitted in front of a file's hunks.

    Pre-image and post-image paths are always the same here: rename and mode
    change headers are not reconstructed.
    """
    return f"diff --git a/{path} b/{path}\n--- a/{path}\n+++ b/{path}\n"


def render_chunk(chunk: DiffChunk) -> str:
    return chunk.hunk_header + "\n" + "".join(line + "\n" for line in chunk.lines)


def reconstruct(
    chunks: Sequence[DiffChunk],
    selection: SelectionSet,
    group_by_file: bool = False,
) -> str:
    """
    Build a patch containing only the selected chunks, in chunk order.

    By default every hunk gets its own file header, even several hunks of the
    same file; git apply treats each header/hunk pair on its own. With
    group_by_file, consecutive selected hunks of one file share a header.
    Hunk headers are copied verbatim and never renumbered.

    Returns "" when nothing is selected.
    """
    parts: list[str] = []
    previous_path: str | None = None

    for index in selection.selected_indices():
        if index >= len(chunks):
            continue
        chunk = chunks[index]
        if not group_by_file or chunk.file_path != previous_path:
            parts.append(file_header(chunk.file_path))
        parts.append(render_chunk(chunk))
        previous_path = chunk.file_path

    patch = "".join(parts)
    if not patch.strip():
        return ""
    return patch
