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
State of one interactive splitting session.

The session is a sequential reactor: the presentation layer feeds it one
event at a time and renders whatever state it ends up in. It does no I/O of
its own; when a commit is requested it moves to BUSY and the presentation
layer runs the partial commit pipeline, then reports back through
complete() or fail().
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.exceptions import (
    MessageGenerationFailedError,
    NoChunksSelectedError,
    PartialCommitError,
)
from aicommit.core.selection.selection_set import SelectionSet


class SessionState(Enum):
    LIST = "list"
    BUSY = "busy"
    COMMITTED = "committed"
    FAILED = "failed"
    QUIT = "quit"


class EventType(Enum):
    CURSOR_UP = "up"
    CURSOR_DOWN = "down"
    MOVE_TO = "move"
    TOGGLE = "toggle"
    SELECT_ALL = "select_all"
    INVERT = "invert"
    COMMIT = "commit"
    RETRY = "retry"
    QUIT = "quit"


@dataclass(frozen=True)
class SessionEvent:
    type: EventType
    index: int | None = None


class SplitSession:
    def __init__(self, chunks: Sequence[DiffChunk]):
        self.chunks = list(chunks)
        self.selection = SelectionSet(len(self.chunks))
        self.cursor = 0
        self.state = SessionState.LIST
        self.status = ""
        self.commit_message: str | None = None
        self.error: PartialCommitError | None = None
        # a busy run is retrying message generation, not committing a new selection
        self.retrying = False
        self._quit_requested = False

    @property
    def can_retry(self) -> bool:
        return self.state is SessionState.FAILED and isinstance(
            self.error, MessageGenerationFailedError
        )

    @property
    def finished(self) -> bool:
        return self.state is SessionState.QUIT

    def handle(self, event: SessionEvent) -> bool:
        """
        Apply one input event.

        Returns True when the event asks the caller to run the commit pipeline
        (the session is now BUSY).
        """
        if event.type is EventType.QUIT:
            if self.state is SessionState.BUSY:
                # the pipeline cannot be interrupted; quit once it reports back
                self._quit_requested = True
            else:
                self.state = SessionState.QUIT
            return False

        if self.state is SessionState.LIST:
            return self._handle_list_event(event)

        if self.state is SessionState.FAILED and event.type is EventType.RETRY:
            if self.can_retry:
                self.state = SessionState.BUSY
                self.retrying = True
                self.status = "Retrying commit message generation..."
                return True

        return False

    def _handle_list_event(self, event: SessionEvent) -> bool:
        if event.type is EventType.CURSOR_UP:
            self.cursor = max(0, self.cursor - 1)
        elif event.type is EventType.CURSOR_DOWN:
            self.cursor = min(max(len(self.chunks) - 1, 0), self.cursor + 1)
        elif event.type is EventType.MOVE_TO:
            if event.index is not None and 0 <= event.index < len(self.chunks):
                self.cursor = event.index
        elif event.type is EventType.TOGGLE:
            index = self.cursor if event.index is None else event.index
            if 0 <= index < len(self.chunks):
                self.selection.toggle(index)
        elif event.type is EventType.SELECT_ALL:
            self.selection.select_all()
        elif event.type is EventType.INVERT:
            self.selection.toggle_all()
        elif event.type is EventType.COMMIT:
            if not self.selection.count():
                self.status = "No chunks selected"
                return False
            self.state = SessionState.BUSY
            self.retrying = False
            self.status = "Committing selected chunks..."
            return True
        return False

    def complete(self, commit_message: str) -> None:
        self.commit_message = commit_message
        self.error = None
        self.status = "Selected chunks committed successfully!"
        self.state = SessionState.COMMITTED
        self._finish_busy()

    def fail(self, error: PartialCommitError) -> None:
        if isinstance(error, NoChunksSelectedError):
            # recoverable: back to the list, nothing changed
            self.status = error.message
            self.state = SessionState.LIST
        else:
            self.error = error
            self.status = f"Error: {error.message}"
            self.state = SessionState.FAILED
        self._finish_busy()

    def _finish_busy(self) -> None:
        self.retrying = False
        if self._quit_requested:
            self.state = SessionState.QUIT
