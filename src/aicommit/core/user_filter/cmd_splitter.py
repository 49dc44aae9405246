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

from collections.abc import Callable

import typer
from loguru import logger
from rich.console import Console

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.exceptions import PartialCommitError
from aicommit.core.patch.patch_reconstructor import file_header, render_chunk
from aicommit.core.split.session import (
    EventType,
    SessionEvent,
    SessionState,
    SplitSession,
)
from aicommit.core.ui.theme import print_patch_cleanly, themed
from aicommit.pipelines.partial_commit import (
    PartialCommitOrchestrator,
    PartialCommitResult,
)

HELP_TEXT = (
    "[space/t] toggle  [number] jump  [j/k] move  [a] select all  "
    "[i] invert  [p] preview  [c] commit  [q] quit"
)

_KEY_EVENTS = {
    "k": EventType.CURSOR_UP,
    "up": EventType.CURSOR_UP,
    "j": EventType.CURSOR_DOWN,
    "down": EventType.CURSOR_DOWN,
    "t": EventType.TOGGLE,
    " ": EventType.TOGGLE,
    "a": EventType.SELECT_ALL,
    "i": EventType.INVERT,
    "c": EventType.COMMIT,
    "r": EventType.RETRY,
    "q": EventType.QUIT,
    "esc": EventType.QUIT,
}


def parse_command(raw: str) -> SessionEvent | None:
    """
    Map one line of user input to a session event.

    A bare number moves the cursor to that chunk (1-based, as displayed);
    an empty line toggles the chunk under the cursor.
    """
    if raw == "" or raw == " ":
        return SessionEvent(EventType.TOGGLE)

    command = raw.strip().lower()
    if command.isdigit():
        return SessionEvent(EventType.MOVE_TO, int(command) - 1)
    if command.startswith("t ") and command[2:].strip().isdigit():
        return SessionEvent(EventType.TOGGLE, int(command[2:].strip()) - 1)

    event_type = _KEY_EVENTS.get(command)
    if event_type is None:
        return None
    return SessionEvent(event_type)


def format_chunk_row(index: int, chunk: DiffChunk, selected: bool, focused: bool) -> str:
    marker = themed("cursor", ">") if focused else " "
    box = themed("selected", "[x]") if selected else "[ ]"
    counts = f"{themed('diff_added', f'+{chunk.added_count}')}/{themed('diff_removed', f'-{chunk.removed_count}')}"
    return (
        f"{marker} {box} {index + 1:>3}. {themed('path', chunk.file_path)}  "
        f"{themed('diff_hunk', chunk.hunk_header)}  {counts}"
    )


class TerminalSplitter:
    """
    Terminal front-end of a SplitSession.

    Reads one command per line, turns it into a session event and renders the
    chunk list. While the commit pipeline runs a spinner is shown; the
    pipeline itself runs synchronously.
    """

    def __init__(
        self,
        session: SplitSession,
        orchestrator: PartialCommitOrchestrator,
        read_command: Callable[[], str] | None = None,
        console: Console | None = None,
    ):
        self.session = session
        self.orchestrator = orchestrator
        self.read_command = read_command or self._prompt
        self.console = console or Console()
        self.show_preview = False

    @staticmethod
    def _prompt() -> str:
        return typer.prompt("Command", default="", show_default=False)

    def run(self) -> PartialCommitResult | None:
        """Run the session until the user quits or a commit is made."""
        result = None
        while not self.session.finished:
            self.render()

            if self.session.state is SessionState.COMMITTED:
                break

            raw = self.read_command()
            if raw.strip().lower() == "p":
                self.show_preview = not self.show_preview
                continue

            event = parse_command(raw)
            if event is None:
                self.session.status = f"Unknown command: {raw.strip()}"
                continue

            if self.session.handle(event):
                result = self._run_pipeline()
            elif event.type is EventType.QUIT:
                logger.info("Split session closed without committing")

        return result

    def _run_pipeline(self) -> PartialCommitResult | None:
        session = self.session
        with self.console.status(session.status):
            try:
                if session.retrying:
                    result = self.orchestrator.retry_message_and_commit()
                else:
                    result = self.orchestrator.commit_selected(
                        session.chunks, session.selection
                    )
            except PartialCommitError as e:
                logger.debug(f"Partial commit failed at step {e.step}: {e.details}")
                session.fail(e)
                return None

        session.complete(result.message)
        return result

    def render(self) -> None:
        session = self.session

        if session.state is SessionState.COMMITTED:
            print(themed("success", session.status))
            print(themed("primary", "Commit message:"))
            print(session.commit_message)
            return

        if session.state is SessionState.FAILED:
            print(themed("error", session.status))
            if session.error is not None and session.error.details:
                print(themed("muted", session.error.details))
            if session.can_retry:
                print(
                    themed(
                        "info",
                        "The selected chunks are still staged. Press [r] to retry message generation or [q] to quit.",
                    )
                )
            else:
                print(themed("info", "Press [q] to quit."))
            return

        print(
            themed(
                "primary",
                f"Select chunks to commit ({session.selection.count()}/{len(session.chunks)} selected)",
            )
        )
        for index, chunk in enumerate(session.chunks):
            print(
                format_chunk_row(
                    index,
                    chunk,
                    session.selection.is_selected(index),
                    index == session.cursor,
                )
            )

        if self.show_preview and session.chunks:
            chunk = session.chunks[session.cursor]
            print_patch_cleanly(file_header(chunk.file_path) + render_chunk(chunk), max_lines=40)

        print(themed("muted", HELP_TEXT))
        if session.status:
            print(themed("info", session.status))
            session.status = ""
