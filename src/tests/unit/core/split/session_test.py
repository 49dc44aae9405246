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

import pytest

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.exceptions import (
    CommitFailedError,
    MessageGenerationFailedError,
    NoChunksSelectedError,
    PatchApplyFailedError,
)
from aicommit.core.split.session import (
    EventType,
    SessionEvent,
    SessionState,
    SplitSession,
)


@pytest.fixture
def session():
    return SplitSession(
        [
            DiffChunk("a.py", "@@ -1 +1 @@", ("+a",)),
            DiffChunk("a.py", "@@ -9 +9 @@", ("+b",)),
            DiffChunk("b.py", "@@ -2 +2 @@", ("+c",)),
        ]
    )


def ev(event_type, index=None):
    return SessionEvent(event_type, index)


# -----------------------------------------------------------------------------
# Navigation and selection
# -----------------------------------------------------------------------------


def test_cursor_is_clamped(session):
    session.handle(ev(EventType.CURSOR_UP))
    assert session.cursor == 0

    for _ in range(5):
        session.handle(ev(EventType.CURSOR_DOWN))
    assert session.cursor == 2


def test_move_to_ignores_out_of_range(session):
    session.handle(ev(EventType.MOVE_TO, 1))
    assert session.cursor == 1
    session.handle(ev(EventType.MOVE_TO, 7))
    assert session.cursor == 1


def test_toggle_uses_cursor_by_default(session):
    session.handle(ev(EventType.CURSOR_DOWN))
    session.handle(ev(EventType.TOGGLE))
    assert session.selection.selected_indices() == [1]


def test_toggle_explicit_index(session):
    session.handle(ev(EventType.TOGGLE, 2))
    session.handle(ev(EventType.TOGGLE, 9))
    assert session.selection.selected_indices() == [2]


def test_select_all_and_invert(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.INVERT))
    assert session.selection.selected_indices() == [1, 2]

    session.handle(ev(EventType.SELECT_ALL))
    assert session.selection.selected_indices() == [0, 1, 2]


# -----------------------------------------------------------------------------
# Commit lifecycle
# -----------------------------------------------------------------------------


def test_commit_with_empty_selection_stays_in_list(session):
    assert session.handle(ev(EventType.COMMIT)) is False
    assert session.state is SessionState.LIST
    assert session.status == "No chunks selected"


def test_commit_moves_to_busy(session):
    session.handle(ev(EventType.TOGGLE, 0))
    assert session.handle(ev(EventType.COMMIT)) is True
    assert session.state is SessionState.BUSY
    assert not session.retrying


def test_events_are_ignored_while_busy(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))

    assert session.handle(ev(EventType.TOGGLE, 1)) is False
    assert session.handle(ev(EventType.COMMIT)) is False
    assert session.selection.selected_indices() == [0]


def test_complete(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))
    session.complete("feat: a")

    assert session.state is SessionState.COMMITTED
    assert session.commit_message == "feat: a"


def test_quit_while_busy_is_deferred(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))
    session.handle(ev(EventType.QUIT))
    assert session.state is SessionState.BUSY

    session.complete("feat: a")
    assert session.finished


def test_quit_from_list(session):
    session.handle(ev(EventType.QUIT))
    assert session.finished


# -----------------------------------------------------------------------------
# Failures and retry
# -----------------------------------------------------------------------------


def test_no_chunks_selected_failure_returns_to_list(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))
    session.fail(NoChunksSelectedError("No chunks selected"))

    assert session.state is SessionState.LIST
    assert session.error is None


def test_generation_failure_can_be_retried(session):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))
    session.fail(MessageGenerationFailedError("provider down"))

    assert session.state is SessionState.FAILED
    assert session.can_retry
    assert session.status.startswith("Error: [generate]")

    assert session.handle(ev(EventType.RETRY)) is True
    assert session.state is SessionState.BUSY
    assert session.retrying

    session.complete("fix: retried")
    assert session.state is SessionState.COMMITTED
    assert not session.retrying


@pytest.mark.parametrize(
    "error",
    [PatchApplyFailedError("rejected"), CommitFailedError("hook failed")],
)
def test_other_failures_cannot_be_retried(session, error):
    session.handle(ev(EventType.TOGGLE, 0))
    session.handle(ev(EventType.COMMIT))
    session.fail(error)

    assert session.state is SessionState.FAILED
    assert not session.can_retry
    assert session.handle(ev(EventType.RETRY)) is False
    assert session.state is SessionState.FAILED


def test_retry_is_ignored_outside_failed_state(session):
    assert session.handle(ev(EventType.RETRY)) is False
    assert session.state is SessionState.LIST
