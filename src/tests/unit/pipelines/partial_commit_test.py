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
    AIServiceError,
    CommitFailedError,
    GitError,
    MessageGenerationFailedError,
    NoChunksSelectedError,
    PatchApplyFailedError,
)
from aicommit.core.git_commands.git_commands import GitOutcome
from aicommit.core.selection.selection_set import SelectionSet
from aicommit.pipelines.partial_commit import PartialCommitOrchestrator


class FakeRepository:
    def __init__(self, staged_diff="staged diff", apply_outcome=None, commit_outcome=None):
        self.staged_diff = staged_diff
        self.apply_outcome = apply_outcome or GitOutcome(True)
        self.commit_outcome = commit_outcome or GitOutcome(True)
        self.calls = []

    def get_staged_diff(self):
        self.calls.append("get_staged_diff")
        if isinstance(self.staged_diff, Exception):
            raise self.staged_diff
        return self.staged_diff

    def apply_patch(self, patch_text):
        self.calls.append(("apply_patch", patch_text))
        if isinstance(self.apply_outcome, Exception):
            raise self.apply_outcome
        return self.apply_outcome

    def commit(self, message):
        self.calls.append(("commit", message))
        if isinstance(self.commit_outcome, Exception):
            raise self.commit_outcome
        return self.commit_outcome


class FakeGenerator:
    def __init__(self, message="feat: add things", error=None):
        self.message = message
        self.error = error
        self.diffs = []

    def generate(self, diff_text):
        self.diffs.append(diff_text)
        if self.error is not None:
            raise self.error
        return self.message


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def chunks():
    return [
        DiffChunk("x.txt", "@@ -1 +1 @@", ("-a", "+b")),
        DiffChunk("y.txt", "@@ -5 +5 @@", ("-c", "+d")),
    ]


def selection_of(chunks, *indices):
    return SelectionSet(len(chunks), set(indices))


# -----------------------------------------------------------------------------
# Happy path
# -----------------------------------------------------------------------------


def test_commit_selected_runs_steps_in_order(chunks):
    repo = FakeRepository(staged_diff="diff of x only")
    generator = FakeGenerator("  feat: change x\n")
    orchestrator = PartialCommitOrchestrator(repo, generator)

    result = orchestrator.commit_selected(chunks, selection_of(chunks, 0))

    assert [c if isinstance(c, str) else c[0] for c in repo.calls] == [
        "apply_patch",
        "get_staged_diff",
        "commit",
    ]
    assert repo.calls[0][1] == "diff --git a/x.txt b/x.txt\n--- a/x.txt\n+++ b/x.txt\n@@ -1 +1 @@\n-a\n+b\n"
    # the message is generated from the re-read index, not from the patch
    assert generator.diffs == ["diff of x only"]
    assert repo.calls[-1] == ("commit", "feat: change x")
    assert result.message == "feat: change x"
    assert result.patch == repo.calls[0][1]
    assert result.staged_diff == "diff of x only"


def test_group_by_file_is_forwarded(chunks):
    repo = FakeRepository()
    same_file = [chunks[0], DiffChunk("x.txt", "@@ -9 +9 @@", ("+z",))]
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator(), group_by_file=True)

    orchestrator.commit_selected(same_file, selection_of(same_file, 0, 1))

    assert repo.calls[0][1].count("diff --git ") == 1


# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------


def test_empty_selection_touches_nothing(chunks):
    repo = FakeRepository()
    generator = FakeGenerator()
    orchestrator = PartialCommitOrchestrator(repo, generator)

    with pytest.raises(NoChunksSelectedError) as exc_info:
        orchestrator.commit_selected(chunks, selection_of(chunks))

    assert exc_info.value.step == "reconstruct"
    assert repo.calls == []
    assert generator.diffs == []


def test_patch_rejected(chunks):
    repo = FakeRepository(apply_outcome=GitOutcome(False, "patch does not apply"))
    generator = FakeGenerator()
    orchestrator = PartialCommitOrchestrator(repo, generator)

    with pytest.raises(PatchApplyFailedError) as exc_info:
        orchestrator.commit_selected(chunks, selection_of(chunks, 1))

    assert exc_info.value.step == "apply"
    assert exc_info.value.details == "patch does not apply"
    assert generator.diffs == []
    assert not any(isinstance(c, tuple) and c[0] == "commit" for c in repo.calls)


def test_index_preparation_error_is_an_apply_failure(chunks):
    repo = FakeRepository(apply_outcome=GitError("Failed to write the index to a tree"))
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator())

    with pytest.raises(PatchApplyFailedError):
        orchestrator.commit_selected(chunks, selection_of(chunks, 0))


def test_generator_error(chunks):
    repo = FakeRepository()
    generator = FakeGenerator(error=AIServiceError("provider down"))
    orchestrator = PartialCommitOrchestrator(repo, generator)

    with pytest.raises(MessageGenerationFailedError) as exc_info:
        orchestrator.commit_selected(chunks, selection_of(chunks, 0))

    assert exc_info.value.step == "generate"
    assert "provider down" in exc_info.value.details
    assert not any(isinstance(c, tuple) and c[0] == "commit" for c in repo.calls)


def test_blank_message_is_a_generation_failure(chunks):
    repo = FakeRepository()
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator("   \n"))

    with pytest.raises(MessageGenerationFailedError):
        orchestrator.commit_selected(chunks, selection_of(chunks, 0))


def test_commit_rejected(chunks):
    repo = FakeRepository(commit_outcome=GitOutcome(False, "hook failed"))
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator())

    with pytest.raises(CommitFailedError) as exc_info:
        orchestrator.commit_selected(chunks, selection_of(chunks, 0))

    assert exc_info.value.step == "commit"
    assert exc_info.value.details == "hook failed"
    assert exc_info.value.message.startswith("[commit]")


def test_commit_git_error_is_a_commit_failure(chunks):
    repo = FakeRepository(commit_outcome=GitError("git could not be started"))
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator())

    with pytest.raises(CommitFailedError) as exc_info:
        orchestrator.commit_selected(chunks, selection_of(chunks, 0))

    assert exc_info.value.step == "commit"
    assert exc_info.value.details == "git could not be started"


# -----------------------------------------------------------------------------
# Retry
# -----------------------------------------------------------------------------


def test_retry_does_not_reapply(chunks):
    repo = FakeRepository(staged_diff="still staged")
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator("fix: retry"))

    result = orchestrator.retry_message_and_commit()

    assert repo.calls == ["get_staged_diff", ("commit", "fix: retry")]
    assert result.message == "fix: retry"
    assert result.patch == ""


def test_retry_staged_diff_read_failure(chunks):
    repo = FakeRepository(staged_diff=GitError("Failed to read the staged diff"))
    orchestrator = PartialCommitOrchestrator(repo, FakeGenerator())

    with pytest.raises(MessageGenerationFailedError):
        orchestrator.retry_message_and_commit()
