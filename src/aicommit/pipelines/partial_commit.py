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
from dataclasses import dataclass

from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.exceptions import (
    CommitFailedError,
    GitError,
    MessageGenerationFailedError,
    NoChunksSelectedError,
    PatchApplyFailedError,
)
from aicommit.core.git_commands.protocol import RepositoryAccessor
from aicommit.core.llm.protocol import MessageGenerator
from aicommit.core.patch.patch_reconstructor import reconstruct
from aicommit.core.selection.selection_set import SelectionSet


@dataclass(frozen=True)
class PartialCommitResult:
    message: str
    patch: str
    staged_diff: str


class PartialCommitOrchestrator:
    """
    Commit only the selected chunks of a staged diff.

    Steps run strictly in order and each one depends on the previous:
    reconstruct the patch, stage it, re-read the staged diff, generate a
    message from that diff, commit. The first failing step ends the run with
    the matching PartialCommitError. Nothing is retried and nothing staged is
    rolled back once the apply step succeeded; use retry_message_and_commit to
    finish a run that failed after staging.
    """

    def __init__(
        self,
        repository: RepositoryAccessor,
        message_generator: MessageGenerator,
        group_by_file: bool = False,
    ):
        self.repository = repository
        self.message_generator = message_generator
        self.group_by_file = group_by_file

    def build_patch(self, chunks: Sequence[DiffChunk], selection: SelectionSet) -> str:
        patch = reconstruct(chunks, selection, group_by_file=self.group_by_file)
        if not patch:
            raise NoChunksSelectedError("No chunks selected")
        return patch

    def stage(self, patch: str) -> None:
        try:
            outcome = self.repository.apply_patch(patch)
        except GitError as e:
            raise PatchApplyFailedError(
                "Failed to prepare the index for the selected chunks", e.message
            ) from e
        if not outcome.success:
            raise PatchApplyFailedError(
                "Failed to apply the selected chunks to the index",
                outcome.error,
            )

    def generate_message(self, staged_diff: str) -> str:
        try:
            message = self.message_generator.generate(staged_diff)
        except Exception as e:
            raise MessageGenerationFailedError(
                "Failed to generate a commit message", str(e)
            ) from e

        if not message or not message.strip():
            raise MessageGenerationFailedError(
                "The message generator returned an empty message"
            )
        return message.strip()

    def commit(self, message: str) -> None:
        try:
            outcome = self.repository.commit(message)
        except GitError as e:
            raise CommitFailedError("Failed to create the commit", e.message) from e
        if not outcome.success:
            raise CommitFailedError("Failed to create the commit", outcome.error)

    def commit_selected(
        self, chunks: Sequence[DiffChunk], selection: SelectionSet
    ) -> PartialCommitResult:
        patch = self.build_patch(chunks, selection)
        self.stage(patch)
        result = self.retry_message_and_commit()
        return PartialCommitResult(result.message, patch, result.staged_diff)

    def retry_message_and_commit(self) -> PartialCommitResult:
        """Generate a message for what is staged right now and commit it."""
        try:
            staged_diff = self.repository.get_staged_diff()
        except GitError as e:
            raise MessageGenerationFailedError(
                "Failed to read the staged diff", e.message
            ) from e
        message = self.generate_message(staged_diff)
        self.commit(message)
        return PartialCommitResult(message, "", staged_diff)
