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

from typing import Protocol

from aicommit.core.git_commands.git_commands import GitOutcome


class RepositoryAccessor(Protocol):
    """The repository operations the partial commit pipeline needs."""

    def get_staged_diff(self) -> str:
        """
        Unified diff of the currently staged changes, binary files excluded.
        """
        ...

    def get_current_branch(self) -> str:
        """Checked out branch name, "" on a detached HEAD."""
        ...

    def apply_patch(self, patch_text: str) -> GitOutcome:
        """
        Stage exactly the hunks in patch_text, failing atomically if any hunk
        does not apply.
        """
        ...

    def commit(self, message: str) -> GitOutcome:
        """Create a commit from the staged content."""
        ...
