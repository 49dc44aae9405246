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

import os
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from aicommit.core.diff.filters import (
    block_path,
    filter_binary_files,
    filter_lock_files,
    has_file_level_change,
    is_binary_block,
    split_file_blocks,
    split_file_level_changes,
)
from aicommit.core.exceptions import GitError
from aicommit.core.git_interface.interface import GitInterface


@dataclass(frozen=True)
class GitOutcome:
    success: bool
    error: str = ""


@dataclass(frozen=True)
class AuthorIdentity:
    name: str | None = None
    email: str | None = None

    def env(self) -> dict[str, str]:
        """GIT_* variables for this identity, used for both author and committer."""
        values = {}
        if self.name:
            values["GIT_AUTHOR_NAME"] = self.name
            values["GIT_COMMITTER_NAME"] = self.name
        if self.email:
            values["GIT_AUTHOR_EMAIL"] = self.email
            values["GIT_COMMITTER_EMAIL"] = self.email
        return values


class GitCommands:
    """
    Repository operations the commit and split commands rely on.

    Staged diffs are read with binary files removed and lock files filtered
    out, so the text handed to the diff tokenizer only holds textual hunks.
    """

    def __init__(
        self,
        git: GitInterface,
        author: AuthorIdentity | None = None,
        lock_files: Sequence[str] = (),
    ):
        self.git = git
        self.author = author or AuthorIdentity()
        self.lock_files = list(lock_files)

    # -------------------------------
    # Repository state
    # -------------------------------

    def is_git_repo(self) -> bool:
        out = self.git.run_git_text(["rev-parse", "--is-inside-work-tree"])
        return out.ok and out.stdout.strip() == "true"

    def get_current_branch(self) -> str:
        """Name of the checked out branch, "" on a detached HEAD."""
        out = self.git.run_git_text_out(["branch", "--show-current"])
        if out is None:
            raise GitError("Failed to read the current branch")
        return out.strip()

    def has_head(self) -> bool:
        return self.git.run_git_text(["rev-parse", "--verify", "--quiet", "HEAD"]).ok

    def has_staged_changes(self) -> bool:
        # exit code 1 means there are staged changes
        return self.git.run_git_text(["diff", "--cached", "--quiet"]).returncode == 1

    # -------------------------------
    # Diffs
    # -------------------------------

    def get_raw_staged_diff(self, binary: bool = False) -> str:
        args = [
            "-c",
            "core.quotepath=false",
            "diff",
            "--cached",
            "--no-color",
            "--no-ext-diff",
        ]
        if binary:
            args.append("--binary")

        out = self.git.run_git_text_out(args)
        if out is None:
            raise GitError("Failed to read the staged diff")
        return out

    def get_staged_diff(self) -> str:
        """Staged diff as shown to the message generator."""
        diff = filter_binary_files(self.get_raw_staged_diff())
        return filter_lock_files(diff, self.lock_files)

    def get_splittable_diff(self) -> str:
        """
        Staged diff as offered for splitting.

        Lock files stay selectable. Binary files and added, deleted, renamed
        or copied files are left out: a rebuilt patch only carries plain
        "--- a/p" / "+++ b/p" headers, which git cannot apply to a path that
        is missing from HEAD. get_held_back_diff returns those files so they
        can be staged again after a split commit.
        """
        diff = filter_binary_files(self.get_raw_staged_diff())
        diff, separated = split_file_level_changes(diff)
        if separated:
            logger.warning(
                "Added, deleted or renamed files cannot be split and are left out: {paths}",
                paths=", ".join(block_path(block) for block in separated),
            )
        return diff

    def get_held_back_diff(self) -> str:
        """
        The staged changes get_splittable_diff leaves out, as a patch that
        git apply --cached accepts (binary content included).
        """
        held_back = [
            block
            for block in split_file_blocks(self.get_raw_staged_diff(binary=True))
            if is_binary_block(block) or has_file_level_change(block)
        ]
        return "".join(held_back)

    # -------------------------------
    # Index manipulation
    # -------------------------------

    def write_tree(self) -> str:
        out = self.git.run_git_text_out(["write-tree"])
        if not out:
            raise GitError("Failed to write the index to a tree")
        return out.strip()

    def read_tree(self, tree: str) -> None:
        if self.git.run_git_text_out(["read-tree", tree]) is None:
            raise GitError(f"Failed to restore the index from {tree}")

    def unstage_all(self) -> None:
        """Reset the index to HEAD (or to empty on an unborn branch) without touching files."""
        args = ["read-tree", "HEAD"] if self.has_head() else ["read-tree", "--empty"]
        if self.git.run_git_text_out(args) is None:
            raise GitError("Failed to unstage changes")

    def apply_patch(self, patch_text: str) -> GitOutcome:
        """
        Make the index hold exactly HEAD plus patch_text.

        The current index is saved as a tree first; if the patch does not
        apply, the index is restored from it, so the operation is all or
        nothing from the caller's point of view.
        """
        saved_tree = self.write_tree()
        self.unstage_all()

        result = self.git.run_git_text(["apply", "--cached", "-"], input_text=patch_text)
        if result.ok:
            logger.debug("Patch applied to index")
            return GitOutcome(True)

        logger.debug(f"Patch did not apply, restoring index to {saved_tree}")
        self.read_tree(saved_tree)
        return GitOutcome(False, result.stderr.strip() or result.stdout.strip())

    # -------------------------------
    # Commits
    # -------------------------------

    def commit(self, message: str) -> GitOutcome:
        """Commit the staged content. The message is passed on stdin so it may span lines."""
        env = None
        identity = self.author.env()
        if identity:
            env = os.environ.copy()
            env.update(identity)

        result = self.git.run_git_text(["commit", "-F", "-"], input_text=message, env=env)
        if result.ok:
            return GitOutcome(True)
        return GitOutcome(False, result.stderr.strip() or result.stdout.strip())
