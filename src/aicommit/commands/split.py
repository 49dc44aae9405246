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

import inquirer
import typer
from loguru import logger

from aicommit.context import GlobalContext, SplitContext
from aicommit.core.data.diff_chunk import DiffChunk
from aicommit.core.diff.assembler import parse_diff_to_chunks
from aicommit.core.exceptions import ChunkingError, handle_aicommit_exception
from aicommit.core.logging.logging import console
from aicommit.core.logging.utils import log_chunks, time_block
from aicommit.core.patch.patch_reconstructor import reconstruct
from aicommit.core.selection.selection_set import SelectionSet
from aicommit.core.split.session import SplitSession
from aicommit.core.user_filter.cmd_splitter import TerminalSplitter
from aicommit.core.validation import sanitize_user_input, validate_message_length
from aicommit.pipelines.partial_commit import PartialCommitOrchestrator


def load_chunks(global_context: GlobalContext) -> list[DiffChunk]:
    diff = global_context.git_commands.get_splittable_diff()
    if not diff.strip():
        return []

    with time_block("Parse staged diff"):
        chunks = parse_diff_to_chunks(diff)

    if not chunks:
        raise ChunkingError(
            "The staged diff holds no hunks that can be split",
            "Staged changes may be renames, mode changes or empty files only.",
        )
    log_chunks("Staged diff", chunks)
    return chunks


def restage(global_context: GlobalContext, patch: str) -> bool:
    """Stage patch on top of HEAD. Returns False if it no longer applies."""
    if not patch:
        return True

    outcome = global_context.git_commands.apply_patch(patch)
    if not outcome.success:
        logger.warning(
            "Could not stage the remaining changes again, they are left as unstaged changes"
        )
        logger.debug(f"git apply: {outcome.error}")
        return False
    return True


def restage_remaining(
    global_context: GlobalContext,
    chunks: list[DiffChunk],
    committed: SelectionSet,
    group_by_file: bool,
    held_back: str = "",
) -> bool:
    """Stage the hunks that were left out of the last commit, plus the held back files."""
    remaining = SelectionSet(len(chunks), committed.selected_indices())
    remaining.toggle_all()

    patch = reconstruct(chunks, remaining, group_by_file=group_by_file) + held_back
    if not restage(global_context, patch):
        return False

    logger.debug(
        "Remaining hunks staged again: count={count}", count=remaining.count()
    )
    return True


def run_split(global_context: GlobalContext, split_context: SplitContext) -> int:
    """Run split sessions until the user stops. Returns the number of commits made."""
    if not global_context.git_commands.has_staged_changes():
        logger.info("No staged changes. Stage something with git add first.")
        return 0

    branch = global_context.git_commands.get_current_branch()
    logger.info(f"Splitting staged changes on {branch or 'a detached HEAD'}")

    generator = global_context.create_message_generator(split_context.message_hint)
    orchestrator = PartialCommitOrchestrator(
        global_context.git_commands,
        generator,
        group_by_file=split_context.group_by_file,
    )

    commits = 0
    while True:
        chunks = load_chunks(global_context)
        if not chunks:
            if commits == 0:
                logger.info(
                    "Only added, deleted, renamed or binary files are staged, use ai-commit commit for them"
                )
            else:
                logger.info("Nothing left to split")
            break
        held_back = global_context.git_commands.get_held_back_diff()

        session = SplitSession(chunks)
        result = TerminalSplitter(session, orchestrator, console=console).run()
        if result is None:
            break

        commits += 1
        logger.debug(
            "Split commit created: chunks={count}", count=session.selection.count()
        )

        if not split_context.loop:
            # unselected hunks stay unstaged, whole-file changes are staged again
            restage(global_context, held_back)
            break

        if not restage_remaining(
            global_context,
            chunks,
            session.selection,
            split_context.group_by_file,
            held_back,
        ):
            break
        if not global_context.git_commands.has_staged_changes():
            logger.info("All staged changes have been committed")
            break
        if not global_context.config.auto_accept and not inquirer.confirm(
            "Split another commit from the remaining changes?", default=True
        ):
            break

    return commits


def main(
    ctx: typer.Context,
    loop: bool = typer.Option(
        False,
        "--loop",
        "-l",
        help="After each commit, start a new session with the hunks that were left out",
    ),
    group_by_file: bool = typer.Option(
        False,
        "--group-by-file",
        help="Emit one file header per file when several hunks of it are selected",
    ),
    message: str | None = typer.Option(
        None,
        "-m",
        "--message",
        help="Context or instructions for the AI to generate the commit messages",
    ),
) -> None:
    """
    Pick hunks of the staged diff and commit only those.

    Unselected hunks are left as unstaged changes in the working tree.

    Examples:
        # Split the staged changes once
        ai-commit split

        # Keep splitting until nothing is staged
        ai-commit split --loop
    """
    global_context: GlobalContext = ctx.obj

    with handle_aicommit_exception(exit_on_fail=True):
        validated_message = validate_message_length(message)
        if validated_message:
            validated_message = sanitize_user_input(validated_message)

        split_context = SplitContext(
            group_by_file=group_by_file, loop=loop, message_hint=validated_message
        )

        with time_block("Split Command E2E"):
            commits = run_split(global_context, split_context)

        logger.debug("Split finished: commits={commits}", commits=commits)
