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
from colorama import Fore, Style
from loguru import logger

from aicommit.context import CommitContext, GlobalContext
from aicommit.core.exceptions import (
    GitError,
    ValidationError,
    handle_aicommit_exception,
)
from aicommit.core.llm.protocol import MessageGenerator
from aicommit.core.logging.logging import console
from aicommit.core.logging.utils import time_block
from aicommit.core.utils.sanitize import sanitize_llm_text
from aicommit.core.validation import sanitize_user_input, validate_message_length

ACCEPT = "Accept and commit"
REGENERATE = "Regenerate"
EDIT = "Edit"
QUIT = "Quit"

REVIEW_CHOICES = [ACCEPT, REGENERATE, EDIT, QUIT]


def generate_with_status(generator: MessageGenerator, diff: str, silent: bool) -> str:
    if silent:
        return generator.generate(diff)
    with console.status("Generating commit message..."):
        return generator.generate(diff)


def review_message(message: str) -> tuple[str, str]:
    """Show a generated message and ask what to do with it. Returns (choice, message)."""
    print(f"\n{Fore.CYAN}{Style.BRIGHT}Proposed commit message:{Style.RESET_ALL}")
    print(message)
    print()

    choice = inquirer.list_input("What would you like to do?", choices=REVIEW_CHOICES)
    if choice == EDIT:
        edited = typer.edit(message)
        if edited is not None:
            edited = sanitize_llm_text(edited)
            if edited:
                return EDIT, edited
        logger.info("Edit aborted, keeping the generated message")
        return EDIT, message
    return choice, message


def run_commit(global_context: GlobalContext, commit_context: CommitContext) -> bool:
    commands = global_context.git_commands

    if not commands.has_staged_changes():
        logger.info("No staged changes. Stage something with git add first.")
        return False

    diff = commands.get_staged_diff()
    if not diff.strip():
        raise ValidationError(
            "Only binary or lock file changes are staged",
            "There is no textual diff to describe; commit them with git directly.",
        )

    generator = global_context.create_message_generator(commit_context.message_hint)
    auto_accept = commit_context.force or global_context.config.auto_accept

    with time_block("Generate commit message"):
        message = generate_with_status(generator, diff, global_context.config.silent)

    while not auto_accept:
        choice, message = review_message(message)
        if choice == ACCEPT:
            break
        if choice == QUIT:
            logger.info("Commit cancelled")
            return False
        if choice == REGENERATE:
            with time_block("Regenerate commit message"):
                message = generate_with_status(
                    generator, diff, global_context.config.silent
                )

    outcome = commands.commit(message)
    if not outcome.success:
        raise GitError("Failed to create the commit", outcome.error)

    logger.success("Committed: {subject}", subject=message.splitlines()[0])
    return True


def main(
    ctx: typer.Context,
    message: str | None = typer.Option(
        None,
        "-m",
        "--message",
        help="Context or instructions for the AI to generate the commit message",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Commit the generated message without reviewing it",
    ),
) -> None:
    """
    Generate a commit message for the staged changes and commit them.

    Examples:
        # Review the proposed message before committing
        ai-commit commit

        # Commit straight away with a hint for the model
        ai-commit commit -m "fixes the login redirect" --force
    """
    global_context: GlobalContext = ctx.obj

    with handle_aicommit_exception(exit_on_fail=True):
        validated_message = validate_message_length(message)
        if validated_message:
            validated_message = sanitize_user_input(validated_message)

        commit_context = CommitContext(message_hint=validated_message, force=force)

        with time_block("Commit Command E2E"):
            run_commit(global_context, commit_context)
