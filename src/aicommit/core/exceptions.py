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
Custom exception hierarchy for the ai-commit CLI application.

This module defines the exception hierarchy used across the application,
including the failure taxonomy of the partial commit pipeline. Each pipeline
error records the step that produced it so the caller can decide how to
recover (re-prompt, retry message generation, or give up).
"""

import contextlib

import typer
from colorama import Fore, Style
from loguru import logger


class AICommitError(Exception):
    """
    Base exception for all ai-commit errors.

    All ai-commit specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize an AICommitError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(AICommitError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class ValidationError(AICommitError):
    """
    Input validation errors.

    Raised when user input fails validation checks.
    """

    pass


class ConfigurationError(AICommitError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class AIServiceError(AICommitError):
    """
    AI service related errors.

    Raised when AI API calls fail, timeout, or return
    invalid responses.
    """

    pass


class ChunkingError(AICommitError):
    """Raised when a staged diff cannot be split into chunks."""

    pass


class PartialCommitError(AICommitError):
    """
    Base class for failures of the partial commit pipeline.

    `step` names the pipeline step that failed: one of
    "reconstruct", "apply", "generate" or "commit".
    """

    step: str = ""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(f"[{self.step}] {message}", details)


class NoChunksSelectedError(PartialCommitError):
    """Commit attempted with an empty selection. Nothing was changed."""

    step = "reconstruct"


class PatchApplyFailedError(PartialCommitError):
    """The reconstructed patch was rejected when staging it."""

    step = "apply"


class MessageGenerationFailedError(PartialCommitError):
    """The message generator failed or returned nothing. The selection stays staged."""

    step = "generate"


class CommitFailedError(PartialCommitError):
    """The repository refused the commit. The selection stays staged."""

    step = "commit"


def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Run 'git init' to initialize a git repository or navigate to an existing repository",
    )


def api_key_missing(service: str) -> ConfigurationError:
    """Create a ConfigurationError for missing API keys."""
    return ConfigurationError(
        f"Missing API key for {service}",
        "Set the API key using --api-key, the config file or the provider's environment variable",
    )


def ai_service_timeout(service: str, timeout: float) -> AIServiceError:
    """Create an AIServiceError for API timeouts."""
    return AIServiceError(
        f"AI service '{service}' timed out after {timeout} seconds",
        "Try again or increase the timeout setting in configuration",
    )


@contextlib.contextmanager
def handle_aicommit_exception(exit_on_fail: bool = True):
    """
    Render AICommitErrors raised inside the block for the user.

    The error is logged to the log file with its details; when exit_on_fail is
    set the process exits with code 1, otherwise the error is re-raised.
    """
    try:
        yield
    except AICommitError as e:
        logger.debug(f"{type(e).__name__}: {e.message} details={e.details}")
        print(f"{Fore.RED}Error:{Style.RESET_ALL} {e.message}")
        if e.details:
            print(f"{Style.DIM}{e.details}{Style.RESET_ALL}")
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
