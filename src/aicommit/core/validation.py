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

"""Validation of user input and repository state before a command runs."""

import re

from aicommit.core.exceptions import ValidationError, not_git_repository
from aicommit.core.git_commands.git_commands import GitCommands

MAX_HINT_LENGTH = 1000

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def validate_git_repository(commands: GitCommands, path: str = ".") -> None:
    if not commands.is_git_repo():
        raise not_git_repository(path)


def validate_message_length(value: str | None) -> str | None:
    """Validate a user supplied hint for the message generator."""
    if value is None:
        return None

    if len(value.strip()) == 0:
        raise ValidationError("Message hint cannot be empty")

    if len(value) > MAX_HINT_LENGTH:
        raise ValidationError(
            f"Message hint too long (max {MAX_HINT_LENGTH} characters)",
            f"Got {len(value)} characters",
        )

    return value.strip()


def sanitize_user_input(value: str) -> str:
    # keep newlines and tabs, drop other control characters
    return _CONTROL_CHARS.sub("", value)
