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
import typer

from aicommit.core.exceptions import (
    AICommitError,
    AIServiceError,
    ChunkingError,
    CommitFailedError,
    ConfigurationError,
    GitError,
    MessageGenerationFailedError,
    NoChunksSelectedError,
    PartialCommitError,
    PatchApplyFailedError,
    ValidationError,
    ai_service_timeout,
    api_key_missing,
    handle_aicommit_exception,
    not_git_repository,
)


def test_exception_inheritance():
    assert issubclass(GitError, AICommitError)
    assert issubclass(ValidationError, AICommitError)
    assert issubclass(ConfigurationError, AICommitError)
    assert issubclass(AIServiceError, AICommitError)
    assert issubclass(ChunkingError, AICommitError)
    assert issubclass(PartialCommitError, AICommitError)
    for cls in (
        NoChunksSelectedError,
        PatchApplyFailedError,
        MessageGenerationFailedError,
        CommitFailedError,
    ):
        assert issubclass(cls, PartialCommitError)


def test_partial_commit_errors_name_their_step():
    assert NoChunksSelectedError("x").step == "reconstruct"
    assert PatchApplyFailedError("x").step == "apply"
    assert MessageGenerationFailedError("x").step == "generate"
    assert CommitFailedError("x").step == "commit"


def test_partial_commit_error_message_carries_step():
    exc = PatchApplyFailedError("Failed to apply", "corrupt patch at line 4")
    assert exc.message == "[apply] Failed to apply"
    assert exc.details == "corrupt patch at line 4"


def test_not_git_repository():
    exc = not_git_repository("/tmp/x")
    assert isinstance(exc, GitError)
    assert "/tmp/x" in exc.message


def test_api_key_missing():
    exc = api_key_missing("openai")
    assert isinstance(exc, ConfigurationError)
    assert "openai" in exc.message


def test_ai_service_timeout():
    exc = ai_service_timeout("ChatOpenAI", 30)
    assert isinstance(exc, AIServiceError)
    assert "30 seconds" in exc.message


def test_handle_exception_exits(capsys):
    with pytest.raises(typer.Exit) as exc_info:
        with handle_aicommit_exception(exit_on_fail=True):
            raise GitError("boom", "more info")

    assert exc_info.value.exit_code == 1
    out = capsys.readouterr().out
    assert "boom" in out
    assert "more info" in out


def test_handle_exception_reraises():
    with pytest.raises(ValidationError):
        with handle_aicommit_exception(exit_on_fail=False):
            raise ValidationError("bad")


def test_handle_exception_ignores_other_errors():
    with pytest.raises(KeyError):
        with handle_aicommit_exception():
            raise KeyError("k")
