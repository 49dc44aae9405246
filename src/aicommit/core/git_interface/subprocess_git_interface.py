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

import subprocess
from pathlib import Path

from loguru import logger

from aicommit.core.exceptions import GitError
from aicommit.core.git_interface.interface import GitInterface, GitResult

_LOG_LIMIT = 2000


def _truncate(text: str) -> str:
    return text[:_LOG_LIMIT] + ("...(truncated)" if len(text) > _LOG_LIMIT else "")


class SubprocessGitInterface(GitInterface):
    """
    Runs git as a subprocess.

    Text is exchanged as utf-8 with surrogateescape, so bytes that are not
    valid utf-8 survive a read/write round trip unchanged.
    """

    def __init__(self, repo_path: str | Path | None = None) -> None:
        self.repo_path = Path(repo_path) if repo_path is not None else Path(".")

    def run_git_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> GitResult:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                capture_output=True,
                check=False,
                env=env,
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise GitError(
                "Git is not installed or not in PATH",
                "Please install git and ensure it's available in your PATH environment variable",
            ) from e

        if result.stdout:
            logger.debug(f"git stdout: {_truncate(result.stdout)}")
        if result.stderr:
            logger.debug(f"git stderr: {_truncate(result.stderr)}")
        logger.debug(f"git returncode: {result.returncode}")

        return GitResult(result.returncode, result.stdout or "", result.stderr or "")

    def run_git_text_out(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        result = self.run_git_text(args, input_text=input_text, env=env, cwd=cwd)
        if not result.ok:
            logger.error(
                f"Git command failed: git {' '.join(args)} code={result.returncode} stderr={result.stderr.strip()}"
            )
            return None
        return result.stdout
