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

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as config_dataclass

from aicommit.constants import (
    DEFAULT_LOCK_FILES,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
)
from aicommit.core.exceptions import ConfigurationError
from aicommit.core.git_commands.git_commands import AuthorIdentity, GitCommands
from aicommit.core.git_interface.interface import GitInterface
from aicommit.core.git_interface.subprocess_git_interface import (
    SubprocessGitInterface,
)
from aicommit.core.llm import (
    LLMMessageGenerator,
    ModelConfig,
    create_llm_model,
    parse_model_spec,
)
from aicommit.core.ui.theme import available_themes


@config_dataclass
class GlobalConfig:
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    language: str = "english"
    author_name: str | None = None
    author_email: str | None = None
    lock_files: list[str] = Field(default_factory=lambda: list(DEFAULT_LOCK_FILES))
    verbose: bool = False
    silent: bool = False
    auto_accept: bool = False
    theme: str = "classic"

    @field_validator("lock_files", mode="before")
    @classmethod
    def split_lock_files(cls, value):
        # environment variables hold a comma separated list
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("theme")
    @classmethod
    def check_theme(cls, value):
        if value not in available_themes():
            raise ValueError(
                f"Unknown theme {value!r}, expected one of {', '.join(available_themes())}"
            )
        return value

    descriptions = {
        "model": "LLM model (format: provider:model, e.g., openai:gpt-4o-mini)",
        "api_key": "API key for the LLM provider",
        "temperature": "Temperature for LLM responses (0.0-1.0)",
        "timeout": "Seconds to wait for the LLM provider before giving up",
        "language": "Language the commit message is written in",
        "author_name": "Author name used for commits (defaults to git's user.name)",
        "author_email": "Author email used for commits (defaults to git's user.email)",
        "lock_files": "File names whose changes are left out of the diff sent to the model",
        "verbose": "Enable verbose logging output",
        "silent": "Only print warnings, errors and prompts",
        "auto_accept": "Commit without asking for confirmation",
        "theme": "Colour theme of the split view (classic or mono)",
    }


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    git_interface: GitInterface
    git_commands: GitCommands
    config: GlobalConfig

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        git_interface = SubprocessGitInterface(repo_path)
        git_commands = GitCommands(
            git_interface,
            author=AuthorIdentity(config.author_name, config.author_email),
            lock_files=config.lock_files,
        )

        return GlobalContext(repo_path, git_interface, git_commands, config)

    def create_message_generator(
        self, additional_context: str | None = None
    ) -> LLMMessageGenerator:
        """Build the LLM backed message generator. Raises ConfigurationError when no model can be built."""
        if not self.config.model:
            raise ConfigurationError("No model configured", "Pass --model provider:model")

        provider, model_name = parse_model_spec(self.config.model)
        chat_model = create_llm_model(
            ModelConfig(
                provider=provider,
                model_name=model_name,
                api_key=self.config.api_key,
                temperature=self.config.temperature,
                timeout=self.config.timeout,
            )
        )
        return LLMMessageGenerator(
            chat_model,
            language=self.config.language,
            additional_context=additional_context,
            timeout=self.config.timeout,
        )


@dataclass(frozen=True)
class CommitContext:
    message_hint: str | None = None
    force: bool = False


@dataclass(frozen=True)
class SplitContext:
    group_by_file: bool = False
    loop: bool = False
    message_hint: str | None = None
