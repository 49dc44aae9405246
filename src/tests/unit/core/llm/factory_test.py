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

from unittest.mock import patch

import pytest

from aicommit.core.exceptions import ConfigurationError
from aicommit.core.llm.factory import ModelConfig, create_llm_model, parse_model_spec


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("openai:gpt-4o-mini", ("openai", "gpt-4o-mini")),
        ("Anthropic:claude-3-5-sonnet", ("anthropic", "claude-3-5-sonnet")),
        ("ollama:llama3:8b", ("ollama", "llama3:8b")),
        ("gpt-4o", ("openai", "gpt-4o")),
        ("gemini-2.0-flash", ("gemini", "gemini-2.0-flash")),
        ("claude-3-haiku", ("anthropic", "claude-3-haiku")),
    ],
)
def test_parse_model_spec(spec, expected):
    assert parse_model_spec(spec) == expected


def test_parse_model_spec_unknown_model():
    with pytest.raises(ConfigurationError, match="Cannot infer provider"):
        parse_model_spec("mystery-model")


def test_unsupported_provider():
    with pytest.raises(ConfigurationError, match="Unsupported LLM provider"):
        create_llm_model(ModelConfig(provider="nope", model_name="x"))


def test_missing_api_key():
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(ConfigurationError, match="Missing API key for openai"):
            create_llm_model(ModelConfig(provider="openai", model_name="gpt-4o-mini"))
