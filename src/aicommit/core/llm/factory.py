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

"""Factory for creating LangChain LLM instances."""

import os
from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel
from loguru import logger

from aicommit.core.exceptions import ConfigurationError, api_key_missing

SUPPORTED_PROVIDERS = ("openai", "gemini", "anthropic", "ollama")


@dataclass
class ModelConfig:
    """Configuration for an LLM model."""

    provider: str  # e.g., "openai", "gemini", "anthropic"
    model_name: str  # e.g., "gpt-4o-mini", "gemini-2.0-flash"
    api_key: str | None = None
    temperature: float = 0.7
    max_tokens: int | None = None
    timeout: float | None = None


def parse_model_spec(model_arg: str) -> tuple[str, str]:
    """
    Split a "provider:model-name" spec.

    Without a provider prefix the provider is inferred from the model name.
    """
    if ":" in model_arg:
        provider, model_name = model_arg.split(":", 1)
        return provider.lower(), model_name

    model_lower = model_arg.lower()
    if "gpt" in model_lower or "o1" in model_lower or "chatgpt" in model_lower:
        return "openai", model_arg
    if "gemini" in model_lower:
        return "gemini", model_arg
    if "claude" in model_lower:
        return "anthropic", model_arg

    raise ConfigurationError(
        f"Cannot infer provider from model '{model_arg}'",
        "Please use format: provider:model-name (e.g., openai:gpt-4o-mini)",
    )


def _resolve_key(api_key: str | None, env_var: str, service: str) -> str:
    key = api_key or os.getenv(env_var)
    if not key:
        raise api_key_missing(service)
    return key


def create_llm_model(config: ModelConfig) -> BaseChatModel:
    """
    Create a LangChain chat model based on the provided configuration.

    Args:
        config: ModelConfig with provider, model_name, and optional api_key

    Returns:
        BaseChatModel instance configured for the specified provider

    Raises:
        ConfigurationError: If the provider is unsupported or a key is missing
        ImportError: If required provider package is not installed
    """
    provider = config.provider.lower()

    logger.debug(f"Creating LLM model: provider={provider}, model={config.model_name}")

    if provider == "openai":
        try:
            from langchain_openai import ChatOpenAI
        except ImportError as e:
            raise ImportError(
                "langchain-openai is not installed. Install it with: pip install langchain-openai"
            ) from e

        return ChatOpenAI(
            model=config.model_name,
            api_key=_resolve_key(config.api_key, "OPENAI_API_KEY", "openai"),
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    elif provider == "gemini" or provider == "google":
        try:
            from langchain_google_genai import ChatGoogleGenerativeAI
        except ImportError as e:
            raise ImportError(
                "langchain-google-genai is not installed. "
                "Install it with: pip install langchain-google-genai"
            ) from e

        return ChatGoogleGenerativeAI(
            model=config.model_name,
            google_api_key=_resolve_key(config.api_key, "GOOGLE_API_KEY", "gemini"),
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            timeout=config.timeout,
        )

    elif provider == "anthropic" or provider == "claude":
        try:
            from langchain_anthropic import ChatAnthropic
        except ImportError as e:
            raise ImportError(
                "langchain-anthropic is not installed. "
                "Install it with: pip install langchain-anthropic"
            ) from e

        kwargs = {}
        if config.max_tokens is not None:
            kwargs["max_tokens"] = config.max_tokens

        return ChatAnthropic(
            model=config.model_name,
            api_key=_resolve_key(config.api_key, "ANTHROPIC_API_KEY", "anthropic"),
            temperature=config.temperature,
            timeout=config.timeout,
            **kwargs,
        )

    elif provider == "ollama":
        try:
            from langchain_ollama import ChatOllama
        except ImportError as e:
            raise ImportError(
                "langchain-ollama is not installed. Install it with: pip install langchain-ollama"
            ) from e

        base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

        return ChatOllama(
            model=config.model_name,
            base_url=base_url,
            temperature=config.temperature,
            client_kwargs={"timeout": config.timeout},
        )

    raise ConfigurationError(
        f"Unsupported LLM provider: {provider}. "
        f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
    )
