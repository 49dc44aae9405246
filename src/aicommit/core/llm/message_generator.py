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

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from loguru import logger

from aicommit.core.exceptions import AIServiceError, ai_service_timeout
from aicommit.core.llm.prompts import (
    COMMIT_PROMPT,
    SYSTEM_PROMPT,
    format_additional_context,
)
from aicommit.core.utils.sanitize import sanitize_llm_text


class LLMMessageGenerator:
    """
    Draft commit messages with a LangChain chat model.

    The request timeout is configured on the model itself (see
    create_llm_model); a timeout surfaces here as an AIServiceError like any
    other provider failure.
    """

    def __init__(
        self,
        chat_model: BaseChatModel,
        language: str = "english",
        additional_context: str | None = None,
        timeout: float | None = None,
    ):
        self.chat_model = chat_model
        self.language = language
        self.additional_context = additional_context
        self.timeout = timeout
        self.prompt_template = ChatPromptTemplate.from_messages(
            [("system", SYSTEM_PROMPT), ("human", COMMIT_PROMPT)]
        )

    def build_messages(self, diff_text: str):
        return self.prompt_template.format_messages(
            language=self.language,
            additional_context=format_additional_context(self.additional_context),
            diff=diff_text,
        )

    def generate(self, diff_text: str) -> str:
        if not diff_text.strip():
            raise AIServiceError("There is no staged diff to describe")

        messages = self.build_messages(diff_text)
        logger.debug(f"Requesting commit message for diff of {len(diff_text)} chars")

        try:
            response = self.chat_model.invoke(messages)
        except Exception as e:
            # provider SDKs raise their own timeout types (APITimeoutError, httpx.ReadTimeout, ...)
            if isinstance(e, TimeoutError) or "timeout" in type(e).__name__.lower():
                raise ai_service_timeout(
                    type(self.chat_model).__name__, self.timeout
                ) from e
            raise AIServiceError("The AI provider request failed", str(e)) from e

        content = response.content if hasattr(response, "content") else response
        if isinstance(content, list):
            # some providers answer with a list of content blocks
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )

        message = sanitize_llm_text(str(content))
        if not message:
            raise AIServiceError("The AI provider returned an empty commit message")

        logger.debug(f"Generated commit message: {message!r}")
        return message
