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

"""Utilities for sanitizing LLM outputs."""

import re

_FENCE_RE = re.compile(r"^```[\w-]*\n(.*?)\n?```$", re.DOTALL)


def sanitize_llm_text(text: str) -> str:
    """
    Sanitizes text output from LLMs before it is used as a commit message.

    LLMs occasionally produce control characters like null bytes (\\x00) which
    git refuses in commit messages, and often wrap the whole answer in a
    markdown code fence even when told not to.

    Args:
        text: Raw text from LLM output.

    Returns:
        Sanitized text with null bytes, surrounding fences and surrounding
        whitespace removed.
    """
    if not text:
        return text

    result = text.replace("\x00", "").strip()

    match = _FENCE_RE.match(result)
    if match:
        result = match.group(1).strip()

    return result
