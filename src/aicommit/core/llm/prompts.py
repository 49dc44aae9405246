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

SYSTEM_PROMPT = """You are an assistant that writes git commit messages.
You only ever answer with the commit message itself."""

COMMIT_PROMPT = """Generate a git commit message following these guidelines:
- Use the Conventional Commits format (e.g., 'feat: add new feature X', 'fix(login): handle edge case').
- Keep the subject line concise (under 50 characters) and in the imperative mood.
- If there are breaking changes, include 'BREAKING CHANGE:' in the commit body.
- After the subject line, add a blank line, then list changes with bullet points (using "- ").
- Omit disclaimers, code blocks, or references to AI.
- Use the present tense and ensure clarity.
- Output only the commit message (do not include the commit hash or branch name).
- Avoid unnecessary repetition; express each idea only once.
- Write the message in {language}.
{additional_context}
Diff:
{diff}
"""


def format_additional_context(text: str | None) -> str:
    if not text:
        return ""
    return f"- Additional context provided by the user: {text}\n"
