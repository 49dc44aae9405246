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

from aicommit.core.utils.sanitize import sanitize_llm_text


def test_removes_null_bytes_and_whitespace():
    assert sanitize_llm_text("  feat: x\x00y \n") == "feat: xy"


def test_strips_code_fence():
    assert sanitize_llm_text("```text\nfix: a\n\n- b\n```") == "fix: a\n\n- b"


def test_keeps_inner_backticks():
    assert sanitize_llm_text("fix: handle `None` input") == "fix: handle `None` input"


def test_empty_input():
    assert sanitize_llm_text("") == ""
