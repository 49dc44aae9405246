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

from aicommit.core.ui.theme import (
    available_themes,
    diff_line_style,
    print_patch_cleanly,
    set_theme,
    themed,
)


def test_diff_line_style():
    assert diff_line_style("diff --git a/x b/x") == "diff_header"
    assert diff_line_style("--- a/x") == "diff_header"
    assert diff_line_style("+++ b/x") == "diff_header"
    assert diff_line_style("@@ -1 +1 @@") == "diff_hunk"
    assert diff_line_style("-old") == "diff_removed"
    assert diff_line_style("+new") == "diff_added"
    assert diff_line_style(" ctx") == "diff_context"


def test_mono_theme_is_plain():
    set_theme("mono")
    try:
        assert themed("error", "boom") == "boom"
    finally:
        set_theme("classic")


def test_classic_theme_wraps_text():
    set_theme("classic")
    text = themed("error", "boom")
    assert text != "boom"
    assert "boom" in text


def test_unknown_theme_falls_back():
    set_theme("does-not-exist")
    assert "classic" in available_themes()
    assert themed("error", "x") != "x"


def test_print_patch_truncates(capsys):
    set_theme("mono")
    try:
        print_patch_cleanly("\n".join(f"+{i}" for i in range(10)) + "\n", max_lines=3)
    finally:
        set_theme("classic")

    out = capsys.readouterr().out.splitlines()
    assert out == ["+0", "+1", "+2", "(Diff truncated)"]
