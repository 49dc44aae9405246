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

from colorama import Fore, Style


@dataclass(frozen=True)
class Theme:
    name: str
    styles: dict[str, str]
    reset: str

    def apply(self, key: str, text: str) -> str:
        prefix = self.styles.get(key, "")
        if not prefix:
            return text
        return f"{prefix}{text}{self.reset}"


def _build_themes() -> dict[str, Theme]:
    reset = Style.RESET_ALL
    return {
        "classic": Theme(
            name="classic",
            reset=reset,
            styles={
                "primary": Fore.CYAN + Style.BRIGHT,
                "info": Fore.YELLOW,
                "error": Fore.RED + Style.BRIGHT,
                "success": Fore.GREEN + Style.BRIGHT,
                "muted": Fore.WHITE + Style.DIM,
                "cursor": Fore.CYAN + Style.BRIGHT,
                "selected": Fore.GREEN + Style.BRIGHT,
                "path": Fore.WHITE + Style.BRIGHT,
                "diff_header": Fore.BLUE,
                "diff_hunk": Fore.BLUE,
                "diff_removed": Fore.RED,
                "diff_added": Fore.GREEN,
                "diff_context": Fore.WHITE + Style.DIM,
            },
        ),
        "mono": Theme(
            name="mono",
            reset="",
            styles={},
        ),
    }


_THEMES = _build_themes()
_current_theme: Theme = _THEMES["classic"]


def set_theme(name: str) -> None:
    global _current_theme
    _current_theme = _THEMES.get(name, _THEMES["classic"])


def available_themes() -> list[str]:
    return sorted(_THEMES.keys())


def themed(key: str, text: str) -> str:
    return _current_theme.apply(key, text)


def diff_line_style(line: str) -> str:
    """Theme key for one line of a unified diff."""
    prefix = line[:10]
    if prefix.startswith("diff --git") or prefix.startswith("---") or prefix.startswith("+++"):
        return "diff_header"
    if prefix.startswith("@@"):
        return "diff_hunk"
    if prefix.startswith("-"):
        return "diff_removed"
    if prefix.startswith("+"):
        return "diff_added"
    return "diff_context"


def print_patch_cleanly(patch_content: str, max_lines: int = 120) -> None:
    """Print diff text with one colour per line kind, truncated after max_lines lines."""
    lines = patch_content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for line in lines[:max_lines]:
        print(themed(diff_line_style(line), line))

    if len(lines) > max_lines:
        print(themed("info", "(Diff truncated)"))
