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

class SelectionSet:
    """
    Which chunks of a splitting session are included in the next commit.

    Indices are the 0-based positions in the session's chunk list. Every index
    starts unselected. This is plain in-memory state, recreated per session.
    """

    def __init__(self, size: int, selected: set[int] | None = None):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.size = size
        self._flags: dict[int, bool] = {}
        for index in selected or ():
            self._check(index)
            self._flags[index] = True

    def _check(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"chunk index {index} out of range (0..{self.size - 1})")

    def toggle(self, index: int) -> None:
        self._check(index)
        self._flags[index] = not self._flags.get(index, False)

    def toggle_all(self) -> None:
        """Invert every flag."""
        for index in range(self.size):
            self._flags[index] = not self._flags.get(index, False)

    def select_all(self) -> None:
        for index in range(self.size):
            self._flags[index] = True

    def is_selected(self, index: int) -> bool:
        return self._flags.get(index, False)

    def selected_indices(self) -> list[int]:
        return sorted(i for i, flag in self._flags.items() if flag)

    def count(self) -> int:
        return sum(1 for flag in self._flags.values() if flag)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.is_selected(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionSet):
            return NotImplemented
        return self.size == other.size and self.selected_indices() == other.selected_indices()

    def __repr__(self) -> str:
        return f"SelectionSet(size={self.size}, selected={self.selected_indices()})"
