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

import pytest

from aicommit.core.selection.selection_set import SelectionSet


def test_starts_unselected():
    selection = SelectionSet(3)
    assert selection.selected_indices() == []
    assert selection.count() == 0
    assert not selection.is_selected(0)


def test_toggle_twice_restores_state():
    selection = SelectionSet(3)
    selection.toggle(1)
    assert selection.is_selected(1)
    selection.toggle(1)
    assert not selection.is_selected(1)


def test_selected_indices_are_sorted():
    selection = SelectionSet(5)
    for index in (4, 0, 2):
        selection.toggle(index)
    assert selection.selected_indices() == [0, 2, 4]


def test_toggle_out_of_range():
    selection = SelectionSet(2)
    with pytest.raises(IndexError):
        selection.toggle(2)
    with pytest.raises(IndexError):
        selection.toggle(-1)


def test_toggle_all_inverts():
    selection = SelectionSet(4, {1, 3})
    selection.toggle_all()
    assert selection.selected_indices() == [0, 2]


def test_select_all():
    selection = SelectionSet(3, {1})
    selection.select_all()
    assert selection.count() == 3
    assert selection.selected_indices() == [0, 1, 2]


def test_initial_selection_is_validated():
    with pytest.raises(IndexError):
        SelectionSet(2, {5})


def test_negative_size():
    with pytest.raises(ValueError):
        SelectionSet(-1)


def test_empty_session():
    selection = SelectionSet(0)
    selection.toggle_all()
    selection.select_all()
    assert selection.selected_indices() == []


def test_container_protocol_and_equality():
    selection = SelectionSet(3, {2})
    assert 2 in selection
    assert 0 not in selection
    assert "2" not in selection
    assert len(selection) == 1
    assert selection == SelectionSet(3, {2})
    assert selection != SelectionSet(4, {2})
