#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the cross-line block state transitions."""

import pytest
from utils import kinds

from fswikifmt.parsers._block_state import EMPTY_LIST_TYPES, BlockState, ListType, transition

UNORDERED = ListType.UNORDERED
ORDERED = ListType.ORDERED


def item(depth: int, list_type: ListType) -> BlockState:
    return BlockState(list_depth=depth, list_type=list_type)


@pytest.mark.unit
class TestTransition:
    """Tests for the pure transition function."""

    def test_no_change(self) -> None:
        """Test that identical states emit nothing."""
        events, types = transition(BlockState(), BlockState(), EMPTY_LIST_TYPES)

        assert events == []
        assert types == EMPTY_LIST_TYPES

    def test_enter_and_leave_paragraph(self) -> None:
        """Test paragraph open and close."""
        events, _ = transition(BlockState(), BlockState(paragraph=True), EMPTY_LIST_TYPES)
        assert kinds(events) == ["paragraph_open"]

        events, _ = transition(BlockState(paragraph=True), BlockState(), EMPTY_LIST_TYPES)
        assert kinds(events) == ["paragraph_close"]

    def test_stay_in_paragraph(self) -> None:
        """Test that a continued paragraph emits nothing."""
        events, _ = transition(BlockState(paragraph=True), BlockState(paragraph=True), EMPTY_LIST_TYPES)

        assert events == []

    def test_open_nested_lists_records_types(self) -> None:
        """Test that every opened depth remembers its type."""
        events, types = transition(BlockState(), item(2, ORDERED), EMPTY_LIST_TYPES)

        assert kinds(events) == ["ordered_list_open", "ordered_list_open"]
        assert types == (ORDERED, ORDERED, None)

    def test_close_uses_remembered_types(self) -> None:
        """Test that closing emits each depth's own type, deepest first."""
        events, types = transition(item(3, ORDERED), BlockState(), (UNORDERED, ORDERED, ORDERED))

        assert kinds(events) == ["ordered_list_close", "ordered_list_close", "unordered_list_close"]
        assert types == EMPTY_LIST_TYPES

    def test_deeper_item_keeps_parent_type(self) -> None:
        """Test that going deeper with the other marker keeps the parent list."""
        events, types = transition(item(1, UNORDERED), item(2, ORDERED), (UNORDERED, None, None))

        assert kinds(events) == ["ordered_list_open"]
        assert types == (UNORDERED, ORDERED, None)

    def test_shallower_item_same_type(self) -> None:
        """Test returning to an outer list of the same type."""
        events, types = transition(item(2, ORDERED), item(1, UNORDERED), (UNORDERED, ORDERED, None))

        assert kinds(events) == ["ordered_list_close"]
        assert types == (UNORDERED, None, None)

    def test_shallower_item_other_type(self) -> None:
        """Test that returning with another marker reopens the outer list."""
        events, types = transition(item(2, UNORDERED), item(1, ORDERED), (UNORDERED, UNORDERED, None))

        assert kinds(events) == ["unordered_list_close", "unordered_list_close", "ordered_list_open"]
        assert types == (ORDERED, None, None)

    def test_type_switch_at_same_depth(self) -> None:
        """Test that a same-depth type switch closes and reopens only that depth."""
        events, types = transition(item(2, UNORDERED), item(2, ORDERED), (UNORDERED, UNORDERED, None))

        assert kinds(events) == ["unordered_list_close", "ordered_list_open"]
        assert types == (UNORDERED, ORDERED, None)

    def test_close_order(self) -> None:
        """Test that closes come before opens: paragraph, lists, table."""
        prev = BlockState(paragraph=True)
        events, _ = transition(prev, BlockState(table=True), EMPTY_LIST_TYPES)
        assert kinds(events) == ["paragraph_close", "table_open"]

        events, _ = transition(item(1, UNORDERED), BlockState(table=True), (UNORDERED, None, None))
        assert kinds(events) == ["unordered_list_close", "table_open"]

        events, _ = transition(BlockState(table=True), item(1, ORDERED), EMPTY_LIST_TYPES)
        assert kinds(events) == ["table_close", "ordered_list_open"]

    def test_entering_preformatted(self) -> None:
        """Test that the preformatted leaf is emitted only when entering the block."""
        events, _ = transition(BlockState(paragraph=True), BlockState(preformatted=True), EMPTY_LIST_TYPES)
        assert kinds(events) == ["paragraph_close", "preformatted"]

        events, _ = transition(BlockState(preformatted=True), BlockState(preformatted=True), EMPTY_LIST_TYPES)
        assert events == []

    def test_input_types_not_mutated(self) -> None:
        """Test that the function returns a new tuple and leaves its input alone."""
        list_types = (UNORDERED, None, None)

        _, types = transition(item(1, UNORDERED), BlockState(), list_types)

        assert list_types == (UNORDERED, None, None)
        assert types == EMPTY_LIST_TYPES
