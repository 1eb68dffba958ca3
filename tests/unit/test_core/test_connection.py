"""Unit tests for connection building."""
from __future__ import annotations

import logging
from operator import attrgetter

import pytest

from relay_pagination.core.exceptions import (
    IdentifierOrderingError,
    InvalidCursorError,
    InvalidLimitError,
    MissingCountError,
    MissingLimitError,
)
from relay_pagination.core.pagination import (
    ConnectionOptions,
    CursorCodec,
    EdgeItem,
    QueryWindow,
    from_list,
    from_slice,
    offset_and_limit_for_query,
)

offset = CursorCodec.encode_offset
record = CursorCodec.encode_record


# ──────────────────────────────────────────────────────────────
# from_list with offset cursors
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestFromListForward:
    """Tests for paging forward through an in-memory list."""

    def test_first_page(self, numbers):
        """The first page starts at the head of the list."""
        page = from_list(numbers, {"first": 3})

        assert page.nodes == [0, 1, 2]
        assert [edge.cursor for edge in page.edges] == [offset(0), offset(1), offset(2)]
        assert page.page_info.start_cursor == offset(0)
        assert page.page_info.end_cursor == offset(2)
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is True

    def test_after_end_cursor_continues(self, numbers):
        first = from_list(numbers, {"first": 3})

        page = from_list(numbers, {"first": 3, "after": first.page_info.end_cursor})

        assert page.nodes == [3, 4, 5]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    def test_forward_traversal_visits_every_item_once(self, numbers):
        """Following end cursors yields the whole list in order."""
        seen: list[int] = []
        args: dict = {"first": 3}

        while True:
            page = from_list(numbers, args)
            seen.extend(page.nodes)
            if not page.page_info.has_next_page:
                break
            args = {"first": 3, "after": page.page_info.end_cursor}

        assert seen == numbers

    def test_first_exactly_list_length_has_no_next_page(self, numbers):
        page = from_list(numbers, {"first": len(numbers)})

        assert page.nodes == numbers
        assert page.page_info.has_next_page is False

    def test_first_one_short_of_list_length_has_next_page(self, numbers):
        page = from_list(numbers, {"first": len(numbers) - 1})

        assert page.nodes == numbers[:-1]
        assert page.page_info.has_next_page is True

    def test_first_larger_than_list(self, numbers):
        page = from_list(numbers, {"first": 50})

        assert page.nodes == numbers
        assert page.page_info.has_next_page is False

    def test_first_zero_is_empty(self, numbers):
        page = from_list(numbers, {"first": 0})

        assert page.edges == []
        assert page.page_info.start_cursor is None
        assert page.page_info.end_cursor is None

    def test_after_last_item_is_empty(self, numbers):
        page = from_list(numbers, {"first": 3, "after": offset(9)})

        assert page.edges == []
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is False

    def test_empty_list(self):
        page = from_list([], {"first": 3})

        assert page.edges == []
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is False


@pytest.mark.unit
class TestFromListBackward:
    """Tests for paging backward through an in-memory list."""

    def test_last_page(self, numbers):
        page = from_list(numbers, {"last": 3})

        assert page.nodes == [7, 8, 9]
        assert [edge.cursor for edge in page.edges] == [offset(7), offset(8), offset(9)]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is False

    def test_before_cursor_pages_back(self, numbers):
        page = from_list(numbers, {"last": 3, "before": offset(7)})

        assert page.nodes == [4, 5, 6]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    def test_short_page_at_the_head(self, numbers):
        """Fewer items than requested before the boundary are all returned."""
        page = from_list(numbers, {"last": 3, "before": offset(1)})

        assert page.nodes == [0]
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is True

    def test_before_first_item_is_empty(self, numbers):
        page = from_list(numbers, {"last": 2, "before": offset(0)})

        assert page.edges == []
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is True

    def test_backward_traversal_visits_every_item_once(self, numbers):
        """Following start cursors yields the whole list, last page first."""
        pages: list[list[int]] = []
        args: dict = {"last": 3}

        while True:
            page = from_list(numbers, args)
            pages.append(page.nodes)
            if not page.page_info.has_previous_page:
                break
            args = {"last": 3, "before": page.page_info.start_cursor}

        assert [node for nodes in reversed(pages) for node in nodes] == numbers


@pytest.mark.unit
class TestFromListArguments:
    """Tests for argument handling in from_list."""

    def test_missing_first_and_last(self, numbers):
        with pytest.raises(MissingLimitError):
            from_list(numbers, {"after": offset(1)})

    def test_invalid_cursor(self, numbers):
        with pytest.raises(InvalidCursorError, match="`before`"):
            from_list(numbers, {"last": 2, "before": "not a cursor"})

    def test_max_option_caps_page(self, numbers):
        page = from_list(numbers, {"first": 50}, ConnectionOptions(max=4))

        assert page.nodes == [0, 1, 2, 3]
        assert page.page_info.has_next_page is True

    def test_max_page_size_setting_caps_page(self, numbers, monkeypatch):
        """The server-wide cap applies when no max option is given."""
        monkeypatch.setenv("PAGINATION_MAX_PAGE_SIZE", "5")

        page = from_list(numbers, {"first": 50})

        assert page.nodes == [0, 1, 2, 3, 4]

    def test_max_option_wins_over_setting(self, numbers, monkeypatch):
        monkeypatch.setenv("PAGINATION_MAX_PAGE_SIZE", "5")

        page = from_list(numbers, {"last": 50}, ConnectionOptions(max=2))

        assert page.nodes == [8, 9]

    def test_first_and_last_keeps_tail_of_page(self, numbers):
        """With both limits the forward page is trimmed to its last items."""
        page = from_list(numbers, {"first": 5, "last": 2})

        assert page.nodes == [3, 4]
        assert page.page_info.start_cursor == offset(3)
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    def test_first_and_negative_last_is_rejected(self, numbers):
        with pytest.raises(InvalidLimitError) as exc_info:
            from_list(numbers, {"first": 5, "last": -1})

        assert exc_info.value.argument == "last"

    def test_first_and_last_share_max_cap(self, numbers):
        page = from_list(numbers, {"first": 6, "last": 5}, ConnectionOptions(max=3))

        assert page.nodes == [0, 1, 2]

    def test_first_and_larger_last_is_untouched(self, numbers):
        page = from_list(numbers, {"first": 2, "last": 5})

        assert page.nodes == [0, 1]
        assert page.page_info.has_previous_page is False


# ──────────────────────────────────────────────────────────────
# Edge fields
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestEdgeItems:
    """Tests for extra fields attached to edges."""

    def test_extra_fields_land_on_edge(self):
        page = from_list(
            [EdgeItem("homer", {"role": "owner"}), EdgeItem("lisa", {"role": "member"})],
            {"first": 2},
        )

        assert page.nodes == ["homer", "lisa"]
        assert [edge.role for edge in page.edges] == ["owner", "member"]
        assert page.edges[0].model_extra == {"role": "owner"}

    def test_node_field_is_ignored_with_warning(self, caplog):
        """The node of an edge cannot be overridden."""
        with caplog.at_level(logging.WARNING, logger="relay_pagination"):
            page = from_list([EdgeItem("homer", {"node": "bart", "role": "owner"})], {"first": 1})

        assert page.nodes == ["homer"]
        assert page.edges[0].role == "owner"
        assert any(
            "Ignoring additional node provided on edge" in message
            for message in caplog.messages
        )

    def test_window_and_edges_logged_by_module_logger(self, caplog):
        logger_name = "relay_pagination.core.pagination.connection"

        with caplog.at_level(logging.DEBUG, logger=logger_name):
            from_list(["a", "b"], {"first": 1})

        records = [r for r in caplog.records if r.name == logger_name]
        assert [r.getMessage() for r in records] == [
            "Resolved list window",
            f"Built edges with cursors ['{offset(0)}']",
        ]
        assert records[0].cursor_kind is None

    def test_cursor_field_overrides_generated_cursor(self):
        page = from_list([EdgeItem("homer", {"cursor": "custom"})], {"first": 1})

        assert page.edges[0].cursor == "custom"
        assert page.page_info.start_cursor == "custom"
        assert page.page_info.end_cursor == "custom"

    def test_bare_and_wrapped_nodes_mix(self):
        page = from_list(["a", EdgeItem("b", {"weight": 2})], {"first": 2})

        assert page.nodes == ["a", "b"]
        assert page.edges[0].model_extra == {}
        assert page.edges[1].weight == 2


# ──────────────────────────────────────────────────────────────
# from_list with record cursors
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestFromListRecordCursors:
    """Tests for identifier-based paging when nodes have stable ids."""

    def test_edges_carry_record_cursors(self, records):
        page = from_list(records, {"first": 3}, node_id=attrgetter("id"))

        assert [edge.cursor for edge in page.edges] == [record("1"), record("2"), record("3")]

    def test_after_record_cursor(self, records):
        first = from_list(records, {"first": 3}, node_id=attrgetter("id"))

        page = from_list(
            records,
            {"first": 3, "after": first.page_info.end_cursor},
            node_id=attrgetter("id"),
        )

        assert [node.id for node in page.nodes] == ["4", "5", "6"]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    def test_before_record_cursor(self, records):
        page = from_list(records, {"last": 2, "before": record("5")}, node_id=attrgetter("id"))

        assert [node.id for node in page.nodes] == ["3", "4"]
        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True

    def test_last_exceeding_items_before_cursor_returns_them_all(self, records):
        """Fewer records than requested before the cursor are all returned."""
        page = from_list(records, {"last": 3, "before": record("3")}, node_id=attrgetter("id"))

        assert [node.id for node in page.nodes] == ["1", "2"]
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is True

    def test_backward_traversal_with_short_head_page(self, records):
        """Following start cursors visits every record when the head page is short."""
        eleven = [*records, type(records[0])(id="11", name="record-11")]
        pages: list[list[str]] = []
        args: dict = {"last": 3}

        while True:
            page = from_list(eleven, args, node_id=attrgetter("id"))
            pages.append([node.id for node in page.nodes])
            if not page.page_info.has_previous_page:
                break
            args = {"last": 3, "before": page.page_info.start_cursor}

        assert pages[-1] == ["1", "2"]
        assert [node_id for ids in reversed(pages) for node_id in ids] == [
            str(i) for i in range(1, 12)
        ]

    def test_record_cursor_survives_deletion(self, records):
        """A record cursor keeps its place when earlier items disappear."""
        first = from_list(records, {"first": 3}, node_id=attrgetter("id"))
        remaining = records[2:]

        page = from_list(
            remaining,
            {"first": 2, "after": first.page_info.end_cursor},
            node_id=attrgetter("id"),
        )

        assert [node.id for node in page.nodes] == ["4", "5"]

    def test_integer_ordering_is_numeric(self, records):
        """Identifier "10" sorts after "9" under the default ordering."""
        page = from_list(records, {"first": 5, "after": record("8")}, node_id=attrgetter("id"))

        assert [node.id for node in page.nodes] == ["9", "10"]
        assert page.page_info.has_next_page is False

    def test_string_ordering_option(self, records):
        page = from_list(
            records,
            {"first": 5, "after": record("8")},
            ConnectionOptions(identifier_ordering=str),
            node_id=attrgetter("id"),
        )

        assert [node.id for node in page.nodes] == ["9"]

    def test_record_cursor_without_node_id(self, numbers):
        with pytest.raises(InvalidCursorError) as exc_info:
            from_list(numbers, {"first": 2, "after": record("3")})

        assert exc_info.value.argument == "after"

    def test_record_cursor_outside_ordering(self, records):
        with pytest.raises(InvalidCursorError):
            from_list(records, {"first": 2, "after": record("abc")}, node_id=attrgetter("id"))

    def test_node_identifier_outside_ordering(self):
        with pytest.raises(IdentifierOrderingError) as exc_info:
            from_list(["x", "y"], {"first": 1, "after": record("1")}, node_id=str)

        assert exc_info.value.status_code == 500

    def test_nodes_without_identifier_get_offset_cursors(self, numbers):
        page = from_list(numbers, {"first": 2}, node_id=lambda node: None)

        assert [edge.cursor for edge in page.edges] == [offset(0), offset(1)]


# ──────────────────────────────────────────────────────────────
# from_slice
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestFromSlice:
    """Tests for connections built from a pre-fetched page."""

    def test_cursors_start_at_offset(self):
        page = from_slice(["f", "g"], 5)

        assert [edge.cursor for edge in page.edges] == [offset(5), offset(6)]

    def test_none_offset_counts_as_zero(self):
        page = from_slice(["a", "b"], None)

        assert page.page_info.start_cursor == offset(0)
        assert page.page_info.end_cursor == offset(1)

    def test_empty_slice(self):
        page = from_slice([], 5)

        assert page.edges == []
        assert page.page_info.start_cursor is None
        assert page.page_info.end_cursor is None
        assert page.page_info.has_previous_page is False
        assert page.page_info.has_next_page is False

    def test_flags_are_trusted(self):
        page = from_slice(
            ["a"],
            0,
            ConnectionOptions(has_previous_page=True, has_next_page=True),
        )

        assert page.page_info.has_previous_page is True
        assert page.page_info.has_next_page is True


# ──────────────────────────────────────────────────────────────
# offset_and_limit_for_query
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOffsetAndLimitForQuery:
    """Tests for the query window computation."""

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            ({"first": 10}, QueryWindow(0, 10)),
            ({"first": 10, "after": offset(4)}, QueryWindow(5, 10)),
            ({"first": 10, "before": offset(1)}, QueryWindow(1, 10)),
            ({"last": 10, "before": offset(1)}, QueryWindow(0, 1)),
            ({"last": 3, "before": offset(5)}, QueryWindow(2, 3)),
        ],
    )
    def test_windows(self, args, expected):
        assert offset_and_limit_for_query(args) == expected

    def test_last_with_count(self):
        window = offset_and_limit_for_query({"last": 5}, ConnectionOptions(count=30))

        assert window == QueryWindow(offset=25, limit=5)

    def test_last_beyond_count(self):
        window = offset_and_limit_for_query({"last": 50}, ConnectionOptions(count=30))

        assert window.offset == 0

    def test_last_without_before_or_count(self):
        with pytest.raises(MissingCountError, match="count"):
            offset_and_limit_for_query({"last": 5})

    def test_max_caps_limit(self):
        window = offset_and_limit_for_query({"first": 100}, ConnectionOptions(max=10))

        assert window == QueryWindow(0, 10)

    def test_record_cursor_is_rejected(self):
        with pytest.raises(InvalidCursorError) as exc_info:
            offset_and_limit_for_query({"first": 2, "after": record("3")})

        assert exc_info.value.argument == "after"

    def test_missing_limit(self):
        with pytest.raises(MissingLimitError):
            offset_and_limit_for_query({})
