"""Unit tests for cursor pagination."""

from unittest.mock import MagicMock

import pytest

from slack_fetcher.services.pagination import collect_pages, iter_pages, next_cursor
from tests.unit.conftest import make_page, paginate


class TestNextCursor:
    """Tests for next_cursor()."""

    def test_returns_cursor(self):
        assert next_cursor({"response_metadata": {"next_cursor": "abc"}}) == "abc"

    def test_empty_cursor_means_done(self):
        assert next_cursor({"response_metadata": {"next_cursor": ""}}) is None

    def test_missing_metadata_means_done(self):
        assert next_cursor({"channels": []}) is None

    def test_null_metadata_means_done(self):
        assert next_cursor({"response_metadata": None}) is None


class TestIterPages:
    """Tests for iter_pages()."""

    def test_threads_cursor_from_one_request_to_the_next(self):
        call = MagicMock(
            side_effect=[
                make_page("channels", [{"id": "C1"}], "cur-a"),
                make_page("channels", [{"id": "C2"}], "cur-b"),
                make_page("channels", [{"id": "C3"}]),
            ]
        )

        pages = list(iter_pages(call, "channels", page_size=1000, types="public_channel"))

        assert pages == [[{"id": "C1"}], [{"id": "C2"}], [{"id": "C3"}]]
        cursors = [c.kwargs["cursor"] for c in call.call_args_list]
        assert cursors == [None, "cur-a", "cur-b"]

    def test_every_request_uses_fixed_page_size_and_params(self):
        call = MagicMock(
            side_effect=[
                make_page("messages", [], "next"),
                make_page("messages", []),
            ]
        )

        list(iter_pages(call, "messages", page_size=1000, channel="C1"))

        for c in call.call_args_list:
            assert c.kwargs["limit"] == 1000
            assert c.kwargs["channel"] == "C1"

    def test_single_page_without_cursor_stops_after_one_call(self):
        call = MagicMock(return_value=make_page("messages", [{"ts": "1"}]))

        pages = list(iter_pages(call, "messages"))

        assert pages == [[{"ts": "1"}]]
        call.assert_called_once()

    def test_missing_items_key_yields_empty_page(self):
        call = MagicMock(return_value={"ok": True})

        assert list(iter_pages(call, "messages")) == [[]]

    def test_is_lazy(self):
        call = MagicMock(return_value=make_page("messages", []))

        pages = iter_pages(call, "messages")

        call.assert_not_called()
        next(pages)
        call.assert_called_once()

    def test_error_propagates_after_earlier_pages(self):
        call = MagicMock(
            side_effect=[make_page("messages", [{"ts": "1"}], "c1"), RuntimeError("boom")]
        )
        pages = iter_pages(call, "messages")

        assert next(pages) == [{"ts": "1"}]
        with pytest.raises(RuntimeError, match="boom"):
            next(pages)


class TestCollectPages:
    """Tests for collect_pages()."""

    def test_concatenates_pages_in_order(self):
        items = [{"id": f"C{i}"} for i in range(7)]
        call = MagicMock(side_effect=paginate("channels", items, per_page=3))

        result = collect_pages(call, "channels")

        assert result.ok
        assert result.items == items
        assert call.call_count == 3

    def test_keeps_duplicates_across_pages(self):
        call = MagicMock(
            side_effect=[
                make_page("channels", [{"id": "C1"}], "c1"),
                make_page("channels", [{"id": "C1"}]),
            ]
        )

        result = collect_pages(call, "channels")

        assert result.items == [{"id": "C1"}, {"id": "C1"}]

    def test_failure_on_later_page_discards_earlier_pages(self):
        call = MagicMock(
            side_effect=[
                make_page("messages", [{"ts": "1"}, {"ts": "2"}], "c1"),
                ConnectionError("reset by peer"),
            ]
        )

        result = collect_pages(call, "messages")

        assert result.failed
        assert result.items == []
        assert "reset by peer" in result.error

    def test_error_without_message_uses_class_name(self):
        call = MagicMock(side_effect=TimeoutError())

        result = collect_pages(call, "messages")

        assert result.error == "TimeoutError"
