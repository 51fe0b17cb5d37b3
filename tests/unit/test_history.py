"""Unit tests for the HistoryFetcher and message normalisation."""

import logging

import pytest

from slack_fetcher.services.history import HistoryFetcher, normalize_message
from tests.unit.conftest import make_message_dict, make_page, make_slack_client


class TestNormalizeMessage:
    """Tests for normalize_message()."""

    def test_missing_user_becomes_none(self):
        raw = {"type": "message", "text": "deploy finished", "ts": "1.1", "bot_id": "B1"}

        result = normalize_message(raw)

        assert result == {
            "user": None,
            "text": "deploy finished",
            "ts": "1.1",
            "type": "message",
        }

    def test_keeps_only_four_fields(self):
        raw = make_message_dict(reactions=[{"name": "+1"}], thread_ts="1.0")

        assert set(normalize_message(raw)) == {"user", "text", "ts", "type"}

    def test_empty_record_gets_defaults(self):
        assert normalize_message({}) == {"user": None, "text": "", "ts": None, "type": ""}

    def test_null_text_and_type_become_empty_strings(self):
        raw = {"type": None, "text": None, "ts": "1.0", "user": "U1"}

        assert normalize_message(raw) == {"user": "U1", "text": "", "ts": "1.0", "type": ""}


class TestTryFetchHistory:
    """Tests for HistoryFetcher.try_fetch_history()."""

    def test_concatenates_pages_in_served_order(self):
        # Newest first, the way conversations.history serves them
        page1 = [make_message_dict(ts="3.0"), make_message_dict(ts="2.0")]
        page2 = [make_message_dict(ts="5.0"), make_message_dict(ts="1.0")]
        client = make_slack_client(
            history={
                "C001": [make_page("messages", page1, "next"), make_page("messages", page2)]
            }
        )

        result = HistoryFetcher(client).try_fetch_history("C001", "general")

        assert result.ok
        # Not re-sorted by timestamp
        assert [m["ts"] for m in result.items] == ["3.0", "2.0", "5.0", "1.0"]

    def test_passes_channel_cursor_and_limit(self):
        client = make_slack_client(
            history={
                "C001": [
                    make_page("messages", [make_message_dict()], "cur-1"),
                    make_page("messages", []),
                ]
            }
        )

        HistoryFetcher(client, page_size=1000).try_fetch_history("C001")

        calls = client.conversations_history.call_args_list
        assert [c.kwargs["channel"] for c in calls] == ["C001", "C001"]
        assert [c.kwargs["cursor"] for c in calls] == [None, "cur-1"]
        assert all(c.kwargs["limit"] == 1000 for c in calls)

    def test_raw_messages_pass_through_unchanged(self, sample_messages):
        client = make_slack_client(history={"C001": [make_page("messages", sample_messages)]})

        result = HistoryFetcher(client).try_fetch_history("C001")

        assert result.items == sample_messages

    def test_normalize_projects_every_message(self, sample_messages):
        client = make_slack_client(history={"C001": [make_page("messages", sample_messages)]})

        result = HistoryFetcher(client, normalize=True).try_fetch_history("C001")

        assert result.items[2] == {
            "user": None,
            "text": "deploy finished",
            "ts": "1700000001.000100",
            "type": "message",
        }
        assert result.items[0]["user"] == "U001"

    def test_failure_on_second_page_gives_no_items(self):
        client = make_slack_client(
            history={
                "C001": [
                    make_page("messages", [make_message_dict()], "next"),
                    RuntimeError("internal_error"),
                ]
            }
        )

        result = HistoryFetcher(client).try_fetch_history("C001", "general")

        assert result.failed
        assert result.items == []


class TestFetchHistory:
    """Tests for HistoryFetcher.fetch_history()."""

    def test_returns_empty_list_not_partial_on_failure(self, caplog):
        client = make_slack_client(
            history={
                "C001": [
                    make_page("messages", [make_message_dict()], "next"),
                    RuntimeError("internal_error"),
                ]
            }
        )

        with caplog.at_level(logging.ERROR, logger="slack_fetcher"):
            messages = HistoryFetcher(client).fetch_history("C001", "general")

        assert messages == []
        assert "Error fetching messages from channel C001" in caplog.text

    def test_empty_channel(self):
        client = make_slack_client()

        assert HistoryFetcher(client).fetch_history("C999") == []


class TestIterHistory:
    """Tests for HistoryFetcher.iter_history()."""

    def test_yields_one_list_per_page(self):
        client = make_slack_client(
            history={
                "C001": [
                    make_page("messages", [make_message_dict(ts="2.0")], "next"),
                    make_page("messages", [make_message_dict(ts="1.0", user="U002")]),
                ]
            }
        )

        pages = list(HistoryFetcher(client, normalize=True).iter_history("C001"))

        assert len(pages) == 2
        assert pages[1] == [{"user": "U002", "text": "hello", "ts": "1.0", "type": "message"}]

    def test_errors_propagate(self):
        client = make_slack_client(history={"C001": [RuntimeError("boom")]})

        with pytest.raises(RuntimeError):
            list(HistoryFetcher(client).iter_history("C001"))
