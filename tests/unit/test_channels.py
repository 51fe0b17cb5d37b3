"""Unit tests for the ChannelEnumerator."""

import logging

from slack_fetcher.services.channels import ChannelEnumerator
from slack_fetcher.types import Channel
from tests.unit.conftest import make_page, make_slack_client


def _channel(cid, name):
    return {"id": cid, "name": name, "is_member": True, "topic": {"value": ""}}


class TestTryListChannels:
    """Tests for ChannelEnumerator.try_list_channels()."""

    def test_two_full_pages_then_empty_final_page(self):
        client = make_slack_client(
            channel_pages=[
                make_page("channels", [_channel("C1", "a"), _channel("C2", "b")], "p2"),
                make_page("channels", [_channel("C3", "c"), _channel("C4", "d")], "p3"),
                make_page("channels", []),
            ]
        )

        result = ChannelEnumerator(client).try_list_channels()

        assert result.ok
        assert result.items == [
            Channel("C1", "a"),
            Channel("C2", "b"),
            Channel("C3", "c"),
            Channel("C4", "d"),
        ]
        assert client.conversations_list.call_count == 3

    def test_projects_to_id_and_name(self, sample_channels):
        client = make_slack_client(channel_pages=[make_page("channels", sample_channels)])

        result = ChannelEnumerator(client).try_list_channels()

        assert [(c.id, c.name) for c in result.items] == [
            ("C001", "general"),
            ("C002", "random"),
            ("C003", "eng"),
            ("C004", "design"),
        ]

    def test_duplicate_ids_across_pages_are_kept(self):
        client = make_slack_client(
            channel_pages=[
                make_page("channels", [_channel("C1", "general")], "p2"),
                make_page("channels", [_channel("C1", "general")]),
            ]
        )

        result = ChannelEnumerator(client).try_list_channels()

        assert result.items == [Channel("C1", "general"), Channel("C1", "general")]

    def test_unnamed_conversations_fall_back_to_id(self):
        client = make_slack_client(
            channel_pages=[
                make_page("channels", [{"id": "D1", "is_im": True}, {"id": "G1", "name": ""}])
            ]
        )

        result = ChannelEnumerator(client, channel_types="im,mpim").try_list_channels()

        assert result.items == [Channel("D1", "D1"), Channel("G1", "G1")]

    def test_passes_types_limit_and_archived_filter(self):
        client = make_slack_client()

        ChannelEnumerator(
            client,
            page_size=200,
            channel_types="public_channel,private_channel",
            exclude_archived=True,
        ).try_list_channels()

        kwargs = client.conversations_list.call_args.kwargs
        assert kwargs["limit"] == 200
        assert kwargs["types"] == "public_channel,private_channel"
        assert kwargs["exclude_archived"] is True
        assert kwargs["cursor"] is None

    def test_archived_filter_omitted_by_default(self):
        client = make_slack_client()

        ChannelEnumerator(client).try_list_channels()

        assert "exclude_archived" not in client.conversations_list.call_args.kwargs

    def test_failure_is_reported(self):
        client = make_slack_client(channel_pages=[RuntimeError("invalid_auth")])

        result = ChannelEnumerator(client).try_list_channels()

        assert result.failed
        assert result.items == []
        assert "invalid_auth" in result.error


class TestListChannels:
    """Tests for ChannelEnumerator.list_channels()."""

    def test_returns_channels(self, sample_channels):
        client = make_slack_client(channel_pages=[make_page("channels", sample_channels)])

        channels = ChannelEnumerator(client).list_channels()

        assert len(channels) == 4

    def test_never_raises_and_returns_empty_on_failure(self, caplog):
        client = make_slack_client(
            channel_pages=[
                make_page("channels", [_channel("C1", "a")], "p2"),
                RuntimeError("server went away"),
            ]
        )

        with caplog.at_level(logging.ERROR, logger="slack_fetcher"):
            channels = ChannelEnumerator(client).list_channels()

        assert channels == []
        assert "Error fetching channel list" in caplog.text
        assert "server went away" in caplog.text
