"""
Tests for MessageStore and LiveMessageList.
"""

import pytest

from fakes import always_disconnected, never_disconnected, parse_sse, run
from productboards.application.services import LiveMessageList
from productboards.domain.entities.conversation import Conversation
from productboards.domain.entities.message import Message
from productboards.domain.exceptions import EntityNotFoundError, StoreError
from productboards.domain.ports.event_feed import message_channel
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.presentation.api.conversations import conversation_events


class TestMessageStore:
    def test_load_empty_conversation(self, message_store, conversation, user_id):
        assert run(message_store.load(conversation.id, user_id)) == []

    def test_load_missing_conversation_is_not_found(self, message_store, user_id):
        with pytest.raises(EntityNotFoundError):
            run(message_store.load(ConversationId.generate(), user_id))

    def test_load_foreign_conversation_is_not_found(
        self, message_store, fakes, user_id, other_user_id
    ):
        foreign = Conversation.create(other_user_id)
        fakes.conversations.rows[foreign.id.value] = foreign

        with pytest.raises(EntityNotFoundError):
            run(message_store.load(foreign.id, user_id))

    def test_load_is_ascending(self, message_store, conversation, user_id):
        async def scenario():
            first = await message_store.append(
                Message.create(conversation.id, "user", "one")
            )
            second = await message_store.append(
                Message.create(conversation.id, "assistant", "two")
            )
            return [first, second], await message_store.load(conversation.id, user_id)

        appended, loaded = run(scenario())
        assert loaded == appended

    def test_undecodable_event_is_dropped(self, message_store, fakes, conversation):
        received = []

        async def scenario():
            await message_store.subscribe(conversation.id, received.append)
            channel = message_channel(conversation.id.value)
            await fakes.feed.publish(channel, {"id": "not-a-message"})
            await message_store.append(Message.create(conversation.id, "user", "hi"))

        run(scenario())
        assert [m.content for m in received] == ["hi"]


class TestLiveMessageList:
    def test_open_loads_history_and_follows_inserts(
        self, message_store, fakes, conversation, user_id
    ):
        changes = []

        async def scenario():
            await message_store.append(Message.create(conversation.id, "user", "old"))
            async with LiveMessageList(
                message_store, conversation.id, user_id, on_change=changes.append
            ) as live:
                await message_store.append(
                    Message.create(conversation.id, "assistant", "new")
                )
                return live.messages

        messages = run(scenario())
        assert [m.content for m in messages] == ["old", "new"]
        assert [m.content for m in changes] == ["new"]
        assert fakes.feed.active_count(message_channel(conversation.id.value)) == 0

    def test_duplicate_delivery_is_ignored(
        self, message_store, fakes, conversation, user_id
    ):
        changes = []

        async def scenario():
            live = LiveMessageList(
                message_store, conversation.id, user_id, on_change=changes.append
            )
            await live.open()
            message = await message_store.append(
                Message.create(conversation.id, "user", "hi")
            )
            await fakes.feed.publish(
                message_channel(conversation.id.value), message.to_payload()
            )
            assert live.record(message) is False
            await live.close()
            return live.messages

        messages = run(scenario())
        assert len(messages) == 1
        assert len(changes) == 1

    def test_open_on_missing_conversation_does_not_subscribe(
        self, message_store, fakes, user_id
    ):
        missing = ConversationId.generate()
        live = LiveMessageList(message_store, missing, user_id)

        with pytest.raises(EntityNotFoundError):
            run(live.open())

        assert fakes.feed.active_count(message_channel(missing.value)) == 0

    def test_failed_load_releases_subscription(
        self, message_store, fakes, conversation, user_id
    ):
        fakes.messages.fail_on.add("get_by_conversation")
        live = LiveMessageList(message_store, conversation.id, user_id)

        with pytest.raises(StoreError):
            run(live.open())

        assert fakes.feed.active_count(message_channel(conversation.id.value)) == 0

    def test_close_twice_is_harmless(self, message_store, fakes, conversation, user_id):
        async def scenario():
            live = LiveMessageList(message_store, conversation.id, user_id)
            await live.open()
            await live.close()
            await live.close()
            await message_store.append(Message.create(conversation.id, "user", "late"))
            return live.messages

        assert run(scenario()) == []
        assert fakes.feed.active_count(message_channel(conversation.id.value)) == 0


class TestConversationEventStream:
    def test_snapshot_then_inserted_messages(
        self, message_store, fakes, conversation, user_id
    ):
        channel = message_channel(conversation.id.value)

        async def scenario():
            old = await message_store.append(
                Message.create(conversation.id, "user", "old")
            )
            stream = conversation_events(
                message_store, conversation.id, user_id, never_disconnected
            )
            snapshot = parse_sse(await stream.__anext__())
            # Re-delivery of a message that is already in the snapshot
            await fakes.feed.publish(channel, old.to_payload())
            new = await message_store.append(
                Message.create(conversation.id, "assistant", "new")
            )
            inserted = parse_sse(await stream.__anext__())
            subscribed = fakes.feed.active_count(channel)
            await stream.aclose()
            return old, new, snapshot, inserted, subscribed

        old, new, snapshot, inserted, subscribed = run(scenario())
        assert snapshot[0] == "snapshot"
        assert [m["id"] for m in snapshot[1]] == [old.id.value]
        assert inserted[0] == "message"
        assert inserted[1]["id"] == new.id.value
        assert inserted[1]["content"] == "new"
        assert subscribed == 1
        assert fakes.feed.active_count(channel) == 0

    def test_unstarted_stream_holds_no_subscription(
        self, message_store, fakes, conversation, user_id
    ):
        stream = conversation_events(
            message_store, conversation.id, user_id, never_disconnected
        )

        assert fakes.feed.active_count(message_channel(conversation.id.value)) == 0
        run(stream.aclose())

    def test_disconnect_ends_stream_and_releases(
        self, message_store, fakes, conversation, user_id
    ):
        async def scenario():
            stream = conversation_events(
                message_store, conversation.id, user_id, always_disconnected
            )
            return [chunk async for chunk in stream]

        chunks = run(scenario())
        assert [parse_sse(c)[0] for c in chunks] == ["snapshot"]
        assert fakes.feed.active_count(message_channel(conversation.id.value)) == 0

    def test_idle_stream_sends_keepalive(
        self, message_store, conversation, user_id
    ):
        async def scenario():
            stream = conversation_events(
                message_store,
                conversation.id,
                user_id,
                never_disconnected,
                keepalive=0.01,
            )
            await stream.__anext__()
            chunk = await stream.__anext__()
            await stream.aclose()
            return chunk

        assert run(scenario()) == ": keep-alive\n\n"
