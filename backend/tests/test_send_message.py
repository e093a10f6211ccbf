"""
Tests for the send pipeline (SendMessageHandler).

The handler runs against in-memory repositories and a scripted assistant, so
every step's side effects can be inspected directly.
"""

import pytest

from fakes import run
from productboards.application.commands.chat import (
    SendMessageCommand,
    SendMessageHandler,
)
from productboards.domain.entities.conversation import DEFAULT_TITLE, Conversation
from productboards.domain.exceptions import (
    AiFailureReason,
    AiUnavailableError,
    DomainValidationError,
    EntityNotFoundError,
    StoreError,
)
from productboards.domain.ports.event_feed import message_channel


@pytest.fixture()
def handler(fakes, guard, message_store):
    return SendMessageHandler(
        guard=guard,
        conv_repo=fakes.conversations,
        message_store=message_store,
        assistant=fakes.assistant,
    )


def send(handler, conversation, content, user_id=None, **kwargs):
    return run(
        handler.execute(
            SendMessageCommand(
                conversation_id=conversation.id,
                user_id=user_id or conversation.owner,
                content=content,
                **kwargs,
            )
        )
    )


class TestInputValidation:
    def test_blank_content_writes_nothing(self, handler, fakes, conversation):
        with pytest.raises(DomainValidationError):
            send(handler, conversation, "   ")

        assert fakes.messages.rows == []
        assert fakes.assistant.transcripts == []

    def test_missing_conversation_id_writes_nothing(self, handler, fakes, user_id):
        with pytest.raises(DomainValidationError):
            run(
                handler.execute(
                    SendMessageCommand(conversation_id=None, user_id=user_id, content="hi")
                )
            )
        assert fakes.messages.rows == []

    def test_foreign_conversation_is_not_found(
        self, handler, fakes, user_id, other_user_id
    ):
        foreign = Conversation.create(other_user_id)
        fakes.conversations.rows[foreign.id.value] = foreign

        with pytest.raises(EntityNotFoundError):
            send(handler, foreign, "hi", user_id=user_id)

        assert fakes.messages.rows == []


class TestHappyPath:
    def test_user_and_assistant_messages_are_stored(self, handler, fakes, conversation):
        user_message = send(handler, conversation, "  Best earbuds under 5k?  ")

        stored = fakes.messages.for_conversation(conversation.id)
        assert [m.role for m in stored] == ["user", "assistant"]
        assert stored[0] == user_message
        assert user_message.content == "Best earbuds under 5k?"
        assert stored[1].content == fakes.assistant.reply_content

    def test_both_inserts_are_published(self, handler, fakes, conversation):
        send(handler, conversation, "hello")

        channels = [channel for channel, _ in fakes.feed.published]
        assert channels == [message_channel(conversation.id.value)] * 2

    def test_assistant_sees_full_transcript_without_metadata(
        self, handler, fakes, conversation
    ):
        send(handler, conversation, "first")
        send(handler, conversation, "second")

        last_transcript = fakes.assistant.transcripts[-1]
        assert last_transcript == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": fakes.assistant.reply_content},
            {"role": "user", "content": "second"},
        ]

    def test_conversation_is_touched(self, handler, fakes, conversation):
        before = conversation.updated_at

        user_message = send(handler, conversation, "hello")

        stored = fakes.conversations.rows[conversation.id.value]
        assert stored.updated_at == user_message.created_at
        assert stored.updated_at >= before


class TestTitle:
    def test_first_exchange_titles_long_message(self, handler, fakes, conversation):
        content = (
            "I need a laptop for video editing and light gaming, "
            "budget around one lakh rupees."
        )
        assert len(content) > 50

        send(handler, conversation, content)

        title = fakes.conversations.rows[conversation.id.value].title
        assert title == content[:50] + "..."

    def test_short_first_message_is_title_without_ellipsis(
        self, handler, fakes, conversation
    ):
        send(handler, conversation, "Running shoes")

        assert fakes.conversations.rows[conversation.id.value].title == "Running shoes"

    def test_later_messages_keep_title(self, handler, fakes, conversation):
        send(handler, conversation, "Running shoes")
        send(handler, conversation, "Something else entirely")

        assert fakes.conversations.rows[conversation.id.value].title == "Running shoes"

    def test_title_failure_does_not_fail_send(self, handler, fakes, conversation):
        fakes.conversations.fail_on.add("set_title")

        send(handler, conversation, "Running shoes")

        assert fakes.conversations.rows[conversation.id.value].title == DEFAULT_TITLE
        assert len(fakes.messages.for_conversation(conversation.id)) == 2


class TestImageReference:
    def test_image_is_folded_into_latest_user_turn(self, handler, fakes, conversation):
        user_message = send(
            handler, conversation, "Is this a good deal?", image_ref="img/abc.png"
        )

        last_turn = fakes.assistant.transcripts[-1][-1]
        assert last_turn["content"] == (
            "[User shared an image: img/abc.png]\n\nIs this a good deal?"
        )
        assert user_message.content == "Is this a good deal?"
        assert user_message.metadata == {"image_ref": "img/abc.png"}


class TestFailures:
    def test_ai_failure_keeps_user_message_only(self, handler, fakes, conversation):
        fakes.assistant.errors.append(AiUnavailableError(AiFailureReason.RATE_LIMITED))

        with pytest.raises(AiUnavailableError) as exc_info:
            send(handler, conversation, "hello")

        assert exc_info.value.reason == AiFailureReason.RATE_LIMITED
        stored = fakes.messages.for_conversation(conversation.id)
        assert [m.role for m in stored] == ["user"]

    def test_retry_after_ai_failure_adds_second_user_message(
        self, handler, fakes, conversation
    ):
        fakes.assistant.errors.append(AiUnavailableError(AiFailureReason.QUOTA_EXHAUSTED))
        with pytest.raises(AiUnavailableError):
            send(handler, conversation, "hello")

        send(handler, conversation, "hello")

        stored = fakes.messages.for_conversation(conversation.id)
        assert [m.role for m in stored] == ["user", "user", "assistant"]
        assert stored[0].id != stored[1].id

    def test_slow_ai_times_out(self, handler, fakes, conversation):
        fakes.assistant.delay = 0.5

        with pytest.raises(AiUnavailableError) as exc_info:
            send(handler, conversation, "hello", ai_timeout=0.05)

        assert exc_info.value.reason == AiFailureReason.TIMEOUT
        assert [m.role for m in fakes.messages.for_conversation(conversation.id)] == [
            "user"
        ]

    def test_user_insert_failure_skips_ai(self, handler, fakes, conversation):
        fakes.messages.fail_on.add("add")

        with pytest.raises(StoreError):
            send(handler, conversation, "hello")

        assert fakes.assistant.transcripts == []
        assert fakes.feed.published == []

    def test_assistant_insert_failure_keeps_user_message(
        self, handler, fakes, conversation
    ):
        fakes.messages.fail_add_number = 2

        with pytest.raises(StoreError):
            send(handler, conversation, "hello")

        stored = fakes.messages.for_conversation(conversation.id)
        assert [m.role for m in stored] == ["user"]

    def test_touch_failure_does_not_fail_send(self, handler, fakes, conversation):
        fakes.conversations.fail_on.add("touch")

        send(handler, conversation, "hello")

        assert len(fakes.messages.for_conversation(conversation.id)) == 2

    def test_feed_outage_does_not_fail_send(self, handler, fakes, conversation):
        fakes.feed.fail_publish = True

        send(handler, conversation, "hello")

        assert len(fakes.messages.for_conversation(conversation.id)) == 2
