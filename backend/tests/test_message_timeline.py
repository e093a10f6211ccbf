"""
Tests for MessageTimeline - ordered, id-unique merging of message sources.
"""

import random
from datetime import datetime, timedelta, timezone

from productboards.domain.entities.message import Message
from productboards.domain.services.message_timeline import MessageTimeline
from productboards.domain.value_objects.conversation_id import ConversationId
from productboards.domain.value_objects.message_id import MessageId

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_message(conversation_id, seconds, role="user", content="hi"):
    return Message(
        id=MessageId.generate(),
        conversation_id=conversation_id,
        role=role,
        content=content,
        created_at=BASE_TIME + timedelta(seconds=seconds),
    )


class TestMerge:
    def setup_method(self):
        self.conversation_id = ConversationId.generate()
        self.timeline = MessageTimeline(self.conversation_id)

    def test_duplicate_id_is_dropped(self):
        message = make_message(self.conversation_id, 1)

        assert self.timeline.merge(message) is True
        assert self.timeline.merge(message) is False
        assert len(self.timeline) == 1

    def test_message_of_other_conversation_is_dropped(self):
        other = make_message(ConversationId.generate(), 1)

        assert self.timeline.merge(other) is False
        assert len(self.timeline) == 0

    def test_late_arrival_is_inserted_in_order(self):
        first = make_message(self.conversation_id, 1)
        second = make_message(self.conversation_id, 2)
        third = make_message(self.conversation_id, 3)

        self.timeline.merge(first)
        self.timeline.merge(third)
        self.timeline.merge(second)

        assert [m.id for m in self.timeline.messages] == [first.id, second.id, third.id]

    def test_equal_timestamps_are_ordered_by_id(self):
        a = make_message(self.conversation_id, 5)
        b = make_message(self.conversation_id, 5)

        self.timeline.merge_all([b, a])

        expected = sorted([a, b], key=lambda m: m.id.value)
        assert self.timeline.messages == expected


class TestInterleavedSources:
    """Load, feed and own-write sources in any order give the same list."""

    def test_any_interleaving_gives_sorted_unique_list(self):
        conversation_id = ConversationId.generate()
        messages = [make_message(conversation_id, i) for i in range(12)]
        loaded = messages[:8]
        fed = messages[5:]  # overlaps the load
        own = [messages[3], messages[10]]
        rng = random.Random(7)

        for _ in range(25):
            deliveries = loaded + fed + own + fed[:2]
            rng.shuffle(deliveries)
            timeline = MessageTimeline(conversation_id)
            timeline.merge_all(deliveries)

            assert timeline.messages == messages
            assert len({m.id for m in timeline.messages}) == len(timeline)

    def test_merge_all_counts_only_new_messages(self):
        conversation_id = ConversationId.generate()
        messages = [make_message(conversation_id, i) for i in range(3)]
        timeline = MessageTimeline(conversation_id)

        assert timeline.merge_all(messages) == 3
        assert timeline.merge_all(messages) == 0
