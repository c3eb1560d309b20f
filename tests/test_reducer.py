"""
Unit tests for the transcript reducer.

These tests feed realtime events through reduce/replay and check the resulting
transcript: item order, merge-or-create behaviour, completion tracking, and the
best-effort handling of malformed or unknown events.
"""

from datetime import datetime

import pytest

from voice_console.models.transcript import ConversationItem, ItemType, Role, Status
from voice_console.transcript.reducer import HANDLERS, reduce, replay


def texts(item):
    return [fragment.text for fragment in item.content]


def without_timestamps(transcript):
    return [item.model_dump(exclude={"timestamp"}) for item in transcript]


def speech_started(item_id):
    return {"type": "input_audio_buffer.speech_started", "item_id": item_id}


def transcription_completed(item_id, transcript):
    return {
        "type": "conversation.item.input_audio_transcription.completed",
        "item_id": item_id,
        "content_index": 0,
        "transcript": transcript,
    }


def content_part(item_id, text, output_index=0):
    return {
        "type": "response.content_part.added",
        "item_id": item_id,
        "output_index": output_index,
        "content_index": 0,
        "part": {"type": "text", "text": text},
    }


def transcript_delta(item_id, delta, output_index=0):
    return {
        "type": "response.audio_transcript.delta",
        "item_id": item_id,
        "output_index": output_index,
        "content_index": 0,
        "delta": delta,
    }


END_TO_END_EVENTS = [
    {"type": "session.created", "session": {"id": "sess_1"}},
    speech_started("a"),
    transcription_completed("a", "Hi"),
    transcript_delta("b", "Hello"),
    transcript_delta("b", " there"),
]


class TestDispatch:
    """Tests for event type dispatch."""

    def test_handlers_cover_protocol_event_types(self):
        assert set(HANDLERS) == {
            "session.created",
            "input_audio_buffer.speech_started",
            "conversation.item.created",
            "conversation.item.input_audio_transcription.completed",
            "response.content_part.added",
            "response.audio_transcript.delta",
            "response.output_item.done",
        }

    def test_unknown_event_type_is_noop(self, fixed_clock):
        transcript = replay(END_TO_END_EVENTS, fixed_clock)
        result = reduce(transcript, {"type": "rate_limits.updated"}, fixed_clock)
        assert result == transcript

    def test_event_without_type_is_noop(self):
        transcript = replay([speech_started("a")])
        assert reduce(transcript, {"item_id": "a"}) == transcript

    def test_accepts_list_input_and_returns_tuple(self):
        result = reduce([], speech_started("a"))
        assert isinstance(result, tuple)
        assert len(result) == 1

    def test_input_transcript_is_not_modified(self, fixed_clock):
        transcript = replay([speech_started("a")], fixed_clock)
        before = list(transcript)
        reduce(transcript, transcription_completed("a", "Hi"), fixed_clock)
        assert list(transcript) == before
        assert texts(transcript[0]) == ["..."]


class TestSessionCreated:
    def test_session_created_clears_transcript(self):
        transcript = replay([speech_started("a"), transcript_delta("b", "Hello")])
        assert len(transcript) == 2
        assert reduce(transcript, {"type": "session.created"}) == ()

    def test_session_created_on_empty_transcript(self):
        assert reduce((), {"type": "session.created"}) == ()


class TestUserSpeech:
    def test_speech_started_appends_placeholder(self, fixed_clock):
        (item,) = reduce((), speech_started("a"), fixed_clock)
        assert item.id == "a"
        assert item.type == ItemType.MESSAGE
        assert item.role == Role.USER
        assert texts(item) == ["..."]
        assert item.status == Status.RUNNING
        assert item.timestamp == "3:04:05 PM"

    def test_transcription_replaces_placeholder(self):
        transcript = replay([speech_started("X"), transcription_completed("X", "hello")])
        (item,) = transcript
        assert texts(item) == ["hello"]
        assert item.status == Status.COMPLETED
        assert item.role == Role.USER

    def test_transcription_without_match_is_noop(self):
        transcript = replay([speech_started("a")])
        assert reduce(transcript, transcription_completed("zzz", "hello")) == transcript

    def test_transcription_ignores_assistant_item_with_same_id(self):
        transcript = replay([transcript_delta("b", "Hello")])
        result = reduce(transcript, transcription_completed("b", "overwrite"))
        assert texts(result[0]) == ["Hello"]

    def test_transcription_keeps_timestamp(self):
        transcript = replay(
            [speech_started("a")], lambda: datetime(2024, 5, 1, 9, 0, 0)
        )
        result = reduce(
            transcript,
            transcription_completed("a", "Hi"),
            lambda: datetime(2024, 5, 1, 10, 0, 0),
        )
        assert result[0].timestamp == "9:00:00 AM"


class TestStreamedAssistantText:
    def test_content_parts_accumulate_in_order(self):
        transcript = replay(
            [content_part("b", "Hel"), content_part("b", "lo"), content_part("b", "!", 1)]
        )
        (item,) = transcript
        assert texts(item) == ["Hel", "lo"]
        assert item.role == Role.ASSISTANT
        assert item.status == Status.RUNNING

    def test_content_part_non_text_is_ignored(self):
        event = content_part("b", "")
        event["part"] = {"type": "audio", "transcript": ""}
        assert reduce((), event) == ()

    def test_delta_creates_then_appends(self):
        transcript = replay([transcript_delta("b", "Hello"), transcript_delta("b", " there")])
        (item,) = transcript
        assert item.display_text == "Hello there"

    def test_empty_delta_is_ignored(self):
        assert reduce((), transcript_delta("b", "")) == ()

    def test_delta_for_other_output_is_ignored(self):
        assert reduce((), transcript_delta("b", "Hello", output_index=1)) == ()

    def test_delta_appends_to_existing_item_of_any_role(self):
        transcript = replay([speech_started("a"), transcript_delta("a", "more")])
        assert texts(transcript[0]) == ["...", "more"]


class TestMessageCreated:
    def test_new_message_is_appended_completed(self, fixed_clock):
        event = {
            "type": "conversation.item.created",
            "previous_item_id": None,
            "item": {
                "id": "m1",
                "object": "realtime.item",
                "type": "message",
                "role": "assistant",
                "content": [{"type": "text", "text": "Welcome"}],
            },
        }
        (item,) = reduce((), event, fixed_clock)
        assert item.id == "m1"
        assert item.role == Role.ASSISTANT
        assert texts(item) == ["Welcome"]
        assert item.status == Status.COMPLETED
        assert item.timestamp == "3:04:05 PM"

    def test_existing_message_is_merged_in_place(self):
        transcript = replay(
            [speech_started("a"), transcript_delta("b", "Hi"), transcript_delta("b", "!")],
            lambda: datetime(2024, 5, 1, 9, 0, 0),
        )
        event = {
            "type": "conversation.item.created",
            "item": {
                "id": "b",
                "type": "message",
                "role": "assistant",
                "content": [{"type": "text", "text": "Hi!"}],
            },
        }
        result = reduce(transcript, event, lambda: datetime(2024, 5, 1, 10, 0, 0))
        assert len(result) == 2
        assert result[1].id == "b"
        assert texts(result[1]) == ["Hi!"]
        assert result[1].status == Status.COMPLETED
        assert result[1].timestamp == "9:00:00 AM"

    def test_message_without_content_gets_empty_content(self):
        transcript = replay([speech_started("a")])
        event = {
            "type": "conversation.item.created",
            "item": {"id": "a", "type": "message", "role": "user"},
        }
        (item,) = reduce(transcript, event)
        assert item.content == ()
        assert item.status == Status.COMPLETED

    def test_non_text_content_is_kept(self):
        event = {
            "type": "conversation.item.created",
            "item": {
                "id": "a",
                "type": "message",
                "role": "user",
                "content": [{"type": "input_audio", "transcript": None}],
            },
        }
        (item,) = reduce((), event)
        assert item.content[0].type == "input_audio"
        assert item.display_text == ""

    def test_created_function_call_item_is_ignored(self):
        event = {
            "type": "conversation.item.created",
            "item": {"id": "f", "type": "function_call", "call_id": "c1"},
        }
        assert reduce((), event) == ()


class TestFunctionCalls:
    def test_output_item_done_appends_running_call(self, function_call_event):
        (item,) = reduce((), function_call_event)
        assert item.type == ItemType.FUNCTION_CALL
        assert item.role == Role.ASSISTANT
        assert item.status == Status.RUNNING
        assert item.call_id == "c1"
        assert item.name == "lookup_order"
        assert item.arguments == '{"order_id": "A-17", "verbose": true}'
        assert texts(item) == ['lookup_order({"order_id":"A-17","verbose":true})']

    def test_call_arguments_render_integral_numbers_without_fraction(
        self, function_call_event
    ):
        function_call_event["item"]["arguments"] = '{"qty": 1.0, "price": 2.50, "n": 3}'
        (item,) = reduce((), function_call_event)
        assert texts(item) == ['lookup_order({"qty":1,"price":2.5,"n":3})']

    def test_output_item_done_for_message_is_ignored(self):
        event = {
            "type": "response.output_item.done",
            "item": {"id": "m", "type": "message", "role": "assistant"},
        }
        assert reduce((), event) == ()

    def test_output_marks_call_completed(
        self, function_call_event, function_call_output_event
    ):
        transcript = replay([function_call_event, function_call_output_event])
        assert len(transcript) == 2
        call, output = transcript
        assert call.status == Status.COMPLETED
        assert output.type == ItemType.FUNCTION_CALL_OUTPUT
        assert output.role == Role.TOOL
        assert output.call_id == "c1"
        assert output.status == Status.COMPLETED
        assert texts(output) == ['Function call response: "shipped"']

    def test_output_without_matching_call_still_appended(
        self, function_call_event, function_call_output_event
    ):
        function_call_output_event["item"]["call_id"] = "other"
        transcript = replay([function_call_event, function_call_output_event])
        assert len(transcript) == 2
        assert transcript[0].status == Status.RUNNING

    def test_output_before_call_does_not_complete_later_call(
        self, function_call_event, function_call_output_event
    ):
        transcript = replay([function_call_output_event, function_call_event])
        assert transcript[1].status == Status.RUNNING


class TestMalformedEvents:
    def test_invalid_arguments_json_drops_event(self, function_call_event):
        function_call_event["item"]["arguments"] = "{not json"
        transcript = replay([speech_started("a")])
        assert reduce(transcript, function_call_event) == transcript

    def test_missing_required_field_drops_event(self):
        transcript = replay([speech_started("a")])
        assert reduce(transcript, {"type": "input_audio_buffer.speech_started"}) == transcript

    def test_wrong_field_type_drops_event(self):
        event = content_part("b", "x")
        event["part"] = "not an object"
        assert reduce((), event) == ()

    def test_unknown_role_drops_event(self):
        event = {
            "type": "conversation.item.created",
            "item": {"id": "m", "type": "message", "role": "narrator"},
        }
        assert reduce((), event) == ()

    def test_non_mapping_event_is_dropped(self):
        assert reduce((), ["session.created"]) == ()
        assert reduce((), None) == ()

    @pytest.mark.parametrize("event_type", [["session.created"], {"x": 1}, 7, None])
    def test_non_string_type_is_dropped(self, event_type):
        transcript = replay([speech_started("a")])
        assert reduce(transcript, {"type": event_type}) == transcript

    @pytest.mark.parametrize("output_index", [False, "0", 0.0])
    def test_non_integer_output_index_is_dropped(self, output_index):
        assert reduce((), transcript_delta("b", "Hello", output_index=output_index)) == ()
        assert reduce((), content_part("b", "Hello", output_index=output_index)) == ()

    def test_processing_continues_after_dropped_event(self, function_call_event):
        function_call_event["item"]["arguments"] = "{not json"
        transcript = replay(
            [speech_started("a"), function_call_event, transcription_completed("a", "Hi")]
        )
        assert len(transcript) == 1
        assert texts(transcript[0]) == ["Hi"]


class TestReplay:
    def test_end_to_end_scenario(self):
        transcript = replay(END_TO_END_EVENTS)
        assert len(transcript) == 2
        user, assistant = transcript
        assert user.role == Role.USER
        assert user.display_text == "Hi"
        assert user.status == Status.COMPLETED
        assert assistant.role == Role.ASSISTANT
        assert assistant.display_text == "Hello there"
        assert assistant.status == Status.RUNNING

    def test_replay_is_deterministic_apart_from_timestamps(
        self, function_call_event, function_call_output_event
    ):
        events = END_TO_END_EVENTS + [
            content_part("c", "part"),
            function_call_event,
            function_call_output_event,
            {"type": "unknown.event"},
        ]
        first = replay(events, lambda: datetime(2024, 5, 1, 9, 0, 0))
        second = replay(events, lambda: datetime(2024, 5, 1, 18, 30, 0))
        assert without_timestamps(first) == without_timestamps(second)
        assert first[0].timestamp != second[0].timestamp

    def test_items_keep_arrival_order(self):
        transcript = replay(
            [transcript_delta("b", "second"), speech_started("a"), content_part("b", "!")]
        )
        assert [item.id for item in transcript] == ["b", "a"]

    def test_items_are_immutable(self):
        (item,) = replay([speech_started("a")])
        assert isinstance(item, ConversationItem)
        with pytest.raises(Exception):
            item.status = Status.COMPLETED
