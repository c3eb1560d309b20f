"""
Unit tests for the pending tool-response correlator.
"""

import json

import pytest

from voice_console.models.realtime_events import (
    ConversationItemCreateEvent,
    ResponseCreateEvent,
)
from voice_console.transcript.reducer import replay
from voice_console.transcript.tool_responses import ToolResponseCache


@pytest.fixture
def cache():
    return ToolResponseCache()


@pytest.fixture
def pending_transcript(function_call_event):
    return replay([function_call_event])


@pytest.fixture
def completed_transcript(function_call_event, function_call_output_event):
    return replay([function_call_event, function_call_output_event])


class TestDrafts:
    def test_set_and_get_response(self, cache):
        cache.set_response("c1", "it shipped")
        assert cache.get_response("c1") == "it shipped"

    def test_missing_response_is_empty(self, cache):
        assert cache.get_response("unknown") == ""

    def test_discard_and_clear(self, cache):
        cache.set_response("c1", "a")
        cache.set_response("c2", "b")
        cache.discard("c1")
        cache.discard("not-there")
        assert cache.responses == {"c2": "b"}
        cache.clear()
        assert cache.responses == {}


class TestFunctionCallViews:
    def test_pending_call_view(self, cache, pending_transcript):
        (view,) = cache.function_calls(pending_transcript)
        assert view.call_id == "c1"
        assert view.name == "lookup_order"
        assert view.arguments == {"order_id": "A-17", "verbose": True}
        assert view.completed is False
        assert view.response is None

    def test_completed_call_view_has_response(self, cache, completed_transcript):
        (view,) = cache.function_calls(completed_transcript)
        assert view.completed is True
        assert view.response == '"shipped"'

    def test_output_before_call_counts_as_completed(
        self, cache, function_call_event, function_call_output_event
    ):
        transcript = replay([function_call_output_event, function_call_event])
        (view,) = cache.function_calls(transcript)
        assert view.completed is True
        assert view.response == '"shipped"'

    def test_first_output_wins(
        self, cache, function_call_event, function_call_output_event
    ):
        second_output = json.loads(json.dumps(function_call_output_event))
        second_output["item"]["id"] = "item_out_2"
        second_output["item"]["output"] = '"lost"'
        transcript = replay([function_call_event, function_call_output_event, second_output])
        (view,) = cache.function_calls(transcript)
        assert view.response == '"shipped"'

    def test_messages_are_not_listed(self, cache):
        transcript = replay(
            [{"type": "input_audio_buffer.speech_started", "item_id": "a"}]
        )
        assert cache.function_calls(transcript) == []


class TestPending:
    def test_running_call_is_pending(self, cache, pending_transcript):
        assert cache.is_pending(pending_transcript, "c1") is True

    def test_completed_call_is_not_pending(self, cache, completed_transcript):
        assert cache.is_pending(completed_transcript, "c1") is False

    def test_unknown_call_is_not_pending(self, cache, pending_transcript):
        assert cache.is_pending(pending_transcript, "c9") is False


class TestSubmission:
    def test_build_submission(self, cache, pending_transcript):
        cache.set_response("c1", "it shipped")
        create_event, continue_event = cache.build_submission(pending_transcript, "c1")

        assert isinstance(create_event, ConversationItemCreateEvent)
        assert create_event.model_dump() == {
            "type": "conversation.item.create",
            "item": {
                "type": "function_call_output",
                "call_id": "c1",
                "output": '"it shipped"',
            },
        }
        assert isinstance(continue_event, ResponseCreateEvent)
        assert continue_event.model_dump() == {"type": "response.create"}

    def test_submission_without_draft_sends_empty_string(self, cache, pending_transcript):
        create_event, _ = cache.build_submission(pending_transcript, "c1")
        assert create_event.item.output == '""'

    def test_submission_for_completed_call_raises(self, cache, completed_transcript):
        cache.set_response("c1", "late")
        with pytest.raises(ValueError):
            cache.build_submission(completed_transcript, "c1")

    def test_submission_for_unknown_call_raises(self, cache, pending_transcript):
        with pytest.raises(ValueError):
            cache.build_submission(pending_transcript, "missing")
