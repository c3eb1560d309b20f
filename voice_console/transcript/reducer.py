"""
Transcript reducer for the realtime voice-call event stream.

The reducer turns the current transcript and one decoded realtime event into the
next transcript. It performs no I/O, so replaying the same events from an empty
transcript always rebuilds the same transcript (apart from timestamps, which come
from the clock).

The stream is consumed on a best-effort basis: events with an unknown type are
ignored, and an event whose payload is malformed, or whose handling fails for any
other reason, is dropped with a warning. The reducer itself never raises.
"""

import logging
from datetime import datetime
from functools import reduce as fold
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from voice_console.config.constants import (
    EVENT_TYPE_AUDIO_TRANSCRIPT_DELTA,
    EVENT_TYPE_CONTENT_PART_ADDED,
    EVENT_TYPE_ITEM_CREATED,
    EVENT_TYPE_OUTPUT_ITEM_DONE,
    EVENT_TYPE_SESSION_CREATED,
    EVENT_TYPE_SPEECH_STARTED,
    EVENT_TYPE_TRANSCRIPTION_COMPLETED,
    LOGGER_NAME,
)
from voice_console.handlers.input_handlers import (
    handle_speech_started,
    handle_transcription_completed,
)
from voice_console.handlers.item_handlers import handle_item_created
from voice_console.handlers.response_handlers import (
    handle_audio_transcript_delta,
    handle_content_part_added,
    handle_output_item_done,
)
from voice_console.handlers.session_handlers import handle_session_created
from voice_console.models.transcript import Clock, Transcript

logger = logging.getLogger(LOGGER_NAME)

# Type hint for handler functions
HandlerFunc = Callable[[Dict[str, Any], Transcript, Clock], Transcript]

HANDLERS: Dict[str, HandlerFunc] = {
    EVENT_TYPE_SESSION_CREATED: handle_session_created,
    EVENT_TYPE_SPEECH_STARTED: handle_speech_started,
    EVENT_TYPE_ITEM_CREATED: handle_item_created,
    EVENT_TYPE_TRANSCRIPTION_COMPLETED: handle_transcription_completed,
    EVENT_TYPE_CONTENT_PART_ADDED: handle_content_part_added,
    EVENT_TYPE_AUDIO_TRANSCRIPT_DELTA: handle_audio_transcript_delta,
    EVENT_TYPE_OUTPUT_ITEM_DONE: handle_output_item_done,
}


def reduce(
    transcript: Iterable, event: Any, clock: Optional[Clock] = None
) -> Transcript:
    """
    Apply one realtime event to a transcript.

    Args:
        transcript: Current transcript; any iterable of ConversationItem
        event: Decoded realtime event (a mapping or a Pydantic model)
        clock: Source of the current time for new items, defaults to datetime.now

    Returns:
        The next transcript. The input is never modified; when the event is
        ignored or dropped the same items are returned.
    """
    transcript = tuple(transcript)

    if isinstance(event, BaseModel):
        event = event.model_dump()
    if not isinstance(event, Mapping):
        logger.warning(f"Dropping event that is not an object: {type(event).__name__}")
        return transcript

    event_type = event.get("type")
    if not isinstance(event_type, str):
        logger.warning(f"Dropping event with invalid type: {event_type!r}")
        return transcript

    handler = HANDLERS.get(event_type)
    if handler is None:
        logger.debug(f"Ignoring event type: {event_type}")
        return transcript

    try:
        return handler(dict(event), transcript, clock or datetime.now)
    except ValidationError as e:
        logger.warning(f"Dropping malformed {event_type} event: {e}")
    except Exception as e:
        logger.warning(f"Dropping {event_type} event that could not be applied: {e}")
    return transcript


def replay(events: Iterable, clock: Optional[Clock] = None) -> Transcript:
    """Rebuild a transcript by reducing a sequence of events from empty."""
    return fold(lambda transcript, event: reduce(transcript, event, clock), events, ())
