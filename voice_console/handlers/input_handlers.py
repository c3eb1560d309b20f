"""
Handles events describing the caller's speech.

The server announces that the caller started speaking before any text is
available, so a placeholder user message is shown first and replaced wholesale
once the input audio transcription completes.
"""

import logging
from typing import Any, Dict

from voice_console.config.constants import LOGGER_NAME, SPEECH_PLACEHOLDER_TEXT
from voice_console.models.realtime_events import (
    SpeechStartedEvent,
    TranscriptionCompletedEvent,
)
from voice_console.models.transcript import (
    Clock,
    ConversationItem,
    ItemType,
    Role,
    Status,
    Transcript,
    format_timestamp,
    text_fragment,
)

logger = logging.getLogger(LOGGER_NAME)


def handle_speech_started(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the input_audio_buffer.speech_started event.

    Appends a running user message with placeholder content for the item the
    server will fill in once the caller's speech is transcribed.
    """
    speech_event = SpeechStartedEvent(**event)
    item = ConversationItem(
        id=speech_event.item_id,
        type=ItemType.MESSAGE,
        role=Role.USER,
        content=(text_fragment(SPEECH_PLACEHOLDER_TEXT),),
        status=Status.RUNNING,
        timestamp=format_timestamp(clock()),
    )
    logger.debug(f"Caller started speaking, item: {speech_event.item_id}")
    return transcript + (item,)


def handle_transcription_completed(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the conversation.item.input_audio_transcription.completed event.

    Replaces the content of the matching user message with the final transcript
    text and marks it completed. Transcripts for unknown items are ignored.
    """
    transcription_event = TranscriptionCompletedEvent(**event)

    matched = False
    items = []
    for item in transcript:
        if (
            item.id == transcription_event.item_id
            and item.type == ItemType.MESSAGE
            and item.role == Role.USER
        ):
            item = item.updated(
                content=(text_fragment(transcription_event.transcript),),
                status=Status.COMPLETED,
            )
            matched = True
        items.append(item)

    if not matched:
        logger.debug(
            f"No user message for transcription of item: {transcription_event.item_id}"
        )
        return transcript
    return tuple(items)
