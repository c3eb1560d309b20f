"""
Handles streaming events emitted while the model generates a response.

Only the first output (output_index 0) is shown in the transcript. Streamed text
is appended to the assistant message it belongs to, which is created on the
first fragment if the console has not seen the item yet. Function calls are
shown once their output item is done, rendered as ``name(arguments)``.
"""

import json
import logging
import math
from typing import Any, Dict

from voice_console.config.constants import LOGGER_NAME
from voice_console.models.realtime_events import (
    AudioTranscriptDeltaEvent,
    ContentPartAddedEvent,
    OutputItemDoneEvent,
)
from voice_console.models.transcript import (
    Clock,
    ContentFragment,
    ConversationItem,
    ItemType,
    Role,
    Status,
    Transcript,
    find_item_index,
    format_timestamp,
    replace_item,
    text_fragment,
)

logger = logging.getLogger(LOGGER_NAME)

# Index of the response output shown in the transcript
DISPLAYED_OUTPUT_INDEX = 0


def _append_fragment(
    transcript: Transcript, item_id: str, fragment: ContentFragment, clock: Clock
) -> Transcript:
    """Append a fragment to the item with the given id, or start an assistant message."""
    index = find_item_index(transcript, item_id)
    if index >= 0:
        existing = transcript[index]
        return replace_item(
            transcript, index, existing.updated(content=existing.content + (fragment,))
        )

    message = ConversationItem(
        id=item_id,
        type=ItemType.MESSAGE,
        role=Role.ASSISTANT,
        content=(fragment,),
        status=Status.RUNNING,
        timestamp=format_timestamp(clock()),
    )
    return transcript + (message,)


def handle_content_part_added(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the response.content_part.added event.

    Text parts for the first output are appended to their item; other parts and
    other outputs leave the transcript unchanged.
    """
    part_event = ContentPartAddedEvent(**event)
    if part_event.output_index != DISPLAYED_OUTPUT_INDEX or part_event.part.type != "text":
        return transcript

    fragment = text_fragment(part_event.part.text or "")
    return _append_fragment(transcript, part_event.item_id, fragment, clock)


def handle_audio_transcript_delta(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the response.audio_transcript.delta event.

    Non-empty deltas for the first output are appended to their item as text.
    """
    delta_event = AudioTranscriptDeltaEvent(**event)
    if delta_event.output_index != DISPLAYED_OUTPUT_INDEX or not delta_event.delta:
        return transcript

    return _append_fragment(
        transcript, delta_event.item_id, text_fragment(delta_event.delta), clock
    )


def _json_number(literal: str):
    # JSON numbers with an integral value render without a fraction, and values
    # too large for a float render as null.
    value = float(literal)
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def format_function_call(name: str, arguments: str) -> str:
    """
    Render a function call for display, e.g. ``lookup({"city":"Paris"})``.

    The arguments are parsed and re-serialized compactly, with numbers written
    the way a browser would write them (``1.0`` becomes ``1``); invalid JSON
    raises json.JSONDecodeError.
    """
    parsed = json.loads(arguments, parse_float=_json_number)
    return f"{name}({json.dumps(parsed, separators=(',', ':'), ensure_ascii=False)})"


def handle_output_item_done(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the response.output_item.done event.

    A finished function_call item is appended as a running assistant item that
    keeps the call fields, so a response can be supplied for it.
    """
    item = OutputItemDoneEvent(**event).item
    if item.type != ItemType.FUNCTION_CALL.value:
        return transcript

    call = ConversationItem(
        id=item.id,
        type=ItemType.FUNCTION_CALL,
        role=Role.ASSISTANT,
        content=(text_fragment(format_function_call(item.name, item.arguments)),),
        status=Status.RUNNING,
        timestamp=format_timestamp(clock()),
        call_id=item.call_id,
        name=item.name,
        arguments=item.arguments,
    )
    logger.info(f"Function call requested: {item.name} (call_id: {item.call_id})")
    return transcript + (call,)
