"""
Handles conversation.item.created events.

Two item kinds matter to the transcript:
- message: a finished user or assistant message. It either completes an item the
  console already shows (created earlier from speech or streaming deltas) or is
  appended as a new completed message.
- function_call_output: the result supplied for a function call. It is shown as
  a tool message, and every function_call item with the same call_id is marked
  completed so the console stops offering a response input for it.

function_call items are not handled here; they are shown once the response
output item is done (see response_handlers).
"""

import logging
from typing import Any, Dict

from voice_console.config.constants import FUNCTION_CALL_RESPONSE_PREFIX, LOGGER_NAME
from voice_console.models.realtime_events import ItemCreatedEvent, RealtimeItem
from voice_console.models.transcript import (
    Clock,
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


def handle_item_created(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the conversation.item.created event.

    Args:
        event: The conversation.item.created event
        transcript: Current transcript snapshot
        clock: Source of the current time for new items

    Returns:
        The updated transcript
    """
    item = ItemCreatedEvent(**event).item

    if item.type == ItemType.MESSAGE.value:
        return _merge_message(item, transcript, clock)
    if item.type == ItemType.FUNCTION_CALL_OUTPUT.value:
        return _add_function_call_output(item, transcript, clock)

    logger.debug(f"Ignoring created item of type: {item.type}")
    return transcript


def _merge_message(
    item: RealtimeItem, transcript: Transcript, clock: Clock
) -> Transcript:
    content = tuple(item.content or ())
    role = Role(item.role) if item.role else None

    index = find_item_index(transcript, item.id)
    if index >= 0:
        existing = transcript[index]
        merged = existing.updated(
            type=ItemType.MESSAGE,
            role=role or existing.role,
            content=content,
            status=Status.COMPLETED,
            timestamp=existing.timestamp or format_timestamp(clock()),
        )
        return replace_item(transcript, index, merged)

    message = ConversationItem(
        id=item.id,
        type=ItemType.MESSAGE,
        role=role,
        content=content,
        status=Status.COMPLETED,
        timestamp=format_timestamp(clock()),
    )
    return transcript + (message,)


def _add_function_call_output(
    item: RealtimeItem, transcript: Transcript, clock: Clock
) -> Transcript:
    output = item.output if item.output is not None else ""
    tool_message = ConversationItem(
        id=item.id,
        type=ItemType.FUNCTION_CALL_OUTPUT,
        role=Role.TOOL,
        content=(text_fragment(FUNCTION_CALL_RESPONSE_PREFIX + output),),
        status=Status.COMPLETED,
        timestamp=format_timestamp(clock()),
        call_id=item.call_id,
        output=item.output,
    )

    items = []
    completed = 0
    for existing in transcript:
        if (
            item.call_id is not None
            and existing.type == ItemType.FUNCTION_CALL
            and existing.call_id == item.call_id
        ):
            existing = existing.updated(status=Status.COMPLETED)
            completed += 1
        items.append(existing)

    if completed:
        logger.info(f"Function call {item.call_id} completed")
    else:
        logger.debug(f"No function call found for output with call_id: {item.call_id}")
    return tuple(items) + (tool_message,)
