"""
Pending tool-response correlation for function calls shown in the console.

When the model requests a function call, the operator types the result into the
console. ToolResponseCache keeps that draft text per call_id and, on submission,
builds the two events that hand the result back to the model: the function call
output item and a request to continue the response.

Whether a call still accepts a response is derived from the transcript the
reducer produced: a call is pending while its item is running and no output for
its call_id has been created.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from voice_console.config.constants import LOGGER_NAME
from voice_console.models.realtime_events import (
    ConversationItemCreateEvent,
    FunctionCallOutputItem,
    OutgoingEvent,
    ResponseCreateEvent,
)
from voice_console.models.transcript import ItemType, Status, Transcript

logger = logging.getLogger(LOGGER_NAME)


class FunctionCallView(BaseModel):
    """A function call with its correlation state, as shown in the console."""

    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Any = None
    completed: bool = False
    response: Optional[str] = None


def _parse_arguments(arguments: Optional[str]) -> Any:
    if arguments is None:
        return None
    try:
        return json.loads(arguments)
    except (TypeError, ValueError):
        return arguments


class ToolResponseCache:
    """
    Keeps operator-entered responses for pending function calls, keyed by call_id.
    """

    def __init__(self):
        self.responses: Dict[str, str] = {}

    def set_response(self, call_id: str, text: str) -> None:
        self.responses[call_id] = text

    def get_response(self, call_id: str) -> str:
        return self.responses.get(call_id, "")

    def discard(self, call_id: str) -> None:
        self.responses.pop(call_id, None)

    def clear(self) -> None:
        self.responses.clear()

    def function_calls(self, transcript: Transcript) -> List[FunctionCallView]:
        """
        List the function calls in a transcript, in transcript order.

        A call counts as completed when its item is completed or when a
        function_call_output for its call_id exists; the first such output
        supplies the response.
        """
        outputs: Dict[str, Optional[str]] = {}
        for item in transcript:
            if (
                item.type == ItemType.FUNCTION_CALL_OUTPUT
                and item.call_id is not None
                and item.call_id not in outputs
            ):
                outputs[item.call_id] = item.output

        views = []
        for item in transcript:
            if item.type != ItemType.FUNCTION_CALL:
                continue
            has_output = item.call_id in outputs
            views.append(
                FunctionCallView(
                    call_id=item.call_id,
                    name=item.name,
                    arguments=_parse_arguments(item.arguments),
                    completed=item.status == Status.COMPLETED or has_output,
                    response=outputs.get(item.call_id),
                )
            )
        return views

    def is_pending(self, transcript: Transcript, call_id: str) -> bool:
        """Whether the call exists and can still receive a response."""
        for view in self.function_calls(transcript):
            if view.call_id == call_id:
                return not view.completed
        return False

    def build_submission(
        self, transcript: Transcript, call_id: str
    ) -> List[OutgoingEvent]:
        """
        Build the events that submit the stored response for a pending call.

        Returns:
            A conversation.item.create event carrying the JSON-serialized response,
            followed by a response.create event

        Raises:
            ValueError: If the call is unknown or already completed
        """
        if not self.is_pending(transcript, call_id):
            raise ValueError(f"Function call is not awaiting a response: {call_id}")

        output = json.dumps(self.get_response(call_id))
        logger.info(f"Submitting response for function call: {call_id}")
        return [
            ConversationItemCreateEvent(
                item=FunctionCallOutputItem(call_id=call_id, output=output)
            ),
            ResponseCreateEvent(),
        ]
