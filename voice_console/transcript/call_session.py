"""
Call session state for the voice call console.

CallSession is the single writer of transcript state: every decoded event from
the voice-call socket goes through apply_event, in arrival order. Readers get the
latest snapshot, an immutable tuple, and re-render from it.
"""

import logging
from typing import Any, Dict, Optional

from voice_console.config.constants import (
    CALL_STATUS_ACTIVE,
    CALL_STATUS_CONNECTED,
    CALL_STATUS_DISCONNECTED,
    EVENT_TYPE_SESSION_CREATED,
    EVENT_TYPE_SPEECH_STARTED,
    LOGGER_NAME,
)
from voice_console.models.transcript import Clock, Transcript
from voice_console.transcript.reducer import reduce
from voice_console.transcript.tool_responses import ToolResponseCache

logger = logging.getLogger(LOGGER_NAME)


class CallSession:
    """
    Tracks the transcript, call status and pending tool responses of one console.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock
        self.transcript: Transcript = ()
        self.call_status = CALL_STATUS_DISCONNECTED
        self.tool_responses = ToolResponseCache()

    def apply_event(self, event: Dict[str, Any]) -> Transcript:
        """
        Reduce one event into a new transcript snapshot.

        Args:
            event: Decoded realtime event from the voice-call socket

        Returns:
            The new transcript snapshot
        """
        self.transcript = reduce(self.transcript, event, self.clock)

        event_type = event.get("type") if isinstance(event, dict) else None
        if event_type == EVENT_TYPE_SESSION_CREATED and self.tool_responses.responses:
            logger.info("New session started, discarding tool response drafts")
            self.tool_responses.clear()
        elif (
            event_type == EVENT_TYPE_SPEECH_STARTED
            and self.call_status != CALL_STATUS_ACTIVE
        ):
            self.set_call_status(CALL_STATUS_ACTIVE)
        return self.transcript

    def set_call_status(self, status: str) -> None:
        if status != self.call_status:
            logger.info(f"Call status changed: {self.call_status} -> {status}")
        self.call_status = status

    def mark_connected(self) -> None:
        self.set_call_status(CALL_STATUS_CONNECTED)

    def mark_disconnected(self) -> None:
        self.set_call_status(CALL_STATUS_DISCONNECTED)

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the transcript and call status."""
        return {
            "call_status": self.call_status,
            "items": [
                item.model_dump(mode="json", exclude_none=True)
                for item in self.transcript
            ],
        }

    def reset(self) -> None:
        self.transcript = ()
        self.call_status = CALL_STATUS_DISCONNECTED
        self.tool_responses.clear()
