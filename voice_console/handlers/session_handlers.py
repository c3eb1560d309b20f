"""
Handles session lifecycle events from the voice-call server.

A session.created event marks the start of a new call session: whatever the
console was showing belongs to a previous call and is discarded.
"""

import logging
from typing import Any, Dict

from voice_console.config.constants import LOGGER_NAME
from voice_console.models.realtime_events import SessionCreatedEvent
from voice_console.models.transcript import Clock, Transcript

logger = logging.getLogger(LOGGER_NAME)


def handle_session_created(
    event: Dict[str, Any], transcript: Transcript, clock: Clock
) -> Transcript:
    """
    Handle the session.created event.

    Args:
        event: The session.created event
        transcript: Current transcript snapshot
        clock: Source of the current time (unused)

    Returns:
        An empty transcript
    """
    SessionCreatedEvent(**event)
    logger.info(f"New session started, discarding {len(transcript)} transcript items")
    return ()
